"""Runtime settings for bundle analysis, overridable through the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from . import constants
from .logging_config import create_logger

logger = create_logger(__name__)

_ENV_PREFIX = "GERBER_QUOTE_"


def _env_number(var: str, default: Any, cast: type) -> Any:
    raw = os.environ.get(_ENV_PREFIX + var)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning(f"Ignoring malformed {_ENV_PREFIX}{var}={raw!r}; using {default}")
        return default
    if value <= 0:
        logger.warning(f"Ignoring non-positive {_ENV_PREFIX}{var}={raw!r}; using {default}")
        return default
    return value


@dataclass(frozen=True)
class AnalysisSettings:
    """Tunables for one analysis call."""

    max_workers: int = constants.DEFAULT_MAX_WORKERS
    sniff_line_limit: int = constants.SNIFF_LINE_LIMIT
    outline_disagreement_ratio: float = constants.OUTLINE_DISAGREEMENT_RATIO
    max_bundle_bytes: int = constants.MAX_BUNDLE_BYTES
    max_archive_entries: int = constants.MAX_ARCHIVE_ENTRIES

    @classmethod
    def from_env(cls) -> AnalysisSettings:
        """Build settings from ``GERBER_QUOTE_*`` environment variables."""
        return cls(
            max_workers=_env_number("MAX_WORKERS", cls.max_workers, int),
            sniff_line_limit=_env_number("SNIFF_LINES", cls.sniff_line_limit, int),
            outline_disagreement_ratio=_env_number(
                "OUTLINE_TOLERANCE", cls.outline_disagreement_ratio, float
            ),
            max_bundle_bytes=_env_number("MAX_BUNDLE_BYTES", cls.max_bundle_bytes, int),
            max_archive_entries=_env_number(
                "MAX_ARCHIVE_ENTRIES", cls.max_archive_entries, int
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_workers": self.max_workers,
            "sniff_line_limit": self.sniff_line_limit,
            "outline_disagreement_ratio": self.outline_disagreement_ratio,
            "max_bundle_bytes": self.max_bundle_bytes,
            "max_archive_entries": self.max_archive_entries,
        }


def resolve_settings(settings: AnalysisSettings | None) -> AnalysisSettings:
    """Return ``settings`` or, when omitted, settings read from the environment."""
    return settings if settings is not None else AnalysisSettings.from_env()
