"""Input validation utilities for tool parameters.

Provides validation for the parameters the analysis tools accept:
- Bundle paths (existing, readable files within the size limit)
- File names inside a bundle
- Manufacturer preset names
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .constants import MAX_BUNDLE_BYTES


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    valid: bool
    value: Any = None
    error: str | None = None

    @classmethod
    def success(cls, value: Any = None) -> ValidationResult:
        return cls(valid=True, value=value)

    @classmethod
    def failure(cls, error: str) -> ValidationResult:
        return cls(valid=False, error=error)


def validate_bundle_path(value: str, max_bytes: int = MAX_BUNDLE_BYTES) -> ValidationResult:
    """Validate the path of a bundle to read from disk.

    Args:
        value: Path to a single fabrication file or an archive.
        max_bytes: Largest accepted file size.

    Returns:
        ValidationResult with the resolved Path or error.
    """
    if not isinstance(value, str):
        return ValidationResult.failure(f"Path must be a string, got {type(value).__name__}")

    if not value.strip():
        return ValidationResult.failure("Path cannot be empty")

    if "\x00" in value:
        return ValidationResult.failure("Path contains null bytes")

    path = Path(value).expanduser()
    if not path.exists():
        return ValidationResult.failure(f"File not found: {value}")

    if not path.is_file():
        return ValidationResult.failure(f"Not a file: {value}")

    size = path.stat().st_size
    if size > max_bytes:
        return ValidationResult.failure(
            f"File is {size} bytes, larger than the {max_bytes} byte limit"
        )

    return ValidationResult.success(path.resolve())


def validate_file_name(value: str) -> ValidationResult:
    """Validate the name of one file inside a bundle."""
    if not isinstance(value, str):
        return ValidationResult.failure(f"Filename must be a string, got {type(value).__name__}")

    if not value.strip():
        return ValidationResult.failure("Filename cannot be empty")

    if "\x00" in value:
        return ValidationResult.failure("Filename contains null bytes")

    if len(value) > 255:
        return ValidationResult.failure("Filename too long (max 255 characters)")

    return ValidationResult.success(value)


def validate_file_names(values: list[str]) -> ValidationResult:
    """Validate a non-empty list of file names."""
    if not isinstance(values, list) or not values:
        return ValidationResult.failure("file_names must be a non-empty list of strings")

    for value in values:
        result = validate_file_name(value)
        if not result.valid:
            return ValidationResult.failure(f"{result.error}: {value!r}")

    return ValidationResult.success(list(values))


def validate_preset_name(value: str, available: list[str]) -> ValidationResult:
    """Validate a manufacturer preset name against the known presets."""
    if not isinstance(value, str) or not value:
        return ValidationResult.failure("Preset name must be a non-empty string")

    if value not in available:
        return ValidationResult.failure(
            f"Unknown preset: {value!r}. Available: {', '.join(sorted(available))}"
        )

    return ValidationResult.success(value)
