"""Exception hierarchy for bundle analysis.

The public analysis entry points never raise: these exceptions are raised
internally and converted into error/warning strings at the boundary. Tool
handlers use ``to_dict()`` to return them as structured error payloads.
"""

from __future__ import annotations

from typing import Any


class GerberQuoteError(Exception):
    """Base exception for all bundle analysis errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update(
            {k: v for k, v in self.__dict__.items() if k not in ["message", "error_code"]}
        )
        return result


class BundleError(GerberQuoteError):
    """Raised when a bundle cannot be analyzed at all.

    ``warnings`` carries actionable hints that accompany the error.
    """

    error_code = "BUNDLE_ERROR"

    def __init__(
        self,
        message: str,
        bundle_name: str | None = None,
        warnings: list[str] | None = None,
        error_code: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(
            message,
            error_code or "BUNDLE_ERROR",
            bundle_name=bundle_name,
            warnings=list(warnings or []),
            **kwargs,
        )


class EmptyBundleError(BundleError):
    """Raised when a bundle contains nothing to analyze."""

    error_code = "EMPTY_BUNDLE"

    def __init__(self, message: str, bundle_name: str | None = None, **kwargs: Any):
        super().__init__(message, bundle_name, error_code="EMPTY_BUNDLE", **kwargs)


class UnsupportedArchiveError(BundleError):
    """Raised for archive formats that are recognized but not supported."""

    error_code = "UNSUPPORTED_ARCHIVE"

    def __init__(
        self,
        message: str,
        bundle_name: str | None = None,
        warnings: list[str] | None = None,
        **kwargs: Any,
    ):
        super().__init__(
            message, bundle_name, warnings, error_code="UNSUPPORTED_ARCHIVE", **kwargs
        )


class CorruptArchiveError(BundleError):
    """Raised when an archive cannot be opened."""

    error_code = "CORRUPT_ARCHIVE"

    def __init__(self, message: str, bundle_name: str | None = None, **kwargs: Any):
        super().__init__(message, bundle_name, error_code="CORRUPT_ARCHIVE", **kwargs)


class TokenizeError(GerberQuoteError):
    """An unparsable statement. Recorded per line, never propagated."""

    error_code = "TOKENIZE_ERROR"

    def __init__(self, message: str, line: int | None = None, **kwargs: Any):
        super().__init__(message, "TOKENIZE_ERROR", line=line, **kwargs)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"line {self.line}: {self.message}"


__all__ = [
    "GerberQuoteError",
    "BundleError",
    "EmptyBundleError",
    "UnsupportedArchiveError",
    "CorruptArchiveError",
    "TokenizeError",
]
