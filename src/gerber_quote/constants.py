"""Global constants for Gerber/Excellon bundle analysis."""

# Unit conversion
MM_PER_INCH = 25.4
"""Millimeters per inch. Every geometric output is normalized to mm."""

# Fallback coordinate formats
DEFAULT_INTEGER_DIGITS = 2
DEFAULT_DECIMAL_DIGITS = 4
"""Inch 2.4 is assumed when a file never declares its format."""

METRIC_DRILL_INTEGER_DIGITS = 3
METRIC_DRILL_DECIMAL_DIGITS = 3
"""Excellon METRIC without an explicit format is read as 3.3."""

# Classification
SNIFF_LINE_LIMIT = 50
"""Number of leading lines inspected when sniffing file content."""

UNKNOWN_FILE_LABEL = "Unknown File Type"
"""Human-readable label for files whose role could not be resolved."""

# Diagnostics
MAX_LINE_ERRORS_PER_FILE = 20
"""Maximum per-line tokenizer errors reported for a single file."""

# Dimension resolution
OUTLINE_DISAGREEMENT_RATIO = 0.2
"""Relative width/height difference above which outline candidates need review."""

# Bundle limits
MAX_BUNDLE_BYTES = 50 * 1024 * 1024
MAX_ARCHIVE_ENTRIES = 500

DEFAULT_MAX_WORKERS = 4
"""Default size of the per-file analysis worker pool."""
