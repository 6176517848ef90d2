"""Two-pass file role classification.

Pass 1 matches the filename against the ordered rule table. Pass 2 runs only
when the name is uninformative and inspects the head of the content: an X2
``.FileFunction`` attribute names the role outright, otherwise the grammar
family is sniffed. The sniffed grammar is recorded on every guess as the
tokenizer hint but never overrides a filename match.
"""

from __future__ import annotations

from ..constants import SNIFF_LINE_LIMIT
from ..formats.detect import sniff_file_function, sniff_format
from ..logging_config import create_logger
from ..schema.roles import Confidence, FileFormat, Role, RoleGuess, Side
from ..schema.results import SourceFile
from .rules import IGNORED_EXTENSIONS, match_filename, role_from_file_function, side_for

logger = create_logger(__name__)


def _basename(name: str) -> str:
    return SourceFile(name, "").basename.lower()


def _extension(basename: str) -> str:
    _, dot, ext = basename.rpartition(".")
    return ext if dot else ""


def classify_file(
    name: str,
    content: str | None = None,
    sniff_line_limit: int = SNIFF_LINE_LIMIT,
) -> RoleGuess:
    """Assign a manufacturing role to a file.

    Args:
        name: File name, possibly with archive directories.
        content: Optional file content used when the name is uninformative.
        sniff_line_limit: Number of leading lines inspected when sniffing.

    Returns:
        A RoleGuess. Failure to classify yields ``Role.UNKNOWN`` with
        ``Confidence.UNRESOLVED``; this function does not raise.
    """
    basename = _basename(name)
    if _extension(basename) in IGNORED_EXTENSIONS:
        logger.debug(f"Skipping classification of non-fabrication file {name!r}")
        return RoleGuess.unresolved()

    file_format = sniff_format(content, sniff_line_limit) if content else FileFormat.UNKNOWN

    rule = match_filename(basename)
    if rule is not None:
        logger.debug(f"{name!r} matched filename rule {rule.name} -> {rule.role.value}")
        return RoleGuess(rule.role, side_for(rule.role), Confidence.FILENAME_MATCH, file_format)

    if content:
        fields = sniff_file_function(content, sniff_line_limit)
        role = role_from_file_function(fields) if fields else None
        if role is not None:
            logger.debug(f"{name!r} declares file function {fields} -> {role.value}")
            return RoleGuess(role, side_for(role), Confidence.CONTENT_SNIFF, file_format)

        if file_format is FileFormat.DRILL:
            logger.debug(f"{name!r} sniffed as drill data")
            return RoleGuess(Role.DRILL, Side.NONE, Confidence.CONTENT_SNIFF, file_format)
        if file_format is FileFormat.DRAWING:
            # Drawing data whose layer cannot be told from the content alone
            logger.debug(f"{name!r} sniffed as drawing data with unknown layer")
            return RoleGuess(Role.UNKNOWN, Side.NONE, Confidence.CONTENT_SNIFF, file_format)

    logger.debug(f"Could not classify {name!r}")
    return RoleGuess.unresolved(file_format)


def classify_files(names: list[str]) -> dict[str, RoleGuess]:
    """Classify several names by filename alone, keyed by name."""
    return {name: classify_file(name) for name in names}
