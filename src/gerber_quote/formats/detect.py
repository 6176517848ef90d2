"""Content sniffing: which grammar a file uses, and what its X2 attributes say."""

from __future__ import annotations

import re
from itertools import islice

from ..constants import SNIFF_LINE_LIMIT
from ..schema.roles import FileFormat

_DRILL_MARKERS = (
    re.compile(r"^M48\s*$"),
    re.compile(r"^(METRIC|INCH)(,|\s*$)"),
    re.compile(r"^T\d+(?:[FSB][0-9.]+)*C[0-9.]+\s*$"),
    re.compile(r"^;\s*(DRILL|LEADER:)", re.IGNORECASE),
    re.compile(r"^M(71|72)\s*$"),
)
_DRAWING_MARKERS = (
    re.compile(r"^%FS[LTD]?[AI]?"),
    re.compile(r"^%MO(IN|MM)"),
    re.compile(r"^%ADD\d+"),
    re.compile(r"^G0?4[\s*]"),
    re.compile(r"^%T[FAO]\."),
    re.compile(r"^(G0?[123])?X[+-]?\d+Y[+-]?\d+D0?[123]\*"),
)
_FILE_FUNCTION_RE = re.compile(r"TF\.FileFunction,([^*\n]+)")


def head_lines(text: str, limit: int = SNIFF_LINE_LIMIT) -> list[str]:
    """Return the first ``limit`` non-blank lines, stripped."""
    lines = (line.strip() for line in text.splitlines())
    return list(islice((line for line in lines if line), limit))


def sniff_format(text: str, limit: int = SNIFF_LINE_LIMIT) -> FileFormat:
    """Guess the grammar family from grammar-defining tokens in the file head.

    ``M48`` is decisive for drill data; otherwise the family with more
    matching marker lines wins, and a tie is UNKNOWN.
    """
    drill_score = 0
    drawing_score = 0
    for line in head_lines(text, limit):
        if line == "M48":
            return FileFormat.DRILL
        if any(p.match(line) for p in _DRILL_MARKERS):
            drill_score += 1
        if any(p.match(line) for p in _DRAWING_MARKERS):
            drawing_score += 1
    if drill_score > drawing_score:
        return FileFormat.DRILL
    if drawing_score > drill_score:
        return FileFormat.DRAWING
    return FileFormat.UNKNOWN


def sniff_file_function(text: str, limit: int = SNIFF_LINE_LIMIT) -> list[str] | None:
    """Return the fields of a Gerber X2 ``.FileFunction`` attribute, if present.

    Handles both the Gerber form ``%TF.FileFunction,Copper,L1,Top*%`` and the
    Excellon comment form ``; #@! TF.FileFunction,Plated,1,2,PTH``.
    """
    for line in head_lines(text, limit):
        m = _FILE_FUNCTION_RE.search(line)
        if m:
            return [field.strip() for field in m.group(1).split(",")]
    return None
