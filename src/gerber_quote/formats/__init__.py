"""Tokenizers for the drawing (Gerber) and drill (Excellon) grammars."""

from ..schema.roles import FileFormat
from ..schema.statements import TokenizeResult
from .coords import decode_coordinate
from .detect import head_lines, sniff_file_function, sniff_format
from .excellon import tokenize_excellon
from .gerber import tokenize_gerber


def tokenize(text: str, hint: FileFormat = FileFormat.UNKNOWN) -> TokenizeResult:
    """Tokenize ``text`` with the grammar named by ``hint``.

    An UNKNOWN hint tries the drawing grammar first and falls back to the
    drill grammar when that recognizes more statements.
    """
    if hint is FileFormat.DRILL:
        return tokenize_excellon(text)
    drawing = tokenize_gerber(text)
    if hint is FileFormat.DRAWING or drawing.operations:
        return drawing
    drill = tokenize_excellon(text)
    if drill.recognized_count > drawing.recognized_count:
        return drill
    return drawing


__all__ = [
    "decode_coordinate",
    "head_lines",
    "sniff_file_function",
    "sniff_format",
    "tokenize",
    "tokenize_excellon",
    "tokenize_gerber",
]
