"""Tokenizer for the drawing grammar (RS-274X Gerber).

Gerber data is a sequence of ``*``-terminated blocks. Extended commands
(format, units, apertures, attributes) are wrapped in ``%`` delimiters and
may hold several blocks. This tokenizer:

- Tracks the active format and units so coordinates are scaled as read
- Resolves aperture selection and modal operation codes onto each operation
- Records every unparsable block as an error and keeps going
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass

from ..exceptions import TokenizeError
from ..schema.roles import FileFormat
from ..schema.statements import (
    FormatDeclaration,
    Operation,
    OperationKind,
    Statement,
    TokenizeResult,
    ToolDefinition,
    UnitDeclaration,
    UnitKind,
    UnitSystem,
    ZeroSuppression,
)
from .coords import decode_coordinate, parse_number

_FS_RE = re.compile(r"^FS([LTD])?([AI])?(?:N\d)?(?:G\d)?X(\d)(\d)Y(\d)(\d)")
_MO_RE = re.compile(r"^MO(IN|MM)$")
_AD_RE = re.compile(r"^ADD(\d+)([A-Za-z_$.][^,]*)(?:,(.*))?$")
_WORD_RE = re.compile(r"([A-Z])([+-]?[0-9.]+)")
_COMMENT_RE = re.compile(r"^G0*4(?!\d)")

# Extended commands that carry no information needed for estimation
_IGNORED_EXTENDED = (
    "TF", "TA", "TO", "TD", "LP", "LM", "LR", "LS", "SR", "IP", "IN", "IR",
    "OF", "SF", "MI", "AS", "LN", "AB", "KO",
)  # fmt: skip

_OPERATION_CODES = {
    1: OperationKind.DRAW,
    2: OperationKind.MOVE,
    3: OperationKind.FLASH,
}

_ZERO_SUPPRESSION = {
    "L": ZeroSuppression.LEADING,
    "T": ZeroSuppression.TRAILING,
    "D": ZeroSuppression.NONE,
}


@dataclass
class _Block:
    text: str
    line: int
    extended: bool
    terminated: bool = True


class _BlockReader:
    """Splits Gerber text into blocks while tracking line numbers."""

    __slots__ = ("_text", "_pos", "_length", "_line")

    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0
        self._length = len(text)
        self._line = 1

    def _skip_whitespace(self) -> None:
        text = self._text
        while self._pos < self._length and text[self._pos] in " \t\r\n":
            if text[self._pos] == "\n":
                self._line += 1
            self._pos += 1

    def _take(self, end: int) -> tuple[str, int]:
        chunk = self._text[self._pos : end]
        start_line = self._line
        self._line += chunk.count("\n")
        return chunk, start_line

    def __iter__(self) -> Iterator[_Block]:
        while True:
            self._skip_whitespace()
            if self._pos >= self._length:
                return

            if self._text[self._pos] == "%":
                self._pos += 1
                end = self._text.find("%", self._pos)
                if end == -1:
                    chunk, line = self._take(self._length)
                    self._pos = self._length
                    yield _Block(chunk, line, extended=True, terminated=False)
                    return
                chunk, line = self._take(end)
                self._pos = end + 1
                yield _Block(chunk, line, extended=True)
                continue

            end = self._text.find("*", self._pos)
            next_ext = self._text.find("%", self._pos)
            if end == -1 or (next_ext != -1 and next_ext < end):
                # A data block must end with '*' before the next extended command
                stop = self._length if next_ext == -1 else next_ext
                chunk, line = self._take(stop)
                self._pos = stop
                yield _Block(chunk, line, extended=False, terminated=False)
                continue
            chunk, line = self._take(end)
            self._pos = end + 1
            yield _Block(chunk, line, extended=False)


class _GerberState:
    """Modal parser state for one file."""

    def __init__(self) -> None:
        default = UnitSystem()
        self.integer_digits = default.integer_digits
        self.decimal_digits = default.decimal_digits
        self.zero_suppression = ZeroSuppression.LEADING
        self.incremental = False
        self.current_aperture: str | None = None
        self.last_operation: OperationKind | None = None
        self.ended = False
        self.result = TokenizeResult(file_format=FileFormat.DRAWING)

    def error(self, message: str, line: int) -> None:
        self.result.errors.append(TokenizeError(message, line=line))

    def emit(self, statement: Statement) -> None:
        self.result.statements.append(statement)

    def format_declaration(self, line: int) -> FormatDeclaration:
        return FormatDeclaration(
            integer_digits=self.integer_digits,
            decimal_digits=self.decimal_digits,
            zero_suppression=self.zero_suppression,
            incremental=self.incremental,
            line=line,
        )

    def decode(self, raw: str) -> float:
        return decode_coordinate(
            raw, self.integer_digits, self.decimal_digits, self.zero_suppression
        )


def _aperture_code(number: int) -> str:
    return f"D{number}"


def _handle_extended(state: _GerberState, block: _Block) -> None:
    body = "".join(block.text.split())
    if not block.terminated:
        state.error("Unterminated extended command", block.line)
        return
    if body.startswith("AM"):
        # Aperture macro bodies hold primitives, not statements
        return

    for word in body.split("*"):
        if not word:
            continue
        _handle_extended_word(state, word, block.line)


def _handle_extended_word(state: _GerberState, word: str, line: int) -> None:
    if word.startswith("FS"):
        m = _FS_RE.match(word)
        if m is None:
            state.error(f"Malformed format specification {word!r}", line)
            return
        state.zero_suppression = _ZERO_SUPPRESSION.get(m.group(1) or "L", ZeroSuppression.LEADING)
        state.incremental = m.group(2) == "I"
        state.integer_digits = int(m.group(3))
        state.decimal_digits = int(m.group(4))
        state.emit(state.format_declaration(line))
        return

    if word.startswith("MO"):
        m = _MO_RE.match(word)
        if m is None:
            state.error(f"Malformed unit mode {word!r}", line)
            return
        kind = UnitKind.INCH if m.group(1) == "IN" else UnitKind.MILLIMETER
        state.emit(UnitDeclaration(kind=kind, line=line))
        return

    if word.startswith("AD"):
        tool = _parse_aperture(word, line)
        if isinstance(tool, TokenizeError):
            state.result.errors.append(tool)
        else:
            state.emit(tool)
        return

    if word.startswith(_IGNORED_EXTENDED):
        return

    state.error(f"Unrecognized extended command {word!r}", line)


def _parse_aperture(word: str, line: int) -> ToolDefinition | TokenizeError:
    m = _AD_RE.match(word)
    if m is None:
        return TokenizeError(f"Malformed aperture definition {word!r}", line=line)

    code = _aperture_code(int(m.group(1)))
    shape = m.group(2)
    raw_params = m.group(3)
    params: tuple[float, ...] = ()
    if raw_params:
        try:
            params = tuple(parse_number(p) for p in raw_params.split("X") if p)
        except ValueError as e:
            return TokenizeError(f"Aperture {code}: {e}", line=line)

    diameter = None
    if shape in ("C", "P") and params:
        diameter = params[0]
    elif shape in ("C", "R", "O", "P") and not params:
        return TokenizeError(f"Aperture {code} ({shape}) has no size", line=line)

    return ToolDefinition(code=code, shape=shape, params=params, diameter=diameter, line=line)


def _code_number(letter: str, value: str) -> int:
    try:
        return int(float(value))
    except (ValueError, OverflowError):
        raise ValueError(f"Malformed code {letter}{value}") from None


def _handle_data(state: _GerberState, block: _Block) -> None:
    word = "".join(block.text.split())
    if not word:
        return
    if not block.terminated:
        state.error(f"Unterminated data block {word[:40]!r}", block.line)
        return
    if _COMMENT_RE.match(block.text.lstrip()):
        return

    words = _WORD_RE.findall(word)
    if "".join(letter + value for letter, value in words) != word:
        state.error(f"Unparsable data block {word[:40]!r}", block.line)
        return

    try:
        codes = [
            (letter, _code_number(letter, value)) for letter, value in words if letter in "GDM"
        ]
    except ValueError as e:
        state.error(str(e), block.line)
        return
    for letter, value in words:
        if letter not in "GDMXYIJN":
            state.error(f"Unknown word {letter}{value} in block", block.line)
            return

    coords = {letter: value for letter, value in words if letter in "XYIJ"}
    d_code: int | None = None
    for letter, number in codes:
        if letter == "G":
            _handle_g_code(state, number, block.line)
        elif letter == "D":
            d_code = number
        elif number in (0, 1, 2):
            # M00/M01/M02 end the file
            state.ended = True
            return

    if d_code is not None and d_code >= 10:
        state.current_aperture = _aperture_code(d_code)
        if not coords:
            return
        d_code = None

    kind: OperationKind | None
    if d_code is not None:
        kind = _OPERATION_CODES.get(d_code)
        if kind is None:
            state.error(f"Unknown operation code D{d_code:02d}", block.line)
            return
    elif "X" in coords or "Y" in coords:
        # Deprecated modal form: coordinates reuse the last operation code
        kind = state.last_operation or OperationKind.DRAW
    else:
        return

    try:
        x = state.decode(coords["X"]) if "X" in coords else None
        y = state.decode(coords["Y"]) if "Y" in coords else None
    except ValueError as e:
        state.error(str(e), block.line)
        return

    state.last_operation = kind
    state.emit(Operation(kind=kind, x=x, y=y, tool_ref=state.current_aperture, line=block.line))


def _handle_g_code(state: _GerberState, code: int, line: int) -> None:
    if code == 70:
        state.emit(UnitDeclaration(kind=UnitKind.INCH, line=line))
    elif code == 71:
        state.emit(UnitDeclaration(kind=UnitKind.MILLIMETER, line=line))
    elif code in (90, 91):
        state.incremental = code == 91
        state.emit(state.format_declaration(line))
    # G01/G02/G03 interpolation, G36/G37 regions, G54/G55 and G74/G75 carry no
    # information needed for bounds or sizes.


def tokenize_gerber(text: str) -> TokenizeResult:
    """Tokenize drawing-grammar text into an ordered statement list.

    Args:
        text: Raw Gerber file content.

    Returns:
        A TokenizeResult whose statements keep coordinates in native units.
    """
    state = _GerberState()
    for block in _BlockReader(text):
        if state.ended:
            break
        if block.extended:
            _handle_extended(state, block)
        else:
            _handle_data(state, block)
    return state.result
