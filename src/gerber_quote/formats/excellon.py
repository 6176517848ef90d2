"""Tokenizer for the drill grammar (Excellon / NC drill).

Excellon files are line oriented: an optional ``M48`` header declares units,
number format and tools, then the body selects tools and lists hit
coordinates. Routed slots (``G00``/``G01`` and ``G85``) are emitted as
drill hits plus draws so their extent reaches the bounding box.
"""

from __future__ import annotations

import re

from ..constants import (
    DEFAULT_DECIMAL_DIGITS,
    DEFAULT_INTEGER_DIGITS,
    METRIC_DRILL_DECIMAL_DIGITS,
    METRIC_DRILL_INTEGER_DIGITS,
)
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
    ZeroSuppression,
)
from .coords import decode_coordinate, parse_number

_UNIT_RE = re.compile(r"^(METRIC|INCH)(?:,(LZ|TZ))?(?:,(0*)\.(0*))?$")
_TOOL_RE = re.compile(r"^T(\d+)((?:[A-Z][+-]?[0-9.]+)*)$")
_TOOL_PARAM_RE = re.compile(r"([A-Z])([+-]?[0-9.]+)")
_COORD_RE = re.compile(r"^(?:G(\d+))?(?:X([+-]?[0-9.]+))?(?:Y([+-]?[0-9.]+))?$")
_SLOT_RE = re.compile(r"^X([+-]?[0-9.]+)?Y([+-]?[0-9.]+)?G85X([+-]?[0-9.]+)?Y([+-]?[0-9.]+)?$")
_FORMAT_COMMENT_RE = re.compile(r"FORMAT\s*=\s*\{?\s*(\d)\s*:\s*(\d)(.*)", re.IGNORECASE)
_HEADER_KEYWORD_RE = re.compile(r"^[A-Z][A-Z0-9]+(?:,.*)?$")

_END_CODES = ("M30", "M00")
_HEADER_END = ("%", "M95")


class _ExcellonState:
    """Modal parser state for one drill file."""

    def __init__(self) -> None:
        self.unit = UnitKind.INCH
        self.integer_digits = DEFAULT_INTEGER_DIGITS
        self.decimal_digits = DEFAULT_DECIMAL_DIGITS
        self.zero_suppression = ZeroSuppression.LEADING
        self.incremental = False
        self.in_header = False
        self.route_mode = False
        self.tool_down = False
        self.current_tool: str | None = None
        self.ended = False
        self.result = TokenizeResult(file_format=FileFormat.DRILL)

    def error(self, message: str, line: int) -> None:
        self.result.errors.append(TokenizeError(message, line=line))

    def emit(self, statement: Statement) -> None:
        self.result.statements.append(statement)

    def declare_format(self, line: int) -> None:
        self.emit(
            FormatDeclaration(
                integer_digits=self.integer_digits,
                decimal_digits=self.decimal_digits,
                zero_suppression=self.zero_suppression,
                incremental=self.incremental,
                line=line,
            )
        )

    def declare_unit(self, kind: UnitKind, line: int) -> None:
        if kind is not self.unit:
            if kind is UnitKind.MILLIMETER:
                self.integer_digits = METRIC_DRILL_INTEGER_DIGITS
                self.decimal_digits = METRIC_DRILL_DECIMAL_DIGITS
            else:
                self.integer_digits = DEFAULT_INTEGER_DIGITS
                self.decimal_digits = DEFAULT_DECIMAL_DIGITS
        self.unit = kind
        self.emit(UnitDeclaration(kind=kind, line=line))

    def decode(self, raw: str | None) -> float | None:
        if raw is None or raw == "":
            return None
        return decode_coordinate(
            raw, self.integer_digits, self.decimal_digits, self.zero_suppression
        )


def _tool_code(number: str) -> str:
    return f"T{int(number)}"


def _handle_comment(state: _ExcellonState, comment: str, line: int) -> None:
    m = _FORMAT_COMMENT_RE.search(comment)
    if m is None:
        return
    state.integer_digits = int(m.group(1))
    state.decimal_digits = int(m.group(2))
    rest = m.group(3).lower()
    if "decimal" in rest:
        state.zero_suppression = ZeroSuppression.NONE
    elif "keep zeros" in rest or "suppress trailing" in rest:
        state.zero_suppression = ZeroSuppression.TRAILING
    if "metric" in rest:
        state.unit = UnitKind.MILLIMETER
        state.emit(UnitDeclaration(kind=UnitKind.MILLIMETER, line=line))
    elif "inch" in rest:
        state.unit = UnitKind.INCH
        state.emit(UnitDeclaration(kind=UnitKind.INCH, line=line))
    state.declare_format(line)


def _handle_unit(state: _ExcellonState, m: re.Match[str], line: int) -> None:
    kind = UnitKind.MILLIMETER if m.group(1) == "METRIC" else UnitKind.INCH
    state.declare_unit(kind, line)
    zeros = m.group(2)
    if zeros == "LZ":
        # Leading zeros kept, so trailing zeros are the ones omitted
        state.zero_suppression = ZeroSuppression.TRAILING
    elif zeros == "TZ":
        state.zero_suppression = ZeroSuppression.LEADING
    if m.group(3) is not None and m.group(4) is not None:
        state.integer_digits = len(m.group(3))
        state.decimal_digits = len(m.group(4))
    state.declare_format(line)


def _handle_tool(state: _ExcellonState, m: re.Match[str], line: int) -> None:
    code = _tool_code(m.group(1))
    params = dict(_TOOL_PARAM_RE.findall(m.group(2)))
    if "C" in params:
        try:
            diameter = parse_number(params["C"])
        except ValueError as e:
            state.error(f"Tool {code}: {e}", line)
            return
        state.emit(
            ToolDefinition(code=code, shape="C", params=(diameter,), diameter=diameter, line=line)
        )
        if state.in_header:
            return
    if state.in_header and params:
        # Feed/speed-only definitions carry no size
        return
    state.current_tool = None if int(m.group(1)) == 0 else code


def _handle_motion(state: _ExcellonState, m: re.Match[str], line: int) -> None:
    g_code = int(m.group(1)) if m.group(1) is not None else None
    if g_code == 5:
        state.route_mode = False
    elif g_code is not None and g_code in (0, 1, 2, 3):
        state.route_mode = True
    elif g_code in (90, 91):
        state.incremental = g_code == 91
        state.declare_format(line)
    elif g_code is not None:
        # G93 offsets and similar setup codes are accepted without effect
        return

    x = state.decode(m.group(2))
    y = state.decode(m.group(3))
    if x is None and y is None:
        return

    if g_code == 0:
        kind = OperationKind.MOVE
    elif state.route_mode:
        kind = OperationKind.DRAW if state.tool_down or g_code in (1, 2, 3) else OperationKind.MOVE
    else:
        kind = OperationKind.DRILL
    state.emit(Operation(kind=kind, x=x, y=y, tool_ref=state.current_tool, line=line))


def _handle_slot(state: _ExcellonState, m: re.Match[str], line: int) -> None:
    start_x, start_y = state.decode(m.group(1)), state.decode(m.group(2))
    end_x, end_y = state.decode(m.group(3)), state.decode(m.group(4))
    state.emit(
        Operation(OperationKind.DRILL, start_x, start_y, tool_ref=state.current_tool, line=line)
    )
    state.emit(Operation(OperationKind.DRAW, end_x, end_y, tool_ref=state.current_tool, line=line))


def _handle_line(state: _ExcellonState, raw: str, line: int) -> None:
    text = raw.strip()
    if not text:
        return
    if text.startswith(";"):
        _handle_comment(state, text[1:], line)
        return

    text = text.upper().replace(" ", "")
    if text == "M48":
        state.in_header = True
        return
    if text in _HEADER_END:
        state.in_header = False
        return
    if text in _END_CODES:
        state.ended = True
        return
    if text == "M71":
        state.declare_unit(UnitKind.MILLIMETER, line)
        return
    if text == "M72":
        state.declare_unit(UnitKind.INCH, line)
        return
    if text == "M15":
        state.tool_down = True
        if state.route_mode:
            # The plunge of a routed slot is one hole
            state.emit(Operation(OperationKind.DRILL, tool_ref=state.current_tool, line=line))
        return
    if text in ("M16", "M17"):
        state.tool_down = False
        return
    if text.startswith("ICI,"):
        state.incremental = text == "ICI,ON"
        state.declare_format(line)
        return

    m = _UNIT_RE.match(text)
    if m:
        _handle_unit(state, m, line)
        return

    m = _TOOL_RE.match(text)
    if m:
        _handle_tool(state, m, line)
        return

    try:
        m = _SLOT_RE.match(text)
        if m:
            _handle_slot(state, m, line)
            return

        m = _COORD_RE.match(text)
        if m and (m.group(1) or m.group(2) or m.group(3)):
            _handle_motion(state, m, line)
            return
    except ValueError as e:
        state.error(str(e), line)
        return

    if text.startswith(("M", "G")) and text[1:].isdigit():
        # Remaining machine codes (M47 messages, G05 alone, ...) are harmless
        return
    if _HEADER_KEYWORD_RE.match(text) and state.in_header:
        return

    state.error(f"Unparsable drill statement {text[:40]!r}", line)


def tokenize_excellon(text: str) -> TokenizeResult:
    """Tokenize drill-grammar text into an ordered statement list.

    Args:
        text: Raw Excellon file content.

    Returns:
        A TokenizeResult whose statements keep coordinates in native units.
    """
    state = _ExcellonState()
    for line_number, raw in enumerate(text.splitlines(), start=1):
        if state.ended:
            break
        _handle_line(state, raw, line_number)
    return state.result
