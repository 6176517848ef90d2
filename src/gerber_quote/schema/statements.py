"""Typed statements produced by the drawing (Gerber) and drill (Excellon) tokenizers.

Both grammars emit the same tagged union, so the extractor is grammar
agnostic. Coordinates and sizes are kept in the file's native unit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from ..constants import DEFAULT_DECIMAL_DIGITS, DEFAULT_INTEGER_DIGITS, MM_PER_INCH
from ..exceptions import TokenizeError
from .roles import FileFormat


class UnitKind(Enum):
    MILLIMETER = "mm"
    INCH = "in"

    @property
    def to_mm(self) -> float:
        """Factor converting a value in this unit to millimeters."""
        return MM_PER_INCH if self is UnitKind.INCH else 1.0


class ZeroSuppression(Enum):
    LEADING = "leading"  # leading zeros omitted, value is right-aligned
    TRAILING = "trailing"  # trailing zeros omitted, value is left-aligned
    NONE = "none"


class OperationKind(Enum):
    MOVE = "move"
    DRAW = "draw"
    FLASH = "flash"
    DRILL = "drill"


@dataclass(frozen=True)
class UnitSystem:
    """Active unit and fixed-point layout for coordinates."""

    kind: UnitKind = UnitKind.INCH
    integer_digits: int = DEFAULT_INTEGER_DIGITS
    decimal_digits: int = DEFAULT_DECIMAL_DIGITS

    def to_dict(self) -> dict[str, Any]:
        return {
            "unit": self.kind.value,
            "integer_digits": self.integer_digits,
            "decimal_digits": self.decimal_digits,
        }


@dataclass(frozen=True)
class UnitDeclaration:
    kind: UnitKind
    line: int = 0


@dataclass(frozen=True)
class FormatDeclaration:
    integer_digits: int
    decimal_digits: int
    zero_suppression: ZeroSuppression = ZeroSuppression.LEADING
    incremental: bool = False
    line: int = 0


@dataclass(frozen=True)
class ToolDefinition:
    """Aperture (drawing grammar) or drill tool definition."""

    code: str
    shape: str | None = None
    params: tuple[float, ...] = ()
    diameter: float | None = None
    line: int = 0

    @property
    def width(self) -> float | None:
        """Effective stroke width: the diameter, or the smaller side of a rect/obround."""
        if self.diameter is not None:
            return self.diameter
        if self.shape in ("R", "O") and len(self.params) >= 2:
            return min(self.params[0], self.params[1])
        if self.shape in ("R", "O") and len(self.params) == 1:
            return self.params[0]
        return None


@dataclass(frozen=True)
class Operation:
    kind: OperationKind
    x: float | None = None
    y: float | None = None
    tool_ref: str | None = None
    line: int = 0

    @property
    def is_geometric(self) -> bool:
        return self.kind is not OperationKind.MOVE


Statement = Union[UnitDeclaration, FormatDeclaration, ToolDefinition, Operation]


@dataclass
class TokenizeResult:
    """Ordered statements plus per-line errors for one file."""

    file_format: FileFormat
    statements: list[Statement] = field(default_factory=list)
    errors: list[TokenizeError] = field(default_factory=list)

    @property
    def operations(self) -> list[Operation]:
        return [s for s in self.statements if isinstance(s, Operation)]

    @property
    def declares_unit(self) -> bool:
        return any(isinstance(s, UnitDeclaration) for s in self.statements)

    @property
    def recognized_count(self) -> int:
        return len(self.statements)
