"""Geometry and attribute extraction for one tokenized file.

The extractor walks the statement stream once, following unit and format
declarations, and converts every size and coordinate to millimeters using the
unit active when it was read.
"""

from __future__ import annotations

import re

from ..constants import MAX_LINE_ERRORS_PER_FILE
from ..exceptions import TokenizeError
from ..logging_config import create_logger
from ..schema.common import BoundingBox
from ..schema.results import PerFileResult, SourceFile
from ..schema.roles import Role, RoleGuess
from ..schema.statements import (
    FormatDeclaration,
    Operation,
    OperationKind,
    TokenizeResult,
    ToolDefinition,
    UnitDeclaration,
    UnitKind,
)

logger = create_logger(__name__)

_GOLD_NAME_RE = re.compile(r"gold|finger", re.IGNORECASE)
_GOLD_CONTENT_RE = re.compile(r"GOLD|FINGER")


def has_gold_finger_marks(source: SourceFile) -> bool:
    """Heuristic: the name or the content mentions gold fingers."""
    return bool(_GOLD_NAME_RE.search(source.basename) or _GOLD_CONTENT_RE.search(source.content))


def format_line_errors(name: str, errors: list[TokenizeError]) -> list[str]:
    """Render tokenizer errors for one file, capped with a summary line."""
    shown = [f"{name}: {error}" for error in errors[:MAX_LINE_ERRORS_PER_FILE]]
    hidden = len(errors) - MAX_LINE_ERRORS_PER_FILE
    if hidden > 0:
        shown.append(f"{name}: ... and {hidden} more unparsable statements")
    return shown


class _Extraction:
    """Running state while walking one file's statements."""

    def __init__(self, guess: RoleGuess) -> None:
        self.guess = guess
        self.factor = UnitKind.INCH.to_mm
        self.unit_declared = False
        self.incremental = False
        self.x = 0.0
        self.y = 0.0
        self.tools: dict[str, tuple[ToolDefinition, float]] = {}
        self.undefined_tools: list[str] = []
        self.min_x: float | None = None
        self.min_y = 0.0
        self.max_x = 0.0
        self.max_y = 0.0
        self.geometric_ops = 0
        self.drill_ops = 0
        self.trace_widths: list[float] = []
        self.hole_diameters: list[float] = []

    def include(self, x: float, y: float) -> None:
        if self.min_x is None:
            self.min_x, self.min_y, self.max_x, self.max_y = x, y, x, y
            return
        self.min_x = min(self.min_x, x)
        self.min_y = min(self.min_y, y)
        self.max_x = max(self.max_x, x)
        self.max_y = max(self.max_y, y)

    def tool(self, code: str | None) -> tuple[ToolDefinition, float] | None:
        if code is None:
            return None
        found = self.tools.get(code)
        if found is None and code not in self.undefined_tools:
            self.undefined_tools.append(code)
        return found

    def target(self, op: Operation) -> tuple[float, float]:
        """Resolve an operation's coordinates to an absolute point in mm."""
        if self.incremental:
            x = self.x + (op.x or 0.0) * self.factor
            y = self.y + (op.y or 0.0) * self.factor
        else:
            x = op.x * self.factor if op.x is not None else self.x
            y = op.y * self.factor if op.y is not None else self.y
        return x, y

    def operation(self, op: Operation) -> None:
        start = (self.x, self.y)
        self.x, self.y = self.target(op)
        if op.kind is OperationKind.MOVE:
            return

        self.geometric_ops += 1
        if op.kind is OperationKind.DRAW:
            self.include(*start)
        self.include(self.x, self.y)

        tool = self.tool(op.tool_ref)
        if op.kind in (OperationKind.DRILL, OperationKind.FLASH):
            self.drill_ops += 1

        if tool is None:
            return
        definition, factor = tool
        if op.kind is OperationKind.DRAW and self.guess.is_copper:
            if definition.width is not None:
                self.trace_widths.append(definition.width * factor)
        elif op.kind is OperationKind.DRILL or (
            op.kind is OperationKind.FLASH and self.guess.role is Role.DRILL
        ):
            if definition.diameter is not None:
                self.hole_diameters.append(definition.diameter * factor)

    def bounding_box(self) -> BoundingBox | None:
        if self.min_x is None:
            return None
        return BoundingBox(self.min_x, self.min_y, self.max_x, self.max_y)


def extract_file(source: SourceFile, guess: RoleGuess, tokenized: TokenizeResult) -> PerFileResult:
    """Compute one file's bounding box, minimum sizes and operation counts.

    Args:
        source: The file the statements were read from.
        guess: The file's classification.
        tokenized: Tokenizer output for ``source``.

    Returns:
        A PerFileResult with every geometric value in millimeters.
    """
    state = _Extraction(guess)
    for statement in tokenized.statements:
        if isinstance(statement, UnitDeclaration):
            state.factor = statement.kind.to_mm
            state.unit_declared = True
        elif isinstance(statement, FormatDeclaration):
            state.incremental = statement.incremental
        elif isinstance(statement, ToolDefinition):
            state.tools[statement.code] = (statement, state.factor)
        elif isinstance(statement, Operation):
            state.operation(statement)

    result = PerFileResult(
        name=source.name,
        guess=guess,
        bounding_box=state.bounding_box(),
        min_trace_width=min(state.trace_widths, default=None),
        min_hole_diameter=min(state.hole_diameters, default=None),
        drill_operation_count=state.drill_ops,
        has_gold_fingers=has_gold_finger_marks(source),
        errors=format_line_errors(source.name, tokenized.errors),
    )

    if state.undefined_tools:
        result.warnings.append(
            f"{source.name}: operations use undefined tools {', '.join(state.undefined_tools)}"
        )

    if state.geometric_ops == 0:
        if not source.content.strip():
            result.warnings.append(f"File '{source.name}' is empty")
        elif guess.implies_geometry:
            result.errors.append(
                f"{source.name}: no drawing or drill operations found in {guess.label} file"
            )
        else:
            result.warnings.append(f"{source.name}: no drawing or drill operations found")
    elif not state.unit_declared:
        logger.debug(f"{source.name} declares no units, assuming inch")

    return result
