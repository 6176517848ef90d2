"""Per-file analysis results and the aggregated board specification."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .common import BoundingBox, Dimensions
from .roles import Confidence, Role, RoleGuess, Side


@dataclass(frozen=True)
class SourceFile:
    """One file to analyze, already extracted from its bundle."""

    name: str
    content: str

    @property
    def basename(self) -> str:
        return self.name.replace("\\", "/").rsplit("/", 1)[-1]


@dataclass
class PerFileResult:
    """Geometry and attributes of one file, normalized to millimeters."""

    name: str
    guess: RoleGuess
    bounding_box: BoundingBox | None = None
    min_trace_width: float | None = None
    min_hole_diameter: float | None = None
    drill_operation_count: int = 0
    has_gold_fingers: bool = False
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def role(self) -> Role:
        return self.guess.role

    @property
    def side(self) -> Side:
        return self.guess.side

    @property
    def confidence(self) -> Confidence:
        return self.guess.confidence

    @property
    def is_outline_candidate(self) -> bool:
        return self.guess.role is Role.OUTLINE

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "name": self.name,
            "classification": self.guess.to_dict(),
            "drill_operation_count": self.drill_operation_count,
            "is_outline_candidate": self.is_outline_candidate,
            "has_gold_fingers": self.has_gold_fingers,
            "errors": self.errors,
            "warnings": self.warnings,
        }
        if self.bounding_box is not None:
            d["bounding_box"] = self.bounding_box.to_dict()
        if self.min_trace_width is not None:
            d["min_trace_width"] = self.min_trace_width
        if self.min_hole_diameter is not None:
            d["min_hole_diameter"] = self.min_hole_diameter
        return d


@dataclass
class BoardSpecification:
    """Normalized manufacturing specification for a whole bundle."""

    copper_layer_count: int = 0
    file_roles: list[str] = field(default_factory=list)
    drill_count: int = 0
    has_gold_fingers: bool = False
    min_trace_width: float | None = None
    min_hole_size: float | None = None
    dimensions: Dimensions | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def failed(cls, errors: list[str], warnings: list[str] | None = None) -> BoardSpecification:
        """An empty specification carrying bundle-level diagnostics."""
        return cls(errors=list(errors), warnings=list(warnings or []))

    def to_dict(self) -> dict[str, Any]:
        """Render the record handed to the pricing/UI collaborator."""
        d: dict[str, Any] = {
            "fileTypes": list(self.file_roles),
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "layers": self.copper_layer_count,
            "drillCount": self.drill_count,
            "hasGoldFingers": self.has_gold_fingers,
        }
        if self.min_trace_width is not None:
            d["minTraceWidth"] = self.min_trace_width
        if self.min_hole_size is not None:
            d["minHoleSize"] = self.min_hole_size
        if self.dimensions is not None:
            d["dimensions"] = self.dimensions.to_dict()
        return d
