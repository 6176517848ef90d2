"""Quoting helpers built on a BoardSpecification.

These map the analysis onto the fields and capability classes of a PCB
quote form, check that the bundle carried enough information to quote, and
render a plain-text report for humans.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..schema.results import BoardSpecification


class TraceClass(Enum):
    """Minimum trace/space capability classes, in mil."""

    TEN_TEN = "10/10mil"
    EIGHT_EIGHT = "8/8mil"
    SIX_SIX = "6/6mil"
    FIVE_FIVE = "5/5mil"
    FOUR_FOUR = "4/4mil"
    THREE_FIVE = "3.5/3.5mil"


class HoleClass(Enum):
    """Minimum finished hole capability classes."""

    ZERO_THREE = "0.3mm"
    ZERO_TWO_FIVE = "0.25mm"
    ZERO_TWO = "0.2mm"
    ZERO_ONE_FIVE = "0.15mm"


# (lower bound in mm, class); first bound the value reaches wins
_TRACE_CLASSES: tuple[tuple[float, TraceClass], ...] = (
    (0.25, TraceClass.TEN_TEN),
    (0.2, TraceClass.EIGHT_EIGHT),
    (0.15, TraceClass.SIX_SIX),
    (0.125, TraceClass.FIVE_FIVE),
    (0.1, TraceClass.FOUR_FOUR),
)

_HOLE_CLASSES: tuple[tuple[float, HoleClass], ...] = (
    (0.3, HoleClass.ZERO_THREE),
    (0.25, HoleClass.ZERO_TWO_FIVE),
    (0.2, HoleClass.ZERO_TWO),
)


def trace_class(width_mm: float) -> TraceClass:
    for bound, cls in _TRACE_CLASSES:
        if width_mm >= bound:
            return cls
    return TraceClass.THREE_FIVE


def hole_class(diameter_mm: float) -> HoleClass:
    for bound, cls in _HOLE_CLASSES:
        if diameter_mm >= bound:
            return cls
    return HoleClass.ZERO_ONE_FIVE


def to_quote_fields(spec: BoardSpecification) -> dict[str, Any]:
    """Map a specification onto quote form fields.

    Board size is given in centimeters rounded to two decimals; fields the
    analysis could not determine are omitted.
    """
    fields: dict[str, Any] = {
        "holeCount": spec.drill_count,
        "goldFingers": spec.has_gold_fingers,
    }
    if spec.dimensions is not None:
        fields["singleDimensions"] = {
            "length": round(spec.dimensions.height / 10, 2),
            "width": round(spec.dimensions.width / 10, 2),
        }
    if spec.copper_layer_count > 0:
        fields["layers"] = spec.copper_layer_count
    if spec.min_trace_width is not None:
        fields["minTrace"] = trace_class(spec.min_trace_width).value
    if spec.min_hole_size is not None:
        fields["minHole"] = hole_class(spec.min_hole_size).value
    return fields


@dataclass(frozen=True)
class SpecificationCheck:
    """Whether a specification holds enough information to quote."""

    is_valid: bool
    missing_info: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "missing_info": self.missing_info,
            "recommendations": self.recommendations,
        }


def validate_specification(spec: BoardSpecification) -> SpecificationCheck:
    missing: list[str] = []
    recommendations: list[str] = []

    if spec.dimensions is None:
        missing.append("Board dimensions")
        recommendations.append("Please ensure your Gerber files contain valid coordinate data")
    if spec.copper_layer_count < 1:
        missing.append("Layer count")
        recommendations.append("Please include all copper layer files (GTL, GBL, etc.)")
    if spec.drill_count == 0:
        missing.append("Drill information")
        recommendations.append("Please include drill files (.drl or .txt)")
    if not spec.file_roles:
        missing.append("File type detection")
        recommendations.append("Please ensure files have proper Gerber extensions")
    if spec.errors:
        recommendations.append("Please fix the errors listed in the analysis result")

    return SpecificationCheck(
        is_valid=not missing and not spec.errors,
        missing_info=missing,
        recommendations=recommendations,
    )


@dataclass(frozen=True)
class ProcessRecommendation:
    """Suggested process options for a board."""

    surface_finish: str | None = None
    test_method: str | None = None
    special_requirements: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"special_requirements": self.special_requirements}
        if self.surface_finish is not None:
            d["surface_finish"] = self.surface_finish
        if self.test_method is not None:
            d["test_method"] = self.test_method
        return d


def recommend_process(spec: BoardSpecification) -> ProcessRecommendation:
    surface_finish = None
    test_method = None
    requirements: list[str] = []

    if spec.has_gold_fingers:
        surface_finish = "enig"
        requirements.append("Gold fingers detected - ENIG surface finish recommended")

    if spec.copper_layer_count >= 6:
        test_method = "fixture"
        requirements.append("Multi-layer board - fixture testing recommended")
    elif spec.copper_layer_count > 0:
        test_method = "flyingProbe"

    if spec.min_trace_width is not None and spec.min_trace_width < 0.1:
        requirements.append("Fine pitch traces detected - high precision manufacturing required")
    if spec.min_hole_size is not None and spec.min_hole_size < 0.2:
        requirements.append("Small via holes detected - precision drilling required")

    return ProcessRecommendation(surface_finish, test_method, requirements)


def _mm(value: float) -> str:
    return f"{value:.4f}".rstrip("0").rstrip(".")


def generate_analysis_report(spec: BoardSpecification) -> str:
    """Render a specification as a plain-text report."""
    lines = ["=== Gerber File Analysis Report ===", ""]

    if spec.dimensions is not None:
        lines.append(
            f"Board Dimensions: {_mm(spec.dimensions.width)} x "
            f"{_mm(spec.dimensions.height)} {spec.dimensions.unit}"
        )
    if spec.copper_layer_count:
        lines.append(f"Estimated Layers: {spec.copper_layer_count}")
    lines.append(f"Total Drill Holes: {spec.drill_count}")
    if spec.min_trace_width is not None:
        lines.append(f"Minimum Trace Width: {_mm(spec.min_trace_width)} mm")
    if spec.min_hole_size is not None:
        lines.append(f"Minimum Hole Size: {_mm(spec.min_hole_size)} mm")

    if spec.file_roles:
        lines.extend(["", "Detected File Types:"])
        lines.extend(f"  - {role}" for role in spec.file_roles)

    if spec.has_gold_fingers:
        lines.extend(["", "Detected Features: Gold Fingers"])

    if spec.warnings:
        lines.extend(["", "Warnings:"])
        lines.extend(f"  ! {warning}" for warning in spec.warnings)

    if spec.errors:
        lines.extend(["", "Errors:"])
        lines.extend(f"  x {error}" for error in spec.errors)

    return "\n".join(lines)
