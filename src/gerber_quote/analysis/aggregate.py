"""Reduction of per-file results into one board specification."""

from __future__ import annotations

from ..constants import OUTLINE_DISAGREEMENT_RATIO
from ..logging_config import create_logger
from ..schema.common import Dimensions
from ..schema.results import BoardSpecification, PerFileResult
from ..schema.roles import Role

logger = create_logger(__name__)


def _differs(a: float, b: float, ratio: float) -> bool:
    reference = max(abs(a), abs(b))
    return reference > 0 and abs(a - b) / reference > ratio


def resolve_dimensions(
    results: list[PerFileResult],
    outline_disagreement_ratio: float = OUTLINE_DISAGREEMENT_RATIO,
) -> tuple[Dimensions | None, list[str]]:
    """Pick the board size from per-file bounding boxes.

    The first outline candidate with a bounding box wins. Without one, the
    size is the component-wise maximum over every box with a non-zero area.

    Returns:
        The dimensions (or None) and any warnings raised while choosing.
    """
    warnings: list[str] = []
    outlines = [r for r in results if r.is_outline_candidate and r.bounding_box is not None]

    if outlines:
        chosen, ignored = outlines[0], outlines[1:]
        assert chosen.bounding_box is not None
        dimensions = Dimensions.from_box(chosen.bounding_box)
        if ignored:
            names = ", ".join(r.name for r in ignored)
            warnings.append(
                f"Multiple board outline files detected; using '{chosen.name}' and ignoring {names}"
            )
            ratio = outline_disagreement_ratio
            disagreeing = [
                r.name
                for r in ignored
                if r.bounding_box is not None
                and (
                    _differs(r.bounding_box.width, dimensions.width, ratio)
                    or _differs(r.bounding_box.height, dimensions.height, ratio)
                )
            ]
            if disagreeing:
                warnings.append(
                    f"Outline candidates {', '.join(disagreeing)} differ from '{chosen.name}' by "
                    f"more than {outline_disagreement_ratio:.0%}; board size needs manual review"
                )
        return dimensions, warnings

    boxes = [
        r.bounding_box
        for r in results
        if r.bounding_box is not None and not r.bounding_box.is_degenerate
    ]
    if not boxes:
        return None, warnings
    return Dimensions(
        width=max(box.width for box in boxes),
        height=max(box.height for box in boxes),
    ), warnings


def _min_defined(values: list[float | None]) -> float | None:
    defined = [v for v in values if v is not None]
    return min(defined) if defined else None


def aggregate(
    results: list[PerFileResult],
    outline_disagreement_ratio: float = OUTLINE_DISAGREEMENT_RATIO,
) -> BoardSpecification:
    """Combine per-file results, in file order, into a BoardSpecification."""
    spec = BoardSpecification()
    for result in results:
        label = result.guess.label
        if label not in spec.file_roles:
            spec.file_roles.append(label)
        if result.guess.is_copper:
            spec.copper_layer_count += 1
        spec.drill_count += result.drill_operation_count
        spec.has_gold_fingers = spec.has_gold_fingers or result.has_gold_fingers
        spec.errors.extend(result.errors)
        spec.warnings.extend(result.warnings)
        if result.role is Role.UNKNOWN:
            spec.warnings.append(f"Could not determine file type for '{result.name}'")

    spec.min_trace_width = _min_defined([r.min_trace_width for r in results])
    spec.min_hole_size = _min_defined([r.min_hole_diameter for r in results])
    spec.dimensions, dimension_warnings = resolve_dimensions(results, outline_disagreement_ratio)
    spec.warnings.extend(dimension_warnings)

    logger.info(
        f"Aggregated {len(results)} files: {spec.copper_layer_count} copper layers, "
        f"{spec.drill_count} drill operations, dimensions "
        f"{spec.dimensions.to_dict() if spec.dimensions else 'unknown'}"
    )
    return spec
