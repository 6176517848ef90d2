"""Common geometric models shared across the analysis stages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box.

    Extractor output is always in millimeters; the same type is used for
    native-unit bounds before conversion.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def is_degenerate(self) -> bool:
        """True when the box has no area (a single point or a straight line)."""
        return self.width <= 0 or self.height <= 0

    def scaled(self, factor: float) -> BoundingBox:
        """Return a copy with every coordinate multiplied by ``factor``."""
        return BoundingBox(
            min_x=self.min_x * factor,
            min_y=self.min_y * factor,
            max_x=self.max_x * factor,
            max_y=self.max_y * factor,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "min_x": self.min_x,
            "min_y": self.min_y,
            "max_x": self.max_x,
            "max_y": self.max_y,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class Dimensions:
    """Board width/height in millimeters."""

    width: float
    height: float
    unit: str = "mm"

    @classmethod
    def from_box(cls, box: BoundingBox) -> Dimensions:
        return cls(width=box.width, height=box.height)

    def to_dict(self) -> dict[str, Any]:
        return {"width": self.width, "height": self.height, "unit": self.unit}
