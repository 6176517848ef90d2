"""Manufacturer capability presets for quoting.

Each preset records what a fabrication house can build at one service level:
- Minimum trace width and finished hole diameter
- Supported copper layer range and maximum panel-free board size
- Whether gold fingers (hard gold edge connectors) are offered

Sources:
- JLCPCB: https://jlcpcb.com/capabilities/pcb-capabilities
- OSHPark: https://docs.oshpark.com/services/
- PCBWay: https://www.pcbway.com/capabilities.html
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..schema.results import BoardSpecification


@dataclass(frozen=True)
class ManufacturerPreset:
    """Quoting capabilities of one manufacturer and service level."""

    name: str
    manufacturer: str
    service_level: str  # e.g., "standard", "advanced"
    description: str

    # Feature sizes (mm)
    min_trace_width: float
    min_hole_diameter: float

    # Copper layers
    min_layers: int = 1
    max_layers: int = 2

    # Board outline (mm), either orientation
    max_board_width: float = 400.0
    max_board_height: float = 500.0

    supports_gold_fingers: bool = False

    notes: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "manufacturer": self.manufacturer,
            "service_level": self.service_level,
            "description": self.description,
            "rules": {
                "min_trace_width_mm": self.min_trace_width,
                "min_hole_diameter_mm": self.min_hole_diameter,
            },
            "board": {
                "min_layers": self.min_layers,
                "max_layers": self.max_layers,
                "max_width_mm": self.max_board_width,
                "max_height_mm": self.max_board_height,
            },
            "capabilities": {
                "gold_fingers": self.supports_gold_fingers,
            },
            "notes": self.notes,
        }

    def fits_board(self, width: float, height: float) -> bool:
        """True if a width x height board fits in either orientation."""
        long_side, short_side = max(width, height), min(width, height)
        limit_long = max(self.max_board_width, self.max_board_height)
        limit_short = min(self.max_board_width, self.max_board_height)
        return long_side <= limit_long and short_side <= limit_short

    def check_specification(self, spec: BoardSpecification) -> list[dict[str, Any]]:
        """Check an analyzed board against this preset and return violations.

        Values the analysis could not determine are not checked.
        """
        violations: list[dict[str, Any]] = []

        trace = spec.min_trace_width
        if trace is not None and trace < self.min_trace_width:
            violations.append(
                {
                    "rule": "min_trace_width",
                    "value": trace,
                    "minimum": self.min_trace_width,
                    "message": f"Trace width {trace}mm < minimum {self.min_trace_width}mm",
                }
            )

        hole = spec.min_hole_size
        if hole is not None and hole < self.min_hole_diameter:
            violations.append(
                {
                    "rule": "min_hole_diameter",
                    "value": hole,
                    "minimum": self.min_hole_diameter,
                    "message": f"Hole diameter {hole}mm < minimum {self.min_hole_diameter}mm",
                }
            )

        layers = spec.copper_layer_count
        if layers > 0:
            if layers < self.min_layers:
                violations.append(
                    {
                        "rule": "min_layers",
                        "value": layers,
                        "minimum": self.min_layers,
                        "message": f"Layer count {layers} < minimum {self.min_layers}",
                    }
                )
            if layers > self.max_layers:
                violations.append(
                    {
                        "rule": "max_layers",
                        "value": layers,
                        "maximum": self.max_layers,
                        "message": f"Layer count {layers} > maximum {self.max_layers}",
                    }
                )

        dims = spec.dimensions
        if dims is not None and not self.fits_board(dims.width, dims.height):
            violations.append(
                {
                    "rule": "max_board_size",
                    "value": [dims.width, dims.height],
                    "maximum": [self.max_board_width, self.max_board_height],
                    "message": (
                        f"Board {dims.width:.2f}x{dims.height:.2f}mm exceeds maximum"
                        f" {self.max_board_width:g}x{self.max_board_height:g}mm"
                    ),
                }
            )

        if spec.has_gold_fingers and not self.supports_gold_fingers:
            violations.append(
                {
                    "rule": "gold_fingers",
                    "value": True,
                    "maximum": False,
                    "message": (
                        f"{self.manufacturer} {self.service_level} does not offer gold fingers"
                    ),
                }
            )

        return violations


# ============================================================================
# Manufacturer Presets
# ============================================================================

JLCPCB_STANDARD = ManufacturerPreset(
    name="jlcpcb_standard",
    manufacturer="JLCPCB",
    service_level="standard",
    description="JLCPCB standard 1-2 layer PCB service",
    min_trace_width=0.127,  # 5 mil
    min_hole_diameter=0.2,
    min_layers=1,
    max_layers=2,
    max_board_width=400.0,
    max_board_height=500.0,
    supports_gold_fingers=True,
    notes="Cheapest option for simple boards. Gold fingers at extra cost.",
)

JLCPCB_4LAYER = ManufacturerPreset(
    name="jlcpcb_4layer",
    manufacturer="JLCPCB",
    service_level="4-layer",
    description="JLCPCB 4-layer PCB service",
    min_trace_width=0.09,  # 3.5 mil
    min_hole_diameter=0.2,
    min_layers=4,
    max_layers=4,
    max_board_width=400.0,
    max_board_height=500.0,
    supports_gold_fingers=True,
)

OSHPARK_2LAYER = ManufacturerPreset(
    name="oshpark_2layer",
    manufacturer="OSH Park",
    service_level="standard",
    description="OSH Park 2-layer purple boards (ENIG finish)",
    min_trace_width=0.152,  # 6 mil
    min_hole_diameter=0.254,  # 10 mil
    min_layers=1,
    max_layers=2,
    max_board_width=406.0,
    max_board_height=406.0,
    notes="Priced per square inch. ENIG finish only.",
)

OSHPARK_4LAYER = ManufacturerPreset(
    name="oshpark_4layer",
    manufacturer="OSH Park",
    service_level="4-layer",
    description="OSH Park 4-layer boards (ENIG finish)",
    min_trace_width=0.127,  # 5 mil
    min_hole_diameter=0.254,
    min_layers=4,
    max_layers=4,
    max_board_width=406.0,
    max_board_height=406.0,
)

PCBWAY_STANDARD = ManufacturerPreset(
    name="pcbway_standard",
    manufacturer="PCBWay",
    service_level="standard",
    description="PCBWay standard 1-2 layer PCB service",
    min_trace_width=0.1,  # ~4 mil
    min_hole_diameter=0.2,
    min_layers=1,
    max_layers=2,
    max_board_width=500.0,
    max_board_height=1100.0,
    supports_gold_fingers=True,
)

PCBWAY_ADVANCED = ManufacturerPreset(
    name="pcbway_advanced",
    manufacturer="PCBWay",
    service_level="advanced",
    description="PCBWay advanced multi-layer service (up to 14 layers)",
    min_trace_width=0.075,  # 3 mil
    min_hole_diameter=0.15,
    min_layers=1,
    max_layers=14,
    max_board_width=500.0,
    max_board_height=1100.0,
    supports_gold_fingers=True,
    notes="Higher cost but supports fine features and high layer counts.",
)

# Registry of all presets by name
PRESETS: dict[str, ManufacturerPreset] = {
    p.name: p
    for p in [
        JLCPCB_STANDARD,
        JLCPCB_4LAYER,
        OSHPARK_2LAYER,
        OSHPARK_4LAYER,
        PCBWAY_STANDARD,
        PCBWAY_ADVANCED,
    ]
}
