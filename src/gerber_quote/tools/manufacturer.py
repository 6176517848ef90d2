"""Manufacturer tools: capability presets and manufacturability checking."""

from __future__ import annotations

from typing import Any

from ..manufacturers import PRESETS
from ..validation import validate_preset_name
from .analysis import load_bundle_specification
from .registry import register_tool


def _list_manufacturer_presets_handler() -> dict[str, Any]:
    """List all available manufacturer capability presets."""
    return {
        "count": len(PRESETS),
        "presets": [p.to_dict() for p in PRESETS.values()],
    }


def _check_manufacturability_handler(bundle_path: str, preset_name: str) -> dict[str, Any]:
    """Check an analyzed bundle against a manufacturer's capabilities.

    Args:
        bundle_path: Path to the fabrication file or archive.
        preset_name: Name of the preset to check against (e.g., 'jlcpcb_standard').
    """
    check = validate_preset_name(preset_name, list(PRESETS))
    if not check.valid:
        return {"error": check.error}

    spec = load_bundle_specification(bundle_path)
    if isinstance(spec, dict):
        return spec

    preset = PRESETS[preset_name]
    violations = preset.check_specification(spec)

    return {
        "preset": preset_name,
        "manufacturer": preset.manufacturer,
        "passed": len(violations) == 0,
        "violation_count": len(violations),
        "violations": violations,
        "analysis_errors": spec.errors,
        "notes": preset.notes,
    }


register_tool(
    name="list_manufacturer_presets",
    description="List all available manufacturer capability presets (JLCPCB, OSHPark, PCBWay).",
    handler=_list_manufacturer_presets_handler,
    category="manufacturer",
)

register_tool(
    name="check_manufacturability",
    description="Check an analyzed fabrication bundle against a manufacturer's capabilities.",
    handler=_check_manufacturability_handler,
    category="manufacturer",
)
