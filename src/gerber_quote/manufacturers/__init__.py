"""Manufacturer capability presets for quoting."""

from .presets import PRESETS, ManufacturerPreset

__all__ = [
    "PRESETS",
    "ManufacturerPreset",
]
