"""Shared helpers for building small fabrication files in tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BUNDLE_DIR = FIXTURES_DIR / "bundle"


def gerber_rect(
    width: float,
    height: float,
    *,
    origin: tuple[float, float] = (0.0, 0.0),
    aperture: float = 0.2,
    unit: str = "MM",
) -> str:
    """Gerber text stroking a width x height rectangle with one round aperture.

    Coordinates use a 4.6 format for millimeters and 2.4 for inches.
    """
    decimals = 6 if unit == "MM" else 4
    integers = 4 if unit == "MM" else 2
    scale = 10**decimals

    def point(x: float, y: float, op: str) -> str:
        return f"X{round(x * scale)}Y{round(y * scale)}{op}*"

    x0, y0 = origin
    x1, y1 = x0 + width, y0 + height
    return "\n".join(
        [
            f"%FSLAX{integers}{decimals}Y{integers}{decimals}*%",
            f"%MO{unit}*%",
            f"%ADD10C,{aperture}*%",
            "D10*",
            point(x0, y0, "D02"),
            point(x1, y0, "D01"),
            point(x1, y1, "D01"),
            point(x0, y1, "D01"),
            point(x0, y0, "D01"),
            "M02*",
        ]
    )


@pytest.fixture
def rect() -> Callable[..., str]:
    return gerber_rect


@pytest.fixture
def bundle_files() -> dict[str, str]:
    """The three-file reference bundle: outline, top copper and drill."""
    return {path.name: path.read_text() for path in sorted(BUNDLE_DIR.iterdir())}


@pytest.fixture
def bundle_dir() -> Path:
    return BUNDLE_DIR
