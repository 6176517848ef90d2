"""Manufacturing roles assigned to fabrication files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..constants import UNKNOWN_FILE_LABEL


class Role(Enum):
    TOP_COPPER = "TopCopper"
    BOTTOM_COPPER = "BottomCopper"
    INNER_COPPER = "InnerCopper"
    TOP_MASK = "TopMask"
    BOTTOM_MASK = "BottomMask"
    TOP_SILK = "TopSilk"
    BOTTOM_SILK = "BottomSilk"
    TOP_PASTE = "TopPaste"
    BOTTOM_PASTE = "BottomPaste"
    DRILL = "Drill"
    OUTLINE = "Outline"
    MECHANICAL = "Mechanical"
    UNKNOWN = "Unknown"


class Side(Enum):
    TOP = "Top"
    BOTTOM = "Bottom"
    NONE = "None"


class Confidence(Enum):
    FILENAME_MATCH = "FilenameMatch"
    CONTENT_SNIFF = "ContentSniff"
    UNRESOLVED = "Unresolved"


class FileFormat(Enum):
    """Grammar family a file's content belongs to."""

    DRAWING = "drawing"
    DRILL = "drill"
    UNKNOWN = "unknown"


COPPER_ROLES = frozenset({Role.TOP_COPPER, Role.BOTTOM_COPPER, Role.INNER_COPPER})

# Roles whose files are expected to contain geometry
GEOMETRY_ROLES = COPPER_ROLES | {Role.DRILL, Role.OUTLINE}

ROLE_LABELS: dict[Role, str] = {
    Role.TOP_COPPER: "Top Copper Layer",
    Role.BOTTOM_COPPER: "Bottom Copper Layer",
    Role.INNER_COPPER: "Inner Copper Layer",
    Role.TOP_MASK: "Top Solder Mask",
    Role.BOTTOM_MASK: "Bottom Solder Mask",
    Role.TOP_SILK: "Top Silkscreen",
    Role.BOTTOM_SILK: "Bottom Silkscreen",
    Role.TOP_PASTE: "Top Solder Paste",
    Role.BOTTOM_PASTE: "Bottom Solder Paste",
    Role.DRILL: "Drill File",
    Role.OUTLINE: "Outline",
    Role.MECHANICAL: "Mechanical",
    Role.UNKNOWN: UNKNOWN_FILE_LABEL,
}


@dataclass(frozen=True)
class RoleGuess:
    """Classification of one file."""

    role: Role
    side: Side = Side.NONE
    confidence: Confidence = Confidence.UNRESOLVED
    file_format: FileFormat = FileFormat.UNKNOWN

    @classmethod
    def unresolved(cls, file_format: FileFormat = FileFormat.UNKNOWN) -> RoleGuess:
        return cls(Role.UNKNOWN, Side.NONE, Confidence.UNRESOLVED, file_format)

    @property
    def label(self) -> str:
        return ROLE_LABELS[self.role]

    @property
    def is_copper(self) -> bool:
        return self.role in COPPER_ROLES

    @property
    def implies_geometry(self) -> bool:
        return self.role in GEOMETRY_ROLES

    def to_dict(self) -> dict[str, Any]:
        return {
            "role": self.role.value,
            "side": self.side.value,
            "confidence": self.confidence.value,
            "format": self.file_format.value,
            "label": self.label,
        }
