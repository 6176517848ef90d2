"""Typed data models for fabrication bundle analysis."""

from .common import BoundingBox, Dimensions
from .results import BoardSpecification, PerFileResult, SourceFile
from .roles import (
    COPPER_ROLES,
    GEOMETRY_ROLES,
    ROLE_LABELS,
    Confidence,
    FileFormat,
    Role,
    RoleGuess,
    Side,
)
from .statements import (
    FormatDeclaration,
    Operation,
    OperationKind,
    Statement,
    TokenizeResult,
    ToolDefinition,
    UnitDeclaration,
    UnitKind,
    UnitSystem,
    ZeroSuppression,
)

__all__ = [
    "BoardSpecification",
    "BoundingBox",
    "COPPER_ROLES",
    "Confidence",
    "Dimensions",
    "FileFormat",
    "FormatDeclaration",
    "GEOMETRY_ROLES",
    "Operation",
    "OperationKind",
    "PerFileResult",
    "ROLE_LABELS",
    "Role",
    "RoleGuess",
    "Side",
    "SourceFile",
    "Statement",
    "TokenizeResult",
    "ToolDefinition",
    "UnitDeclaration",
    "UnitKind",
    "UnitSystem",
    "ZeroSuppression",
]
