"""Gerber/Excellon fabrication bundle analysis for PCB quoting."""

from .analysis import analyze_bundle, analyze_file, analyze_files, open_bundle
from .classify import classify_file
from .exceptions import GerberQuoteError
from .formats import tokenize
from .schema import BoardSpecification, PerFileResult, RoleGuess, SourceFile
from .settings import AnalysisSettings

__version__ = "0.1.0"

__all__ = [
    "AnalysisSettings",
    "BoardSpecification",
    "GerberQuoteError",
    "PerFileResult",
    "RoleGuess",
    "SourceFile",
    "analyze_bundle",
    "analyze_file",
    "analyze_files",
    "classify_file",
    "open_bundle",
    "tokenize",
]
