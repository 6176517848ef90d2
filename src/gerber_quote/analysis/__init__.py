"""Per-file extraction, aggregation and bundle-level analysis."""

from .aggregate import aggregate, resolve_dimensions
from .bundle import analyze_bundle, open_bundle
from .extract import extract_file, format_line_errors, has_gold_finger_marks
from .pipeline import EMPTY_BUNDLE_MESSAGE, analyze_file, analyze_files, analyze_results
from .report import (
    HoleClass,
    ProcessRecommendation,
    SpecificationCheck,
    TraceClass,
    generate_analysis_report,
    hole_class,
    recommend_process,
    to_quote_fields,
    trace_class,
    validate_specification,
)

__all__ = [
    "EMPTY_BUNDLE_MESSAGE",
    "HoleClass",
    "ProcessRecommendation",
    "SpecificationCheck",
    "TraceClass",
    "aggregate",
    "analyze_bundle",
    "analyze_file",
    "analyze_files",
    "analyze_results",
    "extract_file",
    "format_line_errors",
    "generate_analysis_report",
    "has_gold_finger_marks",
    "hole_class",
    "open_bundle",
    "recommend_process",
    "resolve_dimensions",
    "to_quote_fields",
    "trace_class",
    "validate_specification",
]
