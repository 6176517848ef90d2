"""Analysis tools: bundle analysis, classification and quote reports.

Handlers read bundles from disk, delegate to the analysis library and return
plain dicts; failures come back as ``{"error": ...}`` instead of raising.
"""

from __future__ import annotations

from typing import Any

from ..analysis import (
    aggregate,
    analyze_bundle,
    analyze_file,
    generate_analysis_report,
    recommend_process,
    to_quote_fields,
    validate_specification,
)
from ..classify import classify_file
from ..logging_config import create_logger
from ..schema.results import BoardSpecification, SourceFile
from ..settings import AnalysisSettings
from ..validation import validate_bundle_path, validate_file_name, validate_file_names
from .registry import register_tool

logger = create_logger(__name__)


def load_bundle_specification(bundle_path: str) -> BoardSpecification | dict[str, Any]:
    """Analyze the bundle at ``bundle_path``, or return an error dict."""
    settings = AnalysisSettings.from_env()
    check = validate_bundle_path(bundle_path, settings.max_bundle_bytes)
    if not check.valid:
        return {"error": check.error}

    path = check.value
    try:
        data = path.read_bytes()
    except OSError as e:
        logger.warning(f"Could not read bundle {path}: {e}")
        return {"error": f"Could not read {bundle_path}: {e}"}

    return analyze_bundle(path.name, data, settings)


def _analyze_gerber_bundle_handler(bundle_path: str) -> dict[str, Any]:
    """Analyze a Gerber/Excellon bundle (single file or ZIP archive).

    Args:
        bundle_path: Path to the fabrication file or archive.
    """
    spec = load_bundle_specification(bundle_path)
    if isinstance(spec, dict):
        return spec
    return spec.to_dict()


def _analyze_gerber_text_handler(file_name: str, content: str) -> dict[str, Any]:
    """Analyze one fabrication file given as text.

    Args:
        file_name: Name of the file; used for role classification.
        content: Gerber or Excellon text.
    """
    check = validate_file_name(file_name)
    if not check.valid:
        return {"error": check.error}

    settings = AnalysisSettings.from_env()
    result = analyze_file(SourceFile(file_name, content), settings)
    spec = aggregate([result], settings.outline_disagreement_ratio)
    return {
        "file": result.to_dict(),
        "specification": spec.to_dict(),
    }


def _classify_gerber_files_handler(file_names: list[str]) -> dict[str, Any]:
    """Classify fabrication files by name alone.

    Args:
        file_names: File names, e.g. ['board.GTL', 'board-Edge_Cuts.gbr'].
    """
    check = validate_file_names(file_names)
    if not check.valid:
        return {"error": check.error}

    files = []
    for name in check.value:
        guess = classify_file(name)
        files.append({"name": name, **guess.to_dict()})
    return {"count": len(files), "files": files}


def _get_quote_report_handler(bundle_path: str) -> dict[str, Any]:
    """Analyze a bundle and return quote form fields, checks and a text report.

    Args:
        bundle_path: Path to the fabrication file or archive.
    """
    spec = load_bundle_specification(bundle_path)
    if isinstance(spec, dict):
        return spec
    return {
        "specification": spec.to_dict(),
        "quote_fields": to_quote_fields(spec),
        "validation": validate_specification(spec).to_dict(),
        "recommendations": recommend_process(spec).to_dict(),
        "report": generate_analysis_report(spec),
    }


register_tool(
    name="analyze_gerber_bundle",
    description=(
        "Analyze a PCB fabrication bundle (Gerber/Excellon file or ZIP archive) and return "
        "board dimensions, layer count, drill count, minimum trace width and hole size."
    ),
    handler=_analyze_gerber_bundle_handler,
    category="analysis",
)

register_tool(
    name="analyze_gerber_text",
    description="Analyze a single Gerber or Excellon file supplied as text.",
    handler=_analyze_gerber_text_handler,
    category="analysis",
)

register_tool(
    name="classify_gerber_files",
    description="Classify fabrication file names into layer roles (copper, mask, drill, ...).",
    handler=_classify_gerber_files_handler,
    category="analysis",
)

register_tool(
    name="get_quote_report",
    description=(
        "Analyze a bundle and return quote form fields, completeness checks, "
        "process recommendations and a plain-text report."
    ),
    handler=_get_quote_report_handler,
    category="analysis",
)
