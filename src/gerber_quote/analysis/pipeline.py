"""Per-file analysis with fault isolation, run on a bounded worker pool.

Each file is classified, tokenized and extracted as one isolation unit: any
exception inside that unit becomes an error on that file's result and never
reaches its siblings. Results are collected in input order so the aggregate
is deterministic.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextvars import copy_context

from ..classify import classify_file
from ..formats import tokenize
from ..logging_config import analysis_context, create_logger
from ..schema.results import BoardSpecification, PerFileResult, SourceFile
from ..schema.roles import Confidence, FileFormat, Role, RoleGuess
from ..settings import AnalysisSettings, resolve_settings
from .aggregate import aggregate
from .extract import extract_file, has_gold_finger_marks

logger = create_logger(__name__)

EMPTY_BUNDLE_MESSAGE = "No valid files found in the archive"


def analyze_file(source: SourceFile, settings: AnalysisSettings | None = None) -> PerFileResult:
    """Classify, tokenize and extract one file. Never raises."""
    settings = resolve_settings(settings)
    guess = RoleGuess.unresolved()
    try:
        guess = classify_file(source.name, source.content, settings.sniff_line_limit)
        if guess.confidence is Confidence.UNRESOLVED:
            # Neither the name nor the content looks like fabrication data
            result = PerFileResult(
                name=source.name, guess=guess, has_gold_fingers=has_gold_finger_marks(source)
            )
            if not source.content.strip():
                result.warnings.append(f"File '{source.name}' is empty")
            return result

        hint = guess.file_format
        if hint is FileFormat.UNKNOWN and guess.role is Role.DRILL:
            hint = FileFormat.DRILL
        tokenized = tokenize(source.content, hint)
        result = extract_file(source, guess, tokenized)
    except Exception as e:
        logger.warning(f"Failed to analyze {source.name}: {e}", exc_info=True)
        return PerFileResult(
            name=source.name, guess=guess, errors=[f"Failed to analyze {source.name}: {e}"]
        )

    logger.debug(
        f"{source.name}: role={result.role.value} box={result.bounding_box} "
        f"errors={len(result.errors)}"
    )
    return result


def analyze_results(
    files: list[SourceFile], settings: AnalysisSettings | None = None
) -> list[PerFileResult]:
    """Analyze every file on a worker pool and return results in input order."""
    settings = resolve_settings(settings)
    if not files:
        return []

    workers = max(1, min(settings.max_workers, len(files)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="gerber-quote") as executor:
        # One context copy per task so worker records carry the analysis id
        futures = [
            executor.submit(copy_context().run, analyze_file, source, settings)
            for source in files
        ]
        return [future.result() for future in futures]


def analyze_files(
    files: list[SourceFile], settings: AnalysisSettings | None = None
) -> BoardSpecification:
    """Analyze already-extracted files into one BoardSpecification.

    Args:
        files: Files in bundle order.
        settings: Tunables; read from the environment when omitted.

    Returns:
        The aggregated specification. Failures are reported in its
        ``errors`` and ``warnings``; this function does not raise.
    """
    settings = resolve_settings(settings)
    with analysis_context():
        if not files:
            return BoardSpecification.failed([EMPTY_BUNDLE_MESSAGE])
        logger.info(f"Analyzing {len(files)} files with up to {settings.max_workers} workers")
        results = analyze_results(files, settings)
        return aggregate(results, settings.outline_disagreement_ratio)
