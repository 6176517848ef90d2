"""Bundle input: a single fabrication file or a ZIP archive of them.

``open_bundle`` turns uploaded bytes into SourceFile entries and raises a
BundleError subclass when the bundle cannot be analyzed at all.
``analyze_bundle`` is the total entry point that converts those failures into
a BoardSpecification carrying the error.
"""

from __future__ import annotations

import io
import zipfile

from ..exceptions import (
    BundleError,
    CorruptArchiveError,
    EmptyBundleError,
    UnsupportedArchiveError,
)
from ..logging_config import analysis_context, create_logger
from ..schema.results import BoardSpecification, SourceFile
from ..settings import AnalysisSettings, resolve_settings
from .pipeline import EMPTY_BUNDLE_MESSAGE, analyze_files

logger = create_logger(__name__)

ZIP_MAGIC = b"PK\x03\x04"
_ENCRYPTED_FLAG = 0x1

UNSUPPORTED_ARCHIVE_EXTENSIONS = (".rar", ".7z", ".tar", ".tgz", ".tar.gz", ".gz")

EXTRACT_TIP = (
    "Tip: You can use WinRAR, 7-Zip, or other tools to extract the archive "
    "and create a ZIP file instead."
)


def _decode(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")


def _is_zip(name: str, data: bytes | str) -> bool:
    if name.lower().endswith(".zip"):
        return True
    return isinstance(data, bytes) and data.startswith(ZIP_MAGIC)


def _skip_entry(info: zipfile.ZipInfo) -> bool:
    if info.is_dir():
        return True
    path = info.filename.replace("\\", "/")
    if path.startswith("__MACOSX/") or "/__MACOSX/" in path:
        return True
    return path.rsplit("/", 1)[-1].startswith(".")


def _unsupported_archive(name: str) -> UnsupportedArchiveError | None:
    lowered = name.lower()
    for extension in UNSUPPORTED_ARCHIVE_EXTENSIONS:
        if lowered.endswith(extension):
            kind = extension.lstrip(".").upper()
            return UnsupportedArchiveError(
                f"{kind} archives are not supported. Please extract your {kind} file "
                "and upload it as a ZIP archive or as individual files instead.",
                bundle_name=name,
                warnings=[EXTRACT_TIP],
            )
    return None


def _unreadable_entry(name: str, info: zipfile.ZipInfo, reason: str) -> UnsupportedArchiveError:
    return UnsupportedArchiveError(
        f"Could not read '{info.filename}' from '{name}': {reason}. Please extract the "
        "archive and upload it as a standard ZIP archive or as individual files instead.",
        bundle_name=name,
        warnings=[EXTRACT_TIP],
    )


def _read_zip(name: str, data: bytes, settings: AnalysisSettings) -> list[SourceFile]:
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, ValueError) as e:
        raise CorruptArchiveError(f"Could not open ZIP archive '{name}': {e}", name) from e

    with archive:
        entries = [info for info in archive.infolist() if not _skip_entry(info)]
        if len(entries) > settings.max_archive_entries:
            raise BundleError(
                f"Archive '{name}' holds {len(entries)} files, more than the limit of "
                f"{settings.max_archive_entries}",
                bundle_name=name,
            )
        total = sum(info.file_size for info in entries)
        if total > settings.max_bundle_bytes:
            raise BundleError(
                f"Archive '{name}' expands to {total} bytes, more than the limit of "
                f"{settings.max_bundle_bytes}",
                bundle_name=name,
            )

        files = []
        for info in entries:
            if info.flag_bits & _ENCRYPTED_FLAG:
                raise _unreadable_entry(name, info, "the entry is password protected")
            try:
                content = archive.read(info)
            except (NotImplementedError, RuntimeError) as e:
                # Unsupported compression methods and encryption variants
                raise _unreadable_entry(name, info, str(e)) from e
            except (zipfile.BadZipFile, zipfile.LargeZipFile, EOFError, ValueError, OSError) as e:
                raise CorruptArchiveError(
                    f"Could not read '{info.filename}' from '{name}': {e}", name
                ) from e
            files.append(SourceFile(info.filename, _decode(content)))
    return files


def open_bundle(
    name: str, data: bytes | str, settings: AnalysisSettings | None = None
) -> list[SourceFile]:
    """Extract the files of a bundle.

    Args:
        name: Upload file name; its extension selects archive handling.
        data: Raw bundle content.
        settings: Size and entry limits; read from the environment when omitted.

    Returns:
        SourceFile entries in archive order.

    Raises:
        UnsupportedArchiveError: For RAR, 7z and tar style archives, and for ZIP
            entries that are encrypted or use an unsupported compression method.
        CorruptArchiveError: When a ZIP archive cannot be read.
        EmptyBundleError: When there is nothing to analyze.
        BundleError: When a size or entry limit is exceeded.
    """
    settings = resolve_settings(settings)

    unsupported = _unsupported_archive(name)
    if unsupported is not None:
        raise unsupported

    if len(data) > settings.max_bundle_bytes:
        raise BundleError(
            f"Bundle '{name}' is {len(data)} bytes, more than the limit of "
            f"{settings.max_bundle_bytes}",
            bundle_name=name,
        )

    if _is_zip(name, data):
        raw = data.encode("utf-8") if isinstance(data, str) else data
        files = _read_zip(name, raw, settings)
        if not files:
            raise EmptyBundleError(EMPTY_BUNDLE_MESSAGE, name)
        logger.debug(f"Extracted {len(files)} files from {name}")
        return files

    return [SourceFile(name, _decode(data))]


def analyze_bundle(
    name: str, data: bytes | str, settings: AnalysisSettings | None = None
) -> BoardSpecification:
    """Analyze an uploaded bundle into a BoardSpecification. Never raises.

    Bundle-level failures (unsupported or corrupt archives, empty bundles,
    exceeded limits) return an empty specification with the error and any
    hints in ``warnings``; nothing is analyzed in that case.
    """
    settings = resolve_settings(settings)
    with analysis_context():
        try:
            files = open_bundle(name, data, settings)
        except BundleError as e:
            logger.warning(f"Rejected bundle {name}: {e.message}")
            return BoardSpecification.failed([e.message], e.warnings)
        return analyze_files(files, settings)
