"""Tests for bundle extraction and bundle-level errors."""

from __future__ import annotations

import io
import struct
import zipfile
from collections.abc import Callable

import pytest

from gerber_quote.analysis.bundle import EXTRACT_TIP, analyze_bundle, open_bundle
from gerber_quote.exceptions import (
    BundleError,
    CorruptArchiveError,
    EmptyBundleError,
    UnsupportedArchiveError,
)
from gerber_quote.settings import AnalysisSettings

SETTINGS = AnalysisSettings()


def _zip(entries: dict[str, str | bytes], directories: tuple[str, ...] = ()) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for directory in directories:
            archive.writestr(zipfile.ZipInfo(directory), "")
        for name, content in entries.items():
            archive.writestr(name, content)
    return buffer.getvalue()



def _patched_zip(*, flag_bits: int = 0, method: int | None = None) -> bytes:
    """A one-entry stored ZIP with its local and central headers rewritten."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_STORED) as archive:
        archive.writestr("top.gtl", "G04 copper*\n")
    data = bytearray(buffer.getvalue())
    local = data.find(b"PK\x03\x04")
    central = data.find(b"PK\x01\x02")
    data[local + 6] |= flag_bits
    data[central + 8] |= flag_bits
    if method is not None:
        struct.pack_into("<H", data, local + 8, method)
        struct.pack_into("<H", data, central + 10, method)
    return bytes(data)


class TestOpenBundle:
    def test_zip_entries_in_order(self, bundle_files: dict[str, str]) -> None:
        data = _zip(bundle_files)
        files = open_bundle("gerbers.zip", data, SETTINGS)
        assert [f.name for f in files] == list(bundle_files)
        assert files[0].content == next(iter(bundle_files.values()))

    def test_skips_directories_and_os_metadata(self) -> None:
        data = _zip(
            {
                "gerbers/board.GTL": "G04 x*",
                "__MACOSX/gerbers/._board.GTL": b"\x00\x05\x16\x07",
                "gerbers/.DS_Store": b"\x00\x00",
            },
            directories=("gerbers/",),
        )
        files = open_bundle("gerbers.zip", data, SETTINGS)
        assert [f.name for f in files] == ["gerbers/board.GTL"]
        assert files[0].basename == "board.GTL"

    def test_zip_detected_by_content(self) -> None:
        files = open_bundle("upload.bin", _zip({"a.GTL": "G04 x*"}), SETTINGS)
        assert [f.name for f in files] == ["a.GTL"]

    def test_invalid_utf8_is_replaced(self) -> None:
        files = open_bundle("gerbers.zip", _zip({"a.GTL": b"G04 caf\xe9*"}), SETTINGS)
        assert files[0].content == "G04 caf�*"

    def test_single_file(self) -> None:
        files = open_bundle("board.GTL", b"G04 single*\n", SETTINGS)
        assert len(files) == 1
        assert files[0].name == "board.GTL"
        assert files[0].content == "G04 single*\n"

    def test_single_file_as_text(self) -> None:
        assert open_bundle("board.GTL", "G04 text*", SETTINGS)[0].content == "G04 text*"

    @pytest.mark.parametrize(
        "name", ["board.rar", "board.7z", "board.tar", "board.tgz", "b.tar.gz"]
    )
    def test_unsupported_archives(self, name: str) -> None:
        with pytest.raises(UnsupportedArchiveError) as exc_info:
            open_bundle(name, b"whatever", SETTINGS)
        assert exc_info.value.warnings == [EXTRACT_TIP]
        assert "not supported" in exc_info.value.message

    def test_corrupt_zip(self) -> None:
        with pytest.raises(CorruptArchiveError):
            open_bundle("gerbers.zip", b"PK\x03\x04 definitely not a zip", SETTINGS)

    def test_empty_archive(self) -> None:
        with pytest.raises(EmptyBundleError, match="No valid files found in the archive"):
            open_bundle("gerbers.zip", _zip({}, directories=("gerbers/",)), SETTINGS)

    def test_size_limit(self) -> None:
        with pytest.raises(BundleError, match="limit"):
            open_bundle("board.GTL", b"x" * 100, AnalysisSettings(max_bundle_bytes=10))

    def test_uncompressed_size_limit(self) -> None:
        data = _zip({"a.GTL": "0" * 10_000})
        assert len(data) < 5_000
        with pytest.raises(BundleError, match="expands to"):
            open_bundle("gerbers.zip", data, AnalysisSettings(max_bundle_bytes=5_000))

    def test_entry_limit(self) -> None:
        data = _zip({"a.GTL": "x", "a.GBL": "x", "a.GKO": "x"})
        with pytest.raises(BundleError, match="more than the limit of 2"):
            open_bundle("gerbers.zip", data, AnalysisSettings(max_archive_entries=2))


class TestAnalyzeBundle:
    def test_zip_end_to_end(self, bundle_files: dict[str, str]) -> None:
        spec = analyze_bundle("gerbers.zip", _zip(bundle_files), SETTINGS)
        d = spec.to_dict()
        assert d["dimensions"]["width"] == pytest.approx(100.0)
        assert d["dimensions"]["height"] == pytest.approx(80.0)
        assert d["minTraceWidth"] == pytest.approx(0.15)
        assert d["minHoleSize"] == pytest.approx(0.3)
        assert d["drillCount"] == 10
        assert d["layers"] == 1
        assert d["errors"] == []

    def test_single_file_bundle(self, rect: Callable[..., str]) -> None:
        spec = analyze_bundle("board.GKO", rect(60, 40).encode(), SETTINGS)
        assert spec.dimensions is not None
        assert spec.dimensions.width == pytest.approx(60.0)

    def test_rar_short_circuits(self) -> None:
        spec = analyze_bundle("gerbers.rar", b"Rar!\x1a\x07\x00", SETTINGS)
        assert len(spec.errors) == 1
        assert spec.errors[0].startswith("RAR archives are not supported")
        assert spec.warnings == [EXTRACT_TIP]
        assert spec.file_roles == []
        assert spec.copper_layer_count == 0
        assert spec.dimensions is None

    def test_corrupt_zip_is_reported(self) -> None:
        spec = analyze_bundle("gerbers.zip", b"garbage", SETTINGS)
        assert len(spec.errors) == 1
        assert "Could not open ZIP archive 'gerbers.zip'" in spec.errors[0]

    def test_empty_archive_is_reported(self) -> None:
        spec = analyze_bundle("gerbers.zip", _zip({}), SETTINGS)
        assert spec.errors == ["No valid files found in the archive"]

    def test_deterministic(self, bundle_files: dict[str, str]) -> None:
        data = _zip(bundle_files)
        assert (
            analyze_bundle("g.zip", data, SETTINGS).to_dict()
            == analyze_bundle("g.zip", data, SETTINGS).to_dict()
        )


class TestUnreadableEntries:
    def test_encrypted_entry_raises_bundle_error(self) -> None:
        with pytest.raises(UnsupportedArchiveError, match="'top.gtl'.*password protected"):
            open_bundle("board.zip", _patched_zip(flag_bits=0x1), SETTINGS)

    def test_encrypted_entry_is_reported(self) -> None:
        spec = analyze_bundle("board.zip", _patched_zip(flag_bits=0x1), SETTINGS)
        assert len(spec.errors) == 1
        assert "password protected" in spec.errors[0]
        assert spec.warnings == [EXTRACT_TIP]
        assert spec.file_roles == []

    def test_unsupported_compression_is_reported(self) -> None:
        # Method 9 is Deflate64
        spec = analyze_bundle("board.zip", _patched_zip(method=9), SETTINGS)
        assert len(spec.errors) == 1
        assert spec.errors[0].startswith("Could not read 'top.gtl' from 'board.zip'")
        assert spec.warnings == [EXTRACT_TIP]

    def test_untouched_archive_reads(self) -> None:
        files = open_bundle("board.zip", _patched_zip(), SETTINGS)
        assert [f.name for f in files] == ["top.gtl"]
