"""Tests for the drill-grammar (Excellon) tokenizer."""

from __future__ import annotations

import pytest

from gerber_quote.formats import tokenize_excellon
from gerber_quote.schema import (
    FileFormat,
    FormatDeclaration,
    OperationKind,
    ToolDefinition,
    UnitDeclaration,
    UnitKind,
    ZeroSuppression,
)

METRIC_DRILL = """M48
METRIC,TZ
T1C0.300
T2C0.500
%
T1
X5.0Y5.0
X15.0Y5.0
T2
X5.0Y75.0
M30
"""


def _tools(text: str) -> dict[str, ToolDefinition]:
    return {s.code: s for s in tokenize_excellon(text).statements if isinstance(s, ToolDefinition)}


def _formats(text: str) -> list[FormatDeclaration]:
    return [s for s in tokenize_excellon(text).statements if isinstance(s, FormatDeclaration)]


class TestHeader:
    def test_metric_header(self) -> None:
        result = tokenize_excellon(METRIC_DRILL)
        assert result.errors == []
        assert result.file_format is FileFormat.DRILL
        units = [s for s in result.statements if isinstance(s, UnitDeclaration)]
        assert [u.kind for u in units] == [UnitKind.MILLIMETER]

    def test_tool_diameters(self) -> None:
        tools = _tools(METRIC_DRILL)
        assert tools["T1"].diameter == pytest.approx(0.3)
        assert tools["T2"].diameter == pytest.approx(0.5)

    def test_tool_with_feed_and_speed(self) -> None:
        tools = _tools("M48\nINCH\nT01F200S65C0.0320\n%\n")
        assert tools["T1"].diameter == pytest.approx(0.032)

    def test_metric_defaults_to_3_3(self) -> None:
        fmt = _formats("M48\nMETRIC\n%\n")[-1]
        assert (fmt.integer_digits, fmt.decimal_digits) == (3, 3)

    def test_explicit_digit_layout(self) -> None:
        fmt = _formats("M48\nMETRIC,LZ,0000.00\n%\n")[-1]
        assert (fmt.integer_digits, fmt.decimal_digits) == (4, 2)

    def test_lz_means_trailing_zeros_omitted(self) -> None:
        fmt = _formats("M48\nINCH,LZ\n%\n")[-1]
        assert fmt.zero_suppression is ZeroSuppression.TRAILING

    def test_tz_means_leading_zeros_omitted(self) -> None:
        fmt = _formats("M48\nINCH,TZ\n%\n")[-1]
        assert fmt.zero_suppression is ZeroSuppression.LEADING

    def test_legacy_unit_codes(self) -> None:
        result = tokenize_excellon("M48\nM71\nM72\n%\n")
        units = [s.kind for s in result.statements if isinstance(s, UnitDeclaration)]
        assert units == [UnitKind.MILLIMETER, UnitKind.INCH]

    def test_format_comment(self) -> None:
        text = "; FORMAT={3:3/ absolute / metric / decimal}\nM48\n%\nT1C0.5\nX1.5Y2.0\n"
        result = tokenize_excellon(text)
        op = result.operations[0]
        assert op.x == pytest.approx(1.5)
        assert UnitDeclaration(UnitKind.MILLIMETER, line=1) in result.statements

    def test_header_keywords_ignored(self) -> None:
        result = tokenize_excellon("M48\nVER,1\nFMAT,2\nDETECT,ON\n%\n")
        assert result.errors == []


class TestHits:
    def test_drill_hits(self) -> None:
        ops = tokenize_excellon(METRIC_DRILL).operations
        assert [op.kind for op in ops] == [OperationKind.DRILL] * 3
        assert [op.tool_ref for op in ops] == ["T1", "T1", "T2"]
        assert (ops[2].x, ops[2].y) == (pytest.approx(5.0), pytest.approx(75.0))

    def test_inch_leading_suppression(self) -> None:
        ops = tokenize_excellon("M48\nINCH,TZ\n%\nT1C0.02\nX015Y-0025\n").operations
        assert ops[0].x == pytest.approx(0.0015)
        assert ops[0].y == pytest.approx(-0.0025)

    def test_inch_trailing_suppression(self) -> None:
        ops = tokenize_excellon("M48\nINCH,LZ\n%\nT1C0.02\nX01Y025\n").operations
        assert ops[0].x == pytest.approx(1.0)
        assert ops[0].y == pytest.approx(2.5)

    def test_modal_coordinate(self) -> None:
        ops = tokenize_excellon("M48\nMETRIC\n%\nT1C0.3\nX1.0Y1.0\nY2.0\n").operations
        assert ops[1].x is None
        assert ops[1].y == pytest.approx(2.0)

    def test_body_tool_definition_selects(self) -> None:
        ops = tokenize_excellon("M48\nMETRIC\n%\nT3C0.8\nX1.0Y1.0\n").operations
        assert ops[0].tool_ref == "T3"

    def test_t0_deselects(self) -> None:
        ops = tokenize_excellon("M48\nMETRIC\nT1C0.3\n%\nT1\nT0\nX1.0Y1.0\n").operations
        assert ops[0].tool_ref is None

    def test_stops_at_end_of_program(self) -> None:
        ops = tokenize_excellon(METRIC_DRILL + "X99.0Y99.0\n").operations
        assert len(ops) == 3

    def test_incremental_mode(self) -> None:
        formats = _formats("M48\nMETRIC\nICI,ON\n%\n")
        assert formats[-1].incremental is True


class TestSlots:
    def test_g85_slot(self) -> None:
        ops = tokenize_excellon("M48\nMETRIC\nT1C1.0\n%\nT1\nX1.0Y2.0G85X3.0Y2.0\n").operations
        assert [op.kind for op in ops] == [OperationKind.DRILL, OperationKind.DRAW]
        assert ops[1].x == pytest.approx(3.0)

    def test_routed_slot(self) -> None:
        text = "M48\nMETRIC\nT1C1.0\n%\nT1\nG00X1.0Y1.0\nM15\nG01X5.0Y1.0\nM16\nG05\nX8.0Y8.0\n"
        ops = tokenize_excellon(text).operations
        assert [op.kind for op in ops] == [
            OperationKind.MOVE,
            OperationKind.DRILL,
            OperationKind.DRAW,
            OperationKind.DRILL,
        ]
        # The plunge happens at the current position
        assert ops[1].x is None and ops[1].y is None


class TestRecovery:
    def test_garbage_line(self) -> None:
        result = tokenize_excellon("M48\nMETRIC\n%\nT1C0.3\nthis is garbage\nX1.0Y1.0\n")
        assert len(result.errors) == 1
        assert result.errors[0].line == 5
        assert "Unparsable drill statement" in str(result.errors[0])
        assert len(result.operations) == 1

    def test_malformed_coordinate(self) -> None:
        result = tokenize_excellon("M48\nMETRIC\n%\nX1.2.3Y1.0\n")
        assert len(result.errors) == 1
        assert result.operations == []

    def test_empty_input(self) -> None:
        result = tokenize_excellon("")
        assert result.statements == []
        assert result.errors == []
