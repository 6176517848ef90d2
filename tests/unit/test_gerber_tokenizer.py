"""Tests for the drawing-grammar (RS-274X) tokenizer."""

from __future__ import annotations

import pytest

from gerber_quote.formats import tokenize_gerber
from gerber_quote.schema import (
    FileFormat,
    FormatDeclaration,
    Operation,
    OperationKind,
    ToolDefinition,
    UnitDeclaration,
    UnitKind,
    ZeroSuppression,
)

HEADER = "%FSLAX46Y46*%\n%MOMM*%\n"


def _tools(text: str) -> dict[str, ToolDefinition]:
    result = tokenize_gerber(text)
    return {s.code: s for s in result.statements if isinstance(s, ToolDefinition)}


class TestDeclarations:
    def test_format_and_units(self) -> None:
        result = tokenize_gerber(HEADER)
        fmt, unit = result.statements
        assert isinstance(fmt, FormatDeclaration)
        assert (fmt.integer_digits, fmt.decimal_digits) == (4, 6)
        assert fmt.zero_suppression is ZeroSuppression.LEADING
        assert fmt.incremental is False
        assert isinstance(unit, UnitDeclaration)
        assert unit.kind is UnitKind.MILLIMETER
        assert result.errors == []
        assert result.file_format is FileFormat.DRAWING

    def test_inch_units(self) -> None:
        result = tokenize_gerber("%MOIN*%")
        assert result.statements == [UnitDeclaration(UnitKind.INCH, line=1)]

    def test_trailing_zero_format(self) -> None:
        result = tokenize_gerber("%FSTAX24Y24*%\nX015Y025D03*")
        op = result.operations[0]
        assert op.x == pytest.approx(1.5)
        assert op.y == pytest.approx(2.5)

    def test_incremental_format(self) -> None:
        result = tokenize_gerber("%FSLIX24Y24*%")
        fmt = result.statements[0]
        assert isinstance(fmt, FormatDeclaration)
        assert fmt.incremental is True

    def test_legacy_unit_codes(self) -> None:
        result = tokenize_gerber("G70*\nG71*")
        assert [s.kind for s in result.statements] == [UnitKind.INCH, UnitKind.MILLIMETER]

    def test_multiple_commands_in_one_extended_block(self) -> None:
        result = tokenize_gerber("%FSLAX26Y26*MOIN*%")
        assert len(result.statements) == 2
        assert result.declares_unit


class TestApertures:
    def test_circle_has_diameter(self) -> None:
        tool = _tools(HEADER + "%ADD10C,0.150000*%")["D10"]
        assert tool.shape == "C"
        assert tool.diameter == pytest.approx(0.15)
        assert tool.width == pytest.approx(0.15)

    def test_rectangle_width_is_smaller_side(self) -> None:
        tool = _tools(HEADER + "%ADD11R,1.5X0.6*%")["D11"]
        assert tool.diameter is None
        assert tool.width == pytest.approx(0.6)

    def test_obround_width_is_smaller_side(self) -> None:
        tool = _tools(HEADER + "%ADD12O,0.8X2.0*%")["D12"]
        assert tool.width == pytest.approx(0.8)

    def test_circle_with_hole_uses_outer_diameter(self) -> None:
        tool = _tools(HEADER + "%ADD13C,1.0X0.4*%")["D13"]
        assert tool.diameter == pytest.approx(1.0)

    def test_macro_aperture_has_no_width(self) -> None:
        text = HEADER + "%AMTHERMAL*7,0,0,1.0,0.8,0.2,45*%\n%ADD14THERMAL*%"
        result = tokenize_gerber(text)
        assert result.errors == []
        tool = _tools(text)["D14"]
        assert tool.shape == "THERMAL"
        assert tool.width is None

    def test_circle_without_size_is_error(self) -> None:
        result = tokenize_gerber(HEADER + "%ADD10C*%")
        assert len(result.errors) == 1
        assert "no size" in str(result.errors[0])


class TestOperations:
    def test_operation_codes(self) -> None:
        text = HEADER + "%ADD10C,0.1*%\nD10*\nX0Y0D02*\nX1000000Y0D01*\nX2000000Y0D03*"
        kinds = [op.kind for op in tokenize_gerber(text).operations]
        assert kinds == [OperationKind.MOVE, OperationKind.DRAW, OperationKind.FLASH]

    def test_operations_reference_selected_aperture(self) -> None:
        text = HEADER + "%ADD10C,0.1*%\n%ADD11C,0.2*%\nD10*\nX0Y0D03*\nD11*\nX1Y1D03*"
        refs = [op.tool_ref for op in tokenize_gerber(text).operations]
        assert refs == ["D10", "D11"]

    def test_coordinates_scaled_by_format(self) -> None:
        op = tokenize_gerber(HEADER + "X12500000Y-2500000D03*").operations[0]
        assert op.x == pytest.approx(12.5)
        assert op.y == pytest.approx(-2.5)

    def test_omitted_coordinate_is_none(self) -> None:
        op = tokenize_gerber(HEADER + "Y5000000D01*").operations[0]
        assert op.x is None
        assert op.y == pytest.approx(5.0)

    def test_modal_operation_code(self) -> None:
        text = HEADER + "X0Y0D02*\nX1000000Y0D01*\nX2000000Y0*"
        ops = tokenize_gerber(text).operations
        assert ops[-1].kind is OperationKind.DRAW

    def test_interpolation_prefix(self) -> None:
        ops = tokenize_gerber(HEADER + "G01X1000000Y0D01*").operations
        assert ops == [Operation(OperationKind.DRAW, 1.0, 0.0, None, line=3)]

    def test_aperture_select_with_legacy_g54(self) -> None:
        text = HEADER + "%ADD10C,0.1*%\nG54D10*\nX0Y0D03*"
        assert tokenize_gerber(text).operations[0].tool_ref == "D10"

    def test_comment_is_ignored(self) -> None:
        result = tokenize_gerber("G04 This is X1Y2D01 a comment*\n" + HEADER)
        assert result.errors == []
        assert result.operations == []

    def test_stops_at_end_of_file(self) -> None:
        result = tokenize_gerber(HEADER + "M02*\nX1Y1D03*")
        assert result.operations == []

    def test_line_numbers(self) -> None:
        op = tokenize_gerber(HEADER + "\n\nX0Y0D03*").operations[0]
        assert op.line == 5


class TestRecovery:
    def test_garbage_block_recorded_and_skipped(self) -> None:
        text = HEADER + "this is not gerber*\nX1000000Y1000000D03*"
        result = tokenize_gerber(text)
        assert len(result.errors) == 1
        assert result.errors[0].line == 3
        assert len(result.operations) == 1

    def test_unknown_operation_code(self) -> None:
        result = tokenize_gerber(HEADER + "X0Y0D07*")
        assert "D07" in str(result.errors[0])
        assert result.operations == []

    def test_unterminated_extended_command(self) -> None:
        result = tokenize_gerber("%FSLAX46Y46*")
        assert "Unterminated" in str(result.errors[0])

    def test_unterminated_data_block(self) -> None:
        result = tokenize_gerber(HEADER + "X0Y0D03")
        assert len(result.errors) == 1
        assert result.operations == []

    def test_malformed_format(self) -> None:
        result = tokenize_gerber("%FSbogus*%")
        assert "format specification" in str(result.errors[0])

    def test_attributes_are_accepted(self) -> None:
        text = "%TF.FileFunction,Copper,L1,Top*%\n%TA.AperFunction,Conductor*%\n%TD*%\n%LPD*%"
        assert tokenize_gerber(text).errors == []

    def test_empty_input(self) -> None:
        result = tokenize_gerber("")
        assert result.statements == []
        assert result.errors == []

    @pytest.mark.parametrize("block", ["G..*", "D1.2.3*", "X0Y0D.*", "M..*"])
    def test_malformed_code_word_skips_only_its_block(self, block: str) -> None:
        text = HEADER + "%ADD10C,0.1*%\nD10*\nX0Y0D02*\n" + block + "\nX1000000Y0D01*"
        result = tokenize_gerber(text)
        assert len(result.errors) == 1
        assert result.errors[0].line == 6
        assert "Malformed code" in str(result.errors[0])
        assert [op.kind for op in result.operations] == [OperationKind.MOVE, OperationKind.DRAW]

    def test_unknown_word_emits_nothing(self) -> None:
        result = tokenize_gerber(HEADER + "G71Q5*")
        assert "Unknown word Q5" in str(result.errors[0])
        assert len(result.statements) == 2
