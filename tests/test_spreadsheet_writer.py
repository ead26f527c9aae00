"""
Tests for the spreadsheet writer
"""
from openpyxl import load_workbook

from models.export_result import ExtractedRow, FIXED_COLUMNS
from reports.spreadsheet_writer import SpreadsheetWriter


class TestSpreadsheetWriter:
    """Header layout and cell contents"""

    def test_header_sorted_after_fixed_columns(self):
        writer = SpreadsheetWriter(["Z.Last", "A.First", "A.First (2)"])
        assert writer.header == FIXED_COLUMNS + ("A.First", "A.First (2)", "Z.Last")
        header = [cell.value for cell in writer.worksheet[1]]
        assert header == list(writer.header)

    def test_row_values_blank_for_missing_columns(self):
        writer = SpreadsheetWriter(["Item.Name", "Item.Type"])
        row = ExtractedRow(element_name="Wall", class_name="Solid", guid="g-1",
                           x=1.5, y=2.5, z=3.5, values={"Item.Type": "Basic Wall"})

        assert writer.row_values(row) == ["Wall", "Solid", "g-1", 1.5, 2.5, 3.5, None, "Basic Wall"]

    def test_illegal_characters_removed(self):
        writer = SpreadsheetWriter(["Item.Comment"])
        row = ExtractedRow(values={"Item.Comment": "line\x01break"})
        assert writer.row_values(row)[-1] == "linebreak"

    def test_save_and_auto_fit(self, tmp_path):
        writer = SpreadsheetWriter(["Item.Description"], sheet_name="Model Data")
        writer.append_row(ExtractedRow(element_name="Door", values={"Item.Description": "x" * 30}))
        path = writer.save(tmp_path / "out.xlsx")

        sheet = load_workbook(path)["Model Data"]
        assert sheet.max_row == 2
        assert sheet["A2"].value == "Door"
        assert sheet.column_dimensions["G"].width == 32
        assert sheet["A1"].font.bold

    def test_auto_fit_disabled(self, tmp_path):
        writer = SpreadsheetWriter([], auto_fit_columns=False)
        writer.append_row(ExtractedRow(element_name="A very long element name indeed"))
        path = writer.save(tmp_path / "out.xlsx")

        sheet = load_workbook(path).active
        assert sheet.column_dimensions["A"].width != len("A very long element name indeed") + 2
        assert writer.row_count == 1

    def test_text_starting_with_equals_stays_text(self, tmp_path):
        writer = SpreadsheetWriter(["=Odd.Column", "Item.Comment", "Item.Mark"])
        writer.append_row(ExtractedRow(element_name="=Wall",
                                       values={"Item.Comment": "=1+1", "Item.Mark": "=== A ==="}))
        path = writer.save(tmp_path / "out.xlsx")

        sheet = load_workbook(path).active
        header = {cell.value: cell for cell in sheet[1]}
        assert header["=Odd.Column"].data_type == 's'
        assert sheet["A2"].value == "=Wall"
        assert sheet["A2"].data_type == 's'
        row = {sheet.cell(row=1, column=c.column).value: c for c in sheet[2]}
        assert row["Item.Comment"].value == "=1+1"
        assert row["Item.Comment"].data_type == 's'
        assert row["Item.Mark"].value == "=== A ==="
        assert row["Item.Mark"].data_type == 's'
