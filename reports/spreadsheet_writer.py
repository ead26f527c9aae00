"""
Spreadsheet writer for extracted model data.
Writes one worksheet: bold header row, then one row per element.
"""

from typing import Dict, Iterable, List, Optional, Tuple
from pathlib import Path
import logging

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from models.export_result import ExtractedRow, FIXED_COLUMNS, BLANK
from core.key_unifier import sort_columns

logger = logging.getLogger(__name__)

DEFAULT_SHEET_NAME = "Model Data"
MAX_COLUMN_WIDTH = 80
# Excel worksheet limit (column XFD)
MAX_COLUMNS = 16384


class SpreadsheetWriter:
    """
    Builds the output workbook from a frozen column schema.

    The dynamic columns are sorted once at construction and never change;
    rows are appended in the order given.
    """

    def __init__(self, columns: Iterable[str], sheet_name: str = DEFAULT_SHEET_NAME,
                 auto_fit_columns: bool = True):
        """
        Initialize writer and write the header row.

        Args:
            columns: Dynamic column names discovered in the scan pass
            sheet_name: Worksheet title
            auto_fit_columns: Size columns to their longest value on save
        """
        self.columns: Tuple[str, ...] = tuple(sort_columns(columns))
        self.header: Tuple[str, ...] = FIXED_COLUMNS + self.columns
        self.auto_fit_columns = auto_fit_columns
        self.row_count = 0

        self.workbook = Workbook()
        self.worksheet = self.workbook.active
        self.worksheet.title = sheet_name
        self._widths: Dict[int, int] = {}
        self._rows_written = 0

        self._write_header()

    def _write_header(self):
        self._append(list(self.header))
        bold = Font(bold=True)
        for cell in self.worksheet[1]:
            cell.font = bold
        for index, name in enumerate(self.header, 1):
            self._track_width(index, name)

    def row_values(self, row: ExtractedRow) -> List[Optional[object]]:
        """Cell values for a row in header order (None for blank cells)."""
        values = []
        for column in self.header:
            value = row.get(column, BLANK)
            if value == BLANK or value is None:
                values.append(None)
            elif isinstance(value, str):
                values.append(ILLEGAL_CHARACTERS_RE.sub('', value))
            else:
                values.append(value)
        return values

    def append_row(self, row: ExtractedRow):
        """Append one element row."""
        values = self.row_values(row)
        self._append(values)
        self.row_count += 1
        for index, value in enumerate(values, 1):
            if value is not None:
                self._track_width(index, value)

    def _append(self, values: List[Optional[object]]):
        self.worksheet.append(values)
        self._rows_written += 1
        # Text starting with "=" is data, not a formula
        for index, value in enumerate(values, 1):
            if isinstance(value, str) and value.startswith('='):
                self.worksheet.cell(row=self._rows_written, column=index).data_type = 's'

    def _track_width(self, index: int, value):
        length = len(str(value))
        if length > self._widths.get(index, 0):
            self._widths[index] = length

    def save(self, output_path) -> Path:
        """
        Save the workbook.

        Args:
            output_path: Destination .xlsx path

        Returns:
            Path of the saved file
        """
        path = Path(output_path)
        if self.auto_fit_columns:
            for index, width in self._widths.items():
                letter = get_column_letter(index)
                self.worksheet.column_dimensions[letter].width = min(width + 2, MAX_COLUMN_WIDTH)

        self.workbook.save(str(path))
        logger.info(f"Saved {self.row_count} row(s) x {len(self.header)} column(s) to {path}")
        return path
