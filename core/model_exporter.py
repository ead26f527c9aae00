"""
Two-pass model export: scan every element to discover the column schema,
then write the table with that schema.
"""

from typing import Iterable, List, Optional, Set, Tuple
from pathlib import Path
from datetime import datetime
import logging

from models.element import Element
from models.export_result import ExtractedRow, ExportResult, FIXED_COLUMNS
from .tree_flattener import flatten_items
from .property_extractor import PropertyExtractor
from .key_unifier import sort_columns
from .progress import ProgressReporter

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "NavisModelData.xlsx"
DEFAULT_PROGRESS_INTERVAL = 100


class ExportError(RuntimeError):
    """Export could not be completed. The message is user-facing."""


class ModelExporter:
    """Exports selected element subtrees to a spreadsheet."""

    def __init__(
        self,
        output_path,
        sheet_name: Optional[str] = None,
        progress: Optional[ProgressReporter] = None,
        progress_interval: int = DEFAULT_PROGRESS_INTERVAL,
        auto_fit_columns: bool = True,
        extractor: Optional[PropertyExtractor] = None
    ):
        """
        Initialize exporter.

        Args:
            output_path: Destination .xlsx file (replaced if it exists)
            sheet_name: Worksheet title
            progress: Progress sink (updates every progress_interval elements)
            progress_interval: Elements between progress updates
            auto_fit_columns: Size columns to content
            extractor: Property extractor
        """
        self.output_path = Path(output_path)
        self.sheet_name = sheet_name
        self.progress = progress or ProgressReporter()
        self.progress_interval = max(1, int(progress_interval))
        self.auto_fit_columns = auto_fit_columns
        self.extractor = extractor or PropertyExtractor()

    def export(self, roots: Iterable[Element]) -> ExportResult:
        """
        Run the full export for the given roots.

        Args:
            roots: Selected root elements

        Returns:
            ExportResult summary

        Raises:
            ExportError: No selection, or the output file cannot be written
        """
        roots = list(roots)
        if not roots:
            raise ExportError("No items are selected for export.")

        started_at = datetime.now()
        self._remove_existing_output()

        items = list(flatten_items(roots))
        logger.info(f"Exporting {len(items)} element(s) from {len(roots)} selected root(s)")

        rows, columns = self.scan(items)
        self.write(rows, columns)

        result = ExportResult(
            file_path=str(self.output_path),
            element_count=len(rows),
            columns=columns,
            error_rows=sum(1 for r in rows if r.has_error),
            started_at=started_at,
            finished_at=datetime.now()
        )
        logger.info(f"Export complete: {result.get_summary()}")
        return result

    def scan(self, items: List[Element]) -> Tuple[List[ExtractedRow], List[str]]:
        """
        Pass 1: extract every element and discover the column schema.

        Args:
            items: Flattened elements

        Returns:
            Tuple of (rows in item order, sorted dynamic columns)
        """
        total = len(items)
        known_columns: Set[str] = set()
        rows = []

        self._report(0, total, "Reading model properties...")
        for index, item in enumerate(items, 1):
            rows.append(self.extractor.extract(item, known_columns))
            if index % self.progress_interval == 0:
                self._report(index, total, f"Reading item {index} of {total}...")
        self._report(total, total, f"Found {len(known_columns)} property column(s)")

        return rows, sort_columns(known_columns)

    def write(self, rows: List[ExtractedRow], columns: List[str]) -> Path:
        """
        Pass 2: write rows with the frozen schema and save the workbook.

        Raises:
            ExportError: Too many columns for one worksheet, or the workbook cannot be saved
        """
        from reports.spreadsheet_writer import SpreadsheetWriter, DEFAULT_SHEET_NAME, MAX_COLUMNS

        column_count = len(FIXED_COLUMNS) + len(columns)
        if column_count > MAX_COLUMNS:
            raise ExportError(
                f"The selection has {column_count} columns, more than the {MAX_COLUMNS} "
                "a worksheet can hold. Select fewer items and try again."
            )

        total = len(rows)
        writer = SpreadsheetWriter(
            columns,
            sheet_name=self.sheet_name or DEFAULT_SHEET_NAME,
            auto_fit_columns=self.auto_fit_columns
        )

        self._report(0, total, "Writing spreadsheet...")
        for index, row in enumerate(rows, 1):
            writer.append_row(row)
            if index % self.progress_interval == 0:
                self._report(index, total, f"Exporting item {index} of {total}...")

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            path = writer.save(self.output_path)
        except OSError as e:
            logger.error(f"Failed to save spreadsheet: {e}", exc_info=True)
            raise ExportError(f"Could not save spreadsheet to {self.output_path}: {e}") from e

        self._report(total, total, "Export complete")
        return path

    def _remove_existing_output(self):
        if not self.output_path.exists():
            return
        try:
            self.output_path.unlink()
            logger.info(f"Removed previous export: {self.output_path}")
        except OSError as e:
            raise ExportError(
                f"Could not replace {self.output_path}: {e}\n\n"
                "Close the file if it is open in another program and try again."
            ) from e

    def _report(self, current: int, total: int, status: str):
        self.progress.set_progress(current, total, status)
        self.progress.pump_events()
