"""
Export result models: extracted rows, export summary, upload outcome.
"""

from typing import Dict, List, Optional, Union
from dataclasses import dataclass, field
from datetime import datetime


# Fixed leading columns, in output order
COLUMN_NAME = "Element Name"
COLUMN_CLASS = "Category/Class"
COLUMN_GUID = "GUID"
COLUMN_X = "X Coordinate"
COLUMN_Y = "Y Coordinate"
COLUMN_Z = "Z Coordinate"

FIXED_COLUMNS = (COLUMN_NAME, COLUMN_CLASS, COLUMN_GUID, COLUMN_X, COLUMN_Y, COLUMN_Z)

ERROR_COLUMN = "Error"
BLANK = ""  # Explicit blank cell marker
UNKNOWN = "Unknown"
NO_GUID = "No GUID Available"
GUID_ERROR = "Error Reading GUID"

CellValue = Union[str, float]


@dataclass
class ExtractedRow:
    """One element's values: six fixed columns plus dynamic property columns."""

    element_name: str = UNKNOWN
    class_name: str = UNKNOWN
    guid: str = NO_GUID
    x: CellValue = BLANK
    y: CellValue = BLANK
    z: CellValue = BLANK
    values: Dict[str, str] = field(default_factory=dict)  # column name -> display value

    def fixed_values(self) -> Dict[str, CellValue]:
        """Fixed column values keyed by column name."""
        return {
            COLUMN_NAME: self.element_name,
            COLUMN_CLASS: self.class_name,
            COLUMN_GUID: self.guid,
            COLUMN_X: self.x,
            COLUMN_Y: self.y,
            COLUMN_Z: self.z,
        }

    def get(self, column: str, default: CellValue = BLANK) -> CellValue:
        """Value for a fixed or dynamic column."""
        if column in FIXED_COLUMNS:
            return self.fixed_values()[column]
        return self.values.get(column, default)

    @property
    def has_error(self) -> bool:
        return ERROR_COLUMN in self.values


@dataclass
class ExportResult:
    """Summary of a completed export."""

    file_path: str
    element_count: int
    columns: List[str] = field(default_factory=list)  # Sorted dynamic columns
    error_rows: int = 0
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def get_summary(self) -> str:
        """Human-readable one-line summary."""
        return (f"{self.element_count} element(s), {len(self.columns)} property column(s), "
                f"{self.error_rows} row(s) with errors -> {self.file_path}")


@dataclass
class UploadResult:
    """Outcome of the optional webhook upload."""

    success: bool
    url: str
    status_code: Optional[int] = None
    message: str = ""
