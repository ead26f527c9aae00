"""
Per-element property extraction and column schema discovery.

Every element yields one ExtractedRow: six fixed values (name, class, GUID,
bounding box center) that are always populated, plus a mapping of
``"Category.Property"`` column names to display values. Column names seen
along the way are added to a shared set, which becomes the table schema.
"""

from typing import List, MutableSet, Optional, Tuple
import logging

from models.element import Element, PropertyCategory, is_zero_guid
from models.export_result import (
    ExtractedRow, CellValue, BLANK, UNKNOWN, NO_GUID, GUID_ERROR, ERROR_COLUMN
)
from .key_unifier import unique_key, column_key

GUID_PROPERTY = "guid"


class PropertyExtractor:
    """Extracts fixed and dynamic column values from elements."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize extractor.

        Args:
            logger: Logger receiving per-property and per-element diagnostics
        """
        self.logger = logger or logging.getLogger(__name__)

    def extract(self, element: Element, known_columns: MutableSet[str]) -> ExtractedRow:
        """
        Build the row for one element and register its columns.

        Args:
            element: Element to read
            known_columns: Global column set, updated in place

        Returns:
            ExtractedRow with all fixed columns populated
        """
        row = ExtractedRow()
        row.element_name = self.element_name(element)
        row.class_name = self.class_name(element)
        row.x, row.y, row.z = self.center_coordinates(element)

        try:
            categories = element.get_categories() or []
        except Exception as e:
            row.guid = GUID_ERROR
            self._fail_row(row, e, known_columns)
            return row

        row.guid = self.resolve_guid(element, categories)

        try:
            self._collect_properties(row, categories, known_columns)
        except Exception as e:
            self._fail_row(row, e, known_columns)

        return row

    def element_name(self, element: Element) -> str:
        """Display name, falling back to class name, then 'Unknown'."""
        try:
            return _text(element.display_name) or _text(element.class_display_name) or UNKNOWN
        except Exception:
            return UNKNOWN

    def class_name(self, element: Element) -> str:
        """Class display name or 'Unknown'."""
        try:
            return _text(element.class_display_name) or UNKNOWN
        except Exception:
            return UNKNOWN

    def center_coordinates(self, element: Element) -> Tuple[CellValue, CellValue, CellValue]:
        """Bounding box center, or three blank markers when unavailable."""
        try:
            bbox = element.get_bounding_box()
            if bbox is None:
                return BLANK, BLANK, BLANK
            x, y, z = bbox.center
            return float(x), float(y), float(z)
        except Exception as e:
            self.logger.debug(
                f"Bounding box unavailable for '{self.element_name(element)}': {e}",
                extra={'element': self.element_name(element), 'error': str(e)}
            )
            return BLANK, BLANK, BLANK

    def resolve_guid(self, element: Element, categories: Optional[List[PropertyCategory]] = None) -> str:
        """
        Resolve an element's GUID.

        A property named "GUID" (name or display name, any case) wins when its
        value is non-empty and not the all-zero sentinel. Otherwise the
        element's own identifier is used unless it is absent or zeroed.

        Args:
            element: Element to inspect
            categories: Already-read categories (read from element if None)

        Returns:
            GUID string, "No GUID Available", or "Error Reading GUID"
        """
        try:
            if categories is None:
                categories = element.get_categories() or []
            for category in categories:
                for _, prop in _iter_properties(category):
                    names = (_text(prop.name).lower(), _text(prop.display_name).lower())
                    if GUID_PROPERTY not in names:
                        continue
                    value = prop.display_value()
                    if value and not is_zero_guid(value):
                        return value

            own_guid = _text(element.instance_guid)
            if own_guid and not is_zero_guid(own_guid):
                return own_guid
            return NO_GUID
        except Exception as e:
            self.logger.debug(f"GUID resolution failed: {e}", extra={'error': str(e)})
            return GUID_ERROR

    def _collect_properties(self, row: ExtractedRow, categories: List[PropertyCategory],
                            known_columns: MutableSet[str]):
        """Flatten all categories into row.values."""
        for category in categories:
            category_name = _text(category.display_name) or _text(category.name)
            for path, prop in _iter_properties(category):
                base = column_key(category_name, path)
                try:
                    value = prop.display_value()
                except Exception as e:
                    self.logger.debug(
                        f"Skipping property '{base}' on '{row.element_name}': {e}",
                        extra={'element': row.element_name, 'column': base, 'error': str(e)}
                    )
                    continue

                if value:
                    key = unique_key(base, row.values)
                    row.values[key] = value
                    known_columns.add(key)
                elif not prop.children:
                    # Column exists even when this element has no data for it
                    known_columns.add(base)

    def _fail_row(self, row: ExtractedRow, error: Exception, known_columns: MutableSet[str]):
        message = str(error) or type(error).__name__
        self.logger.warning(
            f"Error extracting properties for '{row.element_name}': {message}",
            extra={'element': row.element_name, 'error': message}
        )
        row.values = {ERROR_COLUMN: message}
        known_columns.add(ERROR_COLUMN)


def _iter_properties(category: PropertyCategory):
    """Yield (path, property) for every property in a category, nested ones included."""
    stack = [((_text(p.label),), p) for p in reversed(category.properties)]
    while stack:
        path, prop = stack.pop()
        yield path, prop
        if prop.children:
            stack.extend(
                ((*path, _text(child.label)), child) for child in reversed(prop.children)
            )


def _text(value) -> str:
    return str(value).strip() if value is not None else ''
