"""
Data models for model element trees and export results.
"""

from .element import Element, PropertyCategory, Property, BoundingBox, ModelDocument
from .export_result import ExtractedRow, ExportResult, UploadResult, FIXED_COLUMNS

__all__ = [
    'Element',
    'PropertyCategory',
    'Property',
    'BoundingBox',
    'ModelDocument',
    'ExtractedRow',
    'ExportResult',
    'UploadResult',
    'FIXED_COLUMNS',
]
