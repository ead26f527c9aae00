"""
Core export engine: tree flattening, property extraction, two-pass export.
"""

from .tree_flattener import flatten_items
from .key_unifier import unique_key, sort_columns
from .property_extractor import PropertyExtractor
from .progress import ProgressReporter, LoggingProgressReporter
from .model_exporter import ModelExporter, ExportError

__all__ = [
    'flatten_items',
    'unique_key',
    'sort_columns',
    'PropertyExtractor',
    'ProgressReporter',
    'LoggingProgressReporter',
    'ModelExporter',
    'ExportError',
]
