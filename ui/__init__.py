"""
Desktop UI pieces for the exporter.
"""

from .progress_dialog import ExportProgressDialog, PYQT6_AVAILABLE

__all__ = [
    'ExportProgressDialog',
    'PYQT6_AVAILABLE',
]
