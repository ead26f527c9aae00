"""
Progress dialog shown while a model export runs.
"""

import logging

from core.progress import ProgressReporter

logger = logging.getLogger(__name__)

try:
    from PyQt6.QtWidgets import QApplication, QProgressDialog
    from PyQt6.QtCore import Qt
    PYQT6_AVAILABLE = True
except ImportError:
    PYQT6_AVAILABLE = False
    logger.warning("PyQt6 not available - progress dialog disabled. Install with: pip install PyQt6")


if PYQT6_AVAILABLE:
    class ExportProgressDialog(ProgressReporter):
        """Modal-less progress dialog; processEvents is the export's UI yield point."""

        def __init__(self, title: str = "Exporting Model Data", parent=None):
            self.app = QApplication.instance() or QApplication([])
            self.dialog = QProgressDialog("Preparing export...", None, 0, 100, parent)
            self.dialog.setWindowTitle(title)
            self.dialog.setMinimumWidth(400)
            self.dialog.setMinimumDuration(0)
            self.dialog.setAutoClose(False)
            self.dialog.setAutoReset(False)
            self.dialog.setWindowFlag(Qt.WindowType.WindowStaysOnTopHint, True)

        def show(self):
            self.dialog.show()
            self.pump_events()

        def set_progress(self, current: int, total: int, status: str):
            self.dialog.setLabelText(status)
            self.dialog.setMaximum(max(total, 1))
            self.dialog.setValue(min(current, max(total, 1)))

        def pump_events(self):
            self.app.processEvents()

        def close(self):
            self.dialog.close()
            self.pump_events()
else:
    class ExportProgressDialog(ProgressReporter):
        """Progress dialog (not available)."""

        def __init__(self, *args, **kwargs):
            raise RuntimeError("PyQt6 is required for the progress dialog. Install with: pip install PyQt6")
