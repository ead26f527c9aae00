"""
Progress reporting sinks used during export passes.
"""

import logging

logger = logging.getLogger(__name__)


class ProgressReporter:
    """Base progress sink. Calls are fire-and-forget."""

    def set_progress(self, current: int, total: int, status: str):
        """
        Receive a progress update.

        Args:
            current: Elements processed so far
            total: Elements in the pass
            status: Status text
        """
        pass

    def pump_events(self):
        """Yield point for a host UI event loop."""
        pass


class LoggingProgressReporter(ProgressReporter):
    """Writes progress updates to the log."""

    def __init__(self, log: logging.Logger = None):
        self.log = log or logger

    def set_progress(self, current: int, total: int, status: str):
        percent = (current / total * 100) if total else 100.0
        self.log.info(f"[{current}/{total}] ({percent:.0f}%) {status}")
