"""
Output of exported model data: spreadsheet writing and webhook upload.
"""

from .spreadsheet_writer import SpreadsheetWriter
from .webhook_uploader import upload_file

__all__ = [
    'SpreadsheetWriter',
    'upload_file',
]
