"""
Base importer class for model files.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from models.element import ModelDocument


class BaseImporter(ABC):
    """Base class for all model importers."""

    SUPPORTED_EXTENSIONS: tuple = ()

    def __init__(self, file_path: str):
        """
        Initialize importer.

        Args:
            file_path: Path to model file
        """
        self.file_path = file_path
        self.document: ModelDocument = None

    @abstractmethod
    def import_model(self) -> ModelDocument:
        """
        Load the file and build its element tree.

        Returns:
            ModelDocument with one root Element per model
        """
        pass

    @property
    def model_name(self) -> str:
        """Name shown for the file-level root item."""
        return Path(self.file_path).name
