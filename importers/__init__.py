"""
Model importers for IFC and GLB/glTF files.
"""

from .base_importer import BaseImporter
from .ifc_importer import IFCImporter
from .glb_importer import GLBImporter

__all__ = [
    'BaseImporter',
    'IFCImporter',
    'GLBImporter',
]
