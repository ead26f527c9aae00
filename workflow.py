"""
Export workflow functions.

This module contains the workflow functions for loading a model, choosing
the items to export, exporting them to a spreadsheet and uploading the
result. These functions are used by the command line and GUI entry points.
"""

import logging
from pathlib import Path
from datetime import date
from typing import List, Optional, Sequence

from models.element import Element, ModelDocument
from models.export_result import ExportResult, UploadResult
from core import ModelExporter, ExportError, ProgressReporter
from core.tree_flattener import flatten_items
from importers import IFCImporter, GLBImporter
from reports.webhook_uploader import upload_file
from utils.config_loader import get_config_value, default_output_dir

logger = logging.getLogger(__name__)


def load_model(file_path: str) -> ModelDocument:
    """
    Load a model file.

    Args:
        file_path: Path to model file

    Returns:
        ModelDocument

    Raises:
        ValueError: Unsupported or unreadable file
    """
    logger.info(f"Starting import of model: {file_path}")
    file_ext = Path(file_path).suffix.lower()
    logger.info(f"Detected file format: {file_ext}")

    if file_ext in IFCImporter.SUPPORTED_EXTENSIONS:
        logger.info("Using IFC importer")
        importer = IFCImporter(file_path)
    elif file_ext in GLBImporter.SUPPORTED_EXTENSIONS:
        logger.info("Using GLB importer")
        importer = GLBImporter(file_path)
    else:
        logger.error(f"Unsupported file format: {file_ext}")
        raise ValueError(f"Unsupported file format: {file_ext}")

    document = importer.import_model()
    logger.info(f"Import complete. Found {len(document.models)} model(s)")
    return document


def select_items(document: ModelDocument, names: Optional[Sequence[str]] = None) -> List[Element]:
    """
    Choose the root elements to export.

    With no names, every top-level item is selected. Otherwise each element
    whose display name matches one of the names is selected, in tree order.
    Nested matches are kept, so an item can be exported under more than one
    selected root.

    Args:
        document: Loaded document
        names: Display names to select

    Returns:
        Selected elements
    """
    root_items = document.root_items()
    if not names:
        return root_items

    wanted = {n.strip().lower() for n in names if n and n.strip()}
    selected = [
        item for item in flatten_items(root_items)
        if (item.display_name or '').strip().lower() in wanted
    ]
    logger.info(f"Selected {len(selected)} item(s) matching {sorted(wanted)}")
    return selected


def output_path_from_config(config: dict, output_dir: Optional[str] = None) -> Path:
    """Export file path: output directory plus the fixed file name."""
    directory = output_dir or get_config_value(config, 'export.output_dir')
    directory = Path(directory).expanduser() if directory else default_output_dir()
    file_name = get_config_value(config, 'export.file_name', 'NavisModelData.xlsx')
    return directory / file_name


def export_model(
    document: Optional[ModelDocument],
    config: dict,
    names: Optional[Sequence[str]] = None,
    output_dir: Optional[str] = None,
    progress: Optional[ProgressReporter] = None
) -> ExportResult:
    """
    Export the selected items of a document to a spreadsheet.

    Args:
        document: Loaded document
        config: Configuration dictionary
        names: Display names to select (all top-level items if empty)
        output_dir: Overrides export.output_dir
        progress: Progress sink

    Returns:
        ExportResult

    Raises:
        ExportError: No model open, nothing selected, or file cannot be written
    """
    if document is None or not document.models:
        raise ExportError("No model is currently open.")

    roots = select_items(document, names)
    if not roots:
        raise ExportError("No items are selected for export.")

    exporter = ModelExporter(
        output_path_from_config(config, output_dir),
        sheet_name=get_config_value(config, 'export.sheet_name', 'Model Data'),
        progress=progress,
        progress_interval=get_config_value(config, 'export.progress_interval', 100),
        auto_fit_columns=get_config_value(config, 'export.auto_fit_columns', True),
    )
    return exporter.export(roots)


def upload_export(result: ExportResult, config: dict, upload_date: Optional[date] = None) -> UploadResult:
    """
    Upload an exported file to the configured webhook.

    Args:
        result: Completed export
        config: Configuration dictionary
        upload_date: Date field value (today if include_date and None)

    Returns:
        UploadResult (never raises for network errors)
    """
    if get_config_value(config, 'upload.include_date', True):
        upload_date = upload_date or date.today()
    else:
        upload_date = None

    return upload_file(
        result.file_path,
        get_config_value(config, 'upload.url'),
        upload_date=upload_date,
        file_field=get_config_value(config, 'upload.file_field', 'file'),
        date_field=get_config_value(config, 'upload.date_field', 'date'),
        timeout=get_config_value(config, 'upload.timeout', 60),
    )
