"""
Model Sheet Exporter - Command Line Entry Point

Exports a model's element tree and properties to a spreadsheet and
optionally uploads the file to a webhook.

Usage:
    python run_export.py model.ifc
    python run_export.py model.glb --select "Level 1" --upload
"""

import argparse
import logging
import sys
from typing import List, Optional

from core import ExportError, LoggingProgressReporter
from utils.config_loader import load_config, get_config_value
from utils.logging_config import setup_logging
from workflow import load_model, export_model, upload_export

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export a model's elements and properties to Excel")
    parser.add_argument("model", help="Model file (.ifc, .glb, .gltf)")
    parser.add_argument("--config", default="config.yaml", help="YAML configuration file")
    parser.add_argument("--output-dir", help="Directory for the exported spreadsheet")
    parser.add_argument("--select", action="append", default=[], metavar="NAME",
                        help="Export only items with this name (repeatable)")
    upload = parser.add_mutually_exclusive_group()
    upload.add_argument("--upload", dest="upload", action="store_true", default=None,
                        help="Upload the spreadsheet to the configured webhook")
    upload.add_argument("--no-upload", dest="upload", action="store_false",
                        help="Skip the upload even if enabled in config")
    parser.add_argument("--gui", action="store_true", help="Show a progress dialog")
    parser.add_argument("--log-level", help="Override logging.level")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = load_config(args.config)
    setup_logging(
        args.log_level or get_config_value(config, 'logging.level', 'INFO'),
        get_config_value(config, 'logging.file')
    )

    progress = LoggingProgressReporter()
    dialog = None
    if args.gui:
        from ui.progress_dialog import ExportProgressDialog
        try:
            dialog = ExportProgressDialog()
        except RuntimeError as e:
            logger.error(f"Could not start the progress dialog: {e}")
            return 1
        dialog.show()
        progress = dialog

    try:
        document = load_model(args.model)
        result = export_model(document, config, names=args.select,
                              output_dir=args.output_dir, progress=progress)
    except (ExportError, ValueError) as e:
        logger.error(f"Error exporting model data: {e}")
        return 1
    finally:
        if dialog is not None:
            dialog.close()

    print(f"Model data exported successfully!\nFile saved to:\n{result.file_path}")

    do_upload = args.upload if args.upload is not None else get_config_value(config, 'upload.enabled', False)
    if do_upload:
        upload = upload_export(result, config)
        if upload.success:
            print(f"Uploaded to {upload.url}")
        else:
            # The exported file stays valid
            print(f"Upload failed: {upload.message}", file=sys.stderr)

    return 0


if __name__ == '__main__':
    sys.exit(main())
