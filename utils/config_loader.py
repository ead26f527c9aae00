"""
Configuration loading utilities.
"""

import copy
import logging
import yaml
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'export': {
        'output_dir': None,  # None -> Desktop, falling back to home directory
        'file_name': 'NavisModelData.xlsx',
        'sheet_name': 'Model Data',
        'progress_interval': 100,
        'auto_fit_columns': True,
    },
    'upload': {
        'enabled': False,
        'url': None,
        'include_date': True,
        'date_field': 'date',
        'file_field': 'file',
        'timeout': 60,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


def load_config(config_path: Optional[str] = 'config.yaml') -> dict:
    """
    Load configuration from YAML file, merged over the defaults.

    Args:
        config_path: Path to configuration file

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not config_path:
        return config

    config_file = Path(config_path)
    if not config_file.exists():
        return config

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading config {config_file}: {e}")
        return config

    if not isinstance(loaded, dict):
        logger.error(f"Ignoring config {config_file}: top level must be a mapping")
        return config

    return _merge(config, loaded)


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def get_config_value(config: dict, key_path: str, default: Any = None) -> Any:
    """
    Get configuration value using dot-notation path.

    Args:
        config: Configuration dictionary
        key_path: Dot-separated path (e.g., 'export.file_name')
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    keys = key_path.split('.')
    value = config

    for key in keys:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default

    return value


def default_output_dir() -> Path:
    """Desktop directory if it exists, otherwise the home directory."""
    desktop = Path.home() / 'Desktop'
    return desktop if desktop.is_dir() else Path.home()
