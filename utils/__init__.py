"""
Utility functions and helpers.
"""

from .config_loader import load_config, get_config_value, default_output_dir
from .geometry_utils import bounds_from_points, transform_bounds, merge_bounds
from .logging_config import setup_logging

__all__ = [
    'load_config',
    'get_config_value',
    'default_output_dir',
    'bounds_from_points',
    'transform_bounds',
    'merge_bounds',
    'setup_logging',
]
