# Path: ikea_api/core/__init__.py
"""Core Module - Configuration, Logging and Path Management"""

from .config_loader import ConfigLoader
from .logger import get_logger, configure_logging
from .data_paths import DataPathsManager, ensure_data_paths, validate_paths

__all__ = [
    'ConfigLoader',
    'get_logger',
    'configure_logging',
    'DataPathsManager',
    'ensure_data_paths',
    'validate_paths',
]
