"""
Filesys Core Module

Configuration shared by every backend.
"""

from .config_loader import (
    Config,
    ConfigLoader,
    ConfigValidationError,
    FilesystemConfig,
    LoggingConfig,
    load_config,
)

__all__ = [
    'Config',
    'ConfigLoader',
    'ConfigValidationError',
    'FilesystemConfig',
    'LoggingConfig',
    'load_config',
]
