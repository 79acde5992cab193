from .errors import (
    ConfigError,
    FileSystemError,
    KeymapError,
    KeymapViewError,
    create_file_error,
)
from .logging import get_logger, get_struct_logger, setup_logging


__all__ = [
    "ConfigError",
    "FileSystemError",
    "KeymapError",
    "KeymapViewError",
    "create_file_error",
    "get_logger",
    "get_struct_logger",
    "setup_logging",
]
