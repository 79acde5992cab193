"""Adapters for external resources."""

from keymapview.adapters.file_adapter import (
    FileAdapter,
    FileSystemAdapter,
    create_file_adapter,
)


__all__ = ["FileAdapter", "FileSystemAdapter", "create_file_adapter"]
