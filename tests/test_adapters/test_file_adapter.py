"""Tests for the file system adapter."""

import pytest

from keymapview.adapters import FileAdapter, FileSystemAdapter, create_file_adapter
from keymapview.core.errors import FileSystemError


class TestFileSystemAdapter:
    """Test reading and writing through the adapter."""

    def test_factory_returns_protocol_implementation(self):
        """The factory result satisfies the FileAdapter protocol."""
        adapter = create_file_adapter()

        assert isinstance(adapter, FileSystemAdapter)
        assert isinstance(adapter, FileAdapter)

    def test_read_text(self, tmp_path):
        """Existing files are read as UTF-8."""
        path = tmp_path / "layer.keymap"
        path.write_text("&kp A // =ä", encoding="utf-8")

        assert FileSystemAdapter().read_text(path) == "&kp A // =ä"

    def test_read_missing_file(self, tmp_path):
        """A missing file raises FileSystemError marked as not found."""
        path = tmp_path / "missing.keymap"

        with pytest.raises(FileSystemError) as exc_info:
            FileSystemAdapter().read_text(path)

        error = exc_info.value
        assert error.is_not_found
        assert error.path == path
        assert error.operation == "read_text"
        assert error.context["error_type"] == "FileNotFoundError"
        assert "File not found" in error.message

    def test_read_directory(self, tmp_path):
        """Reading a directory is an OS error, not a missing file."""
        with pytest.raises(FileSystemError) as exc_info:
            FileSystemAdapter().read_text(tmp_path)

        assert not exc_info.value.is_not_found

    def test_read_invalid_encoding(self, tmp_path):
        """Undecodable bytes raise FileSystemError."""
        path = tmp_path / "binary.keymap"
        path.write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(FileSystemError, match="Could not decode"):
            FileSystemAdapter().read_text(path)

    def test_write_creates_parents(self, tmp_path):
        """write_text creates missing parent directories."""
        path = tmp_path / "out" / "nested" / "keymap.json"
        adapter = FileSystemAdapter()

        adapter.write_text(path, "{}")

        assert path.read_text(encoding="utf-8") == "{}"
        assert adapter.exists(path)
        assert adapter.is_file(path)
        assert not adapter.is_file(path.parent)

    def test_write_error(self, tmp_path):
        """Writing over a directory raises FileSystemError."""
        with pytest.raises(FileSystemError) as exc_info:
            FileSystemAdapter().write_text(tmp_path, "x")

        assert exc_info.value.operation == "write_text"
        assert exc_info.value.context["content_length"] == 1
