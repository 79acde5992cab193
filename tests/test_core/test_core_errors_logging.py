"""Tests for the error hierarchy and logging setup."""

import io
import json
import logging
from pathlib import Path

import pytest

from keymapview.core.errors import (
    ConfigError,
    FileSystemError,
    KeymapError,
    KeymapViewError,
    create_file_error,
)
from keymapview.core.logging import get_struct_logger, setup_logging


class TestErrors:
    """Test error messages and context."""

    def test_hierarchy(self):
        """All errors share the base class."""
        for error_class in (KeymapError, ConfigError):
            assert issubclass(error_class, KeymapViewError)
        assert issubclass(FileSystemError, KeymapViewError)

    def test_str_without_context(self):
        """Without context the message is the string form."""
        assert str(KeymapError("No keymap section found")) == "No keymap section found"

    def test_str_with_context(self):
        """Context is appended as key=value pairs."""
        error = ConfigError("Bad value", context={"path": "a.yaml", "line": 3})

        assert str(error) == "Bad value (path=a.yaml, line=3)"
        assert error.message == "Bad value"

    @pytest.mark.parametrize(
        ("cause", "expected"),
        [
            (FileNotFoundError(), "File not found: x.keymap"),
            (PermissionError(), "Permission denied: x.keymap"),
            (IsADirectoryError("is a dir"), "Failed to read text x.keymap: is a dir"),
        ],
    )
    def test_create_file_error_messages(self, cause, expected):
        """Messages depend on the underlying error type."""
        error = create_file_error(Path("x.keymap"), "read_text", cause)

        assert error.message == expected
        assert error.context["error_type"] == type(cause).__name__

    def test_is_not_found_uses_cause(self):
        """is_not_found looks at the chained exception."""
        cause = FileNotFoundError()
        error = create_file_error(Path("x"), "read_text", cause)
        assert not error.is_not_found

        try:
            raise error from cause
        except FileSystemError as raised:
            assert raised.is_not_found


class TestLogging:
    """Test logging setup."""

    def test_stdlib_logs_rendered(self):
        """Library loggers are rendered through the console handler."""
        stream = io.StringIO()
        setup_logging("INFO", stream=stream)

        logging.getLogger("keymapview.test").info("Loaded %d layers", 3)

        assert "Loaded 3 layers" in stream.getvalue()

    def test_level_filters(self):
        """Messages below the level are dropped."""
        stream = io.StringIO()
        setup_logging("WARNING", stream=stream)

        logging.getLogger("keymapview.test").info("hidden")

        assert "hidden" not in stream.getvalue()

    def test_json_console(self):
        """json_logs renders one JSON object per record."""
        stream = io.StringIO()
        setup_logging("INFO", json_logs=True, stream=stream)

        get_struct_logger("keymapview.test", component="parser").info("parsed", layers=2)

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "parsed"
        assert record["layers"] == 2
        assert record["component"] == "parser"

    def test_log_file(self, tmp_path):
        """A log file receives JSON records."""
        log_file = tmp_path / "logs" / "kv.jsonl"
        setup_logging("DEBUG", log_file=log_file, stream=io.StringIO())

        logging.getLogger("keymapview.test").debug("to file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        record = json.loads(log_file.read_text(encoding="utf-8").splitlines()[-1])
        assert record["event"] == "to file"
        assert record["level"] == "debug"

    def test_setup_replaces_handlers(self):
        """Calling setup twice does not duplicate output."""
        stream = io.StringIO()
        setup_logging("INFO", stream=io.StringIO())
        setup_logging("INFO", stream=stream)

        logging.getLogger("keymapview.test").info("once")

        assert stream.getvalue().count("once") == 1
