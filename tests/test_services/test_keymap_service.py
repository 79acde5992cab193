"""Tests for the keymap loading service."""

import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from unittest.mock import Mock

import pytest

from keymapview.adapters.file_adapter import FileSystemAdapter
from keymapview.core.errors import create_file_error
from keymapview.services.keymap_service import (
    FILE_NOT_FOUND_MESSAGE,
    PARSE_FAILED_MESSAGE,
    KeymapService,
    create_keymap_service,
)


class BlockingFileAdapter(FileSystemAdapter):
    """File adapter that holds reads of one path until released."""

    def __init__(self, blocked: Path) -> None:
        self.blocked = blocked
        self.release = threading.Event()

    def read_text(self, path: Path, encoding: str = "utf-8") -> str:
        if path == self.blocked:
            self.release.wait(timeout=5)
        return super().read_text(path, encoding)


@pytest.fixture
def service():
    """Create a service with default dependencies."""
    with create_keymap_service() as service:
        yield service


class TestLoad:
    """Test synchronous loading."""

    def test_initial_state(self, service):
        """A new service has nothing loaded."""
        assert isinstance(service, KeymapService)
        assert service.current_keymap is None
        assert service.current_path is None
        assert service.error_message is None
        assert not service.is_loading

    def test_load_success(self, service, sweep_keymap_file):
        """A good file becomes the current keymap."""
        result = service.load(sweep_keymap_file)

        assert result.success
        assert result.published
        assert result.keymap is not None
        assert service.current_keymap == result.keymap
        assert service.current_path == str(sweep_keymap_file)
        assert service.error_message is None

    def test_missing_file(self, service, tmp_path):
        """A missing file reports 'File not found'."""
        result = service.load(tmp_path / "gone.keymap")

        assert not result.success
        assert result.error_message == FILE_NOT_FOUND_MESSAGE
        assert service.error_message == FILE_NOT_FOUND_MESSAGE

    def test_parse_failure_keeps_previous_keymap(self, service, sweep_keymap_file, tmp_path):
        """A failed load leaves the last good keymap in place."""
        service.load(sweep_keymap_file)
        previous = service.current_keymap
        broken = tmp_path / "broken.keymap"
        broken.write_text("/ { };", encoding="utf-8")

        result = service.load(broken)

        assert not result.success
        assert result.error_message == PARSE_FAILED_MESSAGE
        assert service.error_message == PARSE_FAILED_MESSAGE
        assert service.current_keymap is previous
        assert service.current_path == str(sweep_keymap_file)

    def test_success_clears_error(self, service, sweep_keymap_file, tmp_path):
        """A successful load clears an earlier error message."""
        service.load(tmp_path / "gone.keymap")
        service.load(sweep_keymap_file)

        assert service.error_message is None

    def test_read_error_message(self, tmp_path):
        """Other read failures carry the adapter's message."""
        path = tmp_path / "locked.keymap"
        error = create_file_error(path, "read_text", PermissionError("denied"))
        adapter = Mock()
        adapter.exists.return_value = True
        adapter.read_text.side_effect = error

        service = create_keymap_service(file_adapter=adapter)
        result = service.load(path)

        assert result.error_message == f"Error reading file: Permission denied: {path}"

    def test_reload(self, service, sweep_keymap_file):
        """reload reads the current path again."""
        assert service.reload() is None

        first = service.load(sweep_keymap_file)
        second = service.reload()

        assert second.success
        assert second.generation == first.generation + 1
        assert second.path == str(sweep_keymap_file)


class TestSubmit:
    """Test background loading and last-write-wins publication."""

    def test_submit_publishes_newest(self, service, sweep_keymap_file):
        """A background load that is the newest request is published."""
        result = service.submit(sweep_keymap_file).result(timeout=5)

        assert result.published
        assert service.current_path == str(sweep_keymap_file)
        assert not service.is_loading

    def test_stale_result_not_published(self, tmp_path, sweep_keymap_file, wrap_keymap):
        """An older request finishing late does not replace a newer one."""
        slow = tmp_path / "slow.keymap"
        slow.write_text(wrap_keymap("&kp A"), encoding="utf-8")
        adapter = BlockingFileAdapter(blocked=slow)

        with create_keymap_service(file_adapter=adapter) as service:
            future = service.submit(slow)
            assert service.is_loading

            fast_result = service.load(sweep_keymap_file)
            adapter.release.set()
            slow_result = future.result(timeout=5)

        assert fast_result.published
        assert slow_result.success
        assert not slow_result.published
        assert service.current_path == str(sweep_keymap_file)
        assert len(service.current_keymap.layers) == 3
        assert not service.is_loading

    def test_generations_increase(self, service, sweep_keymap_file):
        """Every request gets a new generation number."""
        first = service.load(sweep_keymap_file)
        second = service.submit(sweep_keymap_file).result(timeout=5)

        assert second.generation > first.generation

    def test_submit_to_stopped_pool_clears_loading(self, sweep_keymap_file):
        """A pool shut down under submit leaves the service idle."""
        service = create_keymap_service()
        stopped = ThreadPoolExecutor(max_workers=1)
        stopped.shutdown()
        service._executor = stopped

        with pytest.raises(RuntimeError):
            service.submit(sweep_keymap_file)

        assert not service.is_loading
