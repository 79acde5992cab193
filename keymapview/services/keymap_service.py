"""Keymap loading service with last-write-wins publication."""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path

from keymapview.adapters.file_adapter import FileAdapter, create_file_adapter
from keymapview.core.errors import FileSystemError
from keymapview.models.base import KeymapViewBaseModel
from keymapview.models.keymap import Keymap
from keymapview.parsers.keymap_parser import KeymapParser, create_keymap_parser


logger = logging.getLogger(__name__)

FILE_NOT_FOUND_MESSAGE = "File not found"
PARSE_FAILED_MESSAGE = "Failed to parse keymap file"


class KeymapLoadResult(KeymapViewBaseModel):
    """Outcome of one load request.

    Attributes:
        success: Whether the file was read and parsed
        path: Requested file path
        generation: Sequence number of the request
        published: Whether the outcome became the service's current state;
            False when a newer request superseded it
        keymap: Parsed keymap on success
        error_message: User-facing reason on failure
    """

    success: bool
    path: str
    generation: int
    published: bool = False
    keymap: Keymap | None = None
    error_message: str | None = None


class KeymapService:
    """Loads keymap files and keeps the most recent good keymap.

    Loads may run on a worker pool. Every request gets a generation number,
    and only the outcome of the newest request is published. A failed load
    sets :attr:`error_message` but leaves the previous keymap in place.
    """

    def __init__(
        self,
        parser: KeymapParser,
        file_adapter: FileAdapter,
        max_workers: int = 1,
    ) -> None:
        """Initialize the service with explicit dependencies.

        Args:
            parser: Keymap parser
            file_adapter: File adapter used to read keymap files
            max_workers: Worker threads used by :meth:`submit`
        """
        self.logger = logging.getLogger(__name__)
        self._parser = parser
        self._file_adapter = file_adapter
        self._max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()
        self._generation = 0
        self._pending = 0
        self._current_keymap: Keymap | None = None
        self._current_path: str | None = None
        self._error_message: str | None = None

    @property
    def current_keymap(self) -> Keymap | None:
        """Last successfully loaded keymap."""
        with self._lock:
            return self._current_keymap

    @property
    def current_path(self) -> str | None:
        """Path of the last successfully loaded keymap."""
        with self._lock:
            return self._current_path

    @property
    def error_message(self) -> str | None:
        """Reason the newest load failed, or None after a success."""
        with self._lock:
            return self._error_message

    @property
    def is_loading(self) -> bool:
        """Whether submitted loads are still running."""
        with self._lock:
            return self._pending > 0

    def load(self, path: Path | str) -> KeymapLoadResult:
        """Read and parse a keymap file on the calling thread.

        Args:
            path: Keymap file path

        Returns:
            KeymapLoadResult describing the outcome
        """
        generation = self._next_generation()
        return self._publish(self._load(str(path), generation))

    def reload(self) -> KeymapLoadResult | None:
        """Load the current path again, e.g. after a file change notification.

        Returns:
            KeymapLoadResult, or None when nothing was loaded yet
        """
        path = self.current_path
        if path is None:
            self.logger.debug("Nothing to reload")
            return None
        return self.load(path)

    def submit(self, path: Path | str) -> "Future[KeymapLoadResult]":
        """Load a keymap file on the worker pool.

        The returned future resolves to the result of this request; it is
        only published when no newer request was made in the meantime.
        """
        generation = self._next_generation()
        with self._lock:
            self._pending += 1
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers, thread_name_prefix="keymap-load"
                )
            executor = self._executor

        try:
            return executor.submit(self._run_submitted, str(path), generation)
        except RuntimeError:
            # Pool was shut down after it was picked up
            with self._lock:
                self._pending -= 1
            raise

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker pool."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)

    def __enter__(self) -> "KeymapService":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _run_submitted(self, path: str, generation: int) -> KeymapLoadResult:
        try:
            return self._publish(self._load(path, generation))
        finally:
            with self._lock:
                self._pending -= 1

    def _next_generation(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _load(self, path: str, generation: int) -> KeymapLoadResult:
        file_path = Path(path)
        if not self._file_adapter.exists(file_path):
            self.logger.info("Keymap file does not exist: %s", path)
            return KeymapLoadResult(
                success=False,
                path=path,
                generation=generation,
                error_message=FILE_NOT_FOUND_MESSAGE,
            )

        try:
            text = self._file_adapter.read_text(file_path)
        except FileSystemError as e:
            message = (
                FILE_NOT_FOUND_MESSAGE
                if e.is_not_found
                else f"Error reading file: {e.message}"
            )
            return KeymapLoadResult(
                success=False, path=path, generation=generation, error_message=message
            )

        result = self._parser.parse_with_result(text, file_path=path)
        if not result.success or result.keymap is None:
            self.logger.warning("%s: %s", PARSE_FAILED_MESSAGE, "; ".join(result.errors))
            return KeymapLoadResult(
                success=False,
                path=path,
                generation=generation,
                error_message=PARSE_FAILED_MESSAGE,
            )

        keymap = result.keymap
        self.logger.info(
            "Loaded %s with %d layers from %s",
            keymap.layout.name,
            len(keymap.layers),
            path,
        )
        return KeymapLoadResult(
            success=True, path=path, generation=generation, keymap=keymap
        )

    def _publish(self, result: KeymapLoadResult) -> KeymapLoadResult:
        """Make a result current unless a newer request exists."""
        with self._lock:
            if result.generation != self._generation:
                self.logger.debug(
                    "Discarding stale load %d of %s (newest is %d)",
                    result.generation,
                    result.path,
                    self._generation,
                )
                return result

            if result.success:
                self._current_keymap = result.keymap
                self._current_path = result.path
                self._error_message = None
            else:
                self._error_message = result.error_message

        return result.model_copy(update={"published": True})


def create_keymap_service(
    parser: KeymapParser | None = None,
    file_adapter: FileAdapter | None = None,
    max_workers: int = 1,
) -> KeymapService:
    """Create a keymap service with default dependencies.

    Args:
        parser: Optional keymap parser (uses create_keymap_parser() if None)
        file_adapter: Optional file adapter (uses create_file_adapter() if None)
        max_workers: Worker threads used by KeymapService.submit

    Returns:
        Configured KeymapService instance
    """
    return KeymapService(
        parser=parser or create_keymap_parser(),
        file_adapter=file_adapter or create_file_adapter(),
        max_workers=max_workers,
    )
