"""Application services."""

from keymapview.services.keymap_service import (
    KeymapLoadResult,
    KeymapService,
    create_keymap_service,
)


__all__ = ["KeymapLoadResult", "KeymapService", "create_keymap_service"]
