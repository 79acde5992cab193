"""Data models for parsed keymaps."""

from .base import KeymapViewBaseModel
from .keymap import (
    CORNE_LAYOUT,
    SWEEP_LAYOUT,
    Binding,
    KeyboardLayout,
    Keymap,
    Layer,
    count_keys_per_row,
)


__all__ = [
    "Binding",
    "CORNE_LAYOUT",
    "KeyboardLayout",
    "Keymap",
    "KeymapViewBaseModel",
    "Layer",
    "SWEEP_LAYOUT",
    "count_keys_per_row",
]
