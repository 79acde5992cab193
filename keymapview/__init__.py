"""keymapview - parse ZMK keymaps into a renderable keyboard model."""

from importlib.metadata import PackageNotFoundError, version


try:
    __version__ = version("keymapview")
except PackageNotFoundError:
    __version__ = "0.0.0"

from keymapview.models import Binding, KeyboardLayout, Keymap, Layer
from keymapview.parsers.keymap_parser import (
    KeymapParser,
    KeymapParseResult,
    create_keymap_parser,
    load_keymap,
    parse,
    parse_bindings,
)


__all__ = [
    "Binding",
    "KeyboardLayout",
    "Keymap",
    "KeymapParseResult",
    "KeymapParser",
    "Layer",
    "__version__",
    "create_keymap_parser",
    "load_keymap",
    "parse",
    "parse_bindings",
]
