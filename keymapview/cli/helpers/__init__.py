"""Helpers for CLI output."""

from keymapview.cli.helpers.output import print_keymap_info
from keymapview.cli.helpers.theme import ThemedConsole, get_themed_console


__all__ = ["ThemedConsole", "get_themed_console", "print_keymap_info"]
