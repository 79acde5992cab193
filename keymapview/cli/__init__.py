"""Command line interface for keymapview."""

from keymapview.cli.app import app, main


__all__ = ["app", "main"]
