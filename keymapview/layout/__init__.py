"""Physical layout inference for parsed keymaps."""

from keymapview.layout.inference import (
    LayoutInferencer,
    analyze_split_gaps,
    create_layout_inferencer,
    detect_layout,
    guess_keys_per_row,
)
from keymapview.layout.known_boards import (
    KNOWN_KEYBOARDS,
    WELL_KNOWN_TOTALS,
    detect_keyboard,
    name_for_key_count,
)


__all__ = [
    "KNOWN_KEYBOARDS",
    "LayoutInferencer",
    "WELL_KNOWN_TOTALS",
    "analyze_split_gaps",
    "create_layout_inferencer",
    "detect_keyboard",
    "detect_layout",
    "guess_keys_per_row",
    "name_for_key_count",
]
