"""Inference of physical keyboard layout from parsed bindings."""

import logging
from collections.abc import Sequence

from keymapview.config.models import ParserConfig
from keymapview.models.keymap import Binding, KeyboardLayout, count_keys_per_row
from keymapview.parsers.aliases import blank_inline_aliases, strip_line_comment

from .known_boards import detect_keyboard, name_for_key_count


logger = logging.getLogger(__name__)

_KNOWN_DISTRIBUTIONS: dict[int, list[int]] = {
    34: [10, 10, 10, 4],
    36: [10, 10, 10, 6],
    42: [12, 12, 12, 6],
    44: [12, 12, 12, 8],
    56: [12, 12, 12, 12, 8],
    58: [12, 12, 12, 12, 10],
}


def guess_keys_per_row(total_keys: int) -> list[int]:
    """Guess a row distribution for a keyboard known only by its key count.

    Args:
        total_keys: Number of keys

    Returns:
        Plausible keys per row, e.g. ``[10, 10, 10, 4]`` for 34 keys
    """
    if total_keys in _KNOWN_DISTRIBUTIONS:
        return list(_KNOWN_DISTRIBUTIONS[total_keys])

    if total_keys % 2 == 0:
        half = total_keys // 2
        if 17 <= half <= 21:
            # Three main rows plus a thumb row on each half
            main_keys = (half - 3) // 3
            thumb_keys = half - main_keys * 3
            return [main_keys * 2, main_keys * 2, main_keys * 2, thumb_keys * 2]

    row_count = max(1, (total_keys + 9) // 10)
    rows = [total_keys // row_count] * row_count
    rows[-1] += total_keys % row_count
    return rows


def detect_layout(
    key_count: int,
    keys_per_row: Sequence[int] | None = None,
    is_split: bool = True,
) -> KeyboardLayout:
    """Create a layout named from the well-known key totals.

    When no row counts are given, a plausible distribution is guessed
    from the key count.
    """
    rows = (
        list(keys_per_row)
        if keys_per_row is not None
        else guess_keys_per_row(key_count)
    )
    return KeyboardLayout.create(
        key_count=key_count,
        keys_per_row=rows,
        detected_name=name_for_key_count(key_count),
        is_split=is_split,
    )


def _ampersand_positions(line: str) -> list[int]:
    return [index for index, char in enumerate(line) if char == "&"]


def analyze_split_gaps(
    payload: str, config: ParserConfig | None = None
) -> bool | None:
    """Decide from source whitespace whether rows have a middle gap.

    A line is flagged when the gap between its two middle bindings exceeds
    ``split_gap_ratio`` times the mean of its other gaps. Lines with fewer
    than ``split_min_tokens`` bindings are ignored.

    Args:
        payload: Bindings payload with its original spacing
        config: Parser thresholds

    Returns:
        True or False, or None when no line could be analyzed
    """
    config = config or ParserConfig()
    analyzed = 0
    flagged = 0

    for raw_line in payload.split("\n"):
        line = blank_inline_aliases(strip_line_comment(raw_line))
        positions = _ampersand_positions(line)
        if len(positions) < config.split_min_tokens:
            continue

        analyzed += 1
        middle = len(positions) // 2
        gaps = [positions[i] - positions[i - 1] for i in range(1, len(positions))]
        middle_gap = gaps[middle - 1]
        other_gaps = gaps[: middle - 1] + gaps[middle:]
        if not other_gaps:
            continue

        mean_other = sum(other_gaps) / len(other_gaps)
        if mean_other > 0 and middle_gap > mean_other * config.split_gap_ratio:
            flagged += 1

    if analyzed == 0:
        return None

    ratio = flagged / analyzed
    logger.debug("Split gap analysis: %d of %d lines flagged", flagged, analyzed)
    return ratio > config.split_majority_ratio


class LayoutInferencer:
    """Derives KeyboardLayout metadata for a parsed keymap."""

    def __init__(self, config: ParserConfig | None = None) -> None:
        self.config = config or ParserConfig()
        self.logger = logging.getLogger(__name__)

    def infer(
        self,
        first_layer_bindings: Sequence[Binding],
        raw_source: str,
        file_path: str | None = None,
        first_payload: str | None = None,
    ) -> KeyboardLayout:
        """Infer layout from the first layer and the raw source.

        Args:
            first_layer_bindings: Bindings of the first layer
            raw_source: Keymap text before comment stripping
            file_path: Optional path hint for board detection
            first_payload: Bindings payload of the first layer, for gap analysis

        Returns:
            KeyboardLayout for the keymap
        """
        keys_per_row = count_keys_per_row(first_layer_bindings)
        total_keys = len(first_layer_bindings)

        keyboard = detect_keyboard(
            raw_source, file_path, extra_keyboards=self.config.extra_keyboards
        )

        if keyboard is not None:
            name: str | None = keyboard.name
            is_split = keyboard.is_split
        else:
            name = name_for_key_count(total_keys)
            is_split = self._detect_split(first_payload)

        layout = KeyboardLayout.create(
            key_count=total_keys,
            keys_per_row=keys_per_row,
            detected_name=name,
            is_split=is_split,
        )
        self.logger.debug(
            "Inferred layout %s: %d keys, rows %s, split=%s",
            layout.name,
            layout.total_keys,
            list(layout.keys_per_row),
            layout.is_split,
        )
        return layout

    def _detect_split(self, payload: str | None) -> bool:
        if payload is None:
            return self.config.default_split
        result = analyze_split_gaps(payload, self.config)
        if result is None:
            return self.config.default_split
        return result


def create_layout_inferencer(config: ParserConfig | None = None) -> LayoutInferencer:
    """Create a layout inferencer."""
    return LayoutInferencer(config)
