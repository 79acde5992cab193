"""Registry of recognizable keyboards and well-known key totals."""

import logging
from collections.abc import Sequence

from keymapview.config.models import KnownKeyboard


logger = logging.getLogger(__name__)


# Layout editor exports carry a board signature; checked before keywords
EDITOR_SIGNATURES: tuple[tuple[tuple[str, ...], KnownKeyboard], ...] = (
    (
        ("GO60 LAYOUT EDITOR", "KB_TYPE_GO_60"),
        KnownKeyboard(keyword="go60", name="Go60", is_split=True),
    ),
    (
        ("GLOVE80 LAYOUT EDITOR", "KB_TYPE_GLOVE_80"),
        KnownKeyboard(keyword="glove80", name="Glove80", is_split=True),
    ),
)

# Order matters: the first keyword found wins, so longer keywords that
# contain a shorter one (reviung41 / reviung) come first.
KNOWN_KEYBOARDS: tuple[KnownKeyboard, ...] = (
    KnownKeyboard(keyword="sweep", name="Sweep/Cradio"),
    KnownKeyboard(keyword="cradio", name="Sweep/Cradio"),
    KnownKeyboard(keyword="corne", name="Corne"),
    KnownKeyboard(keyword="crkbd", name="Corne"),
    KnownKeyboard(keyword="sofle", name="Sofle"),
    KnownKeyboard(keyword="lily58", name="Lily58"),
    KnownKeyboard(keyword="kyria", name="Kyria"),
    KnownKeyboard(keyword="ferris", name="Ferris"),
    KnownKeyboard(keyword="ergodox", name="Ergodox"),
    KnownKeyboard(keyword="dactyl", name="Dactyl"),
    KnownKeyboard(keyword="totem", name="Totem"),
    KnownKeyboard(keyword="go60", name="Go60"),
    KnownKeyboard(keyword="glove80", name="Glove80"),
    KnownKeyboard(keyword="planck", name="Planck", is_split=False),
    KnownKeyboard(keyword="preonic", name="Preonic", is_split=False),
    KnownKeyboard(keyword="reviung41", name="Reviung41", is_split=False),
    KnownKeyboard(keyword="reviung", name="Reviung", is_split=False),
    KnownKeyboard(keyword="bdn9", name="BDN9", is_split=False),
    KnownKeyboard(keyword="nibble", name="Nibble", is_split=False),
)

WELL_KNOWN_TOTALS: dict[int, str] = {
    34: "Sweep/Cradio",
    42: "Corne",
    48: "Sofle",
    60: "Lily58 Pro",
}


def detect_keyboard(
    content: str,
    file_path: str | None = None,
    extra_keyboards: Sequence[KnownKeyboard] = (),
) -> KnownKeyboard | None:
    """Identify a keyboard from raw keymap text and its file path.

    Editor signatures are checked first, then the file path against every
    keyword, then the content. Matching is case-insensitive and the first
    registry entry found wins.

    Args:
        content: Raw keymap text, before comment stripping
        file_path: Optional path hint
        extra_keyboards: Configured entries checked before the built-in ones

    Returns:
        Matching registry entry or None
    """
    for signatures, keyboard in EDITOR_SIGNATURES:
        if any(signature in content for signature in signatures):
            logger.debug("Detected %s from editor signature", keyboard.name)
            return keyboard

    registry = (*extra_keyboards, *KNOWN_KEYBOARDS)

    if file_path:
        path_lower = file_path.lower()
        for keyboard in registry:
            if keyboard.keyword in path_lower:
                logger.debug("Detected %s from file path", keyboard.name)
                return keyboard

    content_lower = content.lower()
    for keyboard in registry:
        if keyboard.keyword in content_lower:
            logger.debug("Detected %s from keymap content", keyboard.name)
            return keyboard

    return None


def name_for_key_count(key_count: int) -> str | None:
    """Board name for a well-known total key count."""
    return WELL_KNOWN_TOTALS.get(key_count)
