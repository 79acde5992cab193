"""Short display labels for ZMK binding codes."""

import logging
import re
from collections.abc import Callable


logger = logging.getLogger(__name__)


SPECIAL_KEYS: dict[str, str] = {
    "BACKSPACE": "⌫",
    "BSPC": "⌫",
    "SPACE": "␣",
    "SPC": "␣",
    "TAB": "⇥",
    "RETURN": "⏎",
    "RET": "⏎",
    "ENTER": "⏎",
    "ESCAPE": "ESC",
    "ESC": "ESC",
    "DELETE": "DEL",
    "DEL": "DEL",
    "LEFT": "←",
    "RIGHT": "→",
    "UP": "↑",
    "DOWN": "↓",
    "SEMICOLON": ";",
    "SEMI": ";",
    "COMMA": ",",
    "DOT": ".",
    "PERIOD": ".",
    "SLASH": "/",
    "FSLH": "/",
    "BACKSLASH": "\\",
    "BSLH": "\\",
    "MINUS": "-",
    "EQUAL": "=",
    "PLUS": "+",
    "LBKT": "[",
    "LEFT_BRACKET": "[",
    "RBKT": "]",
    "RIGHT_BRACKET": "]",
    "LBRC": "{",
    "RBRC": "}",
    "LPAR": "(",
    "RPAR": ")",
    "SQT": "'",
    "SINGLE_QUOTE": "'",
    "DQT": '"',
    "DOUBLE_QUOTES": '"',
    "GRAVE": "`",
    "TILDE": "~",
    "EXCLAMATION": "!",
    "EXCL": "!",
    "AT_SIGN": "@",
    "AT": "@",
    "HASH": "#",
    "POUND": "#",
    "DLLR": "$",
    "DOLLAR": "$",
    "PRCNT": "%",
    "PERCENT": "%",
    "CARET": "^",
    "AMPS": "&",
    "AMPERSAND": "&",
    "STAR": "*",
    "ASTRK": "*",
    "MULTIPLY": "*",
    "VOLUME_UP": "VOL+",
    "VOLUME_DOWN": "VOL-",
    "MUTE": "MUTE",
    **{f"N{digit}": str(digit) for digit in range(10)},
}

MODIFIER_GLYPHS: dict[str, str] = {
    "LEFT_SHIFT": "⇧",
    "LSHIFT": "⇧",
    "LSHFT": "⇧",
    "LS": "⇧",
    "RIGHT_SHIFT": "⇧",
    "RSHIFT": "⇧",
    "RSHFT": "⇧",
    "RS": "⇧",
    "LEFT_CONTROL": "⌃",
    "LCTRL": "⌃",
    "LC": "⌃",
    "RIGHT_CONTROL": "⌃",
    "RCTRL": "⌃",
    "RC": "⌃",
    "LEFT_ALT": "⌥",
    "LALT": "⌥",
    "LA": "⌥",
    "RIGHT_ALT": "⌥",
    "RALT": "⌥",
    "RA": "⌥",
    "LEFT_GUI": "⌘",
    "LGUI": "⌘",
    "LG": "⌘",
    "RIGHT_GUI": "⌘",
    "RGUI": "⌘",
    "RG": "⌘",
    "LEFT_META": "◆",
    "LMETA": "◆",
    "RIGHT_META": "◆",
    "RMETA": "◆",
}

_KEY_PREFIX_RE = re.compile(r"\b(?:NUMBER_|KP_|K_)")
_COMBINATOR_RE = re.compile(
    r"^((?:LEFT|RIGHT)_[A-Z]+|[LR][SCAG])\((.+)\)$", re.IGNORECASE | re.DOTALL
)


def split_arguments(code: str) -> list[str]:
    """Split a binding code on whitespace outside parentheses.

    ``"&kp LC( A )"`` becomes ``["&kp", "LC( A )"]``.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in code:
        if char.isspace() and depth == 0:
            if current:
                parts.append("".join(current))
                current = []
            continue
        if char == "(":
            depth += 1
        elif char == ")" and depth > 0:
            depth -= 1
        current.append(char)
    if current:
        parts.append("".join(current))
    return parts


def _is_balanced(text: str) -> bool:
    depth = 0
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


# Handler receives the argument list (keyword excluded) and returns a label,
# or None when the arguments do not fit the behavior.
BehaviorHandler = Callable[[list[str]], str | None]


class BindingFormatter:
    """Maps a binding's behavior keyword and arguments to a display label.

    Formatting is total: malformed or unknown bindings degrade to a fallback
    label instead of raising.
    """

    def __init__(
        self,
        special_keys: dict[str, str] | None = None,
        modifier_glyphs: dict[str, str] | None = None,
    ) -> None:
        self.special_keys = special_keys if special_keys is not None else SPECIAL_KEYS
        self.modifier_glyphs = (
            modifier_glyphs if modifier_glyphs is not None else MODIFIER_GLYPHS
        )
        self._handlers: dict[str, BehaviorHandler] = {
            "kp": self._format_key_press,
            "mt": self._format_mod_tap,
            "lt": self._format_layer_tap,
            "mo": lambda args: f"MO{args[0]}" if args else None,
            "tog": lambda args: f"TG{args[0]}" if args else None,
            "trans": lambda args: "▽",
            "none": lambda args: "✕",
            "bt": self._format_bluetooth,
            "sys_reset": lambda args: "RESET",
            "bootloader": lambda args: "BOOT",
            "studio_unlock": lambda args: "STUDIO",
        }

    def format(self, raw_code: str) -> str:
        """Format a binding code such as ``&mt LSHIFT A``.

        Args:
            raw_code: Binding code with or without the leading ``&``

        Returns:
            Display label; the raw code itself when nothing better applies
        """
        code = raw_code[1:] if raw_code.startswith("&") else raw_code
        parts = split_arguments(code)
        if not parts:
            return raw_code

        keyword, args = parts[0], parts[1:]
        handler = self._handlers.get(keyword)
        if handler is not None:
            label = handler(args)
            if label is None:
                logger.debug("Too few arguments for '%s': %r", keyword, raw_code)
                return raw_code
            return label

        return self._format_custom(keyword, args)

    def format_key(self, key: str) -> str:
        """Format a key code to a glyph or an uppercase label.

        ``NUMBER_``, ``KP_`` and ``K_`` prefixes are dropped, named keys are
        looked up, and modifier combinators like ``LS(LG(N4))`` are unwrapped.
        """
        formatted = _KEY_PREFIX_RE.sub("", key)

        special = self.special_keys.get(formatted.upper())
        if special is not None:
            return special

        if "(" in formatted:
            return self.unwrap_combinators(formatted)

        return formatted.upper()

    def format_modifier(self, modifier: str) -> str:
        """Return the glyph for a modifier name, or the name when unknown."""
        return self.modifier_glyphs.get(modifier.upper(), modifier)

    def unwrap_combinators(self, expression: str) -> str:
        """Peel nested modifier functions off a key expression.

        ``LS(LA(K))`` becomes ``"⇧+⌥+K"``. Expressions without a recognized
        modifier wrapper are uppercased verbatim.
        """
        modifiers: list[str] = []
        current = expression.strip()

        while True:
            match = _COMBINATOR_RE.match(current)
            if not match or not _is_balanced(match.group(2)):
                break
            modifiers.append(self.format_modifier(match.group(1)))
            current = match.group(2).strip()

        if not modifiers:
            return current.upper()

        return "+".join(modifiers) + "+" + self.format_key(current)

    def _format_key_press(self, args: list[str]) -> str | None:
        if not args:
            return None
        return self.format_key(args[0])

    def _format_mod_tap(self, args: list[str]) -> str | None:
        if len(args) < 2:
            return None
        return f"{self.format_modifier(args[0])}\n{self.format_key(args[1])}"

    def _format_layer_tap(self, args: list[str]) -> str | None:
        if len(args) < 2:
            return None
        return f"L{args[0]}\n{self.format_key(args[1])}"

    def _format_bluetooth(self, args: list[str]) -> str | None:
        if not args:
            return None
        action = args[0]
        if action == "BT_SEL" and len(args) > 1:
            return f"BT{args[1]}"
        if action == "BT_CLR":
            return "BT CLR"
        return action.replace("BT_", "")

    def _format_custom(self, keyword: str, args: list[str]) -> str:
        """Format user-defined behaviors such as ``&long_MT`` or macros."""
        if len(args) >= 2:
            if "MT" in keyword or "mt" in keyword:
                return self._format_mod_tap(args) or keyword
            if "LT" in keyword or "lt" in keyword:
                return self._format_layer_tap(args) or keyword

        if not args:
            return keyword.upper()

        return self.format_key(args[-1])


def format_binding(raw_code: str) -> str:
    """Format a single binding code to its display label."""
    return BindingFormatter().format(raw_code)


def create_binding_formatter() -> BindingFormatter:
    """Create a binding formatter with the default key tables."""
    return BindingFormatter()
