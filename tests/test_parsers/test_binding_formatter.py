"""Tests for binding display labels."""

import pytest

from keymapview.parsers.binding_formatter import (
    BindingFormatter,
    create_binding_formatter,
    format_binding,
    split_arguments,
)
from keymapview.parsers.binding_tokenizer import parse_bindings


@pytest.fixture
def formatter() -> BindingFormatter:
    """Create a formatter with the default tables."""
    return create_binding_formatter()


class TestBehaviorDispatch:
    """Test the built-in behavior keywords."""

    @pytest.mark.parametrize(
        ("raw_code", "expected"),
        [
            ("&kp A", "A"),
            ("&kp a", "A"),
            ("&mt LSHIFT A", "⇧\nA"),
            ("&mt LEFT_CONTROL ESC", "⌃\nESC"),
            ("&lt 1 SPACE", "L1\n␣"),
            ("&mo 1", "MO1"),
            ("&tog 3", "TG3"),
            ("&trans", "▽"),
            ("&none", "✕"),
            ("&bt BT_SEL 0", "BT0"),
            ("&bt BT_CLR", "BT CLR"),
            ("&bt BT_NXT", "NXT"),
            ("&sys_reset", "RESET"),
            ("&bootloader", "BOOT"),
            ("&studio_unlock", "STUDIO"),
        ],
    )
    def test_known_behaviors(self, formatter, raw_code, expected):
        """Each known keyword has its own label form."""
        assert formatter.format(raw_code) == expected

    @pytest.mark.parametrize("raw_code", ["&kp", "&mt LSHIFT", "&lt 1", "&mo", "&bt"])
    def test_too_few_arguments_returns_raw_code(self, formatter, raw_code):
        """Known keywords missing arguments fall back to the raw code."""
        assert formatter.format(raw_code) == raw_code

    def test_leading_ampersand_optional(self, formatter):
        """Codes without '&' are formatted the same."""
        assert formatter.format("kp SPACE") == "␣"

    def test_empty_code(self, formatter):
        """A lone '&' is returned unchanged."""
        assert formatter.format("&") == "&"


class TestKeyFormatting:
    """Test key names, prefixes and combinators."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [
            ("BSPC", "⌫"),
            ("RET", "⏎"),
            ("TAB", "⇥"),
            ("FSLH", "/"),
            ("SEMI", ";"),
            ("N1", "1"),
            ("N0", "0"),
            ("NUMBER_5", "5"),
            ("KP_PLUS", "+"),
            ("K_MUTE", "MUTE"),
            ("F12", "F12"),
            ("c_vol_up", "C_VOL_UP"),
        ],
    )
    def test_format_key(self, formatter, key, expected):
        """Prefixes are dropped and named keys become glyphs."""
        assert formatter.format_key(key) == expected

    @pytest.mark.parametrize(
        ("raw_code", "expected"),
        [
            ("&kp LS(LG(NUMBER_4))", "⇧+⌘+4"),
            ("&kp LC(A)", "⌃+A"),
            ("&kp LC( LS( A ) )", "⌃+⇧+A"),
            ("&kp LEFT_ALT(TAB)", "⌥+⇥"),
            ("&kp RG(SPACE)", "⌘+␣"),
        ],
    )
    def test_combinators_unwrapped(self, formatter, raw_code, expected):
        """Nested modifier functions become '+'-joined glyphs."""
        assert formatter.format(raw_code) == expected

    def test_navigation_and_editing_row(self):
        """A row of editing and arrow keys gets one glyph per key."""
        payload = (
            "&kp SPACE &kp TAB &kp BACKSPACE &kp RETURN "
            "&kp LEFT &kp RIGHT &kp UP &kp DOWN"
        )

        assert [b.display_text for b in parse_bindings(payload)] == [
            "␣",
            "⇥",
            "⌫",
            "⏎",
            "←",
            "→",
            "↑",
            "↓",
        ]

    def test_unknown_wrapper_uppercased(self, formatter):
        """Functions that are not modifiers stay verbatim, uppercased."""
        assert formatter.format("&kp foo(x)") == "FOO(X)"

    def test_unknown_modifier_name_unchanged(self, formatter):
        """format_modifier passes unknown names through."""
        assert formatter.format_modifier("HYPER") == "HYPER"
        assert formatter.format_modifier("lshift") == "⇧"


class TestCustomBehaviors:
    """Test user-defined behavior keywords."""

    def test_custom_mod_tap(self, formatter):
        """Keywords containing MT format like mod-tap."""
        assert formatter.format("&long_MT LEFT_CONTROL A") == "⌃\nA"
        assert formatter.format("&hmt LALT S") == "⌥\nS"

    def test_custom_layer_tap(self, formatter):
        """Keywords containing LT format like layer-tap."""
        assert formatter.format("&short_LT 2 ENTER") == "L2\n⏎"

    def test_macro_without_arguments(self, formatter):
        """A custom keyword alone is uppercased."""
        assert formatter.format("&email") == "EMAIL"

    def test_custom_with_arguments_uses_last(self, formatter):
        """Unknown keywords with arguments show the last argument."""
        assert formatter.format("&hml LALT GRAVE") == "`"
        assert formatter.format("&td_q Q") == "Q"


class TestCustomTables:
    """Test injecting key tables."""

    def test_custom_special_keys(self):
        """Tables passed to the constructor replace the defaults."""
        formatter = BindingFormatter(special_keys={"SPACE": "SPC"})

        assert formatter.format("&kp SPACE") == "SPC"
        assert formatter.format("&kp BSPC") == "BSPC"

    def test_module_function(self):
        """format_binding uses the default tables."""
        assert format_binding("&kp ESC") == "ESC"


class TestSplitArguments:
    """Test parenthesis-aware argument splitting."""

    def test_split_outside_parentheses(self):
        """Whitespace inside parentheses does not split."""
        assert split_arguments("kp LC( LS( A ) )") == ["kp", "LC( LS( A ) )"]

    def test_collapses_whitespace(self):
        """Runs of whitespace separate arguments once."""
        assert split_arguments("  mt   LSHIFT\tA ") == ["mt", "LSHIFT", "A"]
