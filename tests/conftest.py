"""Shared fixtures for keymapview tests."""

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

from keymapview.config.user_config import ENV_PREFIX


SWEEP_KEYMAP = """\
#include <behaviors.dtsi>
#include <dt-bindings/zmk/keys.h>

/ {
    behaviors {
        hm: homerow_mods {
            compatible = "zmk,behavior-hold-tap";
            label = "HOMEROW_MODS";
            #binding-cells = <2>;
            bindings = <&kp>, <&kp>;
        };
    };

    macros {
        email: email_macro {
            compatible = "zmk,behavior-macro";
            label = "EMAIL";
            #binding-cells = <0>;
            bindings = <&kp A &kp T>;
        };
    };

    keymap {
        compatible = "zmk,keymap";

        base {
            label = "Base";
            bindings = <
                &kp Q &kp W &kp E &kp R &kp T         &kp Y &kp U &kp I &kp O &kp P
                &kp A &kp S &kp D &kp F &kp G         &kp H &kp J &kp K &kp L &kp SEMI
                &kp Z &kp X &kp C &kp V &kp B         &kp N &kp M &kp COMMA &kp DOT &kp FSLH
                                  &mo 1 &kp SPACE     &kp BSPC &mo 2
            >;
        };

        nav_layer {
            display-name = "Nav";
            bindings = <
                &trans &trans &trans &trans &trans     &kp LEFT &kp DOWN &kp UP &kp RIGHT &trans
                &kp LC(A) &kp LC(C) &kp LC(V) &trans &trans     &trans &trans &trans &trans &trans
                &none &none &none &none &none     &none &none &none &none &none
                                  &trans &trans     &trans &trans  // =Thumbs
            >;
        };

        fn_layer {
            bindings = <
                &bt BT_SEL 0 &bt BT_SEL 1 &bt BT_CLR &none &none     &none &none &none &none &bootloader
                &kp N1 &kp N2 &kp N3 &kp N4 &kp N5     &kp N6 &kp N7 &kp N8 &kp N9 &kp N0
                &email &none &none &none &none     &none &none &none &none &sys_reset
                                  &trans &trans     &trans &trans
            >;
        };
    };
};
"""


@pytest.fixture
def sweep_keymap_text() -> str:
    """A three-layer 34-key keymap without a board name in it."""
    return SWEEP_KEYMAP


@pytest.fixture
def sweep_keymap_file(tmp_path: Path) -> Path:
    """The sample keymap written to a file whose name does not name a board."""
    path = tmp_path / "my_board.keymap"
    path.write_text(SWEEP_KEYMAP, encoding="utf-8")
    return path


@pytest.fixture
def wrap_keymap():
    """Build a minimal keymap around one bindings payload."""

    def _wrap(payload: str, label: str | None = None) -> str:
        label_line = f'label = "{label}";' if label is not None else ""
        return (
            "/ {\n"
            "    keymap {\n"
            '        compatible = "zmk,keymap";\n'
            "        default_layer {\n"
            f"            {label_line}\n"
            "            bindings = <\n"
            f"{payload}\n"
            "            >;\n"
            "        };\n"
            "    };\n"
            "};\n"
        )

    return _wrap


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI runner."""
    return CliRunner()


@pytest.fixture
def isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path, None, None]:
    """Isolate configuration lookup from the user's environment.

    Runs the test from an empty working directory with XDG_CONFIG_HOME
    pointing into tmp_path and no KEYMAPVIEW_ variables set.

    Yields:
        The XDG config home directory
    """
    import os

    for key in list(os.environ):
        if key.startswith(ENV_PREFIX):
            monkeypatch.delenv(key)

    work_dir = tmp_path / "work"
    work_dir.mkdir()
    config_home = tmp_path / "xdg"
    config_home.mkdir()

    monkeypatch.chdir(work_dir)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    yield config_home


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Undo handlers and levels installed by setup_logging during a test."""
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level

    yield

    for handler in list(root_logger.handlers):
        if handler not in original_handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in original_handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(original_level)
    structlog.reset_defaults()
