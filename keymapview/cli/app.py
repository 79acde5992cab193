"""Main CLI application for keymapview."""

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from keymapview import __version__
from keymapview.adapters.file_adapter import create_file_adapter
from keymapview.cli.decorators import handle_errors, print_stack_trace_if_verbose
from keymapview.cli.helpers.output import print_keymap_info
from keymapview.cli.helpers.theme import get_themed_console
from keymapview.config.user_config import UserConfig, create_user_config
from keymapview.core.errors import ConfigError, KeymapError
from keymapview.core.logging import get_struct_logger, setup_logging
from keymapview.models.keymap import Keymap
from keymapview.parsers.keymap_parser import create_keymap_parser


__all__ = ["app", "main"]

logger = logging.getLogger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        user_config: UserConfig,
        verbose: int = 0,
        log_file: str | None = None,
    ) -> None:
        """Initialize AppContext.

        Args:
            user_config: Loaded user configuration
            verbose: Verbosity level
            log_file: Path to log file
        """
        self.user_config = user_config
        self.verbose = verbose
        self.log_file = log_file

    @property
    def log_level_name(self) -> str:
        """Log level from the verbosity flags, else from configuration."""
        if self.verbose >= 2:
            return "DEBUG"
        if self.verbose == 1:
            return "INFO"
        return self.user_config.data.log_level


app = typer.Typer(
    name="keymapview",
    help=f"""keymapview v{__version__}

Parse ZMK devicetree keymaps into a structured keyboard model.

  • Export as JSON:   keymapview parse corne.keymap -o corne.json
  • Show a summary:   keymapview info corne.keymap""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
    if value:
        print(f"keymapview v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Write JSON logs to file")
    ] = None,
    config_file: Annotated[
        str | None,
        typer.Option("-c", "--config", help="Path to configuration file"),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """keymapview: ZMK keymap parser."""
    try:
        user_config = create_user_config(cli_config_path=config_file)
    except ConfigError as e:
        setup_logging("ERROR", log_file=log_file)
        get_struct_logger(__name__).error("configuration_error", error=str(e))
        print_stack_trace_if_verbose()
        raise typer.Exit(1) from e

    app_context = AppContext(user_config, verbose=verbose, log_file=log_file)
    ctx.obj = app_context

    setup_logging(
        app_context.log_level_name,
        log_file=log_file or user_config.data.log_file,
    )
    logger.debug(
        "Using configuration file: %s", user_config.config_file or "defaults"
    )


def _load_keymap(app_context: AppContext, keymap_file: Path) -> Keymap:
    text = create_file_adapter().read_text(keymap_file)
    parser = create_keymap_parser(app_context.user_config.parser)
    result = parser.parse_with_result(text, file_path=str(keymap_file))
    for warning in result.warnings:
        logger.warning("%s: %s", keymap_file, warning)
    if not result.success or result.keymap is None:
        raise KeymapError(
            "Failed to parse keymap file",
            context={"file": str(keymap_file), "reason": "; ".join(result.errors)},
        )
    return result.keymap


@app.command()
@handle_errors
def parse(
    ctx: typer.Context,
    keymap_file: Annotated[Path, typer.Argument(help="Path to .keymap file")],
    output: Annotated[
        Path | None,
        typer.Option("-o", "--output", help="Write JSON to this file"),
    ] = None,
    indent: Annotated[
        int, typer.Option("--indent", min=0, help="JSON indentation")
    ] = 2,
) -> None:
    """Parse a keymap file and export it as JSON."""
    app_context: AppContext = ctx.obj
    keymap = _load_keymap(app_context, keymap_file)
    content = json.dumps(keymap.to_dict_full(), indent=indent, ensure_ascii=False)

    if output is None:
        typer.echo(content)
        return

    create_file_adapter().write_text(output, content + "\n")
    get_themed_console().print_success(
        f"Wrote {len(keymap.layers)} layers to {output}"
    )


@app.command()
@handle_errors
def info(
    ctx: typer.Context,
    keymap_file: Annotated[Path, typer.Argument(help="Path to .keymap file")],
) -> None:
    """Show the inferred layout, layers, behaviors and macros of a keymap."""
    app_context: AppContext = ctx.obj
    keymap = _load_keymap(app_context, keymap_file)
    print_keymap_info(keymap, get_themed_console())


def main() -> int:
    """Main CLI entry point."""
    exit_code = 0
    try:
        app()
    except SystemExit as e:
        exit_code = e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print_stack_trace_if_verbose()
        exit_code = 1
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
