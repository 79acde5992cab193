"""Theme for consistent Rich styling across CLI commands."""

from rich.console import Console
from rich.table import Table
from rich.theme import Theme


class Colors:
    """Standardized color palette for CLI output."""

    SUCCESS = "bold green"
    ERROR = "bold red"
    WARNING = "bold yellow"
    INFO = "bold blue"

    PRIMARY = "cyan"
    SECONDARY = "blue"
    MUTED = "dim"

    HEADER = "bold cyan"
    HIGHLIGHT = "bold white"


class Icons:
    """Icons for message types, with plain-text fallbacks."""

    SUCCESS = "✓"

    _TEXT = {"SUCCESS": "OK"}

    @classmethod
    def get_icon(cls, icon_name: str, use_icons: bool = True) -> str:
        """Return an icon, or its text form when icons are disabled."""
        if not use_icons:
            return cls._TEXT.get(icon_name, "")
        return str(getattr(cls, icon_name, ""))


KEYMAPVIEW_THEME = Theme(
    {
        "success": Colors.SUCCESS,
        "error": Colors.ERROR,
        "warning": Colors.WARNING,
        "info": Colors.INFO,
        "primary": Colors.PRIMARY,
        "muted": Colors.MUTED,
        "highlight": Colors.HIGHLIGHT,
    }
)


class ThemedConsole:
    """Console wrapper with the keymapview theme applied."""

    def __init__(self, use_icons: bool = True, console: Console | None = None) -> None:
        self.console = console or Console(theme=KEYMAPVIEW_THEME)
        self.use_icons = use_icons

    def print_success(self, message: str) -> None:
        """Print success message with icon and styling."""
        icon = Icons.get_icon("SUCCESS", self.use_icons)
        self.console.print(f"{icon} {message}", style="success")


def create_basic_table(title: str = "") -> Table:
    """Create a table with the standard header and border styles."""
    return Table(
        title=title,
        show_header=True,
        header_style=Colors.HEADER,
        border_style=Colors.SECONDARY,
    )


def get_themed_console(use_icons: bool = True) -> ThemedConsole:
    """Get a themed console writing to the current stdout."""
    return ThemedConsole(use_icons=use_icons)
