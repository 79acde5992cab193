"""Rich rendering of parsed keymaps for the ``info`` command."""

from rich.table import Table

from keymapview.cli.helpers.theme import Colors, ThemedConsole, create_basic_table
from keymapview.models.keymap import Keymap, Layer


def _printable(label: str) -> str:
    return label.replace("\n", " ")


def create_layout_table(keymap: Keymap) -> Table:
    """Summary table of the inferred keyboard layout."""
    layout = keymap.layout
    table = create_basic_table("Layout")
    table.add_column("Property", style=Colors.PRIMARY, no_wrap=True)
    table.add_column("Value")

    table.add_row("Keyboard", layout.name)
    table.add_row("Keys", str(layout.total_keys))
    table.add_row("Keys per row", ", ".join(str(n) for n in layout.keys_per_row))
    table.add_row("Split", "yes" if layout.is_split else "no")
    table.add_row(
        "Thumb cluster",
        f"{layout.thumb_keys_count} keys" if layout.has_thumb_cluster else "none",
    )
    return table


def create_layers_table(keymap: Keymap) -> Table:
    """One row per layer with its size and first keys."""
    table = create_basic_table("Layers")
    table.add_column("#", style=Colors.MUTED, justify="right")
    table.add_column("Name", style=Colors.PRIMARY, no_wrap=True)
    table.add_column("Keys", justify="right")
    table.add_column("Rows", justify="right")
    table.add_column("First row")

    for index, layer in enumerate(keymap.layers):
        table.add_row(
            str(index),
            layer.name,
            str(len(layer.bindings)),
            str(layer.row_count),
            _first_row_preview(layer),
        )
    return table


def _first_row_preview(layer: Layer) -> str:
    rows = layer.rows()
    if not rows:
        return ""
    return " ".join(_printable(b.effective_display_text) for b in rows[0])


def create_labels_table(title: str, labels: dict[str, str]) -> Table:
    """Table of devicetree labels and their human-readable names."""
    table = create_basic_table(title)
    table.add_column("Node", style=Colors.PRIMARY, no_wrap=True)
    table.add_column("Label")
    for node, label in labels.items():
        table.add_row(node, label)
    return table


def print_keymap_info(keymap: Keymap, themed: ThemedConsole) -> None:
    """Print layout, layers, behaviors and macros of a keymap."""
    console = themed.console
    console.print(create_layout_table(keymap))
    console.print(create_layers_table(keymap))

    if keymap.behaviors:
        console.print(create_labels_table("Behaviors", keymap.behaviors))
    if keymap.macros:
        console.print(create_labels_table("Macros", keymap.macros))
