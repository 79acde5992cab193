"""Keymap models produced by the parser."""

from collections.abc import Sequence

from pydantic import Field, computed_field

from keymapview.models.base import KeymapViewBaseModel


class Binding(KeymapViewBaseModel):
    """One physical key's resolved meaning within a layer."""

    display_text: str
    raw_code: str
    alias: str | None = None
    row: int = Field(ge=0)
    column: int = Field(ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def effective_display_text(self) -> str:
        """Alias if the user supplied one, otherwise the derived label."""
        return self.alias if self.alias is not None else self.display_text

    @property
    def position(self) -> tuple[int, int]:
        """Grid position as ``(row, column)``."""
        return (self.row, self.column)


def count_keys_per_row(bindings: Sequence[Binding]) -> list[int]:
    """Count bindings per row index, from row 0 up to the highest row.

    Rows that hold no binding count as 0. An empty sequence gives an empty list.
    """
    if not bindings:
        return []

    counts: dict[int, int] = {}
    for binding in bindings:
        counts[binding.row] = counts.get(binding.row, 0) + 1

    return [counts.get(row, 0) for row in range(max(counts) + 1)]


class Layer(KeymapViewBaseModel):
    """One keymap layer ("default", "symbols", ...)."""

    name: str
    identifier: str = ""
    bindings: tuple[Binding, ...] = ()
    row_count: int = 0
    column_count: int = 0

    @classmethod
    def from_bindings(
        cls, name: str, bindings: Sequence[Binding], identifier: str = ""
    ) -> "Layer":
        """Create a layer, deriving its extents from the bindings."""
        keys_per_row = count_keys_per_row(bindings)
        return cls(
            name=name,
            identifier=identifier or name,
            bindings=tuple(bindings),
            row_count=len(keys_per_row),
            column_count=max(keys_per_row, default=0),
        )

    @property
    def keys_per_row(self) -> list[int]:
        """Number of bindings in each row."""
        return count_keys_per_row(self.bindings)

    def rows(self) -> list[list[Binding]]:
        """Bindings grouped by row, each row ordered by column."""
        grouped: list[list[Binding]] = [[] for _ in range(self.row_count)]
        for binding in self.bindings:
            grouped[binding.row].append(binding)
        return [sorted(row, key=lambda b: b.column) for row in grouped]

    def binding_at(self, row: int, column: int) -> Binding | None:
        """Return the binding at a grid position, if there is one."""
        for binding in self.bindings:
            if binding.row == row and binding.column == column:
                return binding
        return None


class KeyboardLayout(KeymapViewBaseModel):
    """Physical keyboard geometry shared by all layers of one keymap."""

    total_keys: int = 0
    keys_per_row: tuple[int, ...] = ()
    row_count: int = 0
    has_thumb_cluster: bool = False
    thumb_keys_count: int = 0
    name: str = "Unknown"
    is_split: bool = True

    @classmethod
    def create(
        cls,
        key_count: int,
        keys_per_row: Sequence[int],
        detected_name: str | None = None,
        is_split: bool = True,
    ) -> "KeyboardLayout":
        """Create a layout from parsed row counts.

        A thumb cluster is assumed when the last row is shorter than the first.

        Args:
            key_count: Total number of keys
            keys_per_row: Number of keys in each row
            detected_name: Board name, if one was identified
            is_split: Whether the board has a left/right gap

        Returns:
            KeyboardLayout instance
        """
        first_row_keys = keys_per_row[0] if keys_per_row else 0
        thumb_keys = keys_per_row[-1] if keys_per_row else 0
        has_thumb_cluster = thumb_keys < first_row_keys

        return cls(
            total_keys=key_count,
            keys_per_row=tuple(keys_per_row),
            row_count=len(keys_per_row),
            has_thumb_cluster=has_thumb_cluster,
            thumb_keys_count=thumb_keys if has_thumb_cluster else 0,
            name=detected_name or f"Custom ({key_count} keys)",
            is_split=is_split,
        )

    @classmethod
    def unknown(cls) -> "KeyboardLayout":
        """Placeholder layout for an empty or not yet loaded keymap."""
        return cls()


SWEEP_LAYOUT = KeyboardLayout.create(34, [10, 10, 10, 4], "Sweep/Cradio")
CORNE_LAYOUT = KeyboardLayout.create(42, [12, 12, 12, 6], "Corne")


class Keymap(KeymapViewBaseModel):
    """Top-level parse result."""

    layers: tuple[Layer, ...] = ()
    layout: KeyboardLayout = Field(default_factory=KeyboardLayout.unknown)
    behaviors: dict[str, str] = Field(default_factory=dict)
    macros: dict[str, str] = Field(default_factory=dict)
    source_path: str | None = None

    @property
    def layer_names(self) -> list[str]:
        """Names of all layers in source order."""
        return [layer.name for layer in self.layers]

    def get_layer(self, name_or_index: str | int) -> Layer | None:
        """Look a layer up by display name, identifier or index."""
        if isinstance(name_or_index, int):
            if 0 <= name_or_index < len(self.layers):
                return self.layers[name_or_index]
            return None

        for layer in self.layers:
            if name_or_index in (layer.name, layer.identifier):
                return layer
        return None
