"""ZMK keymap parser producing immutable Keymap models."""

import logging
from pathlib import Path

from keymapview.adapters.file_adapter import FileAdapter, create_file_adapter
from keymapview.config.models import ParserConfig
from keymapview.core.errors import FileSystemError, KeymapError
from keymapview.layout.inference import LayoutInferencer
from keymapview.models.base import KeymapViewBaseModel
from keymapview.models.keymap import Binding, Keymap, Layer

from .binding_tokenizer import BindingsParser
from .binding_tokenizer import parse_bindings as _parse_bindings
from .comment_stripper import CommentStripper, StrippedSource
from .layer_extractor import LayerBlock, LayerExtractor
from .section_locator import find_section, parse_section_labels


class KeymapParseResult(KeymapViewBaseModel):
    """Result of a keymap parsing operation."""

    success: bool
    keymap: Keymap | None = None
    errors: list[str] = []
    warnings: list[str] = []


class KeymapParser:
    """Parser turning devicetree keymap text into a Keymap.

    Parsing is a pure function of the text, the optional file path hint and
    the configuration; the parser holds no state between calls and can be
    shared between threads.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        stripper: CommentStripper | None = None,
        layer_extractor: LayerExtractor | None = None,
        bindings_parser: BindingsParser | None = None,
        inferencer: LayoutInferencer | None = None,
    ) -> None:
        """Initialize the parser with explicit dependencies.

        Args:
            config: Parser thresholds and extra known boards
            stripper: Comment stripper (default instance if None)
            layer_extractor: Layer extractor (default instance if None)
            bindings_parser: Bindings parser (default instance if None)
            inferencer: Layout inferencer (built from config if None)
        """
        self.logger = logging.getLogger(__name__)
        self.config = config or ParserConfig()
        self.stripper = stripper or CommentStripper()
        self.layer_extractor = layer_extractor or LayerExtractor()
        self.bindings_parser = bindings_parser or BindingsParser()
        self.inferencer = inferencer or LayoutInferencer(self.config)

    def parse(self, text: str, file_path: str | None = None) -> Keymap | None:
        """Parse keymap text, returning None when it holds no usable keymap."""
        return self.parse_with_result(text, file_path).keymap

    def parse_with_result(
        self, text: str, file_path: str | None = None
    ) -> KeymapParseResult:
        """Parse keymap text and report why parsing failed, if it did.

        Args:
            text: Keymap source text
            file_path: Optional path hint used for board detection

        Returns:
            KeymapParseResult with the keymap or error messages
        """
        warnings: list[str] = []
        try:
            keymap = self._parse(text, file_path, warnings)
        except KeymapError as e:
            self.logger.debug("Keymap rejected: %s", e)
            return KeymapParseResult(success=False, errors=[str(e)], warnings=warnings)
        except Exception as e:
            exc_info = self.logger.isEnabledFor(logging.DEBUG)
            self.logger.error("Failed to parse keymap: %s", e, exc_info=exc_info)
            return KeymapParseResult(
                success=False, errors=[f"Parsing failed: {e}"], warnings=warnings
            )

        return KeymapParseResult(success=True, keymap=keymap, warnings=warnings)

    def _parse(self, text: str, file_path: str | None, warnings: list[str]) -> Keymap:
        stripped = self.stripper.strip_with_annotations(text)
        clean = stripped.text

        behaviors = parse_section_labels("behaviors", clean)
        macros = parse_section_labels("macros", clean)

        span = find_section("keymap", clean)
        if span is None:
            raise KeymapError("No keymap section found")
        if not span.terminated:
            warnings.append("Keymap section is not terminated")

        blocks = self.layer_extractor.extract(
            span.body(clean), base_offset=span.body_start
        )
        if not blocks:
            raise KeymapError("No layers found in keymap section")

        layers = tuple(
            Layer.from_bindings(
                block.name,
                self._parse_block_bindings(block, stripped),
                identifier=block.identifier,
            )
            for block in blocks
        )

        layout = self.inferencer.infer(
            layers[0].bindings,
            raw_source=text,
            file_path=file_path,
            first_payload=blocks[0].payload,
        )

        keymap = Keymap(
            layers=layers,
            layout=layout,
            behaviors=behaviors,
            macros=macros,
            source_path=file_path,
        )
        self.logger.debug(
            "Parsed keymap: %d layers, %d behaviors, %d macros, layout %s",
            len(layers),
            len(behaviors),
            len(macros),
            layout.name,
        )
        return keymap

    def _parse_block_bindings(
        self, block: LayerBlock, stripped: StrippedSource
    ) -> list[Binding]:
        """Parse one layer's payload with the end-of-line aliases of its lines."""
        first_line = stripped.text.count("\n", 0, block.payload_offset)
        last_line = first_line + block.payload.count("\n")
        line_aliases = {
            line - first_line: alias
            for line, alias in stripped.line_aliases.items()
            if first_line <= line <= last_line
        }
        return self.bindings_parser.parse(block.payload, line_aliases)


def create_keymap_parser(config: ParserConfig | None = None) -> KeymapParser:
    """Create a keymap parser.

    Args:
        config: Optional parser configuration

    Returns:
        Configured KeymapParser instance
    """
    return KeymapParser(config=config)


def parse(
    source_text: str,
    file_path: str | None = None,
    config: ParserConfig | None = None,
) -> Keymap | None:
    """Parse keymap source text.

    Args:
        source_text: Devicetree keymap text
        file_path: Optional path hint for keyboard detection
        config: Optional parser configuration

    Returns:
        Keymap, or None when the text has no keymap section or no layers
    """
    return create_keymap_parser(config).parse(source_text, file_path)


def parse_bindings(payload: str) -> list[Binding]:
    """Parse a bindings payload into Binding models."""
    return _parse_bindings(payload)


def load_keymap(
    path: Path | str,
    file_adapter: FileAdapter | None = None,
    config: ParserConfig | None = None,
) -> Keymap | None:
    """Read and parse a keymap file.

    Returns:
        Keymap, or None when the file cannot be read or parsed
    """
    adapter = file_adapter or create_file_adapter()
    path = Path(path)
    try:
        text = adapter.read_text(path)
    except FileSystemError as e:
        logging.getLogger(__name__).warning("Error loading keymap: %s", e)
        return None
    return parse(text, file_path=str(path), config=config)
