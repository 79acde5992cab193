"""Extraction of layer nodes from the body of a ``keymap`` section."""

import logging
import re
from dataclasses import dataclass

from .section_locator import find_matching_brace, find_node_label


logger = logging.getLogger(__name__)

_CHILD_NODE_RE = re.compile(r"(?:[A-Za-z_]\w*\s*:\s*)?([A-Za-z_][\w@,.+-]*)\s*\{")
_BINDINGS_RE = re.compile(r"(?<![\w-])bindings\s*=\s*<")


@dataclass(frozen=True)
class LayerBlock:
    """Raw pieces of one layer node.

    Attributes:
        identifier: Node identifier (``default_layer``)
        name: Resolved display name
        payload: Text between ``bindings = <`` and ``>``
        payload_offset: Offset of the payload within the text passed to
            :meth:`LayerExtractor.extract`, plus the ``base_offset`` given
    """

    identifier: str
    name: str
    payload: str
    payload_offset: int


class LayerExtractor:
    """Splits a keymap body into layer blocks."""

    def extract(self, keymap_body: str, base_offset: int = 0) -> list[LayerBlock]:
        """Find every child node that declares ``bindings``.

        Args:
            keymap_body: Text inside the keymap section's outer braces
            base_offset: Offset of ``keymap_body`` in the full text

        Returns:
            Layer blocks in source order
        """
        layers: list[LayerBlock] = []
        pos = 0

        while True:
            match = _CHILD_NODE_RE.search(keymap_body, pos)
            if not match:
                break

            open_pos = match.end() - 1
            close_pos = find_matching_brace(keymap_body, open_pos)
            node_end = close_pos if close_pos is not None else len(keymap_body)
            node_body = keymap_body[open_pos + 1 : node_end]

            block = self._build_block(
                identifier=match.group(1),
                node_body=node_body,
                body_offset=base_offset + open_pos + 1,
            )
            if block is not None:
                layers.append(block)
            else:
                logger.debug("Skipping node without bindings: %s", match.group(1))

            pos = node_end + 1

        return layers

    def _build_block(
        self, identifier: str, node_body: str, body_offset: int
    ) -> LayerBlock | None:
        bindings_match = _BINDINGS_RE.search(node_body)
        if not bindings_match:
            return None

        payload_start = bindings_match.end()
        payload_end = self._find_payload_end(node_body, payload_start)
        name = find_node_label(node_body[: bindings_match.start()])
        if name is None:
            name = find_node_label(node_body[payload_end:]) or identifier

        return LayerBlock(
            identifier=identifier,
            name=name,
            payload=node_body[payload_start:payload_end],
            payload_offset=body_offset + payload_start,
        )

    @staticmethod
    def _find_payload_end(text: str, start: int) -> int:
        """Find the ``>`` closing a bindings list, skipping alias comments."""
        pos = start
        while pos < len(text):
            if text.startswith("/*", pos):
                close = text.find("*/", pos + 2)
                if close == -1:
                    return len(text)
                pos = close + 2
                continue
            if text[pos] == ">":
                return pos
            pos += 1
        return len(text)


def extract_layers(keymap_body: str, base_offset: int = 0) -> list[LayerBlock]:
    """Extract layer blocks from a keymap section body."""
    return LayerExtractor().extract(keymap_body, base_offset)
