"""Brace-balanced location of devicetree nodes in keymap text."""

import logging
import re
from dataclasses import dataclass


logger = logging.getLogger(__name__)

_LABEL_RE = re.compile(r'(?<![\w-])label\s*=\s*"([^"]*)"')
_DISPLAY_NAME_RE = re.compile(r'(?<![\w-])display-name\s*=\s*"([^"]*)"')
_LABELED_NODE_RE = re.compile(r"([A-Za-z_][\w]*)\s*:\s*[\w@,.+-]+\s*\{")


@dataclass(frozen=True)
class SectionSpan:
    """Location of a ``name { ... }`` node.

    Attributes:
        name: Searched node name
        start: Offset of the node name
        body_start: Offset just after the opening brace
        body_end: Offset of the closing brace (or end of text if unterminated)
        end: Offset just after the closing brace
        terminated: False when the text ended before the braces balanced
    """

    name: str
    start: int
    body_start: int
    body_end: int
    end: int
    terminated: bool = True

    def body(self, text: str) -> str:
        """Return the text between the outer braces."""
        return text[self.body_start : self.body_end]


def find_matching_brace(text: str, open_pos: int) -> int | None:
    """Find the brace closing the one at ``open_pos``.

    Braces inside block comments (alias annotations survive stripping) and
    inside double-quoted strings are not counted.

    Args:
        text: Text to scan
        open_pos: Offset of an opening ``{``

    Returns:
        Offset of the matching ``}`` or None if braces never balance
    """
    depth = 1
    pos = open_pos + 1
    while pos < len(text):
        if text.startswith("/*", pos):
            close = text.find("*/", pos + 2)
            if close == -1:
                return None
            pos = close + 2
            continue

        char = text[pos]
        if char == '"':
            pos = _skip_string(text, pos)
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return pos
        pos += 1
    return None


def _skip_string(text: str, quote_pos: int) -> int:
    """Return the offset just after the string opening at ``quote_pos``.

    Strings end at the closing quote or, unterminated, at the line end.
    """
    pos = quote_pos + 1
    while pos < len(text):
        char = text[pos]
        if char == "\\" and pos + 1 < len(text) and text[pos + 1] != "\n":
            pos += 2
            continue
        if char == '"' or char == "\n":
            return pos + 1
        pos += 1
    return pos


def find_section(name: str, text: str, start: int = 0) -> SectionSpan | None:
    """Locate the first ``name {`` node and its balanced body.

    Args:
        name: Node name, e.g. ``keymap``
        text: Comment-stripped source
        start: Offset to begin searching from

    Returns:
        SectionSpan or None if ``name {`` does not occur
    """
    pattern = re.compile(rf"(?<![\w-]){re.escape(name)}\s*\{{")
    match = pattern.search(text, start)
    if not match:
        return None

    open_pos = match.end() - 1
    close_pos = find_matching_brace(text, open_pos)
    if close_pos is None:
        logger.warning("Section '%s' is not terminated, reading to end of text", name)
        return SectionSpan(
            name=name,
            start=match.start(),
            body_start=open_pos + 1,
            body_end=len(text),
            end=len(text),
            terminated=False,
        )

    return SectionSpan(
        name=name,
        start=match.start(),
        body_start=open_pos + 1,
        body_end=close_pos,
        end=close_pos + 1,
    )


def find_node_label(node_body: str) -> str | None:
    """Return the ``label`` of a node, falling back to ``display-name``.

    Empty strings are treated as absent.
    """
    for pattern in (_LABEL_RE, _DISPLAY_NAME_RE):
        match = pattern.search(node_body)
        if match and match.group(1):
            return match.group(1)
    return None


def parse_labeled_nodes(section_body: str) -> dict[str, str]:
    """Map ``label_name: node { label = "X"; }`` entries to their labels.

    Args:
        section_body: Body of a ``behaviors`` or ``macros`` section

    Returns:
        Dictionary of devicetree label -> human label, in source order
    """
    entries: dict[str, str] = {}
    pos = 0
    while True:
        match = _LABELED_NODE_RE.search(section_body, pos)
        if not match:
            break

        open_pos = match.end() - 1
        close_pos = find_matching_brace(section_body, open_pos)
        body_end = close_pos if close_pos is not None else len(section_body)
        label = find_node_label(section_body[open_pos + 1 : body_end])
        if label is not None:
            entries[match.group(1)] = label

        pos = body_end + 1

    return entries


def parse_section_labels(name: str, text: str) -> dict[str, str]:
    """Read labeled entries of an optional section; empty if it is missing."""
    span = find_section(name, text)
    if span is None:
        logger.debug("No %s section found", name)
        return {}
    return parse_labeled_nodes(span.body(text))
