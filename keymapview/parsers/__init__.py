"""Text-level parsing stages for ZMK keymap source.

The top-level :mod:`keymapview.parsers.keymap_parser` combines these stages
and is imported from there (or from :mod:`keymapview`).
"""

from keymapview.parsers.aliases import extract_inline_alias, extract_line_alias
from keymapview.parsers.binding_formatter import (
    BindingFormatter,
    create_binding_formatter,
    format_binding,
)
from keymapview.parsers.binding_tokenizer import (
    BindingsParser,
    BindingToken,
    BindingTokenizer,
    parse_bindings,
    tokenize_bindings,
)
from keymapview.parsers.comment_stripper import (
    CommentStripper,
    StrippedSource,
    create_comment_stripper,
    strip_comments,
)
from keymapview.parsers.layer_extractor import (
    LayerBlock,
    LayerExtractor,
    extract_layers,
)
from keymapview.parsers.section_locator import (
    SectionSpan,
    find_section,
    parse_labeled_nodes,
    parse_section_labels,
)


__all__ = [
    "BindingFormatter",
    "BindingToken",
    "BindingTokenizer",
    "BindingsParser",
    "CommentStripper",
    "LayerBlock",
    "LayerExtractor",
    "SectionSpan",
    "StrippedSource",
    "create_binding_formatter",
    "create_comment_stripper",
    "extract_inline_alias",
    "extract_layers",
    "extract_line_alias",
    "find_section",
    "format_binding",
    "parse_bindings",
    "parse_labeled_nodes",
    "parse_section_labels",
    "strip_comments",
    "tokenize_bindings",
]
