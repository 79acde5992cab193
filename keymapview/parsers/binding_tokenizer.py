"""Tokenization of a ``bindings = < ... >`` payload into positioned bindings."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from keymapview.models.keymap import Binding

from .aliases import (
    extract_inline_alias,
    extract_line_alias,
    is_alias_comment,
    strip_line_comment,
)
from .binding_formatter import BindingFormatter, create_binding_formatter
from .comment_stripper import CommentStripper


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindingToken:
    """One binding token with its grid position and alias."""

    raw_code: str
    row: int
    column: int
    alias: str | None = None


class BindingTokenizer:
    """Splits binding payloads into tokens, one row per binding-bearing line.

    Rows are numbered contiguously: blank and comment-only lines do not
    consume a row index.
    """

    def tokenize(
        self, payload: str, line_aliases: Mapping[int, str] | None = None
    ) -> list[BindingToken]:
        """Tokenize a bindings payload.

        Args:
            payload: Text between ``bindings = <`` and ``>``
            line_aliases: End-of-line aliases keyed by payload line index, for
                payloads whose line comments were already stripped

        Returns:
            Tokens in source order
        """
        tokens: list[BindingToken] = []
        row = 0

        for index, original_line in enumerate(payload.split("\n")):
            # End-of-line aliases must be read before the comment is stripped
            line_alias = extract_line_alias(original_line)
            if line_alias is None and line_aliases:
                line_alias = line_aliases.get(index)

            line = strip_line_comment(original_line).strip()
            if not line:
                continue

            pieces = self.split_line(line)
            if not pieces:
                continue

            last_column = len(pieces) - 1
            for column, piece in enumerate(pieces):
                raw_code, alias = self._resolve_alias(
                    piece, line_alias if column == last_column else None
                )
                tokens.append(
                    BindingToken(raw_code=raw_code, row=row, column=column, alias=alias)
                )
            row += 1

        return tokens

    def split_line(self, line: str) -> list[str]:
        """Split one comment-stripped line into binding tokens.

        A token starts at each ``&`` outside parentheses. Alias block comments
        stay attached to the token they follow; other block comments are
        dropped. Text that does not start with ``&`` is discarded.
        """
        tokens: list[str] = []
        current: list[str] = []
        depth = 0
        pos = 0

        while pos < len(line):
            if line.startswith("/*", pos):
                close = line.find("*/", pos + 2)
                end = len(line) if close == -1 else close + 2
                content = line[pos + 2 : close if close != -1 else len(line)]
                current.append(line[pos:end] if is_alias_comment(content) else " ")
                pos = end
                continue

            char = line[pos]
            if char == "&" and depth == 0:
                self._flush(current, tokens)
                current = [char]
            elif char == "(":
                depth += 1
                current.append(char)
            elif char == ")":
                depth = max(depth - 1, 0)
                current.append(char)
            else:
                current.append(char)
            pos += 1

        self._flush(current, tokens)
        return tokens

    @staticmethod
    def _flush(current: list[str], tokens: list[str]) -> None:
        token = "".join(current).strip()
        if token.startswith("&"):
            tokens.append(token)
        elif token:
            logger.debug("Discarding text outside of a binding: %r", token)

    @staticmethod
    def _resolve_alias(piece: str, line_alias: str | None) -> tuple[str, str | None]:
        """Apply alias precedence: inline annotation, then end-of-line alias."""
        alias: str | None = None
        code = piece

        extracted = extract_inline_alias(piece)
        if extracted is not None:
            code, alias = extracted

        if alias is None:
            alias = line_alias

        return " ".join(code.split()), alias


class BindingsParser:
    """Turns a bindings payload into formatted Binding models."""

    def __init__(
        self,
        tokenizer: BindingTokenizer | None = None,
        formatter: BindingFormatter | None = None,
        stripper: CommentStripper | None = None,
    ) -> None:
        self.tokenizer = tokenizer or BindingTokenizer()
        self.formatter = formatter or create_binding_formatter()
        self.stripper = stripper or CommentStripper()

    def parse(
        self, payload: str, line_aliases: Mapping[int, str] | None = None
    ) -> list[Binding]:
        """Parse a payload into bindings with display text and aliases.

        Without ``line_aliases`` the payload is treated as raw source: comments
        are stripped first, so block comments spanning lines hide their
        content. With ``line_aliases`` it must already be stripped.
        """
        if line_aliases is None:
            stripped = self.stripper.strip_with_annotations(payload)
            payload, line_aliases = stripped.text, stripped.line_aliases

        return [
            Binding(
                display_text=self.formatter.format(token.raw_code),
                raw_code=token.raw_code,
                alias=token.alias,
                row=token.row,
                column=token.column,
            )
            for token in self.tokenizer.tokenize(payload, line_aliases)
        ]


def tokenize_bindings(
    payload: str, line_aliases: Mapping[int, str] | None = None
) -> list[BindingToken]:
    """Tokenize a bindings payload."""
    return BindingTokenizer().tokenize(payload, line_aliases)


def parse_bindings(payload: str) -> list[Binding]:
    """Parse a raw bindings payload (comments allowed) into Binding models.

    Args:
        payload: Bindings text, e.g. ``"&kp A  &kp B  // =Bravo"``

    Returns:
        Bindings in source order with rows and columns assigned
    """
    return BindingsParser().parse(payload)
