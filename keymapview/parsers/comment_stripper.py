"""Comment removal for devicetree keymap source.

Line (``//``) and block (``/* */``) comments are removed while keeping every
newline, so line numbers of the stripped text match the original. Block
comments whose content starts with ``=`` are alias annotations and are kept
verbatim for the alias extractor. Block comments do not nest: the first
``*/`` closes the comment.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum

from .aliases import alias_from_comment_text, is_alias_comment


logger = logging.getLogger(__name__)


class _State(Enum):
    CODE = "code"
    STRING = "string"
    LINE_COMMENT = "line_comment"


@dataclass(frozen=True)
class StrippedSource:
    """Comment-free text plus the end-of-line aliases removed with it.

    Attributes:
        text: Source with comments removed and newlines preserved
        line_aliases: Zero-based line number -> alias from a ``// =X`` comment
    """

    text: str
    line_aliases: dict[int, str] = field(default_factory=dict)


class CommentStripper:
    """Character state machine removing C-style comments.

    Block comments are consumed in one step by looking ahead to their first
    ``*/`` so the alias check can see the whole comment.
    """

    def strip(self, source: str) -> str:
        """Remove comments from source text.

        Args:
            source: Raw keymap text

        Returns:
            Text with comments removed and line structure preserved
        """
        return self.strip_with_annotations(source).text

    def strip_with_annotations(self, source: str) -> StrippedSource:
        """Remove comments and record end-of-line aliases per line.

        Args:
            source: Raw keymap text

        Returns:
            StrippedSource with the cleaned text and captured line aliases
        """
        out: list[str] = []
        line_aliases: dict[int, str] = {}
        state = _State.CODE
        line = 0
        comment_start = 0
        pos = 0
        length = len(source)

        while pos < length:
            char = source[pos]
            pair = source[pos : pos + 2]

            if state is _State.CODE:
                if pair == "//":
                    state = _State.LINE_COMMENT
                    comment_start = pos + 2
                    pos += 2
                    continue
                if pair == "/*":
                    end = self._consume_block(source, pos, out)
                    line += source.count("\n", pos, end)
                    pos = end
                    continue
                if char == '"':
                    state = _State.STRING
                elif char == "\n":
                    line += 1
                out.append(char)
                pos += 1
                continue

            if state is _State.STRING:
                if char == '"' or char == "\n":
                    state = _State.CODE
                    if char == "\n":
                        line += 1
                elif char == "\\" and pos + 1 < length and source[pos + 1] != "\n":
                    out.append(pair)
                    pos += 2
                    continue
                out.append(char)
                pos += 1
                continue

            # LINE_COMMENT: runs up to (not including) the newline
            if char == "\n":
                self._record_line_alias(source[comment_start:pos], line, line_aliases)
                state = _State.CODE
                out.append(char)
                line += 1
            pos += 1

        if state is _State.LINE_COMMENT:
            self._record_line_alias(source[comment_start:], line, line_aliases)

        return StrippedSource(text="".join(out), line_aliases=line_aliases)

    def _consume_block(self, source: str, start: int, out: list[str]) -> int:
        """Handle a block comment opening at ``start``.

        Returns:
            Position just after the comment
        """
        close = source.find("*/", start + 2)
        end = len(source) if close == -1 else close + 2
        content = source[start + 2 : close if close != -1 else len(source)]

        if is_alias_comment(content):
            out.append(source[start:end])
        else:
            out.append("\n" * content.count("\n"))

        if close == -1:
            logger.debug("Unterminated block comment at offset %d", start)
        return end

    @staticmethod
    def _record_line_alias(
        comment_text: str, line: int, line_aliases: dict[int, str]
    ) -> None:
        alias = alias_from_comment_text(comment_text)
        if alias is not None:
            line_aliases[line] = alias


def strip_comments(source: str) -> str:
    """Remove ``//`` and ``/* */`` comments, keeping alias block comments."""
    return CommentStripper().strip(source)


def create_comment_stripper() -> CommentStripper:
    """Create a comment stripper instance."""
    return CommentStripper()
