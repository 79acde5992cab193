"""Alias annotations embedded in keymap comments.

Two independent forms are recognized:

* inline, attached to one binding: ``&kp A /* =Alpha */``
* end of line, attached to the last binding on the line: ``&kp A &kp B // =Bravo``

Alias text is trimmed; empty text means no alias.
"""

import re


INLINE_ALIAS_RE = re.compile(r"/\*\s*=(.*?)\*/", re.DOTALL)
_TOKEN_WITH_ALIAS_RE = re.compile(r"^(.+?)\s*/\*\s*=(.*?)\*/", re.DOTALL)


def alias_from_comment_text(comment_text: str) -> str | None:
    """Interpret the text of a comment as an alias annotation.

    Args:
        comment_text: Comment content without its delimiters

    Returns:
        Alias text, or None when the comment is not an alias or is empty
    """
    if not is_alias_comment(comment_text):
        return None
    return comment_text.strip()[1:].strip() or None


def is_alias_comment(comment_text: str) -> bool:
    """Whether comment content is an alias annotation (even an empty one)."""
    return comment_text.strip().startswith("=")


def find_line_comment(line: str) -> int | None:
    """Locate a ``//`` comment that is outside block comments and strings.

    Returns:
        Index of the ``//`` or None if the line has no line comment
    """
    pos = 0
    in_block = False
    in_string = False
    while pos < len(line) - 1:
        pair = line[pos : pos + 2]
        if in_block:
            if pair == "*/":
                in_block = False
                pos += 2
                continue
        elif in_string:
            if line[pos] == '"':
                in_string = False
        elif pair == "/*":
            in_block = True
            pos += 2
            continue
        elif pair == "//":
            return pos
        elif line[pos] == '"':
            in_string = True
        pos += 1
    return None


def extract_line_alias(line: str) -> str | None:
    """Return the alias of a trailing ``// =X`` comment on an unstripped line."""
    start = find_line_comment(line)
    if start is None:
        return None
    return alias_from_comment_text(line[start + 2 :])


def strip_line_comment(line: str) -> str:
    """Remove a trailing ``//`` comment, keeping any block comments."""
    start = find_line_comment(line)
    if start is None:
        return line
    return line[:start].rstrip()


def extract_inline_alias(token: str) -> tuple[str, str | None] | None:
    """Split a token carrying a ``/* =X */`` annotation into code and alias.

    Args:
        token: Binding token, possibly followed by an alias block comment

    Returns:
        ``(code, alias)`` with the annotation removed from the code, where
        alias is None for empty alias text; None if no annotation is present
    """
    match = _TOKEN_WITH_ALIAS_RE.match(token)
    if not match:
        return None
    code = match.group(1).strip()
    alias = match.group(2).strip()
    return code, alias or None


def blank_inline_aliases(text: str) -> str:
    """Remove alias block comments, e.g. before measuring column widths."""
    return INLINE_ALIAS_RE.sub("", text)
