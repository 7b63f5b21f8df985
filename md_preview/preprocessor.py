"""Input normalization and code-span protection."""

from __future__ import annotations

import html
import re

from .constants import (
    FENCED_BLOCK_PATTERN,
    INLINE_CODE_PATTERN,
    SURROUNDING_QUOTES,
    TRAILING_WHITESPACE_PATTERN,
)
from .models import FragmentKind, FragmentStore


def escape_html(text: str) -> str:
    """Escape text for literal display inside HTML.

    Examples:
        escape_html("<b>")  # "&lt;b&gt;"
    """
    return html.escape(text, quote=True)


def strip_surrounding_quotes(text: str) -> str:
    """Remove one layer of quotes wrapping the whole document.

    The same quote character must open and close the document, and must not be
    part of a longer run of that character, so a document that starts with a
    code fence or a doubled quote keeps its delimiters.

    Args:
        text: Document text.

    Returns:
        str: The unwrapped document, or `text` unchanged when it is not wrapped.

    Examples:
        strip_surrounding_quotes('"# Title"')  # "# Title"
        strip_surrounding_quotes("```\\ncode\\n```")  # unchanged
    """
    stripped = text.strip()
    if len(stripped) < 2:
        return text

    quote = stripped[0]
    if quote not in SURROUNDING_QUOTES or stripped[-1] != quote:
        return text
    if len(stripped) > 2 and (stripped[1] == quote or stripped[-2] == quote):
        return text
    # A single backticked line is an inline code span, not a wrapper.
    if quote == "`" and "\n" not in stripped:
        return text

    return stripped[1:-1]


def normalize(text: str) -> str:
    """Normalize raw input before any markdown pass runs.

    Strips a wrapping quote layer, converts every line ending to ``\\n`` and
    removes trailing spaces and tabs from each line. Blank lines are kept.

    Args:
        text: Raw document text.

    Returns:
        str: Normalized text.

    Examples:
        normalize("'a  \\r\\nb'")  # "a\\nb"
    """
    text = strip_surrounding_quotes(text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return TRAILING_WHITESPACE_PATTERN.sub("", text)


def _fenced_body(body: str) -> str:
    # One newline after the opening fence and one before the closing fence
    # belong to the fences.
    if body.startswith("\n"):
        body = body[1:]
    if body.endswith("\n"):
        body = body[:-1]
    return body


def protect(text: str) -> tuple[str, FragmentStore]:
    """Replace code blocks and inline code spans with placeholder keys.

    Fenced blocks are protected first so the inline pattern never sees a
    backtick that belongs to a fence. Stored renderings are already escaped.

    Args:
        text: Normalized document text.

    Returns:
        tuple[str, FragmentStore]: Text with placeholders, and the store
            holding the rendering of each placeholder.

    Examples:
        protected, store = protect("Use `<b>` here")
        store.restore(protected)  # "Use <code>&lt;b&gt;</code> here"
    """
    store = FragmentStore.for_text(text)

    def _protect_block(match: re.Match[str]) -> str:
        body = escape_html(_fenced_body(match.group("body")))
        return store.add(FragmentKind.CODE_BLOCK, f"<pre><code>{body}</code></pre>")

    def _protect_inline(match: re.Match[str]) -> str:
        body = escape_html(match.group("body"))
        return store.add(FragmentKind.INLINE_CODE, f"<code>{body}</code>")

    text = FENCED_BLOCK_PATTERN.sub(_protect_block, text)
    text = INLINE_CODE_PATTERN.sub(_protect_inline, text)
    return text, store


def restore(text: str, store: FragmentStore) -> str:
    """Put protected renderings back, code blocks first, then inline spans."""
    text = store.restore(text, FragmentKind.CODE_BLOCK)
    return store.restore(text, FragmentKind.INLINE_CODE)
