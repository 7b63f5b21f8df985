"""Final whitespace and empty-element cleanup."""

from __future__ import annotations

import re

from .constants import PREFORMATTED_PATTERN
from .models import FragmentKind, FragmentStore

HEADING_BREAK_PATTERN = re.compile(r"</(h[1-6])>\s*<br\s*/?>\s*", re.IGNORECASE)
EMPTY_PARAGRAPH_PATTERN = re.compile(r"<p>(?:\s|&nbsp;|<br\s*/?>)*</p>", re.IGNORECASE)
BREAK_BEFORE_LIST_PATTERN = re.compile(r"<br\s*/?>\s*<(ul|ol|li|/ul|/ol|/li)>", re.IGNORECASE)
BREAK_AFTER_LIST_PATTERN = re.compile(r"<(ul|ol|li|/ul|/ol|/li)>\s*<br\s*/?>", re.IGNORECASE)
EXCESS_BLANK_LINES_PATTERN = re.compile(r"\n\s*\n\s*\n")
INTER_TAG_NEWLINE_PATTERN = re.compile(r">\s*\n\s*<")


def final_cleanup(html: str) -> str:
    """Remove stray breaks, empty paragraphs and surplus whitespace.

    Preformatted regions are shielded and come back byte-for-byte.

    Args:
        html: Assembled HTML.

    Returns:
        str: HTML with every line trimmed and no empty lines.

    Examples:
        final_cleanup("<h1>T</h1><br>\\n<p> </p>\\n<p>x</p>")  # "<h1>T</h1><p>x</p>"
    """
    store = FragmentStore.for_text(html)
    text = PREFORMATTED_PATTERN.sub(
        lambda match: store.add(FragmentKind.PREFORMATTED, match.group(0)), html
    )

    text = HEADING_BREAK_PATTERN.sub(r"</\1>", text)
    text = EMPTY_PARAGRAPH_PATTERN.sub("", text)
    text = BREAK_BEFORE_LIST_PATTERN.sub(r"<\1>", text)
    text = BREAK_AFTER_LIST_PATTERN.sub(r"<\1>", text)
    text = EXCESS_BLANK_LINES_PATTERN.sub("\n\n", text)
    text = INTER_TAG_NEWLINE_PATTERN.sub("><", text)

    lines = (line.strip() for line in text.split("\n"))
    text = "\n".join(line for line in lines if line)

    return store.restore(text, FragmentKind.PREFORMATTED)
