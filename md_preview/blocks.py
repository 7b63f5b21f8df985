"""Paragraph segmentation and block assembly."""

from __future__ import annotations

from .constants import (
    BLANK_LINE_PATTERN,
    BLOCK_END_PATTERN,
    BLOCK_START_PATTERN,
    HEADING_WITH_TEXT_PATTERN,
    PREFORMATTED_PATTERN,
)


def is_block_level(block: str) -> bool:
    """Check whether a block starts or ends with a block-level element.

    Examples:
        is_block_level("<h1>Title</h1>")  # True
        is_block_level("<strong>bold</strong> text")  # False
    """
    return bool(BLOCK_START_PATTERN.match(block) or BLOCK_END_PATTERN.search(block))


def _wrap_paragraph(block: str) -> str:
    return "<p>" + block.replace("\n", "<br>") + "</p>"


def _assemble_block(block: str) -> list[str]:
    parts: list[str] = []

    # A heading directly followed by text keeps its own element; the text
    # after it is assembled as a separate block.
    heading = HEADING_WITH_TEXT_PATTERN.match(block)
    while heading:
        parts.append(heading.group("heading"))
        block = heading.group("rest").strip()
        heading = HEADING_WITH_TEXT_PATTERN.match(block)

    if block:
        parts.append(block if is_block_level(block) else _wrap_paragraph(block))
    return parts


def assemble_blocks(text: str) -> str:
    """Split text into blocks and wrap plain-text blocks in paragraphs.

    Preformatted regions are blocks of their own. The rest of the text splits
    on blank lines; each block is trimmed and empty blocks are dropped. Blocks
    that already start or end with a block-level element pass through, and
    the others become ``<p>`` elements with ``<br>`` for single newlines.

    Args:
        text: Text after every inline pass and code restoration.

    Returns:
        str: Assembled blocks joined by single newlines.

    Examples:
        assemble_blocks("<h1>Title</h1>\\nIntro line\\nsecond")
        # "<h1>Title</h1>\\n<p>Intro line<br>second</p>"
    """
    blocks: list[str] = []
    for index, segment in enumerate(PREFORMATTED_PATTERN.split(text)):
        if index % 2:
            blocks.append(segment)
            continue
        for raw_block in BLANK_LINE_PATTERN.split(segment):
            block = raw_block.strip()
            if block:
                blocks.extend(_assemble_block(block))
    return "\n".join(blocks)
