"""Inline formatting passes: headers, emphasis, blockquotes, rules and links."""

from __future__ import annotations

import re

from .constants import (
    ANCHOR_ELEMENT_PATTERN,
    ATX_HEADER_PATTERN,
    AUTOLINK_PATTERN,
    AUTOLINK_TRAILING_PUNCTUATION,
    BLOCKQUOTE_LINE_PATTERN,
    BOLD_PATTERN,
    DOUBLED_QUOTE_PATTERN,
    HORIZONTAL_RULE_PATTERN,
    HTML_HEADING_LINE_PATTERN,
    IMAGE_PATTERN,
    ITALIC_PATTERN,
    LINK_PATTERN,
    LIST_ITEM_PATTERN,
    RELAXED_STAR_ITALIC_PATTERN,
    RELAXED_UNDERSCORE_ITALIC_PATTERN,
    SETEXT_UNDERLINE_PATTERN,
    STRICT_STAR_ITALIC_PATTERN,
    STRICT_UNDERSCORE_ITALIC_PATTERN,
    STRIKETHROUGH_PATTERN,
)


def _render_atx_header(match: re.Match[str]) -> str:
    level = len(match.group("hashes"))
    return f"<h{level}>{match.group('text').strip()}</h{level}>"


def _is_setext_title(line: str) -> bool:
    """Check whether a line can be promoted by a setext underline.

    Blank lines, existing headings, blockquote lines, list items, rules and
    underlines themselves are not titles.
    """
    if not line.strip():
        return False
    if HTML_HEADING_LINE_PATTERN.match(line) or line.lstrip().startswith(">"):
        return False
    if LIST_ITEM_PATTERN.match(line) or HORIZONTAL_RULE_PATTERN.match(line):
        return False
    return not SETEXT_UNDERLINE_PATTERN.match(line)


def format_headers(text: str) -> str:
    """Render ATX and setext headers.

    ATX headers (``#`` to ``######``, optionally behind a bullet and followed
    by closing hashes) are rendered first. A text line followed by a line of
    three or more ``=`` becomes ``<h1>``; with ``-`` it becomes ``<h2>``.

    Args:
        text: Document text.

    Returns:
        str: Text with header lines replaced by ``<hN>`` elements.

    Examples:
        format_headers("# Title")  # "<h1>Title</h1>"
        format_headers("Title\\n=====")  # "<h1>Title</h1>"
        format_headers("* ## Section ##")  # "<h2>Section</h2>"
    """
    text = ATX_HEADER_PATTERN.sub(_render_atx_header, text)

    lines = text.split("\n")
    result: list[str] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        if index + 1 < len(lines) and _is_setext_title(line):
            underline = SETEXT_UNDERLINE_PATTERN.match(lines[index + 1])
            if underline:
                level = 1 if underline.group("rule").startswith("=") else 2
                result.append(f"<h{level}>{line.strip()}</h{level}>")
                index += 2
                continue
        result.append(line)
        index += 1

    return "\n".join(result)


def _is_inside_word(match: re.Match[str]) -> bool:
    source = match.string
    before = source[match.start() - 1] if match.start() > 0 else ""
    after = source[match.end()] if match.end() < len(source) else ""
    return any(char.isalnum() or char == "_" for char in (before, after))


def _render_bold(match: re.Match[str]) -> str:
    delimiter = match.group("delimiter")
    if delimiter == "__" and _is_inside_word(match):
        return match.group(0)

    body = match.group("body")
    # Inside the span, italics of the same family only need to avoid the bold
    # delimiter itself; the other family keeps word-boundary guards.
    if delimiter == "**":
        body = RELAXED_STAR_ITALIC_PATTERN.sub(r"<em>\g<body></em>", body)
        body = STRICT_UNDERSCORE_ITALIC_PATTERN.sub(r"<em>\g<body></em>", body)
    else:
        body = STRICT_STAR_ITALIC_PATTERN.sub(r"<em>\g<body></em>", body)
        body = RELAXED_UNDERSCORE_ITALIC_PATTERN.sub(r"<em>\g<body></em>", body)
    return f"<strong>{body}</strong>"


def _format_line_emphasis(line: str) -> str:
    line = DOUBLED_QUOTE_PATTERN.sub(r'"*\g<body>*"', line)
    line = BOLD_PATTERN.sub(_render_bold, line)
    line = ITALIC_PATTERN.sub(r"<em>\g<body></em>", line)
    return STRIKETHROUGH_PATTERN.sub(r"<del>\g<body></del>", line)


def format_emphasis(text: str) -> str:
    """Render bold, italic and strikethrough spans.

    ``""quoted""`` text is first rewritten to an italic quotation. Bold spans
    (``**`` or ``__``) resolve the italics they contain, so
    ``**a *b* c**`` nests correctly. Remaining italics need word boundaries,
    which keeps ``snake_case`` intact. Horizontal rule lines are skipped.

    Args:
        text: Document text.

    Returns:
        str: Text with ``<strong>``, ``<em>`` and ``<del>`` elements.

    Examples:
        format_emphasis("**bold with *italic* inside**")
        # "<strong>bold with <em>italic</em> inside</strong>"
    """
    return "\n".join(
        line if HORIZONTAL_RULE_PATTERN.match(line) else _format_line_emphasis(line)
        for line in text.split("\n")
    )


def format_blockquotes(text: str) -> str:
    """Render ``>`` lines as blockquotes, merging adjacent ones with ``<br>``.

    Blockquotes are single level; a nested ``>`` stays literal text.
    """
    text = BLOCKQUOTE_LINE_PATTERN.sub(r"<blockquote>\g<body></blockquote>", text)
    text = re.sub(r"</blockquote>[ \t]*\n[ \t]*<blockquote>", "<br>", text)
    text = re.sub(r"<blockquote>(?:<br>)+", "<blockquote>", text)
    text = re.sub(r"(?:<br>)+</blockquote>", "</blockquote>", text)
    return text.replace("<blockquote></blockquote>", "")


def format_horizontal_rules(text: str) -> str:
    """Replace lines made of three or more ``-``, ``*`` or ``_`` with ``<hr>``."""
    return "\n".join(
        "<hr>" if HORIZONTAL_RULE_PATTERN.match(line) else line for line in text.split("\n")
    )


def _split_autolink_suffix(url: str) -> tuple[str, str]:
    end = len(url)
    while end > 0:
        char = url[end - 1]
        if char in AUTOLINK_TRAILING_PUNCTUATION:
            end -= 1
        elif char == ")" and url.count("(", 0, end) < url.count(")", 0, end):
            end -= 1
        else:
            break
    return url[:end], url[end:]


def _render_autolink(match: re.Match[str]) -> str:
    url, suffix = _split_autolink_suffix(match.group(0))
    if not url:
        return match.group(0)
    return f'<a href="{url}">{url}</a>{suffix}'


def format_links(text: str) -> str:
    """Render images, links and bare URLs.

    Images are handled before links because the link pattern would otherwise
    consume ``![alt](src)``. Bare ``http(s)://`` URLs become links unless they
    sit inside an attribute or an existing anchor element.

    Examples:
        format_links("![logo](logo.png)")  # '<img src="logo.png" alt="logo">'
        format_links("see https://example.com.")
        # 'see <a href="https://example.com">https://example.com</a>.'
    """
    text = IMAGE_PATTERN.sub(r'<img src="\g<url>" alt="\g<alt>">', text)
    text = LINK_PATTERN.sub(r'<a href="\g<url>">\g<text></a>', text)

    parts = ANCHOR_ELEMENT_PATTERN.split(text)
    for index in range(0, len(parts), 2):
        parts[index] = AUTOLINK_PATTERN.sub(_render_autolink, parts[index])
    return "".join(parts)
