"""Constants used across the md-preview package."""

from __future__ import annotations

import re

# Placeholder keys are wrapped in control characters that survive every pass.
PLACEHOLDER_OPEN = "\x02"
PLACEHOLDER_CLOSE = "\x03"

# Preprocessor
SURROUNDING_QUOTES = ('"', "'", "`")
FENCED_BLOCK_PATTERN = re.compile(r"```(?P<body>.*?)```", re.DOTALL)
INLINE_CODE_PATTERN = re.compile(r"`(?P<body>[^`\n]+)`")
TRAILING_WHITESPACE_PATTERN = re.compile(r"[ \t]+$", re.MULTILINE)

# Headers
ATX_HEADER_PATTERN = re.compile(
    r"^[ \t]*(?:[-*+][ \t]+)?(?P<hashes>#{1,6})(?!#)[ \t]+(?P<text>.+?)[ \t]*#*[ \t]*$",
    re.MULTILINE,
)
SETEXT_UNDERLINE_PATTERN = re.compile(r"^[ \t]*(?P<rule>={3,}|-{3,})[ \t]*$")
HTML_HEADING_LINE_PATTERN = re.compile(r"^[ \t]*<h[1-6]\b", re.IGNORECASE)

# Emphasis
DOUBLED_QUOTE_PATTERN = re.compile(r'""(?P<body>[^"\n]+)""')
BOLD_PATTERN = re.compile(
    r"(?P<delimiter>\*\*|__)"
    r"(?P<body>\S(?:(?:(?!(?P=delimiter))[^\n])*?\S)?)"
    r"(?P=delimiter)(?![*_])"
)
STRICT_STAR_ITALIC_PATTERN = re.compile(r"(?<!\w)\*(?P<body>[^*\n]+)\*(?!\w)")
RELAXED_STAR_ITALIC_PATTERN = re.compile(r"(?<!\*)\*(?P<body>[^*\n]+)\*(?!\*)")
STRICT_UNDERSCORE_ITALIC_PATTERN = re.compile(r"(?<!\w)_(?P<body>[^_\n]+)_(?!\w)")
RELAXED_UNDERSCORE_ITALIC_PATTERN = re.compile(r"(?<!_)_(?P<body>[^_\n]+)_(?!_)")
ITALIC_PATTERN = re.compile(
    r"(?<!\w)(?P<delimiter>[*_])(?P<body>[^*_\s](?:[^*_\n]*[^*_\s])?)(?P=delimiter)(?!\w)"
)
STRIKETHROUGH_PATTERN = re.compile(r"~~(?P<body>[^~\n]+)~~")

# Blockquotes and rules
BLOCKQUOTE_LINE_PATTERN = re.compile(r"^[ \t]*>[ \t]?(?P<body>.*)$", re.MULTILINE)
HORIZONTAL_RULE_PATTERN = re.compile(r"^[ \t]*(?:-{3,}|\*{3,}|_{3,})[ \t]*$")

# Links and images
IMAGE_PATTERN = re.compile(r"!\[(?P<alt>[^\]]*)\]\((?P<url>[^)]+)\)")
LINK_PATTERN = re.compile(r"\[(?P<text>[^\]]+)\]\((?P<url>[^)]+)\)")
ANCHOR_ELEMENT_PATTERN = re.compile(r"(<a\b[^>]*>.*?</a>)", re.DOTALL | re.IGNORECASE)
AUTOLINK_PATTERN = re.compile(r"(?<![\"'=>])\bhttps?://[^\s<>\"'\x02\x03]+")
AUTOLINK_TRAILING_PUNCTUATION = ".,;:!?"

# Lists
LIST_ITEM_PATTERN = re.compile(
    r"^(?P<indent>[ \t]*)"
    r"(?P<marker>[-*+]|\d+[.)]|\(\d+\)|[a-zA-Z][.)]|[ivxlcdm]+[.)]|[IVXLCDM]+[.)])"
    r"[ \t]+"
    r"(?:\[(?P<check>[ xX])\](?:[ \t]+|$))?"
    r"(?P<content>.*)$"
)
NAME_SHAPE_PATTERN = re.compile(r"^[A-Z][a-z]*\s+[A-Z]")
LONE_CAPITALIZED_WORD_PATTERN = re.compile(r"^[A-Z][a-z]*\.$")
ROMAN_LETTERS = frozenset("ivxlcdm")
CORROBORATION_WINDOW = 3
INDENT_TOLERANCE = 2
UNSEEN_INDENT_STEP = 4
MIN_NEARBY_ITEMS = 2
SHORT_PHRASE_LENGTH = 20
TAB_WIDTH = 4

# Blocks
BLANK_LINE_PATTERN = re.compile(r"\n[ \t]*\n")
PREFORMATTED_PATTERN = re.compile(r"(<pre\b[^>]*>.*?</pre>)", re.DOTALL | re.IGNORECASE)
HEADING_WITH_TEXT_PATTERN = re.compile(
    r"^(?P<heading><h(?P<level>[1-6])\b[^>]*>.*?</h(?P=level)>)\s*(?P<rest>.+)$",
    re.DOTALL | re.IGNORECASE,
)
BLOCK_START_PATTERN = re.compile(
    r"^<(?:h[1-6]|ul|ol|li|blockquote|pre|hr|div|table|p)\b", re.IGNORECASE
)
BLOCK_END_PATTERN = re.compile(
    r"(?:</(?:h[1-6]|ul|ol|li|blockquote|pre|div|table|p)>|<hr\s*/?>)$", re.IGNORECASE
)

# Shell default; config-aware values are resolved by the CLI.
from .config import PreviewConfig  # noqa: E402

PREVIEW_EXTENSIONS = PreviewConfig().extensions
