"""Markdown to preview HTML conversion pipeline."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from .blocks import assemble_blocks
from .exceptions import RecoverableTransformError
from .inline import (
    format_blockquotes,
    format_emphasis,
    format_headers,
    format_horizontal_rules,
    format_links,
)
from .lists import format_lists
from .models import ConversionOutcome, ConversionResult
from .normalizer import final_cleanup
from .preprocessor import escape_html, normalize, protect, restore

logger = logging.getLogger(__name__)


@contextmanager
def _stage(name: str) -> Iterator[None]:
    """Run one pass, turning any failure into a `RecoverableTransformError`."""
    try:
        yield
    except Exception as error:
        raise RecoverableTransformError(name) from error


def _run_pipeline(markdown: str) -> str:
    with _stage("normalize"):
        text = normalize(markdown)
    with _stage("protect"):
        text, store = protect(text)
        logger.debug("Protected %d code fragment(s)", len(store))
    with _stage("headers"):
        text = format_headers(text)
    with _stage("emphasis"):
        text = format_emphasis(text)
    with _stage("blockquotes"):
        text = format_blockquotes(text)
    with _stage("lists"):
        text = format_lists(text)
    with _stage("horizontal_rules"):
        text = format_horizontal_rules(text)
    with _stage("links"):
        text = format_links(text)
    with _stage("restore"):
        text = restore(text, store)
    with _stage("paragraphs"):
        text = assemble_blocks(text)
    with _stage("cleanup"):
        text = final_cleanup(text)
    return text


def render_fallback(markdown: object, error: RecoverableTransformError) -> str:
    """Render raw input verbatim, escaped inside ``<pre>``, below a diagnostic."""
    raw = markdown if isinstance(markdown, str) else str(markdown)
    return (
        f"<p>Error rendering content ({escape_html(error.stage)} pass failed). "
        "Raw content:</p>\n"
        f"<pre>{escape_html(raw)}</pre>"
    )


def convert_document(markdown: str) -> ConversionResult:
    """Convert markdown text and report how the conversion went.

    Every pass runs under a single failure boundary: if any pass raises, the
    result falls back to the escaped raw input with a short diagnostic instead
    of a partial document.

    Args:
        markdown: Raw document text.

    Returns:
        ConversionResult: ``SUCCESS`` with the rendered HTML, or ``FALLBACK``
            with the escaped raw rendering and a diagnostic.

    Examples:
        result = convert_document("# Title")
        result.ok  # True
        result.html  # "<h1>Title</h1>"
    """
    try:
        html = _run_pipeline(markdown)
    except RecoverableTransformError as error:
        logger.warning("Falling back to raw rendering: %s", error, exc_info=True)
        return ConversionResult(
            outcome=ConversionOutcome.FALLBACK,
            html=render_fallback(markdown, error),
            diagnostic=error.diagnostic,
        )

    return ConversionResult(outcome=ConversionOutcome.SUCCESS, html=html)


def convert(markdown: str) -> str:
    """Convert markdown text to preview HTML.

    Never raises for a failing pass; see `convert_document`.

    Examples:
        convert("**bold with *italic* inside**")
        # "<p><strong>bold with <em>italic</em> inside</strong></p>"
    """
    return convert_document(markdown).html
