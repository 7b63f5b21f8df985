from __future__ import annotations

import logging

import pytest

import md_preview.converter as converter
from md_preview import ConversionOutcome, RecoverableTransformError, convert, convert_document


def _flat(html: str) -> str:
    return html.replace("\n", "")


def test_heading_followed_by_text():
    assert convert("# Title\nSome text") == "<h1>Title</h1><p>Some text</p>"


def test_lettered_list():
    assert convert("a. First\nb. Second\nc. Third") == (
        "<ol><li>First</li><li>Second</li><li>Third</li></ol>"
    )


def test_nested_list():
    assert _flat(convert("- a\n  - b\n- c")) == "<ul><li>a<ul><li>b</li></ul></li><li>c</li></ul>"


def test_paragraphs_and_line_breaks():
    assert convert("line1\nline2\n\nline3") == "<p>line1<br>line2</p><p>line3</p>"


def test_code_block_is_not_formatted():
    assert convert("```\n* not a list *\n```") == "<pre><code>* not a list *</code></pre>"


def test_code_block_keeps_every_line_and_whitespace():
    html = convert("```python\ndef f():\n    return 1\n```")

    assert html == "<pre><code>python\ndef f():\n    return 1</code></pre>"


def test_code_block_first_word_is_not_lost():
    assert convert("```hello\nworld\n```") == "<pre><code>hello\nworld</code></pre>"


def test_inline_code_is_escaped_and_left_alone():
    assert convert("Use `<b>**x**</b>` here") == (
        "<p>Use <code>&lt;b&gt;**x**&lt;/b&gt;</code> here</p>"
    )


def test_horizontal_rule():
    assert convert("---") == "<hr>"


def test_nested_emphasis():
    assert convert("**bold with *italic* inside**") == (
        "<p><strong>bold with <em>italic</em> inside</strong></p>"
    )


def test_prose_with_lettered_start_stays_a_paragraph():
    assert convert("B. Spielberger directed the film.") == (
        "<p>B. Spielberger directed the film.</p>"
    )


def test_blockquote():
    assert convert("> quoted\n> more") == "<blockquote>quoted<br>more</blockquote>"


def test_links_and_autolinks():
    html = convert("[home](https://example.com) or https://example.org.")

    assert html == (
        '<p><a href="https://example.com">home</a> or '
        '<a href="https://example.org">https://example.org</a>.</p>'
    )


def test_surrounding_quotes_and_line_endings():
    assert convert('"# Title"') == "<h1>Title</h1>"
    assert convert("a\r\nb") == "<p>a<br>b</p>"


def test_task_list():
    html = convert("- [x] done\n- [ ] open")

    assert html == (
        '<ul><li><input type="checkbox" checked disabled> done</li>'
        '<li><input type="checkbox" disabled> open</li></ul>'
    )


def test_mixed_document():
    source = "\n".join(
        [
            "Report",
            "======",
            "",
            "Intro with **bold**.",
            "",
            "1. first",
            "2. second",
            "",
            "***",
            "",
            "> note",
        ]
    )

    assert convert(source) == (
        "<h1>Report</h1>"
        "<p>Intro with <strong>bold</strong>.</p>"
        "<ol><li>first</li><li>second</li></ol>"
        "<hr>"
        "<blockquote>note</blockquote>"
    )


def test_no_placeholders_leak():
    html = convert("`a` and ```\nb\n```")

    assert "\x02" not in html
    assert "\x03" not in html
    assert "<code>a</code>" in html
    assert "<pre><code>b</code></pre>" in html


def test_empty_input():
    result = convert_document("")

    assert result.ok
    assert result.html == ""


def test_success_result_has_no_diagnostic():
    result = convert_document("text")

    assert result.outcome is ConversionOutcome.SUCCESS
    assert result.diagnostic is None


def _explode(text: str) -> str:
    raise ValueError("boom")


def test_failing_pass_falls_back_to_escaped_raw(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(converter, "format_headers", _explode)

    result = convert_document("<b> # x")

    assert result.outcome is ConversionOutcome.FALLBACK
    assert result.html == (
        "<p>Error rendering content (headers pass failed). Raw content:</p>\n"
        "<pre>&lt;b&gt; # x</pre>"
    )
    assert result.diagnostic == "Conversion failed during the 'headers' pass (ValueError: boom)"


def test_convert_never_raises_on_pass_failure(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(converter, "format_lists", _explode)

    assert convert("- a").startswith("<p>Error rendering content (lists pass failed).")


def test_fallback_is_logged(monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture):
    monkeypatch.setattr(converter, "final_cleanup", _explode)

    with caplog.at_level(logging.WARNING, logger="md_preview"):
        convert("text")

    assert "Falling back to raw rendering" in caplog.text


def test_non_string_input_falls_back():
    result = convert_document(None)  # type: ignore[arg-type]

    assert not result.ok
    assert "normalize" in result.diagnostic
    assert result.html.endswith("<pre>None</pre>")


def test_stage_wraps_and_chains_errors():
    with pytest.raises(RecoverableTransformError) as excinfo:
        with converter._stage("links"):
            raise KeyError("missing")

    assert excinfo.value.stage == "links"
    assert isinstance(excinfo.value.__cause__, KeyError)
