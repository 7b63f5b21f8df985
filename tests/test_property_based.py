from __future__ import annotations

import string

from hypothesis import assume, given
from hypothesis import strategies as st

from md_preview import convert, convert_document
from md_preview.lists import analyze_indentation_levels, format_lists, nesting_level

indent_strategy = st.integers(min_value=0, max_value=12)
word_strategy = st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=8)


@given(st.lists(indent_strategy, min_size=1, max_size=20))
def test_smallest_indent_is_depth_zero(indents: list[int]):
    lines = [f"{' ' * indent}- item" for indent in indents]
    levels = analyze_indentation_levels(lines)

    assert levels[min(indents)] == 0
    assert sorted(levels.values()) == list(range(len(set(indents))))


@given(st.lists(indent_strategy, min_size=1, max_size=20), st.data())
def test_nesting_level_is_monotonic_over_seen_widths(indents: list[int], data):
    levels = analyze_indentation_levels([f"{' ' * indent}- item" for indent in indents])
    first = data.draw(st.sampled_from(indents))
    second = data.draw(st.sampled_from(indents))
    assume(first <= second)

    assert nesting_level(first, levels) <= nesting_level(second, levels)


@given(st.lists(st.tuples(st.integers(min_value=0, max_value=3), word_strategy), max_size=15))
def test_list_tags_are_balanced(items: list[tuple[int, str]]):
    text = "\n".join(f"{'  ' * depth}- {word}" for depth, word in items)
    html = format_lists(text)

    assert html.count("<ul>") == html.count("</ul>")
    assert html.count("<li>") == html.count("</li>") == len(items)


@given(st.text())
def test_convert_is_total_and_deterministic(text: str):
    result = convert_document(text)

    assert result.ok
    assert convert(text) == result.html


@given(st.text())
def test_output_has_no_empty_paragraphs(text: str):
    assert "<p></p>" not in convert(text)


@given(st.text())
def test_no_placeholder_leaks(text: str):
    assume("\x02" not in text and "\x03" not in text)
    html = convert(text)

    assert "\x02" not in html
    assert "\x03" not in html


@given(st.text(alphabet=string.ascii_letters + " *_\n", max_size=80))
def test_emphasis_markup_is_balanced(text: str):
    html = convert(text)

    assert html.count("<strong>") == html.count("</strong>")
    assert html.count("<em>") == html.count("</em>")
