from __future__ import annotations

import pytest

from md_preview.blocks import assemble_blocks, is_block_level
from md_preview.normalizer import final_cleanup


@pytest.mark.parametrize(
    ("block", "expected"),
    [
        ("<h1>Title</h1>", True),
        ("<ul>\n<li>a</li>\n</ul>", True),
        ("<hr>", True),
        ("text then <hr>", True),
        ("<blockquote>q</blockquote>", True),
        ("<strong>bold</strong> text", False),
        ("plain <br>", False),
        ("<a href=\"x\">x</a>", False),
    ],
)
def test_is_block_level(block: str, expected: bool):
    assert is_block_level(block) is expected


def test_plain_text_becomes_paragraphs():
    assert assemble_blocks("line1\nline2\n\nline3") == "<p>line1<br>line2</p>\n<p>line3</p>"


def test_blank_lines_with_whitespace_split_blocks():
    assert assemble_blocks("a\n  \t\nb") == "<p>a</p>\n<p>b</p>"


def test_empty_blocks_are_dropped():
    assert assemble_blocks("\n\n  \n") == ""


def test_heading_followed_by_text_is_split():
    result = assemble_blocks("<h1>Title</h1>\nIntro line\nsecond")

    assert result == "<h1>Title</h1>\n<p>Intro line<br>second</p>"


def test_consecutive_headings_followed_by_text():
    result = assemble_blocks("<h1>A</h1>\n<h2>B</h2>\ntext")

    assert result == "<h1>A</h1>\n<h2>B</h2>\n<p>text</p>"


def test_block_level_elements_pass_through():
    block = "<ul>\n<li>a</li>\n</ul>"

    assert assemble_blocks(block) == block


def test_preformatted_regions_are_their_own_blocks():
    text = "intro\n<pre><code>a\n\nb</code></pre>\nafter"

    assert assemble_blocks(text) == "<p>intro</p>\n<pre><code>a\n\nb</code></pre>\n<p>after</p>"


def test_cleanup_removes_break_after_heading():
    assert final_cleanup("<h2>T</h2><br>\n<p>x</p>") == "<h2>T</h2><p>x</p>"


@pytest.mark.parametrize("paragraph", ["<p></p>", "<p> </p>", "<p><br></p>", "<p>&nbsp;<br/></p>"])
def test_cleanup_removes_empty_paragraphs(paragraph: str):
    assert final_cleanup(f"<p>a</p>\n{paragraph}\n<p>b</p>") == "<p>a</p><p>b</p>"


def test_cleanup_removes_breaks_around_lists():
    assert final_cleanup("<p>a<br><ul><li>b</li></ul></p>") == "<p>a<ul><li>b</li></ul></p>"
    assert final_cleanup("<ul><br><li>b</li><br></ul>") == "<ul><li>b</li></ul>"


def test_cleanup_trims_lines_and_drops_blank_ones():
    assert final_cleanup("  <p>a</p>  \n\n\n   <p>b</p>") == "<p>a</p><p>b</p>"
    assert final_cleanup("  text  \n\n  more  ") == "text\nmore"


def test_cleanup_keeps_breaks_inside_paragraphs():
    assert final_cleanup("<p>a<br>b</p>") == "<p>a<br>b</p>"


def test_cleanup_leaves_preformatted_regions_untouched():
    pre = "<pre><code>  a\n\n\n  b  </code></pre>"

    assert final_cleanup(f"{pre}\n<p>x</p>") == f"{pre}\n<p>x</p>"
