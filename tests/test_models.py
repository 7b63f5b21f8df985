from md_preview.models import (
    ConversionOutcome,
    ConversionResult,
    FragmentKind,
    FragmentStore,
    ListContext,
    ListItemCandidate,
    ListType,
    MarkerFamily,
)


def test_list_type_values_are_container_tags():
    assert ListType.ORDERED.value == "ol"
    assert ListType.UNORDERED.value == "ul"


def test_candidate_defaults():
    candidate = ListItemCandidate(indent=0, marker="-")

    assert candidate.is_task is False
    assert candidate.checked is False
    assert candidate.content == ""


def test_candidate_marker_families():
    families = {
        marker: ListItemCandidate(indent=0, marker=marker).family
        for marker in ("-", "*", "+", "12.", "3)", "(4)", "b.", "C)", "iv.", "XII)")
    }

    assert families == {
        "-": MarkerFamily.BULLET,
        "*": MarkerFamily.BULLET,
        "+": MarkerFamily.BULLET,
        "12.": MarkerFamily.ARABIC,
        "3)": MarkerFamily.ARABIC,
        "(4)": MarkerFamily.PARENTHESIZED,
        "b.": MarkerFamily.LETTER,
        "C)": MarkerFamily.LETTER,
        "iv.": MarkerFamily.ROMAN,
        "XII)": MarkerFamily.ROMAN,
    }


def test_candidate_list_type_and_ordinal():
    bullet = ListItemCandidate(indent=0, marker="*")
    lettered = ListItemCandidate(indent=0, marker="c)")

    assert bullet.list_type is ListType.UNORDERED
    assert lettered.list_type is ListType.ORDERED
    assert lettered.ordinal == "c"
    assert ListItemCandidate(indent=0, marker="(7)").ordinal == "7"


def test_candidate_single_character_markers():
    assert ListItemCandidate(indent=0, marker="3.").is_single_character
    assert ListItemCandidate(indent=0, marker="b)").is_single_character
    assert not ListItemCandidate(indent=0, marker="12.").is_single_character
    assert not ListItemCandidate(indent=0, marker="(1)").is_single_character
    assert not ListItemCandidate(indent=0, marker="-").is_single_character


def test_list_context_defaults():
    context = ListContext(list_type=ListType.ORDERED, depth=2)

    assert context.item_open is False
    assert context.depth == 2


def test_fragment_store_nonce_avoids_source_text():
    store = FragmentStore.for_text("plain text")

    assert store.nonce not in "plain text"
    assert len(store) == 0


def test_fragment_store_keys_are_unique_and_restore_exactly():
    store = FragmentStore.for_text("")
    first = store.add(FragmentKind.CODE_BLOCK, "<pre><code>a</code></pre>")
    second = store.add(FragmentKind.INLINE_CODE, "<code>b</code>")

    assert first != second
    assert len(store) == 2
    assert store.restore(f"{first} and {second}") == "<pre><code>a</code></pre> and <code>b</code>"


def test_fragment_store_restores_single_kind():
    store = FragmentStore.for_text("")
    block = store.add(FragmentKind.CODE_BLOCK, "<pre><code>a</code></pre>")
    inline = store.add(FragmentKind.INLINE_CODE, "<code>b</code>")

    restored = store.restore(f"{block}{inline}", FragmentKind.CODE_BLOCK)

    assert restored == f"<pre><code>a</code></pre>{inline}"


def test_conversion_result_ok():
    assert ConversionResult(outcome=ConversionOutcome.SUCCESS, html="<p>x</p>").ok
    fallback = ConversionResult(
        outcome=ConversionOutcome.FALLBACK, html="<pre>x</pre>", diagnostic="boom"
    )
    assert not fallback.ok
    assert fallback.diagnostic == "boom"
