"""List structuring: indentation analysis, item classification and nesting."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .constants import (
    CORROBORATION_WINDOW,
    INDENT_TOLERANCE,
    LIST_ITEM_PATTERN,
    LONE_CAPITALIZED_WORD_PATTERN,
    MIN_NEARBY_ITEMS,
    NAME_SHAPE_PATTERN,
    ROMAN_LETTERS,
    SHORT_PHRASE_LENGTH,
    TAB_WIDTH,
    UNSEEN_INDENT_STEP,
)
from .models import ListContext, ListItemCandidate, ListScan, ListType, MarkerFamily


def leading_whitespace_columns(line: str) -> int:
    """Compute the column width of leading whitespace.

    Tabs advance to the next multiple of four columns.

    Args:
        line: Line whose leading whitespace should be measured.

    Returns:
        int: Number of columns occupied by the leading whitespace.

    Examples:
        leading_whitespace_columns("    - item")  # 4
        leading_whitespace_columns("\\t- item")  # 4
    """
    columns = 0
    for character in line:
        if character == " ":
            columns += 1
            continue
        if character == "\t":
            columns += TAB_WIDTH - (columns % TAB_WIDTH)
            continue
        break
    return columns


def match_list_item(line: str) -> ListItemCandidate | None:
    """Parse a line against the list marker grammar.

    Args:
        line: A single line of text.

    Returns:
        ListItemCandidate | None: The parsed candidate, or None when the line
            has no list marker.

    Examples:
        match_list_item("  - [x] done")
        # ListItemCandidate(indent=2, marker="-", is_task=True, checked=True, content="done")
        match_list_item("plain text")  # None
    """
    match = LIST_ITEM_PATTERN.match(line)
    if match is None:
        return None

    check = match.group("check")
    return ListItemCandidate(
        indent=leading_whitespace_columns(match.group("indent")),
        marker=match.group("marker"),
        is_task=check is not None,
        checked=check is not None and check in "xX",
        content=match.group("content"),
    )


def _rank_indents(candidates: Iterable[ListItemCandidate | None]) -> dict[int, int]:
    widths = {candidate.indent for candidate in candidates if candidate is not None}
    return {width: depth for depth, width in enumerate(sorted(widths))}


def analyze_indentation_levels(lines: Sequence[str]) -> dict[int, int]:
    """Map every indent width used by a list-shaped line to a nesting depth.

    Depth is the rank of the width among the distinct widths in the document,
    so nesting follows the document's own indentation habits rather than a
    fixed step.

    Args:
        lines: Document lines.

    Returns:
        dict[int, int]: Indent width to zero-based depth.

    Examples:
        analyze_indentation_levels(["- a", "   - b", "      - c"])  # {0: 0, 3: 1, 6: 2}
    """
    return _rank_indents(match_list_item(line) for line in lines)


def _sequence_ordinal(candidate: ListItemCandidate) -> str | None:
    if candidate.family is MarkerFamily.LETTER:
        return candidate.ordinal.lower()
    if candidate.family is MarkerFamily.ARABIC:
        return candidate.ordinal.lstrip("0") or "0"
    return None


def scan_lines(lines: Sequence[str]) -> ListScan:
    """Parse every line against the marker grammar once.

    Examples:
        scan = scan_lines(["a. one", "text", "b. two"])
        scan.ordinals[(MarkerFamily.LETTER, "b")]  # [(2, 0)]
    """
    scan = ListScan(candidates=[match_list_item(line) for line in lines])
    for index, candidate in enumerate(scan.candidates):
        if candidate is None:
            continue
        ordinal = _sequence_ordinal(candidate)
        if ordinal is not None:
            scan.ordinals.setdefault((candidate.family, ordinal), []).append(
                (index, candidate.indent)
            )
    return scan


def nesting_level(indent: int, levels: dict[int, int]) -> int:
    """Resolve the nesting depth of an indent width.

    Widths seen during analysis map directly. Any other width takes the depth
    of the nearest smaller known width plus one level per four extra columns.

    Args:
        indent: Indent width of the item.
        levels: Map built by `analyze_indentation_levels`.

    Returns:
        int: Zero-based nesting depth.

    Examples:
        nesting_level(8, {0: 0, 2: 1})  # 2
    """
    if indent in levels:
        return levels[indent]

    known = [width for width in levels if width <= indent]
    base_width = max(known) if known else 0
    base_depth = levels.get(base_width, 0)
    return base_depth + (indent - base_width) // UNSEEN_INDENT_STEP


def looks_like_name(content: str) -> bool:
    """Detect content shaped like a name or abbreviation ("Spielberger Films", "Smith.")."""
    return bool(NAME_SHAPE_PATTERN.match(content) or LONE_CAPITALIZED_WORD_PATTERN.match(content))


def markers_related(first: ListItemCandidate, second: ListItemCandidate) -> bool:
    """Check whether two markers belong to the same list family.

    Single letters that are also Roman digits (``i.``, ``v)``) relate to
    multi-character Roman numerals.
    """
    if first.family is second.family:
        return True

    families = {first.family, second.family}
    if families == {MarkerFamily.LETTER, MarkerFamily.ROMAN}:
        letter = first if first.family is MarkerFamily.LETTER else second
        return letter.ordinal.lower() in ROMAN_LETTERS
    return False


def has_list_context(
    scan: ListScan, index: int, candidate: ListItemCandidate
) -> tuple[bool, int]:
    """Inspect the corroboration window around a candidate.

    Args:
        scan: Parsed lines of the document.
        index: Zero-based index of the candidate line.
        candidate: The parsed candidate at `index`.

    Returns:
        tuple[bool, int]: Whether a related marker sits at a similar indent
            within three lines, and how many list-shaped lines do.
    """
    related = False
    nearby_items = 0

    start = max(0, index - CORROBORATION_WINDOW)
    end = min(len(scan.candidates) - 1, index + CORROBORATION_WINDOW)
    for position in range(start, end + 1):
        other = scan.candidates[position]
        if position == index or other is None:
            continue
        if abs(other.indent - candidate.indent) > INDENT_TOLERANCE:
            continue
        nearby_items += 1
        if markers_related(candidate, other):
            related = True

    return related, nearby_items


def has_sequential_markers(scan: ListScan, index: int, candidate: ListItemCandidate) -> bool:
    """Verify that every earlier marker of a sequence appears before `index`.

    For ``d.`` the letters ``a`` to ``c`` must all appear on earlier lines at a
    similar indent; for ``4.`` the numbers ``1`` to ``3``. The first marker of
    a sequence (``a``, ``A`` or ``1``) is always complete.

    Args:
        scan: Parsed lines of the document.
        index: Zero-based index of the candidate line.
        candidate: The parsed candidate at `index`.

    Returns:
        bool: True when the preceding chain is complete.

    Examples:
        has_sequential_markers(scan_lines(["a. one", "b. two"]), 1, match_list_item("b. two"))
        # True
    """
    family = candidate.family
    if family is MarkerFamily.LETTER:
        position = ord(candidate.ordinal.lower()) - ord("a")
        required = [chr(ord("a") + offset) for offset in range(position)]
    elif family is MarkerFamily.ARABIC and candidate.is_single_character:
        required = [str(number) for number in range(1, int(candidate.ordinal))]
    else:
        return False

    def _seen_before(ordinal: str) -> bool:
        return any(
            line < index and abs(indent - candidate.indent) <= INDENT_TOLERANCE
            for line, indent in scan.ordinals.get((family, ordinal), ())
        )

    return all(_seen_before(ordinal) for ordinal in required)


def classify_list_item(scan: ListScan, index: int) -> bool:
    """Decide whether a list-shaped line really is a list item.

    Bullets are always list items. Ordered, lettered and Roman markers need
    corroboration, which keeps prose such as "B. Spielberger directed the
    film." or "Dr. Smith" out of lists:

    1. Content shaped like a name is rejected.
    2. A related marker at a similar indent within three lines accepts.
    3. A single-character marker with a complete preceding sequence accepts;
       without one, a short capitalized phrase is rejected.
    4. Otherwise two or more list-shaped neighbours are required.

    Args:
        scan: Parsed lines of the document, from `scan_lines`.
        index: Zero-based index of the line to classify.

    Returns:
        bool: True to render the line as a list item.
    """
    candidate = scan.candidates[index]
    if candidate is None:
        return False
    if candidate.family is MarkerFamily.BULLET:
        return True

    content = candidate.content.strip()
    if looks_like_name(content):
        return False

    related, nearby_items = has_list_context(scan, index, candidate)
    if related:
        return True

    if candidate.is_single_character:
        if has_sequential_markers(scan, index, candidate):
            return True
        if content[:1].isupper() and (" " in content or len(content) < SHORT_PHRASE_LENGTH):
            return False

    return nearby_items >= MIN_NEARBY_ITEMS


def _render_item(candidate: ListItemCandidate) -> str:
    content = candidate.content
    if candidate.is_task:
        checked = " checked" if candidate.checked else ""
        content = f'<input type="checkbox"{checked} disabled> {content}'
    return f"<li>{content}"


def _close_item(context: ListContext, output: list[str]) -> None:
    if context.item_open:
        output[-1] += "</li>"
        context.item_open = False


def _close_context(stack: list[ListContext], output: list[str]) -> None:
    context = stack.pop()
    _close_item(context, output)
    output.append(f"</{context.list_type.value}>")


def _close_all(stack: list[ListContext], output: list[str]) -> None:
    while stack:
        _close_context(stack, output)


def _reconcile_stack(
    stack: list[ListContext], output: list[str], depth: int, list_type: ListType
) -> None:
    while len(stack) > depth + 1:
        _close_context(stack, output)

    if len(stack) == depth + 1:
        if stack[-1].list_type is list_type:
            _close_item(stack[-1], output)
            return
        _close_context(stack, output)

    while len(stack) <= depth:
        new_depth = len(stack)
        new_type = list_type if new_depth == depth else ListType.UNORDERED
        output.append(f"<{new_type.value}>")
        stack.append(ListContext(list_type=new_type, depth=new_depth))


def format_lists(text: str) -> str:
    """Turn list-shaped lines into nested ``<ul>``/``<ol>`` structures.

    Lines are parsed once with `scan_lines`; nesting depth is the rank of the
    indent width, as in `analyze_indentation_levels`. Each accepted item
    reconciles the list stack: deeper lists close, missing levels open
    (intermediate ones as ``<ul>``), and a list whose type differs from the
    item's marker is closed and reopened. Nested lists are placed inside the
    open ``<li>`` of their parent.

    Blank lines do not end a list; they are held back and emitted once the
    list closes. Any other line closes every open list before it is emitted
    unchanged.

    Args:
        text: Document text.

    Returns:
        str: Text with list markup.

    Examples:
        format_lists("- a\\n  - b")
        # "<ul>\\n<li>a\\n<ul>\\n<li>b</li>\\n</ul></li>\\n</ul>"
    """
    lines = text.split("\n")
    scan = scan_lines(lines)
    levels = _rank_indents(scan.candidates)

    output: list[str] = []
    stack: list[ListContext] = []
    held_blank_lines: list[str] = []

    for index, line in enumerate(lines):
        candidate = scan.candidates[index]
        if candidate is not None and classify_list_item(scan, index):
            held_blank_lines.clear()
            depth = nesting_level(candidate.indent, levels)
            _reconcile_stack(stack, output, depth, candidate.list_type)
            output.append(_render_item(candidate))
            stack[-1].item_open = True
            continue

        if not line.strip():
            if stack:
                held_blank_lines.append(line)
            else:
                output.append(line)
            continue

        _close_all(stack, output)
        output.extend(held_blank_lines)
        held_blank_lines.clear()
        output.append(line)

    _close_all(stack, output)
    output.extend(held_blank_lines)
    return "\n".join(output)
