"""Data models for md-preview."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum, auto

from .constants import PLACEHOLDER_CLOSE, PLACEHOLDER_OPEN


class ListType(Enum):
    """HTML list container produced for a marker.

    Attributes:
        ORDERED: Numbered, lettered or Roman markers (``<ol>``).
        UNORDERED: Bullet markers (``<ul>``).
    """

    ORDERED = "ol"
    UNORDERED = "ul"


class MarkerFamily(Enum):
    """Syntactic family of a list marker.

    Attributes:
        BULLET: ``-``, ``*`` or ``+``.
        ARABIC: ``1.`` or ``1)``.
        PARENTHESIZED: ``(1)``.
        LETTER: A single Latin letter, ``a.`` or ``A)``.
        ROMAN: A multi-character Roman numeral, ``ii.`` or ``IV)``.
    """

    BULLET = auto()
    ARABIC = auto()
    PARENTHESIZED = auto()
    LETTER = auto()
    ROMAN = auto()


class FragmentKind(Enum):
    """Kinds of protected fragments, in restoration order."""

    CODE_BLOCK = "C"
    INLINE_CODE = "I"
    PREFORMATTED = "P"


class ConversionOutcome(Enum):
    """Outcome of a conversion call."""

    SUCCESS = auto()
    FALLBACK = auto()


@dataclass(frozen=True)
class ListItemCandidate:
    """A line that matches the list marker grammar.

    Attributes:
        indent: Column width of the leading whitespace.
        marker: Marker text, including its delimiter (``"-"``, ``"2."``, ``"(3)"``).
        is_task: Whether a task checkbox follows the marker.
        checked: Whether the task checkbox is ticked.
        content: Text after the marker and checkbox.
    """

    indent: int
    marker: str
    is_task: bool = False
    checked: bool = False
    content: str = ""

    @property
    def ordinal(self) -> str:
        """Marker text without delimiters, e.g. ``"b"`` for ``"b)"``."""
        return self.marker.strip("().")

    @property
    def family(self) -> MarkerFamily:
        ordinal = self.ordinal
        if self.marker in ("-", "*", "+"):
            return MarkerFamily.BULLET
        if self.marker.startswith("("):
            return MarkerFamily.PARENTHESIZED
        if ordinal.isdigit():
            return MarkerFamily.ARABIC
        if len(ordinal) == 1:
            return MarkerFamily.LETTER
        return MarkerFamily.ROMAN

    @property
    def list_type(self) -> ListType:
        if self.family is MarkerFamily.BULLET:
            return ListType.UNORDERED
        return ListType.ORDERED

    @property
    def is_single_character(self) -> bool:
        """True for one-character numbers or letters such as ``3.`` or ``c)``."""
        return self.family in (MarkerFamily.ARABIC, MarkerFamily.LETTER) and len(self.ordinal) == 1


@dataclass
class ListContext:
    """An open list on the list stack.

    Attributes:
        list_type: Container type of the open list.
        depth: Zero-based nesting depth of the list.
        item_open: Whether an ``<li>`` of this list still awaits its closing tag.
    """

    list_type: ListType
    depth: int
    item_open: bool = False


@dataclass
class ListScan:
    """List-shaped lines of one document, parsed once.

    Attributes:
        candidates: Parsed candidate per line, None for lines without a marker.
        ordinals: ``(family, ordinal)`` of every arabic and lettered marker,
            mapped to the ``(line index, indent)`` pairs where it occurs.
            Letters are stored lowercase, numbers without leading zeros.
    """

    candidates: list[ListItemCandidate | None]
    ordinals: dict[tuple[MarkerFamily, str], list[tuple[int, int]]] = field(default_factory=dict)


@dataclass
class FragmentStore:
    """Ordered map of placeholder keys to protected HTML renderings.

    Keys embed a random nonce that does not occur anywhere in the text the
    store was created for, so a key can only match text this store produced.

    Attributes:
        nonce: Random token shared by every key of this store.
        fragments: Rendered HTML keyed by placeholder, in insertion order.
    """

    nonce: str
    fragments: dict[str, str] = field(default_factory=dict)
    kinds: dict[str, FragmentKind] = field(default_factory=dict)

    @classmethod
    def for_text(cls, text: str) -> FragmentStore:
        nonce = uuid.uuid4().hex
        while nonce in text:
            nonce = uuid.uuid4().hex
        return cls(nonce=nonce)

    def add(self, kind: FragmentKind, rendered: str) -> str:
        """Store `rendered` and return the placeholder key that stands for it."""
        key = f"{PLACEHOLDER_OPEN}{self.nonce}{kind.value}{len(self.fragments)}{PLACEHOLDER_CLOSE}"
        self.fragments[key] = rendered
        self.kinds[key] = kind
        return key

    def restore(self, text: str, kind: FragmentKind | None = None) -> str:
        """Replace placeholder keys in `text` with their renderings.

        Args:
            text: Text containing placeholder keys.
            kind: Restrict restoration to one fragment kind; all kinds when None.

        Returns:
            str: Text with matching keys replaced by exact lookup.
        """
        for key, rendered in self.fragments.items():
            if kind is not None and self.kinds[key] is not kind:
                continue
            text = text.replace(key, rendered)
        return text

    def __len__(self) -> int:
        return len(self.fragments)


@dataclass(frozen=True)
class ConversionResult:
    """Explicit result of converting one document.

    Attributes:
        outcome: Whether the pipeline succeeded or fell back.
        html: Rendered HTML, or the escaped fallback rendering.
        diagnostic: Description of the failure for fallback results, else None.
    """

    outcome: ConversionOutcome
    html: str
    diagnostic: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is ConversionOutcome.SUCCESS
