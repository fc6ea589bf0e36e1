"""Navigation item entity and sibling ordering.

Siblings are ordered by ``order`` ascending, ties broken by ``name_de`` in
code point order. Children live in a list that is kept sorted on insertion, so
two items that compare equal are both retained.
"""
from __future__ import annotations
from bisect import insort
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .errors import MenuItemError

DEFAULT_ORDER = 9999

HASH_BASE = 10000
HASH_LENGTH = 5
HASH_RADIX = 43

_SPECIAL_CHAR_CODES = {
    "ä": 38,
    "ö": 39,
    "ü": 40,
    "ß": 41,
}
_OTHER_CHAR_CODE = 42


def _char_code(ch: str) -> int:
    if ch == " ":
        return 0
    if "0" <= ch <= "9":
        return ord(ch) - ord("0") + 1
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 11
    return _SPECIAL_CHAR_CODES.get(ch, _OTHER_CHAR_CODE)


def order_preserving_hash(value: str) -> int:
    """Map an order hint to an integer >= 10000 that preserves lexical order.

    Only the first five characters of the lowercased value are weighted, as
    digits of a base-43 number. Characters outside digits, ASCII letters and
    the German umlauts share one code, so non-Latin hints collide. Characters
    whose lowercase form is longer (such as "İ") shift the following
    positions, and astral characters count as one position rather than two.
    """
    lowered = value.lower()[:HASH_LENGTH]
    result = HASH_BASE
    for pos, ch in enumerate(lowered):
        result += _char_code(ch) * HASH_RADIX ** (HASH_LENGTH - 1 - pos)
    return result


def sort_key(item: "MenuItem") -> Tuple[int, str]:
    return (item.order, item.name_de)


class ChildItems:
    """Ordered multiset of menu items."""

    def __init__(self, items: Iterable["MenuItem"] = ()):
        self._items: List[MenuItem] = []
        self.extend(items)

    def add(self, item: "MenuItem") -> None:
        insort(self._items, item, key=sort_key)

    def extend(self, items: Iterable["MenuItem"]) -> None:
        for item in items:
            self.add(item)

    def __iter__(self) -> Iterator["MenuItem"]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> "MenuItem":
        return self._items[index]

    def __repr__(self) -> str:
        return f"ChildItems({self._items!r})"


@dataclass(frozen=True, eq=False)
class MenuItem:
    link: str
    name_de: Optional[str] = None
    name_en: Optional[str] = None
    group: Optional[str] = None
    order: int = DEFAULT_ORDER
    hidden: bool = False
    properties: Dict[str, str] = field(default_factory=dict, repr=False)
    children: ChildItems = field(default_factory=ChildItems, repr=False)

    def __post_init__(self):
        if self.name_de is None and self.name_en is None:
            raise MenuItemError("Must provide name in at least one language.")
        if self.name_de is None:
            object.__setattr__(self, "name_de", self.name_en)
        if self.name_en is None:
            object.__setattr__(self, "name_en", self.name_de)

    def walk(self) -> Iterator["MenuItem"]:
        """Yield every descendant depth-first, in sibling order."""
        for child in self.children:
            yield child
            yield from child.walk()


__all__ = [
    "MenuItem",
    "ChildItems",
    "DEFAULT_ORDER",
    "order_preserving_hash",
    "sort_key",
]
