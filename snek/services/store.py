"""Ordered string stores backing request headers and query parameters."""
from __future__ import annotations
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

def _is_blank(value: Any) -> bool:
    """True for values that a single-pair set silently ignores."""
    return value is None or value == ""

class QueryStore:
    """Insertion-ordered query parameters; last write wins per key."""

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        self._items: Dict[str, str] = {}
        if initial:
            self.set_many(initial)

    def _key(self, key: str) -> str:
        return str(key)

    def set_one(self, key: str, value: Any) -> None:
        """Set a single pair. A missing value is a no-op."""
        if _is_blank(value):
            return
        self._items[self._key(key)] = str(value)

    def set_many(self, mapping: Mapping[str, Any]) -> None:
        """Merge every pair of a mapping, overwriting existing keys."""
        for k, v in mapping.items():
            self._items[self._key(k)] = str(v)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._items.get(self._key(key), default)

    def items(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._items.items()))

    def to_dict(self) -> Dict[str, str]:
        return dict(self._items)

    def copy(self) -> "QueryStore":
        clone = type(self)()
        clone._items = dict(self._items)
        return clone

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._key(key) in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

class HeaderStore(QueryStore):
    """Header store: keys are case-folded to lowercase on write and lookup."""

    def _key(self, key: str) -> str:
        return str(key).lower()
