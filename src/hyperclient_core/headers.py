"""Case-insensitive, immutable header sets.

Header field names are case-insensitive (RFC 9110). A HeaderSet looks names
up case-insensitively, keeps the casing of the last writer for transmission,
and is never changed in place: merging returns a new set.
"""

from collections.abc import Iterator, Mapping

from hyperclient_core import __version__

DEFAULT_ACCEPT = "application/hal+json,application/json"
DEFAULT_USER_AGENT = f"hyperclient-core/{__version__}"


class HeaderSet(Mapping[str, str]):
    """Immutable mapping from case-insensitive header name to value."""

    __slots__ = ("_items",)

    def __init__(self, headers: Mapping[str, object] | None = None) -> None:
        items: dict[str, tuple[str, str]] = {}
        for name, value in (headers or {}).items():
            if value is None:
                continue
            name = str(name).strip()
            if not name:
                continue
            items[name.lower()] = (name, str(value))
        self._items = items

    def __getitem__(self, name: str) -> str:
        return self._items[name.lower()][1]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderSet):
            return self.lower_items() == other.lower_items()
        if isinstance(other, Mapping):
            return self.lower_items() == HeaderSet(other).lower_items()
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self.lower_items().items()))

    def __repr__(self) -> str:
        return f"HeaderSet({dict(self.items())!r})"

    def lower_items(self) -> dict[str, str]:
        """Return a plain dict with lower-cased names."""
        return {key: value for key, (_, value) in self._items.items()}

    def merge(self, other: Mapping[str, object] | None) -> "HeaderSet":
        """Return a new set with ``other`` layered on top (last write wins)."""
        if not other:
            return self
        merged = HeaderSet()
        merged._items = {**self._items, **HeaderSet(other)._items}
        return merged

    def without(self, *names: str) -> "HeaderSet":
        """Return a new set with ``names`` removed."""
        drop = {name.lower() for name in names}
        return HeaderSet({name: value for name, value in self.items() if name.lower() not in drop})


def default_headers() -> HeaderSet:
    """Headers every client starts from."""
    return HeaderSet({"Accept": DEFAULT_ACCEPT, "User-Agent": DEFAULT_USER_AGENT})
