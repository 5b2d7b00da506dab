"""Ordered, duplicate-free technology list."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


def _require_name(name: object) -> str:
    if not isinstance(name, str):
        raise TypeError(f"technology names must be strings, got {type(name).__name__}")
    return name


class TechnologyList:
    """Insertion-ordered set of technology names (case-sensitive)."""

    def __init__(self, names: Iterable[str] = ()):
        self._items: list[str] = []
        self.replace_all(names)

    def add(self, name: str) -> bool:
        """Append name unless already present. Returns True if the list changed."""
        _require_name(name)
        if name in self._items:
            return False
        self._items.append(name)
        return True

    def remove(self, name: str) -> bool:
        """Remove name if present. Returns True if the list changed."""
        try:
            self._items.remove(name)
        except ValueError:
            return False
        return True

    def replace_all(self, names: Iterable[str]) -> None:
        """Swap in a new collection, keeping the first occurrence of each name.

        Raises TypeError, leaving the list untouched, if any entry is not a str.
        """
        checked = [_require_name(name) for name in names]
        # dict keeps insertion order
        self._items = list(dict.fromkeys(checked))

    def clear(self) -> None:
        self._items = []

    def to_list(self) -> list[str]:
        return list(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TechnologyList):
            return self._items == other._items
        if isinstance(other, (list, tuple)):
            return self._items == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"TechnologyList({self._items!r})"


# Predefined options offered by the technology selector
AVAILABLE_TECHNOLOGIES: tuple[str, ...] = (
    "React",
    "Next.js",
    "TypeScript",
    "JavaScript",
    "Node.js",
    "Python",
    "PostgreSQL",
    "MongoDB",
    "Drizzle ORM",
    "Prisma",
    "TailwindCSS",
    "Docker",
    "AWS",
    "GraphQL",
    "REST API",
)
