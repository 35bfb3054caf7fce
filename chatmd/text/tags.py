"""Named text attributes shared by every block in a markdown view."""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, Optional

from rich.style import Style


@dataclass
class TextTag:
    """A named style plus non-visual attributes (e.g. hyphenation)."""

    name: str
    style: Style = field(default_factory=Style)
    attrs: Dict[str, object] = field(default_factory=dict)


class TagTable:
    """Tags by name."""

    def __init__(self) -> None:
        self._tags: Dict[str, TextTag] = {}

    def add(self, tag: TextTag) -> TextTag:
        self._tags[tag.name] = tag
        return tag

    def lookup(self, name: str) -> Optional[TextTag]:
        return self._tags.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._tags

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self) -> Iterator[TextTag]:
        return iter(self._tags.values())


# Tags the library knows how to build on demand.
KNOWN_TAGS: Dict[str, Callable[[], TextTag]] = {
    "_nohyphens": lambda: TextTag("_nohyphens", attrs={"hyphens": False}),
    "_monospace": lambda: TextTag("_monospace", attrs={"family": "monospace"}),
    "_dim": lambda: TextTag("_dim", style=Style(dim=True)),
}


def from_table(table: TagTable, name: str) -> TextTag:
    """Return ``name`` from ``table``, creating a known tag on first use."""
    tag = table.lookup(name)
    if tag is not None:
        return tag
    try:
        factory = KNOWN_TAGS[name]
    except KeyError:
        raise KeyError(f"unknown tag: {name}") from None
    return table.add(factory())
