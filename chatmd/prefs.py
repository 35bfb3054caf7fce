"""User-tunable preferences.

Preferences are declared at import time by the modules that read them and
surfaced by an external preferences UI (or ``chatmd prefs``). Values are
persisted by :mod:`chatmd.config`.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

_log = logging.getLogger(__name__)


class PrefError(ValueError):
    """Raised when a preference is given a value it cannot hold."""


@dataclass(frozen=True)
class IntMeta:
    """Declared metadata for an integer preference."""

    name: str
    section: str
    description: str
    min: int
    max: int


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


_REGISTRY: Dict[str, "IntPref"] = {}
_ORDER: List[str] = []


class IntPref:
    """A bounded integer preference with change subscribers."""

    def __init__(self, default: int, meta: IntMeta):
        if meta.min > meta.max:
            raise PrefError(f"{meta.name}: min {meta.min} is above max {meta.max}")
        self.meta = meta
        self.key = _slugify(meta.name)
        self.default = default
        self._validate(default)
        self._value = default
        self._subscribers: List[Callable[[int], None]] = []
        _REGISTRY[self.key] = self

    def __repr__(self) -> str:
        return f"IntPref({self.key!r}, value={self._value})"

    def _validate(self, value) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise PrefError(f"{self.meta.name}: expected an integer, got {value!r}")
        if not self.meta.min <= value <= self.meta.max:
            raise PrefError(
                f"{self.meta.name}: {value} is outside {self.meta.min}..{self.meta.max}"
            )
        return value

    def value(self) -> int:
        """Return the current value."""
        return self._value

    def publish(self, value: int) -> None:
        """Validate and store a new value, notifying subscribers on change."""
        value = self._validate(value)
        if value == self._value:
            return
        self._value = value
        _log.debug("pref %s = %d", self.key, value)
        for callback in list(self._subscribers):
            callback(value)

    def reset(self) -> None:
        """Restore the declared default."""
        self.publish(self.default)

    def subscribe(self, callback: Callable[[int], None]) -> Callable[[], None]:
        """Call ``callback(value)`` on every change.

        Returns a function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe


def order(*prefs: IntPref) -> None:
    """Record the display order of a group of preferences."""
    for pref in prefs:
        if pref.key in _ORDER:
            _ORDER.remove(pref.key)
        _ORDER.append(pref.key)


def registered() -> List[IntPref]:
    """All declared preferences, ordered ones first."""
    ordered = [_REGISTRY[key] for key in _ORDER if key in _REGISTRY]
    rest = [pref for key, pref in _REGISTRY.items() if key not in _ORDER]
    return ordered + rest


def by_key(key: str) -> IntPref:
    """Look up a preference by its slug key."""
    try:
        return _REGISTRY[key]
    except KeyError:
        raise KeyError(f"unknown preference: {key}") from None


def find(key: str) -> Optional[IntPref]:
    """Like :func:`by_key` but returns ``None`` for unknown keys."""
    return _REGISTRY.get(key)
