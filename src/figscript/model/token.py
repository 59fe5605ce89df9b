"""Token model: the two shapes a property-string segment can take."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Bare:
    """A segment with no key, e.g. ``w-100px`` or ``↔️``."""

    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class KeyValue:
    """A ``key=value`` segment. Both halves are already trimmed."""

    key: str
    value: str

    @property
    def name(self) -> str:
        """The key, lower-cased for dispatch."""
        return self.key.lower()

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


Token = Bare | KeyValue
