"""Parse results and the per-concern class accumulator used to build them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from figscript.model.diagnostic import Diagnostic, Severity


def _family(concern: str) -> str:
    return concern.split(":", 1)[0]


class ClassSlots:
    """Insertion-ordered map from concern name to the classes representing it.

    Concern names are ``family`` or ``family:member`` (``padding:l``,
    ``dimension:width``). Setting a concern replaces whatever it held before
    and moves it to the end, so the superseded classes are gone rather than
    shadowed. The map is flattened once, when the parser finishes.
    """

    def __init__(self) -> None:
        self._slots: dict[str, tuple[str, ...]] = {}

    def set(self, concern: str, *classes: str) -> tuple[str, ...] | None:
        """Store *classes* for *concern*; returns the classes it replaced."""
        previous = self._slots.pop(concern, None)
        self._slots[concern] = tuple(classes)
        return previous

    def get(self, concern: str) -> tuple[str, ...]:
        return self._slots.get(concern, ())

    def discard(self, *concerns: str) -> list[str]:
        """Remove the given concerns; returns the ones that were present."""
        return [c for c in concerns if self._slots.pop(c, None) is not None]

    def discard_family(self, family: str) -> list[str]:
        return self.discard(*self.concerns(family))

    def concerns(self, family: str | None = None) -> list[str]:
        if family is None:
            return list(self._slots)
        return [c for c in self._slots if _family(c) == family]

    def has_family(self, family: str) -> bool:
        return any(_family(c) == family for c in self._slots)

    def classes(self, *families: str) -> list[str]:
        """Flatten to an ordered, duplicate-free class list.

        With *families* given, they are emitted in that order (insertion
        order within each family); otherwise everything in insertion order.
        """
        if families:
            concerns = [c for fam in families for c in self.concerns(fam)]
        else:
            concerns = list(self._slots)
        ordered: dict[str, None] = {}
        for concern in concerns:
            for cls in self._slots[concern]:
                ordered.setdefault(cls, None)
        return list(ordered)

    def __contains__(self, concern: object) -> bool:
        return concern in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)


@dataclass
class ParseResult:
    """Output of one domain parser call.

    ``classes`` is an ordered set kept as a list: :meth:`add_classes` never
    appends a class that is already present.
    """

    classes: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def add_classes(self, classes: Iterable[str]) -> None:
        for cls in classes:
            if cls not in self.classes:
                self.classes.append(cls)

    def prepend_class(self, cls: str) -> None:
        if cls not in self.classes:
            self.classes.insert(0, cls)

    @property
    def ok(self) -> bool:
        return not self.errors

    def diagnostics(self, source: str | None = None) -> list[Diagnostic]:
        """Errors then warnings as :class:`Diagnostic` objects."""
        return [Diagnostic(Severity.ERROR, m, source) for m in self.errors] + [
            Diagnostic(Severity.WARNING, m, source) for m in self.warnings
        ]


@dataclass
class PositionResult(ParseResult):
    """Position parser output; ``is_fixed`` tells the renderer to detach."""

    is_fixed: bool = False


@dataclass(frozen=True)
class AggregateResult:
    """The merged output of all five domain parsers."""

    classes: tuple[str, ...] = ()
    is_fixed: bool = False
    diagnostics: tuple[Diagnostic, ...] = ()
    extra_classes: str = ""

    @property
    def errors(self) -> list[str]:
        return [d.message for d in self.diagnostics if d.is_error]

    @property
    def warnings(self) -> list[str]:
        return [d.message for d in self.diagnostics if d.is_warning]

    @property
    def ok(self) -> bool:
        return not any(d.is_error for d in self.diagnostics)

    def class_name(self, extra: str = "") -> str:
        """Join the classes with the configured and *extra* classes for a ``class`` attribute."""
        merged = dict.fromkeys(self.classes)
        merged.update(dict.fromkeys(self.extra_classes.split()))
        merged.update(dict.fromkeys(extra.split()))
        return " ".join(merged)
