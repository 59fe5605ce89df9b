"""Sheet model: Selector, SheetRule, and Sheet dataclasses."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Selector:
    """A CSS-like selector targeting every element or one named element.

    Specificity values:
        0 = universal (*)
        1 = element (#name)
    """

    kind: str  # "universal", "element"
    value: str  # "*", "name"
    specificity: int  # 0, 1

    def matches(self, name: str) -> bool:
        return self.kind == "universal" or self.value == name


@dataclass(frozen=True)
class SheetRule:
    """A single rule pairing a selector with FigScript property strings."""

    selector: Selector
    properties: dict[str, str]  # Layout, Position, Appearance, Fill, Stroke
    line: int = 0


@dataclass(frozen=True)
class Sheet:
    """A collection of rules parsed from a FigScript sheet."""

    rules: list[SheetRule]

    def elements(self) -> list[str]:
        """Names of every ``#name`` selector, in first-seen order."""
        names: dict[str, None] = {}
        for rule in self.rules:
            if rule.selector.kind == "element":
                names.setdefault(rule.selector.value, None)
        return list(names)

    def resolve(self, name: str) -> dict[str, str]:
        """Property strings for element *name*.

        Rules apply in specificity order, then source order, so an element
        rule overrides a universal default one property at a time.
        """
        matching = [r for r in self.rules if r.selector.matches(name)]
        matching.sort(key=lambda r: r.selector.specificity)
        properties: dict[str, str] = {}
        for rule in matching:
            properties.update(rule.properties)
        return properties
