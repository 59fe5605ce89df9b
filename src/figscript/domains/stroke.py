"""Stroke parser: border colour, opacity and weight.

Syntax example::

    color=#0f172a, opacity=100%, position=center, weight={t-1px, b-2px}
    collapsed: tailwind-slate-900, 100%, center, ⬆️1px, ⬇️2px
"""

from __future__ import annotations

from figscript.model.result import ClassSlots, ParseResult
from figscript.model.token import Bare, KeyValue, Token
from figscript.parser.numeric import Unit, parse_numeric
from figscript.parser.tokenizer import tokenize
from figscript.parser.values import (
    color_class,
    expand,
    looks_like_color,
    match_prefix,
    normalize_marker,
    opacity_class,
    parse_percent,
    parse_pixels,
    pixel_class,
    unwrap,
)

__all__ = ["parse_stroke"]

_COLOR_ALIASES = ("bg",)

_SIDE_PREFIXES = {
    "all-": "all",
    "t-": "t",
    "b-": "b",
    "l-": "l",
    "r-": "r",
    "top-": "t",
    "bottom-": "b",
    "left-": "l",
    "right-": "r",
    "⬆": "t",
    "⬇": "b",
    "⬅": "l",
    "➡": "r",
}

_CENTERED = frozenset({"center", "centered"})
_OPACITY_PREFIXES = ("opacity-", "border-opacity-")


class _StrokeParser:
    def __init__(self, result: ParseResult) -> None:
        self.result = result
        self.slots = ClassSlots()
        self.color_defined = False
        self.opacity_defined = False

    def feed(self, token: Token) -> None:
        if isinstance(token, KeyValue):
            self._keyed(token)
        else:
            self._shorthand(token)

    def _keyed(self, token: KeyValue) -> None:
        name, value = token.name, token.value
        if name in ("color", "colour"):
            self._color(unwrap(value))
        elif name == "opacity":
            self._opacity(unwrap(value))
        elif name == "position":
            self._position(unwrap(value))
        elif name in ("weight", "width"):
            for item in expand(value):
                self._weight(item)
        else:
            self.result.warn(f'Unknown Stroke property "{token.key}".')

    def _shorthand(self, token: Bare) -> None:
        text = token.text
        numeric = parse_numeric(text)
        if text.lower() in _CENTERED:
            self._position(text)
        elif looks_like_color(text, "border", _COLOR_ALIASES):
            self._color(text)
        elif text.endswith("%") or text.startswith(_OPACITY_PREFIXES) or (numeric and numeric.unit is None):
            self._opacity(text)
        elif match_prefix(normalize_marker(text), _SIDE_PREFIXES) is not None:
            self._weight(text)
        elif numeric and numeric.unit is Unit.PIXELS:
            self._weight(text)
        else:
            self.result.warn(f'Unknown or misplaced Stroke token: "{text}".')

    def _color(self, value: str) -> None:
        try:
            cls = color_class(value, "border", _COLOR_ALIASES)
        except ValueError as exc:
            self.result.error(f"Invalid stroke color: {exc}.")
            return
        if self.color_defined:
            self.result.warn(f'Stroke color defined multiple times. Last definition used: "{value}".')
        self.slots.set("color", cls)
        self.color_defined = True

    def _opacity(self, value: str) -> None:
        try:
            numeric = parse_percent(value)
        except ValueError as exc:
            self.result.error(f"Invalid stroke opacity value: {exc}.")
            return
        if self.opacity_defined:
            self.result.warn(f'Stroke opacity defined multiple times. Last definition used: "{value}".')
        self.slots.set("opacity", opacity_class("border-opacity", numeric))
        self.opacity_defined = True

    def _position(self, value: str) -> None:
        # Centered strokes are what CSS borders draw already.
        if value.strip().lower() not in _CENTERED:
            self.result.error(f'Invalid stroke position: "{value}". Only "center" is supported.')

    def _weight(self, item: str) -> None:
        text = normalize_marker(item)
        matched = match_prefix(text, _SIDE_PREFIXES)
        side, rest = matched if matched is not None else ("all", text)
        try:
            numeric = parse_pixels(rest)
        except ValueError as exc:
            self.result.error(f'Invalid stroke weight "{item}": {exc}.')
            return

        if side == "all":
            if self.slots.discard_family("weight"):
                self.result.warn(f'Stroke weight redefined by "{item}"; earlier weights dropped.')
            self.slots.set("weight:all", pixel_class("border", numeric))
            return
        self.slots.discard("weight:all")
        if self.slots.set(f"weight:{side}", pixel_class(f"border-{side}", numeric)) is not None:
            self.result.warn(f'Stroke weight for side "{side}" defined multiple times. Last definition used: "{item}".')

    def finish(self) -> ParseResult:
        if not self.color_defined:
            self.result.error('Stroke "color" is required.')
        if not self.slots.has_family("weight"):
            self.result.error('Stroke "weight" is required.')
        self.result.add_classes(self.slots.classes("color", "opacity", "weight"))
        return self.result


def parse_stroke(raw: str | None) -> ParseResult:
    """Parse a Stroke property string. An absent stroke is valid and yields nothing."""
    result = ParseResult()
    if not raw or not raw.strip():
        return result
    parser = _StrokeParser(result)
    for token in tokenize(raw):
        parser.feed(token)
    return parser.finish()
