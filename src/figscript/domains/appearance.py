"""Appearance parser: visibility, opacity and corner radius.

Syntax example::

    visibility=visible, opacity=80%, corner-radius=(↖️4px, ↘️8px)
    collapsed: hidden, 50%, corner-12px
"""

from __future__ import annotations

from figscript.model.result import ClassSlots, ParseResult
from figscript.model.token import Bare, KeyValue, Token
from figscript.parser.numeric import parse_numeric
from figscript.parser.tokenizer import is_wrapped, tokenize
from figscript.parser.values import (
    expand,
    match_prefix,
    normalize_marker,
    opacity_class,
    parse_flag,
    parse_percent,
    parse_pixels,
    pixel_class,
    unwrap,
)

__all__ = ["parse_appearance"]

_VISIBILITY = {"visible": True, "show": True, "hidden": False, "hide": False, "invisible": False}

_CORNER_PREFIXES = {
    "all-": "all",
    "tl-": "tl",
    "tr-": "tr",
    "bl-": "bl",
    "br-": "br",
    "top-left-": "tl",
    "top-right-": "tr",
    "bottom-left-": "bl",
    "bottom-right-": "br",
    "↖": "tl",
    "↗": "tr",
    "↙": "bl",
    "↘": "br",
}

_RADIUS_KEYS = ("corner-radius", "radius", "corner")
_SMOOTHING_KEYS = ("corner-smoothing", "smoothing")


class _AppearanceParser:
    def __init__(self, result: ParseResult) -> None:
        self.result = result
        self.slots = ClassSlots()
        self.visible: bool | None = None
        self.opacity_defined = False

    def feed(self, token: Token) -> None:
        if isinstance(token, KeyValue):
            self._keyed(token)
        else:
            self._shorthand(token)

    def _keyed(self, token: KeyValue) -> None:
        name, value = token.name, token.value
        if name in ("visibility", "visible"):
            self._visibility(unwrap(value))
        elif name == "opacity":
            self._opacity(unwrap(value))
        elif name in _RADIUS_KEYS:
            self._radius(value, str(token))
        elif name in _SMOOTHING_KEYS:
            self._smoothing(str(token))
        else:
            self.result.warn(f'Unknown Appearance property "{token.key}".')

    def _shorthand(self, token: Bare) -> None:
        text = token.text
        marker = normalize_marker(text)
        numeric = parse_numeric(text)
        if text.lower() in _VISIBILITY:
            self._visibility(text)
        elif text.startswith(_SMOOTHING_KEYS):
            self._smoothing(text)
        elif text.endswith("%") or text.startswith("opacity-") or (numeric and numeric.unit is None):
            self._opacity(text)
        elif text.startswith("corner-"):
            self._radius(text[len("corner-"):], text)
        elif text.startswith("corner(") or text.startswith("corner{"):
            self._radius(text[len("corner"):], text)
        elif match_prefix(marker, _CORNER_PREFIXES) is not None:
            self._radius(text, text)
        else:
            self.result.warn(f'Unknown or misplaced Appearance token: "{text}".')

    # ---- visibility and opacity (required) ----

    def _visibility(self, value: str) -> None:
        word = value.strip().lower()
        if word in _VISIBILITY:
            visible = _VISIBILITY[word]
        else:
            try:
                visible = parse_flag(value)
            except ValueError:
                self.result.error(f'Invalid visibility value: "{value}". Use "visible" or "hidden".')
                return
        if self.visible is not None:
            self.result.warn(f'Appearance visibility defined multiple times. Last definition used: "{value}".')
        self.visible = visible
        self.slots.set("visibility", "visible" if visible else "invisible")

    def _opacity(self, value: str) -> None:
        try:
            numeric = parse_percent(value)
        except ValueError as exc:
            self.result.error(f"Invalid opacity value: {exc}.")
            return
        if self.opacity_defined:
            self.result.warn(f'Appearance opacity defined multiple times. Last definition used: "{value}".')
        self.opacity_defined = True
        self.slots.set("opacity", opacity_class("opacity", numeric))

    # ---- corner radius ----

    def _radius(self, value: str, source: str) -> None:
        """Apply one radius value; bundles ``(a, b)`` / ``{a, b}`` recurse per item."""
        text = normalize_marker(value)
        if is_wrapped(text, "(", ")") or is_wrapped(text, "{", "}"):
            for item in expand(text):
                self._radius(item, source)
            return

        matched = match_prefix(text, _CORNER_PREFIXES)
        corner, rest = matched if matched is not None else ("all", text)
        try:
            numeric = parse_pixels(rest, allow_unitless=True)
        except ValueError as exc:
            self.result.error(f'Invalid corner radius "{value}" in "{source}": {exc}.')
            return

        if corner == "all":
            # Every corner at once supersedes any per-corner values.
            if self.slots.discard_family("radius"):
                self.result.warn(f'Corner radius redefined by "{value}"; earlier corner values dropped.')
            self.slots.set("radius:all", pixel_class("rounded", numeric))
            return
        self.slots.discard("radius:all")
        if self.slots.set(f"radius:{corner}", pixel_class(f"rounded-{corner}", numeric)) is not None:
            self.result.warn(f'Corner radius "{corner}" defined multiple times. Last definition used: "{value}".')

    def _smoothing(self, source: str) -> None:
        self.result.warn(
            f'Corner smoothing "{source}" has no CSS equivalent and will be ignored.'
        )

    # ---- assembly ----

    def finish(self) -> ParseResult:
        if self.visible is None:
            self.result.error('Appearance "visibility" is required. Defaulting to visible.')
        if not self.opacity_defined:
            self.result.error('Appearance "opacity" is required. Defaulting to 100% (opacity-100).')
            self.slots.set("opacity", "opacity-100")
        self.result.add_classes(self.slots.classes("visibility", "opacity", "radius"))
        return self.result


def parse_appearance(raw: str | None) -> ParseResult:
    """Parse an Appearance property string into classes and diagnostics."""
    result = ParseResult()
    if not raw or not raw.strip():
        result.warn(
            "Appearance property string is empty or missing. "
            "Defaults applied (visible, 100% opacity)."
        )
        return result
    parser = _AppearanceParser(result)
    for token in tokenize(raw):
        parser.feed(token)
    return parser.finish()
