"""Position parser: detachment from flow, anchoring, z-order and rotation.

Syntax example::

    ignore-auto-layout=TRUE, rotation=r-90, align-h-center, y-24, z-40
    collapsed: ↔️, r-0, h-stretch, align-bottom
"""

from __future__ import annotations

import re

from figscript.model.result import ClassSlots, PositionResult
from figscript.model.token import Bare, KeyValue, Token
from figscript.parser.numeric import NumericLiteral, Unit, parse_numeric
from figscript.parser.tokenizer import tokenize
from figscript.parser.values import (
    expand,
    normalize_marker,
    parse_flag,
    parse_pixels,
    pixel_class,
    unwrap,
)

__all__ = ["parse_position", "DEFAULT_Z_CLASS"]

DEFAULT_Z_CLASS = "z-50"

_DETACH_MARKER = "↔"

# Centering always pairs the anchor with a translate that pulls the box back
# by half its own size.
_H_CENTER = ("left-1/2", "-translate-x-1/2")
_V_CENTER = ("top-1/2", "-translate-y-1/2")

_ALIGNMENTS: dict[str, tuple[str, tuple[str, ...]]] = {
    "left": ("anchor-x", ("left-0",)),
    "right": ("anchor-x", ("right-0",)),
    "h-center": ("anchor-x", _H_CENTER),
    "top": ("anchor-y", ("top-0",)),
    "bottom": ("anchor-y", ("bottom-0",)),
    "v-center": ("anchor-y", _V_CENTER),
}

_CONSTRAINTS: dict[str, tuple[str, tuple[str, ...]]] = {
    "h-stretch": ("anchor-x", ("left-0", "right-0")),
    "v-stretch": ("anchor-y", ("top-0", "bottom-0")),
    "h-center": ("anchor-x", _H_CENTER),
    "v-center": ("anchor-y", _V_CENTER),
    "h-scale": ("size-x", ("w-full",)),
    "v-scale": ("size-y", ("h-full",)),
}

_RIGHT_ANGLES = {90.0: "rotate-90", 180.0: "rotate-180", 270.0: "-rotate-90"}
_FLIPS = {"flip-h": ("flip-x", "scale-x-[-1]"), "flip-v": ("flip-y", "scale-y-[-1]")}

_Z_STEPS = frozenset({"0", "10", "20", "30", "40", "50", "auto"})
_INTEGER_RE = re.compile(r"^-?\d+$")

_OUTPUT_ORDER = (
    "position",
    "z",
    "anchor-x",
    "anchor-y",
    "size-x",
    "size-y",
    "rotation",
    "flip-x",
    "flip-y",
)


class _PositionParser:
    def __init__(self, result: PositionResult) -> None:
        self.result = result
        self.slots = ClassSlots()
        self.detached: bool | None = None
        self.rotation_defined = False
        # (concern, source token) for everything that needs detachment.
        self.detached_only: list[tuple[str, str]] = []

    def feed(self, token: Token) -> None:
        if isinstance(token, KeyValue):
            self._keyed(token)
        else:
            self._shorthand(token)

    def _keyed(self, token: KeyValue) -> None:
        name, value = token.name, token.value
        if name == "ignore-auto-layout":
            try:
                self._detach(parse_flag(unwrap(value), markers=(_DETACH_MARKER,)), str(token))
            except ValueError:
                self.result.error(f'Invalid ignore-auto-layout value: "{value}". Use TRUE or FALSE.')
        elif name in ("rotation", "rotate"):
            for item in expand(value):
                self._rotation(item)
        elif name in ("align", "alignment"):
            for item in expand(value):
                self._align(item.removeprefix("align-"), item)
        elif name in ("x", "y"):
            self._offset(name, unwrap(value), str(token))
        elif name in ("constraints", "constraint"):
            for item in expand(value):
                self._constraint(item)
        elif name in ("z", "z-index", "z-order"):
            self._z(unwrap(value), str(token))
        else:
            self.result.warn(f'Unknown Position property "{token.key}".')

    def _shorthand(self, token: Bare) -> None:
        text = token.text
        if text == "ignore-auto-layout" or normalize_marker(text) == _DETACH_MARKER:
            self._detach(True, text)
        elif text.startswith(("r-", "flip-")):
            self._rotation(text)
        elif text.startswith("align-"):
            self._align(text[len("align-"):], text)
        elif text.startswith(("x-", "y-")):
            self._offset(text[0], text[2:], text)
        elif text in _CONSTRAINTS:
            self._constraint(text)
        elif text.startswith("z-"):
            self._z(text[2:], text)
        else:
            self.result.warn(f'Unknown or misplaced Position token: "{text}".')

    # ---- detachment and rotation (required) ----

    def _detach(self, flag: bool, source: str) -> None:
        if self.detached is not None:
            self.result.warn(
                f'Position "ignore-auto-layout" defined multiple times. Last definition used: "{source}".'
            )
        self.detached = flag

    def _rotation(self, item: str) -> None:
        text = item.strip().lower()
        if text in _FLIPS:
            concern, cls = _FLIPS[text]
            self.slots.set(concern, cls)
            self.rotation_defined = True
            return
        angle = text[2:] if text.startswith("r-") else text
        numeric = parse_numeric(angle) if angle != "none" else parse_numeric("0")
        if numeric is None or numeric.unit not in (None, Unit.DEGREES):
            self.result.error(f'Invalid rotation value: "{item}". Use r-<degrees>, flip-h or flip-v.')
            return
        if "rotation" in self.slots:
            self.result.warn(f'Position rotation defined multiple times. Last definition used: "{item}".')
        self.rotation_defined = True
        turn = numeric.magnitude % 360
        if turn == 0:
            self.slots.discard("rotation")
        else:
            self.slots.set("rotation", _RIGHT_ANGLES.get(turn) or f"rotate-[{NumericLiteral(turn).format()}deg]")

    # ---- detached-only placement ----

    def _place(self, concern: str, classes: tuple[str, ...], source: str) -> None:
        self.slots.set(concern, *classes)
        self.detached_only.append((concern, source))

    def _align(self, name: str, source: str) -> None:
        if name.lower() not in _ALIGNMENTS:
            self.result.error(f'Invalid Position alignment: "{source}".')
            return
        concern, classes = _ALIGNMENTS[name.lower()]
        self._place(concern, classes, source)

    def _offset(self, axis: str, value: str, source: str) -> None:
        try:
            numeric = parse_pixels(value, allow_unitless=True, allow_negative=True)
        except ValueError as exc:
            self.result.error(f'Invalid {axis} offset "{source}": {exc}.')
            return
        edge = "left" if axis == "x" else "top"
        self._place(f"anchor-{axis}", (pixel_class(edge, numeric),), source)

    def _constraint(self, name: str) -> None:
        if name.lower() not in _CONSTRAINTS:
            self.result.error(f'Invalid Position constraint: "{name}".')
            return
        concern, classes = _CONSTRAINTS[name.lower()]
        self._place(concern, classes, name)

    # ---- z-order ----

    def _z(self, value: str, source: str) -> None:
        text = value.strip().lower()
        if text in _Z_STEPS:
            cls = f"z-{text}"
        elif _INTEGER_RE.match(text):
            cls = f"z-[{text}]"
        else:
            self.result.error(f'Invalid z-order value: "{source}". Use 0-50 in steps of 10, auto, or an integer.')
            return
        if "z" in self.slots:
            self.result.warn(f'Position z-order defined multiple times. Last definition used: "{source}".')
        self.slots.set("z", cls)

    # ---- assembly ----

    def finish(self) -> PositionResult:
        slots, result = self.slots, self.result
        if self.detached is None:
            result.error('Position "ignore-auto-layout" (TRUE/FALSE) is required. Defaulting to FALSE.')
        if not self.rotation_defined:
            result.error('Position "rotation" is required. Use "r-0" for no rotation.')

        if self.detached:
            result.is_fixed = True
            slots.set("position", "fixed")
            if "z" not in slots:
                slots.set("z", DEFAULT_Z_CLASS)
        else:
            for concern, source in self.detached_only:
                result.error(
                    f'Position token "{source}" only applies when ignore-auto-layout=TRUE. It will be ignored.'
                )
                slots.discard(concern)
            if "z" in slots:
                slots.set("position", "relative")
                result.warn(
                    "z-order was set without ignore-auto-layout=TRUE; "
                    'adding "relative" positioning so it takes effect.'
                )

        result.add_classes(slots.classes(*_OUTPUT_ORDER))
        return result


def parse_position(raw: str | None) -> PositionResult:
    """Parse a Position property string; ``is_fixed`` reports detachment."""
    parser = _PositionParser(PositionResult())
    for token in tokenize(raw):
        parser.feed(token)
    return parser.finish()
