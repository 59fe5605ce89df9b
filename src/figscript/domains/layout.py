"""Layout parser: box sizing, clipping, spacing and auto-layout flex rules.

Standard layout::

    dimensions={w-100px, h-50px}, spacing={v-10px}, clip-content=TRUE(✂️)
    collapsed: w-100px, h-50px, v-10px, ✂️

Auto layout::

    Auto{flow={horizontal(↔️), wrap(↩️)}, dimensions={w-fill, h-hug},
         alignment=center(🔯), gap=10px, padding={all-5px}, clip-content=TRUE}
    collapsed: Auto{↔️, ↩️, w-fill, h-hug, 🔯, gap-10px, p-5px, ✂️}
"""

from __future__ import annotations

import re
from enum import Enum

from figscript.model.result import ClassSlots, ParseResult
from figscript.model.token import Bare, KeyValue, Token
from figscript.parser.numeric import Unit, parse_numeric
from figscript.parser.tokenizer import is_wrapped, tokenize
from figscript.parser.values import (
    expand,
    match_prefix,
    normalize_marker,
    parse_flag,
    parse_pixels,
    pixel_class,
    split_annotation,
    unwrap,
)

__all__ = ["LayoutMode", "parse_layout", "resolve_mode", "ALIGNMENT_GRID"]


class LayoutMode(Enum):
    STANDARD = "STANDARD"
    AUTO = "AUTO"
    UNKNOWN = "UNKNOWN"


# 3x3 alignment grid: marker -> (main axis, cross axis).
ALIGNMENT_GRID: dict[str, tuple[str, str]] = {
    "↖": ("justify-start", "items-start"),
    "⬆": ("justify-center", "items-start"),
    "↗": ("justify-end", "items-start"),
    "⬅": ("justify-start", "items-center"),
    "🔯": ("justify-center", "items-center"),
    "➡": ("justify-end", "items-center"),
    "↙": ("justify-start", "items-end"),
    "⬇": ("justify-center", "items-end"),
    "↘": ("justify-end", "items-end"),
}

_ALIGNMENT_NAMES = {
    "top-left": "↖",
    "top": "⬆",
    "top-center": "⬆",
    "top-right": "↗",
    "left": "⬅",
    "center-left": "⬅",
    "center": "🔯",
    "right": "➡",
    "center-right": "➡",
    "bottom-left": "↙",
    "bottom": "⬇",
    "bottom-center": "⬇",
    "bottom-right": "↘",
}

_FLOW_VALUES = {
    "vertical": "vertical",
    "↕": "vertical",
    "horizontal": "horizontal",
    "↔": "horizontal",
    "wrap": "wrap",
    "↩": "wrap",
}

# Substrings that only appear in auto layout; used to infer the mode.
_AUTO_KEYWORDS = ("flow", "gap", "fill", "hug", "↕", "↔", "↩", "🔯")

_DIMENSION_PREFIXES = {
    "w-": "w",
    "h-": "h",
    "min-w-": "min-w",
    "max-w-": "max-w",
    "min-h-": "min-h",
    "max-h-": "max-h",
}

_FRACTION_RE = re.compile(r"^\d+/\d+$")

_SPACING_PREFIXES = {"v-": "y", "h-": "x"}

# Shorthand padding prefixes, and the long forms used inside padding={...}.
_PADDING_SHORTHAND = {
    "all-": "all",
    "p-": "all",
    "px-": "x",
    "py-": "y",
    "pl-": "l",
    "pr-": "r",
    "pt-": "t",
    "pb-": "b",
}
_PADDING_KEYED = {
    **_PADDING_SHORTHAND,
    "h-": "x",
    "v-": "y",
    "l-": "l",
    "r-": "r",
    "t-": "t",
    "b-": "b",
}
_PADDING_UTILITY = {"all": "p", "x": "px", "y": "py", "l": "pl", "r": "pr", "t": "pt", "b": "pb"}
_PADDING_SIDES = {
    "all": frozenset("trbl"),
    "x": frozenset("lr"),
    "y": frozenset("tb"),
    "l": frozenset("l"),
    "r": frozenset("r"),
    "t": frozenset("t"),
    "b": frozenset("b"),
}

_UNSUPPORTED_SETTINGS = ("strokes-included", "canvas-stacking")

# Families that only exist in auto layout, and the emitted class order.
_AUTO_FAMILIES = ("flow", "alignment", "gap", "baseline", "padding")
_OUTPUT_ORDER = ("dimension", "clip", "spacing", "flow", "alignment", "gap", "baseline", "padding")


def _is_auto_marker(token: Token) -> bool:
    if isinstance(token, KeyValue):
        return token.name == "mode" and token.value.lower() == "auto"
    return token.text == "Auto"


def _has_auto_keyword(token: Token) -> bool:
    if isinstance(token, KeyValue):
        texts = (token.key, token.value)
    else:
        texts = (token.text,)
    return any(kw in normalize_marker(t) for t in texts for kw in _AUTO_KEYWORDS)


def resolve_mode(raw: str, result: ParseResult) -> tuple[LayoutMode, list[Token]]:
    """Decide the layout mode once and return it with the tokens to dispatch.

    ``Auto{...}`` wins, then an ``Auto`` / ``mode=Auto`` token, then keyword
    inference (which warns, since the mode was not stated).
    """
    text = raw.strip()
    if text[:4].lower() == "auto" and is_wrapped(text[4:], "{", "}"):
        return LayoutMode.AUTO, tokenize(text[5:-1])

    tokens = tokenize(text)
    if any(_is_auto_marker(t) for t in tokens):
        return LayoutMode.AUTO, [t for t in tokens if not _is_auto_marker(t)]

    if any(_has_auto_keyword(t) for t in tokens):
        result.warn(
            'Layout mode inferred as "AUTO" due to presence of Auto Layout keywords. '
            'For clarity, explicitly use "Layout=Auto{...}".'
        )
        return LayoutMode.AUTO, tokens
    result.warn('Layout mode inferred as "STANDARD". For Auto Layout, use "Layout=Auto{...}".')
    return LayoutMode.STANDARD, tokens


class _LayoutParser:
    """Per-call state for one Layout string; discarded after :meth:`finish`."""

    def __init__(self, mode: LayoutMode, result: ParseResult) -> None:
        self.mode = mode
        self.result = result
        self.slots = ClassSlots()
        self.baseline = False
        self.settings_seen = False

    # ---- dispatch ----

    def feed(self, token: Token) -> None:
        if isinstance(token, KeyValue):
            self._keyed(token)
        else:
            self._shorthand(token)

    def _keyed(self, token: KeyValue) -> None:
        name, value = token.name, token.value
        if name == "dimensions":
            for item in expand(value):
                self._dimension(item, shorthand=False)
        elif name == "clip-content":
            self._clip(unwrap(value))
        elif name == "spacing":
            for item in expand(value):
                self._spacing(item)
        elif name == "flow":
            for item in expand(value):
                self._flow(item)
        elif name == "alignment":
            self._alignment(unwrap(value))
        elif name == "gap":
            self._gap(unwrap(value))
        elif name == "padding":
            for item in expand(value):
                self._padding(item, _PADDING_KEYED)
        elif name == "settings":
            for item in expand(value):
                self._setting(item)
        else:
            self.result.warn(f'Unknown Layout property "{token.key}" for {self.mode.value} mode.')

    def _shorthand(self, token: Bare) -> None:
        text = token.text
        marker = normalize_marker(text)
        head, _ = split_annotation(marker)
        if match_prefix(text, _DIMENSION_PREFIXES) is not None:
            self._dimension(text, shorthand=True)
        elif marker == "✂" or head.upper() in ("TRUE", "FALSE"):
            self._clip(text)
        elif text.startswith("v-"):
            self._spacing(text)
        elif head.lower() in _FLOW_VALUES:
            self._flow(text)
        elif marker in ALIGNMENT_GRID or head.lower() in _ALIGNMENT_NAMES:
            self._alignment(text)
        elif text.startswith("gap-") or text == "auto" or _is_pixel(text):
            self._gap(text[len("gap-"):] if text.startswith("gap-") else text)
        elif match_prefix(text, _PADDING_SHORTHAND) is not None:
            self._padding(text, _PADDING_SHORTHAND)
        elif "align-text-baseline" in text:
            self._setting(text)
        else:
            self.result.warn(f'Unknown or misplaced Layout token: "{text}" for {self.mode.value} mode.')

    def _replace(self, concern: str, *classes: str, label: str, source: str) -> None:
        if self.slots.set(concern, *classes) is not None:
            self.result.warn(f'Layout {label} defined multiple times. Last definition used: "{source}".')

    # ---- common: dimensions, clip content ----

    def _dimension(self, item: str, shorthand: bool) -> None:
        matched = match_prefix(item, _DIMENSION_PREFIXES)
        if matched is None:
            self.result.error(f'Invalid dimension token: "{item}". Use w-#px, h-#px, w-fill or h-hug.')
            return
        utility, rest = matched
        concern = f"dimension:{utility}"

        if utility in ("min-w", "max-w", "min-h", "max-h"):
            if self.mode is not LayoutMode.AUTO:
                self.result.error(f'Min/max dimensions are only for Auto Layout. Invalid token: "{item}".')
                return
            try:
                numeric = parse_pixels(rest)
            except ValueError as exc:
                self.result.error(f'Invalid Auto Layout dimension "{item}": {exc}.')
                return
            self._replace(concern, pixel_class(utility, numeric), label=utility, source=item)
            return

        if rest in ("fill", "hug"):
            if self.mode is not LayoutMode.AUTO:
                self.result.error(
                    f'"{utility}-fill" and "{utility}-hug" are only for Auto Layout mode. '
                    f'Use "{utility}-#px" for Standard Layout.'
                )
                return
            cls = f"{utility}-full" if rest == "fill" else f"{utility}-auto"
        elif _FRACTION_RE.match(rest):
            cls = item
        elif _is_pixel(rest):
            cls = pixel_class(utility, parse_pixels(rest))
        elif shorthand and rest:
            # Ready-made Tailwind sizes such as w-screen or h-10.
            cls = item
        else:
            self.result.error(f'Invalid {"width" if utility == "w" else "height"} dimension: "{item}".')
            return
        self._replace(concern, cls, label="width" if utility == "w" else "height", source=item)

    def _clip(self, value: str) -> None:
        try:
            clip = parse_flag(value, markers=("✂",))
        except ValueError:
            self.result.error(f'Invalid clip-content value: "{value}". Use TRUE(✂️) or FALSE.')
            return
        if clip:
            self.slots.set("clip", "overflow-hidden")
        else:
            self.slots.discard("clip")

    # ---- standard layout: spacing ----

    def _spacing(self, item: str) -> None:
        matched = match_prefix(item, _SPACING_PREFIXES)
        if matched is None:
            self.result.error(f'Unknown spacing token: "{item}". Use "v-#px" or "h-#px".')
            return
        axis, rest = matched
        try:
            numeric = parse_pixels(rest)
        except ValueError:
            direction = "vertical" if axis == "y" else "horizontal"
            self.result.error(f'Invalid {direction} spacing: "{item}". Use "{item[:2]}#px".')
            return
        self._replace(
            f"spacing:{axis}", pixel_class(f"space-{axis}", numeric), label="spacing", source=item
        )

    # ---- auto layout: flow, alignment, gap, padding, settings ----

    def _flow(self, item: str) -> None:
        head, _ = split_annotation(normalize_marker(item))
        flow = _FLOW_VALUES.get(head.lower())
        if flow == "vertical":
            self._replace("flow:direction", "flex-col", label="flow direction", source=item)
            if self.slots.discard("flow:wrap"):
                self.result.warn('"wrap(↩️)" was dropped because the flow changed to "vertical(↕️)".')
        elif flow == "horizontal":
            self._replace("flow:direction", "flex-row", label="flow direction", source=item)
        elif flow == "wrap":
            if self.slots.get("flow:direction") == ("flex-row",):
                self.slots.set("flow:wrap", "flex-wrap")
            else:
                self.result.error('"wrap(↩️)" can only be used with "horizontal(↔️)" flow.')
        else:
            self.result.error(f'Unknown flow token: "{item}".')

    def _alignment(self, value: str) -> None:
        head, note = split_annotation(normalize_marker(value))
        marker = None
        for candidate in (head, note):
            if candidate is None:
                continue
            if candidate in ALIGNMENT_GRID:
                marker = candidate
            elif candidate.lower() in _ALIGNMENT_NAMES:
                marker = _ALIGNMENT_NAMES[candidate.lower()]
            if marker is not None:
                break
        if marker is None:
            self.result.error(f'Invalid alignment value: "{value}".')
            return
        self._replace("alignment", *ALIGNMENT_GRID[marker], label="alignment", source=value)

    def _gap(self, value: str) -> None:
        if value.lower() == "auto":
            self._replace("gap", "justify-between", label="gap", source=value)
            return
        try:
            numeric = parse_pixels(value)
        except ValueError:
            self.result.error(f'Invalid gap value: "{value}". Use "#px" or "auto".')
            return
        self._replace("gap", pixel_class("gap", numeric), label="gap", source=value)

    def _padding(self, item: str, table: dict[str, str]) -> None:
        matched = match_prefix(item, table)
        if matched is None:
            self.result.error(f'Invalid padding token: "{item}".')
            return
        side, rest = matched
        if _is_pixel(rest):
            cls = pixel_class(_PADDING_UTILITY[side], parse_pixels(rest))
        elif rest and item.startswith(tuple(f"{u}-" for u in _PADDING_UTILITY.values())):
            # Ready-made Tailwind padding such as p-4 or px-2.
            cls = item
        else:
            self.result.error(f'Invalid padding token: "{item}". Use e.g. "all-10px" or "l-4px".')
            return
        # A padding value replaces every earlier one that touches the same sides.
        for concern in self.slots.concerns("padding"):
            if _PADDING_SIDES[concern.split(":", 1)[1]] & _PADDING_SIDES[side]:
                self.slots.discard(concern)
        self.slots.set(f"padding:{side}", cls)

    def _setting(self, item: str) -> None:
        marker = normalize_marker(item)
        head, _ = split_annotation(marker)
        self.settings_seen = True
        if head == "align-text-baseline" or marker == "✅":
            self.baseline = True
        elif head in _UNSUPPORTED_SETTINGS:
            self.result.warn(f'Layout setting "{head}" is not currently supported and will be ignored.')
        else:
            self.result.warn(f'Unknown Layout setting: "{item}".')

    # ---- assembly ----

    def finish(self) -> ParseResult:
        slots, result = self.slots, self.result

        if self.baseline:
            if any(c.startswith("items-") for c in slots.get("alignment")):
                result.warn(
                    "align-text-baseline setting was provided, but an items-* alignment "
                    "was also set. The alignment takes precedence."
                )
            else:
                slots.set("baseline", "items-baseline")

        # gap=auto spreads items with justify-between, which owns the main axis.
        alignment = slots.get("alignment")
        if slots.get("gap") == ("justify-between",) and any(c.startswith("justify-") for c in alignment):
            result.warn(
                'gap "auto" (justify-between) overrides the main-axis part of the alignment; '
                "only the cross-axis alignment is kept."
            )
            slots.set("alignment", *(c for c in alignment if not c.startswith("justify-")))

        if self.mode is LayoutMode.STANDARD:
            found = [f for f in _AUTO_FAMILIES if slots.has_family(f)]
            if self.settings_seen and "baseline" not in found:
                found.append("settings")
            if found:
                result.error(
                    f"Auto Layout properties ({', '.join(found)}) were found in Standard Layout "
                    "mode. These will be ignored. Use Layout=Auto{...} for Auto Layout."
                )
                for family in found:
                    slots.discard_family(family)
        elif slots.has_family("spacing"):
            result.error(
                "Standard Layout 'spacing' properties (v-#px, h-#px) are not applicable in "
                "Auto Layout mode. Use 'gap' and 'padding' instead."
            )
            slots.discard_family("spacing")

        if not slots.has_family("dimension"):
            result.error('Layout "dimensions" (w, h) are required.')
        if self.mode is LayoutMode.AUTO:
            if "flow:direction" not in slots:
                result.error('Auto Layout "flow" (vertical/horizontal) is required.')
            if "alignment" not in slots:
                result.warn(
                    'Auto Layout "alignment" is not specified. Defaulting to flex defaults '
                    "(justify-start, items-stretch). Consider setting an explicit alignment."
                )
            if "gap" not in slots:
                result.warn(
                    'Auto Layout "gap" is not specified. Defaulting to no gap. '
                    'Consider setting "gap-0px" or "gap-auto".'
                )

        result.add_classes(slots.classes(*_OUTPUT_ORDER))
        if self.mode is LayoutMode.AUTO and any(slots.has_family(f) for f in _AUTO_FAMILIES):
            result.prepend_class("flex")
        return result


def _is_pixel(text: str) -> bool:
    numeric = parse_numeric(text)
    return numeric is not None and numeric.unit is Unit.PIXELS and numeric.magnitude >= 0


def parse_layout(raw: str | None) -> ParseResult:
    """Parse a Layout property string into classes and diagnostics."""
    result = ParseResult()
    if not raw or not raw.strip():
        result.error("Layout property string is empty or missing. It is required.")
        return result
    mode, tokens = resolve_mode(raw, result)
    parser = _LayoutParser(mode, result)
    for token in tokens:
        parser.feed(token)
    return parser.finish()
