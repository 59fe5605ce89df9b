"""Fill parser: solid colour or image background, plus background opacity.

Syntax example::

    type=solid, color=#1e293b, opacity=100%
    collapsed: solid, tailwind-slate-800, 100%
               image, url('/img/hero.png'), 50%
"""

from __future__ import annotations

from figscript.model.result import ClassSlots, ParseResult
from figscript.model.token import Bare, KeyValue, Token
from figscript.parser.numeric import parse_numeric
from figscript.parser.tokenizer import tokenize
from figscript.parser.values import (
    color_class,
    looks_like_color,
    opacity_class,
    parse_percent,
    strip_quotes,
    unwrap,
)

__all__ = ["parse_fill", "IMAGE_PRESENTATION"]

IMAGE_PRESENTATION = ("bg-cover", "bg-center", "bg-no-repeat")

_URL_PREFIXES = ("url(", "http://", "https://", "/")
_OPACITY_PREFIXES = ("opacity-", "bg-opacity-")


class _FillParser:
    def __init__(self, result: ParseResult) -> None:
        self.result = result
        self.slots = ClassSlots()
        self.fill_type: str | None = None
        self.color_defined = False
        self.opacity_defined = False
        self.url: str | None = None

    def feed(self, token: Token) -> None:
        if isinstance(token, KeyValue):
            self._keyed(token)
        else:
            self._shorthand(token)

    def _keyed(self, token: KeyValue) -> None:
        name, value = token.name, token.value
        if name == "type":
            self._type(unwrap(value))
        elif name in ("color", "colour"):
            self._color(unwrap(value))
        elif name == "opacity":
            self._opacity(unwrap(value))
        elif name in ("url", "image-url", "src"):
            self._url(unwrap(value))
        else:
            self.result.warn(f'Unknown Fill property "{token.key}".')

    def _shorthand(self, token: Bare) -> None:
        text = token.text
        numeric = parse_numeric(text)
        if text.lower() in ("solid", "image"):
            self._type(text)
        elif text.startswith(_URL_PREFIXES):
            self._url(text)
        elif looks_like_color(text, "bg"):
            self._color(text)
        elif text.endswith("%") or text.startswith(_OPACITY_PREFIXES) or (numeric and numeric.unit is None):
            self._opacity(text)
        else:
            self.result.warn(f'Unknown or misplaced Fill token: "{text}".')

    # ---- type state machine: unset -> solid | image ----

    def _type(self, value: str) -> None:
        fill_type = value.strip().lower()
        if fill_type == "solid":
            if self.url is not None:
                self.result.warn('Fill type set to "solid"; the image URL and its presentation classes are dropped.')
                self.slots.discard("url", "presentation")
                self.url = None
            self.fill_type = "solid"
        elif fill_type == "image":
            if self.color_defined:
                self.result.warn("Color was defined before type=image; color will be ignored for image fill.")
                self.slots.discard("color")
                self.color_defined = False
            self.fill_type = "image"
        else:
            self.result.error(f'Invalid fill type: "{value}". Must be "solid" or "image".')

    def _color(self, value: str) -> None:
        if self.fill_type == "image":
            self.result.warn(f'Fill color token "{value}" ignored because fill type is "image".')
            return
        try:
            cls = color_class(value, "bg")
        except ValueError as exc:
            self.result.error(f"Invalid fill color: {exc}.")
            return
        if self.color_defined:
            self.result.warn(f'Fill color defined multiple times. Last definition used: "{value}".')
        self.slots.set("color", cls)
        self.color_defined = True
        if self.fill_type is None:
            self.fill_type = "solid"

    def _opacity(self, value: str) -> None:
        try:
            numeric = parse_percent(value)
        except ValueError as exc:
            self.result.error(f"Invalid fill opacity value: {exc}.")
            return
        if self.opacity_defined:
            self.result.warn(f'Fill opacity defined multiple times. Last definition used: "{value}".')
        self.slots.set("opacity", opacity_class("bg-opacity", numeric))
        self.opacity_defined = True

    def _url(self, value: str) -> None:
        if self.fill_type != "image":
            if self.fill_type == "solid":
                self.result.warn(f'Image URL "{value}" ignored because fill type is "solid".')
                return
            self.fill_type = "image"
            self.result.warn('Fill type automatically set to "image" due to URL presence.')

        url = value.strip()
        if url.startswith("url(") and url.endswith(")"):
            url = url[len("url("):-1].strip()
        url = strip_quotes(url)
        if not url:
            self.result.error(f'Empty image URL: "{value}".')
            return
        if self.url is not None:
            self.result.warn(f'Image URL defined multiple times. Last definition used: "{value}".')
        self.url = url
        self.slots.set("url", f"bg-[url('{url}')]")
        if "presentation" not in self.slots:
            self.slots.set("presentation", *IMAGE_PRESENTATION)
            self.result.warn("Added default bg-cover, bg-center, bg-no-repeat for image fill. Customize as needed.")

    # ---- assembly ----

    def finish(self) -> ParseResult:
        result = self.result
        if self.fill_type is None:
            result.error('Fill "type" (solid/image) is required.')
        elif self.fill_type == "solid" and not self.color_defined:
            result.error('Fill "color" is required when type is "solid".')
        elif self.fill_type == "image" and self.url is None:
            result.error('An image URL is required when fill type is "image".')
        if not self.opacity_defined:
            result.error('Fill "opacity" is required. Defaulting to 100% (bg-opacity-100).')
            self.slots.set("opacity", "bg-opacity-100")
        result.add_classes(self.slots.classes("color", "url", "presentation", "opacity"))
        return result


def parse_fill(raw: str | None) -> ParseResult:
    """Parse a Fill property string. An absent fill is valid and yields nothing."""
    result = ParseResult()
    if not raw or not raw.strip():
        return result
    parser = _FillParser(result)
    for token in tokenize(raw):
        parser.feed(token)
    return parser.finish()
