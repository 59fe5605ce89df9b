"""Value grammars shared by the domain parsers.

Helpers raise ``ValueError`` with a short human-readable reason; the domain
parser that called them turns the reason into an error message and moves on
to the next token.
"""

from __future__ import annotations

import re
from typing import Mapping, TypeVar

from figscript.parser.numeric import NumericLiteral, Unit, parse_numeric
from figscript.parser.tokenizer import is_wrapped, split_segments

__all__ = [
    "normalize_marker",
    "split_annotation",
    "unwrap",
    "expand",
    "match_prefix",
    "parse_flag",
    "parse_pixels",
    "pixel_class",
    "parse_percent",
    "opacity_class",
    "looks_like_color",
    "color_class",
    "strip_quotes",
]

T = TypeVar("T")

VARIATION_SELECTOR = "\ufe0f"

_TRUE_WORDS = frozenset({"true", "yes", "on"})
_FALSE_WORDS = frozenset({"false", "no", "off"})

# Opacity utilities kept by the downstream Tailwind safelist.
OPACITY_STEPS = frozenset({0, 5, 10, 20, 25, 30, 40, 50, 60, 70, 75, 80, 90, 95, 100})

_HEX_RE = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")

# ``TRUE(✂️)``, ``center(🔯)``: a value followed by a parenthesised note.
_ANNOTATED_RE = re.compile(r"^(?P<head>[^()]+)\((?P<note>[^()]*)\)$")


def normalize_marker(text: str) -> str:
    """Drop emoji variation selectors so ``↔️`` and ``↔`` compare equal."""
    return text.replace(VARIATION_SELECTOR, "").strip()


def split_annotation(text: str) -> tuple[str, str | None]:
    """Split ``head(note)`` into its parts; plain text has no note."""
    match = _ANNOTATED_RE.match(text.strip())
    if match is None:
        return text.strip(), None
    return match.group("head").strip(), match.group("note").strip()


def unwrap(value: str) -> str:
    """Strip one outer ``{...}`` / ``(...)`` group from a single value."""
    value = value.strip()
    if is_wrapped(value, "{", "}") or is_wrapped(value, "(", ")"):
        return value[1:-1].strip()
    return value


def expand(value: str) -> list[str]:
    """Items of a list value: ``{a, b}``, ``(a, b)`` or a bare ``a, b``."""
    return split_segments(unwrap(value))


def match_prefix(text: str, table: Mapping[str, T]) -> tuple[T, str] | None:
    """Match the longest prefix of *text* found in *table*.

    Returns ``(table[prefix], remainder)`` or ``None``.
    """
    for prefix in sorted(table, key=len, reverse=True):
        if text.startswith(prefix):
            return table[prefix], text[len(prefix):]
    return None


def parse_flag(text: str, markers: tuple[str, ...] = ()) -> bool:
    """Parse a boolean-like value: TRUE/FALSE, ``TRUE(note)`` or a true *marker*."""
    head, _ = split_annotation(normalize_marker(text))
    if head.lower() in _TRUE_WORDS:
        return True
    if head.lower() in _FALSE_WORDS:
        return False
    if head in {normalize_marker(m) for m in markers}:
        return True
    raise ValueError(f'"{text}" is not TRUE or FALSE')


def parse_pixels(
    text: str, *, allow_unitless: bool = False, allow_negative: bool = False
) -> NumericLiteral:
    numeric = parse_numeric(text)
    if numeric is None:
        raise ValueError(f'"{text}" is not a number')
    if numeric.unit is not Unit.PIXELS and not (allow_unitless and numeric.unit is None):
        raise ValueError(f'"{text}" is not a pixel value; use "#px"')
    if numeric.magnitude < 0 and not allow_negative:
        raise ValueError(f'"{text}" must not be negative')
    return numeric


def pixel_class(prefix: str, numeric: NumericLiteral) -> str:
    """``w`` + 100 -> ``w-[100px]``."""
    return f"{prefix}-[{numeric.format()}px]"


def parse_percent(text: str) -> NumericLiteral:
    """Parse an opacity value: ``50``, ``50%``, ``opacity-50`` (0-100 inclusive)."""
    stripped = text.strip()
    matched = match_prefix(
        stripped, {"opacity-": None, "bg-opacity-": None, "border-opacity-": None}
    )
    if matched is not None:
        stripped = matched[1]
    numeric = parse_numeric(stripped)
    if numeric is None or numeric.unit not in (None, Unit.PERCENT):
        raise ValueError(f'"{text}" must be 0-100 or a percentage like "50%"')
    if not 0 <= numeric.magnitude <= 100:
        raise ValueError(f'"{text}" is out of range (0-100)')
    return numeric


def opacity_class(prefix: str, numeric: NumericLiteral) -> str:
    """``opacity`` + 50 -> ``opacity-50``; off-step values use an arbitrary value."""
    if numeric.is_integral and int(numeric.magnitude) in OPACITY_STEPS:
        return f"{prefix}-{numeric.format()}"
    return f"{prefix}-[{numeric.magnitude / 100:g}]"


def looks_like_color(text: str, prefix: str, aliases: tuple[str, ...] = ()) -> bool:
    """Shorthand detection: could *text* be a colour for the *prefix* utility?"""
    if text.startswith(("#", "tailwind-", "layer-")):
        return True
    for utility in (prefix, *aliases):
        if text.startswith(f"{utility}-") and not text.startswith(f"{utility}-opacity-"):
            return True
    return False


def color_class(text: str, prefix: str, aliases: tuple[str, ...] = ()) -> str:
    """Translate a colour value into a ``<prefix>-...`` class.

    Accepts ``#RGB``/``#RRGGBB``, ``tailwind-<color>``, ``layer-<name>``, a
    ready-made ``<prefix>-<color>`` class, or ``<alias>-<color>`` which is
    rewritten onto *prefix*.
    """
    value = text.strip()
    if value.startswith("#"):
        if not _HEX_RE.match(value):
            raise ValueError(f'invalid hex color "{value}"; use #RGB or #RRGGBB')
        return f"{prefix}-[{value}]"
    if value.startswith("tailwind-") and len(value) > len("tailwind-"):
        return f"{prefix}-{value[len('tailwind-'):]}"
    if value.startswith("layer-") and len(value) > len("layer-"):
        return f"{prefix}-{value}"
    if value.startswith(f"{prefix}-") and len(value) > len(prefix) + 1:
        return value
    for alias in aliases:
        if value.startswith(f"{alias}-") and len(value) > len(alias) + 1:
            return f"{prefix}-{value[len(alias) + 1:]}"
    raise ValueError(
        f'unsupported color "{value}"; use #HEX, tailwind-<color>, layer-<name> or {prefix}-<color>'
    )


def strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        return text[1:-1]
    return text
