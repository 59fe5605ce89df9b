"""Numeric literal extraction: ``10px``, ``-45deg``, ``50%``, ``1.5``."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

__all__ = ["Unit", "NumericLiteral", "parse_numeric"]


class Unit(Enum):
    """Unit suffixes recognised after a magnitude."""

    PIXELS = "px"
    DEGREES = "deg"
    PERCENT = "%"


_NUMERIC_RE = re.compile(
    r"""
    ^
    (?P<magnitude>[-+]?(?:\d+(?:\.\d*)?|\.\d+))   # integer or decimal
    (?P<unit>px|deg|%)?                           # optional unit suffix
    $
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class NumericLiteral:
    magnitude: float
    unit: Unit | None = None

    @property
    def is_integral(self) -> bool:
        return self.magnitude.is_integer()

    def format(self) -> str:
        """The magnitude as written in a class token (``10``, not ``10.0``)."""
        if self.is_integral:
            return str(int(self.magnitude))
        return f"{self.magnitude:g}"


def parse_numeric(text: str) -> NumericLiteral | None:
    """Parse *text* as a number with an optional unit; ``None`` if it is not one."""
    match = _NUMERIC_RE.match(text.strip())
    if match is None:
        return None
    unit = match.group("unit")
    return NumericLiteral(
        magnitude=float(match.group("magnitude")),
        unit=Unit(unit) if unit else None,
    )
