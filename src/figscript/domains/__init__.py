from figscript.domains.appearance import parse_appearance
from figscript.domains.fill import parse_fill
from figscript.domains.layout import LayoutMode, parse_layout, resolve_mode
from figscript.domains.position import DEFAULT_Z_CLASS, parse_position
from figscript.domains.stroke import parse_stroke

__all__ = [
    "parse_layout",
    "parse_position",
    "parse_appearance",
    "parse_fill",
    "parse_stroke",
    "LayoutMode",
    "resolve_mode",
    "DEFAULT_Z_CLASS",
]
