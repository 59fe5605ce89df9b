"""FigScript: translate design-tool styling strings into Tailwind classes."""

from figscript.compose import DOMAIN_PARSERS, CompositionError, compose, compose_or_raise
from figscript.config import FigScriptConfig
from figscript.domains import (
    parse_appearance,
    parse_fill,
    parse_layout,
    parse_position,
    parse_stroke,
)
from figscript.model import AggregateResult, Diagnostic, ParseResult, PositionResult, Severity
from figscript.parser import tokenize

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # aggregator
    "compose",
    "compose_or_raise",
    "CompositionError",
    "DOMAIN_PARSERS",
    "FigScriptConfig",
    # domain parsers
    "parse_layout",
    "parse_position",
    "parse_appearance",
    "parse_fill",
    "parse_stroke",
    "tokenize",
    # results
    "ParseResult",
    "PositionResult",
    "AggregateResult",
    "Diagnostic",
    "Severity",
]
