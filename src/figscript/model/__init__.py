"""FigScript model layer -- public type re-exports."""

from figscript.model.diagnostic import Diagnostic, Severity
from figscript.model.result import AggregateResult, ClassSlots, ParseResult, PositionResult
from figscript.model.token import Bare, KeyValue, Token

__all__ = [
    # token
    "Bare",
    "KeyValue",
    "Token",
    # result
    "ClassSlots",
    "ParseResult",
    "PositionResult",
    "AggregateResult",
    # diagnostic
    "Severity",
    "Diagnostic",
]
