"""Aggregator: runs every domain parser and merges their results."""

from __future__ import annotations

import logging
from typing import Callable

from figscript.config import FigScriptConfig
from figscript.domains import (
    parse_appearance,
    parse_fill,
    parse_layout,
    parse_position,
    parse_stroke,
)
from figscript.model.diagnostic import Diagnostic
from figscript.model.result import AggregateResult, ParseResult, PositionResult

__all__ = ["DOMAIN_PARSERS", "CompositionError", "compose", "compose_or_raise"]

logger = logging.getLogger(__name__)

ParserFunc = Callable[[str | None], ParseResult]
DiagnosticsCallback = Callable[[list[str], list[str]], None]

# Property name -> parser, in the order composition runs them.
DOMAIN_PARSERS: dict[str, ParserFunc] = {
    "Position": parse_position,
    "Layout": parse_layout,
    "Appearance": parse_appearance,
    "Fill": parse_fill,
    "Stroke": parse_stroke,
}


class CompositionError(Exception):
    """Raised when composition produces ERROR-severity diagnostics."""

    def __init__(self, result: AggregateResult) -> None:
        self.result = result
        messages = [str(d) for d in result.diagnostics if d.is_error]
        super().__init__(
            f"Composition failed with {len(messages)} error(s): " + "; ".join(messages)
        )


def compose(
    layout: str | None = None,
    position: str | None = None,
    appearance: str | None = None,
    fill: str | None = None,
    stroke: str | None = None,
    *,
    config: FigScriptConfig | None = None,
    on_diagnostics: DiagnosticsCallback | None = None,
) -> AggregateResult:
    """Parse all five property strings and merge them into one result.

    Classes keep first-seen order across domains with duplicates removed;
    diagnostics are tagged with the domain that produced them. When
    *on_diagnostics* is given it is called once with the error and warning
    messages. With ``config.strict`` set, errors raise :class:`CompositionError`.
    """
    config = config or FigScriptConfig()
    raw = {
        "Position": position,
        "Layout": layout,
        "Appearance": appearance,
        "Fill": fill,
        "Stroke": stroke,
    }

    classes: dict[str, None] = {}
    diagnostics: list[Diagnostic] = []
    is_fixed = False
    for name, parser in DOMAIN_PARSERS.items():
        partial = parser(raw[name])
        if isinstance(partial, PositionResult):
            is_fixed = partial.is_fixed
        classes.update(dict.fromkeys(partial.classes))
        diagnostics.extend(partial.diagnostics(name))

    result = AggregateResult(
        classes=tuple(classes),
        is_fixed=is_fixed,
        diagnostics=tuple(diagnostics),
        extra_classes=config.extra_classes,
    )
    logger.debug(
        "Composed %d class(es), fixed=%s, %d error(s), %d warning(s)",
        len(result.classes),
        result.is_fixed,
        len(result.errors),
        len(result.warnings),
    )
    if config.log_diagnostics:
        _log_diagnostics(result)
    if on_diagnostics is not None:
        on_diagnostics(result.errors, result.warnings)
    if config.strict and not result.ok:
        raise CompositionError(result)
    return result


def compose_or_raise(
    layout: str | None = None,
    position: str | None = None,
    appearance: str | None = None,
    fill: str | None = None,
    stroke: str | None = None,
    *,
    config: FigScriptConfig | None = None,
    on_diagnostics: DiagnosticsCallback | None = None,
) -> AggregateResult:
    """Compose; raises :class:`CompositionError` if any ERROR diagnostics exist.

    Returns the result (warnings included) when no errors are found.
    """
    result = compose(
        layout,
        position,
        appearance,
        fill,
        stroke,
        config=config,
        on_diagnostics=on_diagnostics,
    )
    if not result.ok:
        raise CompositionError(result)
    return result


def _log_diagnostics(result: AggregateResult) -> None:
    for diag in result.diagnostics:
        if diag.is_error:
            logger.error("%s", diag)
        else:
            logger.warning("%s", diag)
