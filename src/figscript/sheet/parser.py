"""Hand-written parser for FigScript sheets.

Syntax example:
    * { Appearance: visible, 100%; }
    #header {
      Layout: Auto{flow=horizontal, gap=10px, dimensions={w-fill, h-hug}};
      Position: ignore-auto-layout=FALSE, rotation=r-0;
    }

Property values are FigScript strings and may contain their own braces, so
rule bodies are found by bracket depth rather than by the next ``}``.
"""

from __future__ import annotations

import re

from figscript.compose import DOMAIN_PARSERS
from figscript.parser.tokenizer import split_segments
from figscript.sheet.model import Selector, Sheet, SheetRule

__all__ = ["SheetError", "parse_sheet"]

_PROPERTY_NAMES = {name.lower(): name for name in DOMAIN_PARSERS}

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


class SheetError(Exception):
    """Raised when sheet source cannot be parsed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


def _line_of(source: str, index: int) -> int:
    return source.count("\n", 0, index) + 1


def _blank_comments(source: str) -> str:
    # Keep newlines so reported line numbers still match the file.
    return _COMMENT_RE.sub(lambda m: re.sub(r"[^\n]", " ", m.group(0)), source)


def _parse_selector(raw: str, line: int) -> Selector:
    """Parse a raw selector string into a Selector object."""
    raw = raw.strip()
    if raw == "*":
        return Selector(kind="universal", value="*", specificity=0)
    if raw.startswith("#") and _NAME_RE.match(raw[1:]):
        return Selector(kind="element", value=raw[1:], specificity=1)
    raise SheetError(f"Invalid selector: {raw!r}", line)


def _matching_brace(source: str, start: int) -> int | None:
    """Index of the ``}`` closing the ``{`` at *start*, or None."""
    depth = 0
    for index in range(start, len(source)):
        char = source[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return None


def _parse_declarations(body: str, line: int) -> dict[str, str]:
    """Parse ``Property: value;`` declarations into a property dictionary."""
    props: dict[str, str] = {}
    for declaration in split_segments(body, ";"):
        key, colon, value = declaration.partition(":")
        if not colon:
            raise SheetError(f"Expected 'Property: value' but got {declaration!r}", line)
        name = _PROPERTY_NAMES.get(key.strip().lower())
        if name is None:
            raise SheetError(
                f"Unknown property {key.strip()!r}; expected one of "
                + ", ".join(DOMAIN_PARSERS),
                line,
            )
        props[name] = value.strip()
    return props


def parse_sheet(source: str) -> Sheet:
    """Parse a FigScript sheet string into a Sheet object.

    Returns a Sheet containing all parsed rules in source order.
    """
    source = _blank_comments(source)
    rules: list[SheetRule] = []
    pos = 0
    while True:
        brace = source.find("{", pos)
        if brace == -1:
            trailing = source[pos:]
            if trailing.strip():
                offset = pos + len(trailing) - len(trailing.lstrip())
                raise SheetError("Expected '{' after selector", _line_of(source, offset))
            break
        line = _line_of(source, brace)
        selector = _parse_selector(source[pos:brace], line)
        close = _matching_brace(source, brace)
        if close is None:
            raise SheetError("Unclosed rule block", line)
        properties = _parse_declarations(source[brace + 1 : close], line)
        if properties:  # skip rules with no declarations
            rules.append(SheetRule(selector=selector, properties=properties, line=line))
        pos = close + 1
    return Sheet(rules=rules)
