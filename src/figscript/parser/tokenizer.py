"""Hand-written tokenizer for FigScript property strings.

Syntax example:
    Auto{flow=horizontal, gap=10px, dimensions={w-fill, h-hug}}
    corner-radius=(tl-4px, br-8px), 80%, visible

Commas separate segments unless they sit inside ``()``, ``{}`` or ``[]``.
A segment with exactly one top-level ``=`` is a key/value pair; anything
else is a bare value.
"""

from __future__ import annotations

from typing import Iterator

from figscript.model.token import Bare, KeyValue, Token

__all__ = ["tokenize", "split_segments", "is_wrapped"]

_OPENERS = "({["
_CLOSERS = ")}]"


def _scan(text: str) -> Iterator[tuple[int, str, int]]:
    """Yield ``(index, char, depth)`` with depth counted before *char*.

    A closing bracket with nothing open is plain text; depth never goes
    negative.
    """
    depth = 0
    for index, char in enumerate(text):
        yield index, char, depth
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS and depth > 0:
            depth -= 1


def _top_level(text: str, target: str) -> list[int]:
    return [i for i, char, depth in _scan(text) if char == target and depth == 0]


def split_segments(raw: str | None, separator: str = ",") -> list[str]:
    """Split *raw* on top-level *separator*; returns trimmed, non-empty segments."""
    if not raw or not raw.strip():
        return []
    segments: list[str] = []
    start = 0
    for index in _top_level(raw, separator):
        segments.append(raw[start:index])
        start = index + 1
    segments.append(raw[start:])
    return [s.strip() for s in segments if s.strip()]


def is_wrapped(text: str, opener: str, closer: str) -> bool:
    """True if *text* is one ``opener ... closer`` group enclosing everything."""
    if len(text) < 2 or text[0] != opener or text[-1] != closer:
        return False
    last = len(text) - 1
    for index, char, depth in _scan(text):
        # The group must stay open until the final character closes it.
        if index == last:
            return depth == 1
        if char in _CLOSERS and depth == 1:
            return False
    return False


def tokenize(raw: str | None) -> list[Token]:
    """Tokenize a property string into Bare and KeyValue tokens, in order."""
    tokens: list[Token] = []
    for segment in split_segments(raw):
        equals = _top_level(segment, "=")
        if len(equals) == 1:
            index = equals[0]
            tokens.append(KeyValue(segment[:index].strip(), segment[index + 1 :].strip()))
        else:
            tokens.append(Bare(segment))
    return tokens
