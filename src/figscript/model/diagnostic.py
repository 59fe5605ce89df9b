"""Diagnostic model: structured view over parser errors and warnings."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding reported while translating a property string.

    Attributes:
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        source: The property that produced it (``Layout``, ``Fill``...), if known.
    """

    severity: Severity
    message: str
    source: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [{self.source}]" if self.source else ""
        return f"{self.severity.value}{location}: {self.message}"
