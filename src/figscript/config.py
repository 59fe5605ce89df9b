from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FigScriptConfig:
    strict: bool = False  # raise CompositionError instead of returning errors
    log_diagnostics: bool = False
    extra_classes: str = ""  # carried onto every AggregateResult.class_name()
