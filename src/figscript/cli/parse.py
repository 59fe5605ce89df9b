"""CLI command: figscript parse -- translate property strings to classes."""

from __future__ import annotations

import json
import sys

import click

from figscript.compose import CompositionError, compose
from figscript.config import FigScriptConfig
from figscript.model.result import AggregateResult


def _as_json(result: AggregateResult, class_name: str) -> str:
    return json.dumps(
        {
            "className": class_name,
            "classes": list(result.classes),
            "isFixed": result.is_fixed,
            "errors": result.errors,
            "warnings": result.warnings,
        },
        indent=2,
        ensure_ascii=False,
    )


@click.command()
@click.option("--layout", default=None, help="Layout property string.")
@click.option("--position", default=None, help="Position property string.")
@click.option("--appearance", default=None, help="Appearance property string.")
@click.option("--fill", default=None, help="Fill property string.")
@click.option("--stroke", default=None, help="Stroke property string.")
@click.option("--class-name", default="", help="Extra classes appended to the output.")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.option("--strict", is_flag=True, help="Exit with code 1 if any error is reported.")
def parse(
    layout: str | None,
    position: str | None,
    appearance: str | None,
    fill: str | None,
    stroke: str | None,
    class_name: str,
    as_json: bool,
    strict: bool,
) -> None:
    """Translate FigScript property strings into Tailwind classes.

    Prints the class string, whether the element is detached (fixed), and
    every diagnostic. With --strict, errors make the command exit with code 1.
    """
    config = FigScriptConfig(strict=strict, extra_classes=class_name)
    try:
        result = compose(
            layout, position, appearance, fill, stroke, config=config
        )
    except CompositionError as exc:
        result = exc.result

    joined = result.class_name()
    if as_json:
        click.echo(_as_json(result, joined))
    else:
        click.echo(joined)
        click.echo(f"fixed: {'yes' if result.is_fixed else 'no'}")
        for diag in result.diagnostics:
            click.echo(str(diag), err=True)

    if strict and not result.ok:
        sys.exit(1)
