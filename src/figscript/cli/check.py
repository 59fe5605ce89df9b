"""CLI command: figscript check -- parse a sheet and compose every element."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from figscript.compose import compose
from figscript.sheet import SheetError, parse_sheet


@click.command()
@click.argument("sheet", type=click.Path(exists=True))
def check(sheet: str) -> None:
    """Parse a FigScript sheet and check every element in it.

    Prints each element's classes and diagnostics and exits with code 0 if
    no errors are found, or code 1 if there are errors.
    """
    sheet_path = Path(sheet)

    try:
        source = sheet_path.read_text(encoding="utf-8")
        parsed = parse_sheet(source)
    except SheetError as exc:
        click.echo(f"Sheet error: {exc}", err=True)
        sys.exit(1)

    elements = parsed.elements()
    if not elements:
        click.echo(f"OK: {sheet_path.name} defines no elements")
        sys.exit(0)

    errors = warnings = 0
    for name in elements:
        props = {key.lower(): value for key, value in parsed.resolve(name).items()}
        result = compose(**props)
        errors += len(result.errors)
        warnings += len(result.warnings)

        click.echo(f"#{name}: {result.class_name()}")
        for diag in result.diagnostics:
            click.echo(f"  {diag}")

    click.echo()
    click.echo(
        f"Summary: {len(elements)} element(s), {errors} error(s), {warnings} warning(s)"
    )

    if errors:
        sys.exit(1)
    sys.exit(0)
