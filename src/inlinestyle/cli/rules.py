"""CLI command: inlinestyle rules -- show the order rules are applied in."""

from __future__ import annotations

import sys

import click

from inlinestyle.cli.inline import read_stylesheet
from inlinestyle.errors import MalformedDeclaration, MalformedStylesheet
from inlinestyle.stylesheet import (
    parse_stylesheet,
    score_selector,
    serialize_declarations,
    sort_rules,
)


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
def rules(cssfile: str) -> None:
    """Parse CSSFILE and list its rules in application order.

    Each line shows the specificity (ids,classes,types), the selector and
    the declarations.  Rules with empty selectors are marked as skipped.
    """
    try:
        parsed = sort_rules(parse_stylesheet(read_stylesheet(cssfile)))
    except (MalformedStylesheet, MalformedDeclaration, UnicodeDecodeError) as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    for rule in parsed:
        ids, classes, types = score_selector(rule.selector)
        selector = rule.selector or "(empty, skipped)"
        click.echo(
            f"({ids},{classes},{types})  {selector}  {{ {serialize_declarations(rule.declarations)} }}"
        )
    click.echo()
    click.echo(f"Summary: {len(parsed)} rule(s)")
