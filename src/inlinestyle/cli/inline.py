"""CLI command: inlinestyle inline -- inline stylesheets into an HTML file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from inlinestyle.config import InlineStyleConfig
from inlinestyle.errors import (
    DocumentError,
    MalformedDeclaration,
    MalformedStylesheet,
    ResourceNotFound,
)
from inlinestyle.fetch import sniff_css_encoding
from inlinestyle.inliner import InlineStyle


def read_stylesheet(path: str) -> str:
    """Read a stylesheet file, honouring its BOM or leading ``@charset``.

    Raises :class:`UnicodeDecodeError` if the bytes do not match the encoding.
    """
    content = Path(path).read_bytes()
    return content.decode(sniff_css_encoding(content))


@click.command()
@click.argument("htmlfile", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-s",
    "--stylesheet",
    "stylesheets",
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Extra stylesheet file, applied after embedded ones. Repeatable.",
)
@click.option(
    "--extract/--no-extract",
    default=True,
    help="Inline <style> and <link> stylesheets found in the document.",
)
@click.option("--base-uri", default="", help="Base URI for relative <link> hrefs.")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the result here instead of stdout.",
)
@click.option("--compact", is_flag=True, help="Do not pretty-print the output.")
def inline(
    htmlfile: str,
    stylesheets: tuple[str, ...],
    extract: bool,
    base_uri: str,
    output: str | None,
    compact: bool,
) -> None:
    """Inline stylesheets into HTMLFILE and print the resulting HTML.

    Exits with code 1 if a stylesheet or the document cannot be parsed.
    """
    config = InlineStyleConfig(base_uri=base_uri, pretty_print=not compact)
    inliner = InlineStyle(config=config)

    try:
        inliner.load_html_file(htmlfile)
        sheets = inliner.extract_stylesheets() if extract else []
        sheets.extend(read_stylesheet(p) for p in stylesheets)
        inliner.apply_stylesheet(sheets)
    except (MalformedStylesheet, MalformedDeclaration, UnicodeDecodeError) as exc:
        click.echo(f"Stylesheet error: {exc}", err=True)
        sys.exit(1)
    except (ResourceNotFound, DocumentError) as exc:
        click.echo(f"Document error: {exc}", err=True)
        sys.exit(1)
    finally:
        inliner.fetcher.close()

    html = inliner.get_html()
    if output:
        Path(output).write_text(html, encoding="utf-8")
        click.echo(f"Wrote {output}", err=True)
    else:
        click.echo(html, nl=False)
