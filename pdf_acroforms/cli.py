"""
Command-line interface for PDF AcroForms.
"""

import json
import logging
import os
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pdf_acroforms import __version__
from pdf_acroforms.exceptions import PDFAcroFormsException
from pdf_acroforms.parser import parse_pdf
from pdf_acroforms.utils import configure_logging

console = Console()


def _load(input_pdf):
    try:
        return parse_pdf(input_pdf)
    except PDFAcroFormsException as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


def _describe_options(options):
    if not options:
        return ""
    return ", ".join(
        key if key == value else f"{key}={value}" for key, value in options.items()
    )


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose):
    """
    PDF AcroForms CLI - Inspect interactive form fields and PDF structure.
    """
    configure_logging(logging.DEBUG if verbose else logging.WARNING)


@cli.command(name="fields")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option('--json', 'as_json', is_flag=True, help='Print fields as JSON')
def show_fields(input_pdf, as_json):
    """
    List the form fields of a PDF file.

    Examples:

        pdf-acroforms fields form.pdf

        pdf-acroforms fields form.pdf --json
    """
    document = _load(input_pdf)

    if as_json:
        click.echo(json.dumps(
            {name: field.to_dict() for name, field in document.fields.items()},
            indent=2,
        ))
        return

    if not document.fields:
        console.print("[yellow]No form fields found[/yellow]")
        return

    table = Table(title=f"Form fields of {os.path.basename(input_pdf)}")
    table.add_column("Name", style="cyan")
    table.add_column("Full name", style="green")
    table.add_column("Type")
    table.add_column("Flags", justify="right")
    table.add_column("Max length", justify="right")
    table.add_column("Options")

    for name, field in document.fields.items():
        table.add_row(
            escape(name),
            escape(field.full_name),
            field.type,
            str(field.flags),
            str(field.max_len) if field.max_len else "",
            escape(_describe_options(field.options)),
        )

    console.print(table)
    console.print(f"\n[bold green]✓ {len(document.fields)} fields[/bold green]")


@cli.command(name="info")
@click.argument('input_pdf', type=click.Path(exists=True))
@click.option('--json', 'as_json', is_flag=True, help='Print information as JSON')
def show_info(input_pdf, as_json):
    """
    Display metadata, trailer and cross-reference information.

    Example:

        pdf-acroforms info form.pdf
    """
    document = _load(input_pdf)
    cross_reference = document.get_cross_reference()

    if as_json:
        metadata = {
            key: list(value) if isinstance(value, tuple) else value
            for key, value in document.metadata.items()
        }
        click.echo(json.dumps(
            {
                "metadata": metadata,
                "fields": len(document.fields),
                "objects": len(document.offsets),
                "cross_reference": cross_reference.to_dict(),
            },
            indent=2,
        ))
        return

    info_table = Table(title="PDF Information", show_header=False)
    info_table.add_column("Property", style="cyan")
    info_table.add_column("Value", style="green")

    info_table.add_row("File", os.path.basename(input_pdf))
    for key, value in document.metadata.items():
        if isinstance(value, tuple):
            value = " ".join(value)
        info_table.add_row(key, escape(str(value)))
    info_table.add_row("Objects", str(len(document.offsets)))
    info_table.add_row("Form fields", str(len(document.fields)))
    info_table.add_row("xref line", str(cross_reference.line))
    info_table.add_row("xref offset", str(cross_reference.start_pointer))
    info_table.add_row("xref entries", str(cross_reference.count))
    info_table.add_row("startxref", str(cross_reference.start_value))

    console.print(info_table)


if __name__ == '__main__':
    cli()
