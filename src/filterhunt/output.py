import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .common import dump_yaml
from .defaults import RECORD_FIELDS


def filter_table(records, title=None):
    table = Table(title=title, show_lines=True)
    for field in RECORD_FIELDS:
        # fold so long WQL queries wrap instead of being cut off
        table.add_column(field, overflow="fold")
    for record in records:
        table.add_row(*(escape(value) for value in record.as_row()))
    return table


def print_records(records, title=None, console=None):
    if not records:
        return
    console = console or Console()
    console.print(filter_table(records, title=title))


def print_raw(records):
    # Plain echo: YAML should stay copy-pasteable, no markup or color
    for record in records:
        click.echo("---")
        click.echo(dump_yaml(record), nl=False)
