from __future__ import annotations

from typing import Any, Iterable, Optional

from rich import box
from rich.console import Console
from rich.markup import escape as escape_markup
from rich.table import Table

from datamirror.codec.values import read_value
from datamirror.domain.catalog import FieldCatalog
from datamirror.domain.models import FieldAccessError, FieldError
from datamirror.encoders.json_text import as_json
from datamirror.encoders.query_string import as_query_string
from datamirror.statements.binder import bound_values
from datamirror.statements.predicate import where_clause


def print_catalog(catalog: FieldCatalog, console: Optional[Console] = None) -> None:
    """
    Render a record type's field catalog as a rich table, in binding order.
    """
    console = console or Console()

    table = Table(
        title=f"{catalog.record_type.__name__} field catalog",
        box=box.ROUNDED,
        caption="Sorted by upper-cased name (binding order)",
    )
    table.add_column("#", justify="right", style="blue")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Column", style="magenta")
    table.add_column("Type", style="green")

    for index, field in enumerate(catalog, start=1):
        table.add_row(str(index), field.name, field.column, field.type_tag.value)

    console.print(table)


def print_record(
    record: Any,
    catalog: FieldCatalog,
    exclude_keys: bool = False,
    console: Optional[Console] = None,
) -> None:
    """
    Render a record's field states followed by each of its external forms.
    """
    console = console or Console()

    fields_table = Table(title=escape_markup(catalog.describe(record)), box=box.ROUNDED)
    fields_table.add_column("Field", style="cyan", no_wrap=True)
    fields_table.add_column("Value", style="bold")
    fields_table.add_column("State", style="yellow")

    for field in catalog:
        try:
            value = read_value(record, field)
        except FieldAccessError as exc:
            fields_table.add_row(field.name, "[red]unreadable[/red]", escape_markup(str(exc)))
            continue
        fields_table.add_row(field.name, escape_markup(repr(value.value)), value.state.value)

    console.print(fields_table)

    outputs = Table(box=box.SIMPLE, show_header=False)
    outputs.add_column("Form", style="cyan", no_wrap=True)
    outputs.add_column("Output", overflow="fold")
    outputs.add_row("Query string", escape_markup(as_query_string(record)) or "[dim](empty)[/dim]")
    outputs.add_row("JSON", escape_markup(as_json(record)))
    outputs.add_row("Predicate", escape_markup(where_clause(record, exclude_keys)) or "[dim](empty)[/dim]")
    outputs.add_row("Bound values", escape_markup(repr(bound_values(record, exclude_keys))))
    console.print(outputs)


def print_errors(errors: Iterable[FieldError], console: Optional[Console] = None) -> None:
    """
    Render the error ledger of a request load, if any.
    """
    console = console or Console()
    errors = list(errors)

    if not errors:
        console.print("[green]All parameters converted.[/green]")
        return

    table = Table(title="Conversion errors", box=box.ROUNDED)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Raw value", style="red")
    for error in errors:
        table.add_row(error.name, escape_markup(repr(error.raw_value)))

    console.print(table)


__all__ = ["print_catalog", "print_errors", "print_record"]
