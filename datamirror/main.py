from __future__ import annotations

import importlib
import sys
from typing import List, Optional, Tuple

import typer

from datamirror.codec.sources import RequestParameters
from datamirror.config import get_settings
from datamirror.domain.catalog import FieldCatalog, catalog_for
from datamirror.domain.models import TypeIntrospectionError
from datamirror.encoders.mapping import as_map
from datamirror.loaders.request import load_from_request
from datamirror.reporter import print_catalog, print_errors, print_record
from datamirror.utils.logging import configure_logging

app = typer.Typer(help="DataMirror CLI: inspect how records map to parameters, rows and text.")


def _load_catalog(target: str) -> FieldCatalog:
    """
    Resolve ``module:ClassName`` to the catalog of that record type.
    """
    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise typer.BadParameter(f"Expected module:ClassName, got {target!r}")
    try:
        record_type = getattr(importlib.import_module(module_name), attr)
    except (ImportError, AttributeError) as exc:
        raise typer.BadParameter(f"Cannot import {target!r}: {exc}") from exc
    try:
        return catalog_for(record_type)
    except TypeIntrospectionError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc


def _split_params(values: List[str]) -> List[Tuple[str, str]]:
    pairs = []
    for item in values:
        name, sep, value = item.partition("=")
        if not sep:
            raise typer.BadParameter(f"Expected name=value, got {item!r}")
        pairs.append((name, value))
    return pairs


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"encoding={settings.text_encoding} separator={settings.index_separator!r} "
        f"ledger={settings.error_ledger_size} key_marker={settings.key_marker} "
        f"fallback_number=1{settings.grouping_separator}234{settings.decimal_separator}5"
    )


@app.command()
def catalog(
    target: str = typer.Argument(..., help="Record type as module:ClassName."),
) -> None:
    """
    Print the field catalog of a record type.
    """
    configure_logging(level=get_settings().log_level, json_logs=get_settings().log_json)
    print_catalog(_load_catalog(target))


@app.command()
def mirror(
    target: str = typer.Argument(..., help="Record type as module:ClassName."),
    param: Optional[List[str]] = typer.Option(
        None,
        "--param",
        "-p",
        help="Request parameter as name=value (repeatable).",
    ),
    query: Optional[str] = typer.Option(
        None,
        "--query",
        "-q",
        help="Request parameters as a query string (a=1&b=x), added to --param values.",
    ),
    url_decode: bool = typer.Option(
        False, "--url-decode", help="Percent-decode text parameters with the legacy encoding."
    ),
    exclude_keys: bool = typer.Option(
        False, "--exclude-keys", help="Leave key fields out of the predicate and bound values."
    ),
) -> None:
    """
    Load a blank record from request parameters and print every mapped form.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    record_catalog = _load_catalog(target)

    pairs = _split_params(param or [])
    if query:
        pairs.extend(RequestParameters.from_query_string(query, settings.text_encoding).items())

    try:
        record = record_catalog.new_instance()
    except TypeIntrospectionError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    result = load_from_request(record, RequestParameters(pairs), url_decode)
    print_record(result.record, record_catalog, exclude_keys=exclude_keys)
    typer.echo(f"Map: {as_map(result.record).copy()!r}")
    print_errors(result.errors)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
