"""Developer CLI for inspecting field mappings and Salesforce datetimes.

Commands:
    fields       List the Salesforce field names a record class sends for a rank
    to-remote    Convert an ISO 8601 timestamp to the Salesforce wire format
    from-remote  Parse any date/time text the way responses are decoded

Usage: ``python -m salesforce_fieldmap fields myapp.records:Contact --rank 2``
"""
from __future__ import annotations

import importlib
import logging
from datetime import datetime
from typing import Optional

import typer
from pydantic import TypeAdapter, ValidationError

from .config import get_settings
from .exceptions import FieldMapError
from .mapper import eligible_field_names, from_remote_string, to_remote_string

app = typer.Typer(help="Salesforce field mapping CLI")

_DATETIME_ADAPTER = TypeAdapter(datetime)


def _load_target(target: str) -> type:
    """Import ``module:ClassName`` and return the class."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise typer.BadParameter("expected 'module:ClassName'", param_hint="TARGET")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"cannot import {module_name}: {e}", param_hint="TARGET") from e
    obj = module
    for part in attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as e:
            raise typer.BadParameter(f"{module_name} has no attribute {attr}", param_hint="TARGET") from e
    if not isinstance(obj, type):
        raise typer.BadParameter(f"{target} is not a class", param_hint="TARGET")
    return obj


@app.callback()
def main() -> None:  # pragma: no cover - simple callback
    """Configure logging for every command."""
    logging.basicConfig(level=get_settings().LOG_LEVEL)


@app.command(help="List Salesforce field names selected for a rank.")
def fields(
    target: str = typer.Argument(..., help="Record class as module:ClassName"),
    rank: int = typer.Option(0, "--rank", min=0, help="Requested rank (0 = all mapped fields)"),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help="Fail on duplicate Salesforce names (default from settings)"
    ),
) -> None:
    record_type = _load_target(target)
    try:
        names = eligible_field_names(record_type, rank, strict=strict)
    except FieldMapError as e:
        logging.getLogger(__name__).error("%s (%s)", e, e.code)
        raise typer.Exit(code=1) from e
    for name in names:
        typer.echo(name)


@app.command("to-remote", help="Convert an ISO 8601 timestamp to the Salesforce format.")
def to_remote(text: str = typer.Argument(..., help="e.g. 2024-03-05T14:30:00")) -> None:
    try:
        value = _DATETIME_ADAPTER.validate_python(text)
    except ValidationError as e:
        raise typer.BadParameter(f"not an ISO 8601 datetime: {text}", param_hint="TEXT") from e
    typer.echo(to_remote_string(value))


@app.command("from-remote", help="Parse date/time text into a UTC ISO timestamp.")
def from_remote(
    text: str = typer.Argument(..., help="Date/time text in any common format"),
    dayfirst: Optional[bool] = typer.Option(None, "--dayfirst/--monthfirst", help="Day-first ambiguous dates"),
    yearfirst: Optional[bool] = typer.Option(None, "--yearfirst/--no-yearfirst", help="Year-first ambiguous dates"),
) -> None:
    parsed = from_remote_string(text, dayfirst=dayfirst, yearfirst=yearfirst)
    if parsed is None:
        typer.echo(f"Unparseable date/time: {text}", err=True)
        raise typer.Exit(code=1)
    typer.echo(parsed.isoformat())


if __name__ == "__main__":  # pragma: no cover
    app()
