"""CLI entrypoint for gis-functions."""

from __future__ import annotations

import logging
import math

import click
import pandas as pd
from rich.console import Console
from rich.table import Table

from gis_functions.config import FunctionConfig
from gis_functions.errors import GisError, MalformedGeometryText
from gis_functions.functions import FUNCTION_MAP, create_function
from gis_functions.functions.base import (
    DoubleColumn,
    DoubleConstant,
    StrColumn,
    StrConstant,
)

logger = logging.getLogger(__name__)

console = Console()


def _constant(type_code: str, raw: str):
    if raw.lower() == "null":
        return DoubleConstant(None) if type_code == "D" else StrConstant(None)
    if type_code == "D":
        try:
            return DoubleConstant(float(raw))
        except ValueError:
            raise click.BadParameter(f"{raw!r} is not a number")
    return StrConstant(raw)


def _operand(type_code: str, raw: str):
    """``$name`` is a column reference, anything else a constant."""
    if raw.startswith("$"):
        return DoubleColumn(raw[1:]) if type_code == "D" else StrColumn(raw[1:])
    return _constant(type_code, raw)


def _call(ctx: click.Context, name: str, raw_args: tuple[str, ...]):
    factory = FUNCTION_MAP[name]
    if len(raw_args) != len(factory.arg_types):
        raise click.UsageError(f"{factory.signature} takes {len(factory.arg_types)} argument(s), got {len(raw_args)}")
    args = [_operand(t, raw) for t, raw in zip(factory.arg_types, raw_args)]
    try:
        return create_function(name, args, configuration=ctx.obj)
    except GisError as exc:
        raise click.ClickException(str(exc))


def _show(value) -> str:
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return "null"
    return str(value)


@click.group()
@click.pass_context
def cli(ctx: click.Context):
    """Geometry functions: parse, build and measure geometry text."""
    try:
        config = FunctionConfig.from_env()
    except ValueError as exc:
        raise click.ClickException(str(exc))
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    ctx.obj = config


@cli.command()
@click.argument("text")
@click.pass_context
def canonical(ctx: click.Context, text: str):
    """Print the canonical form of geometry TEXT."""
    function = _call(ctx, "st_geomfromtext", (text,))
    console.print(_show(function.get_str(None)), highlight=False)


@cli.command()
@click.argument("geom_a")
@click.argument("geom_b")
@click.pass_context
def distance(ctx: click.Context, geom_a: str, geom_b: str):
    """Print the distance between two geometry texts."""
    function = _call(ctx, "st_distance", (geom_a, geom_b))
    console.print(_show(function.get_double(None)), highlight=False)


@cli.command("make-point")
@click.argument("lon")
@click.argument("lat")
@click.pass_context
def make_point(ctx: click.Context, lon: str, lat: str):
    """Print the geometry text of the point (LON, LAT)."""
    function = _call(ctx, "st_makepoint", (lon, lat))
    console.print(_show(function.get_str(None)), highlight=False)


@cli.command()
def functions():
    """List registered functions."""
    table = Table(title="Geometry Functions")
    table.add_column("Name", style="bold")
    table.add_column("Signature")
    table.add_column("Arguments", justify="right")

    for name, factory in sorted(FUNCTION_MAP.items()):
        table.add_row(name, factory.signature, str(len(factory.arg_types)))

    console.print(table)


@cli.command()
@click.argument("name", type=click.Choice(sorted(FUNCTION_MAP)))
@click.argument("args", nargs=-1)
@click.pass_context
def explain(ctx: click.Context, name: str, args: tuple[str, ...]):
    """Print the plan text of NAME applied to ARGS ($col for a column)."""
    function = _call(ctx, name, args)
    console.print(function.plan(), highlight=False)


@cli.command()
@click.argument("csv_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--column", default="wkt", help="Column holding geometry text.")
@click.option("--to", "target", required=True, help="Geometry text to measure from.")
@click.option("--skip-malformed", is_flag=True, help="Log and skip rows with bad geometry text.")
@click.option("--limit", default=50, help="Max rows to display.")
@click.pass_context
def scan(ctx: click.Context, csv_path: str, column: str, target: str, skip_malformed: bool, limit: int):
    """Evaluate st_distance(COLUMN, TO) for every row of a CSV file."""
    frame = pd.read_csv(csv_path, dtype=str)
    if column not in frame.columns:
        raise click.ClickException(f"column '{column}' not found in {csv_path}")

    function = _call(ctx, "st_distance", (f"${column}", target))

    table = Table(title=function.plan())
    table.add_column("Row", justify="right")
    table.add_column(column)
    table.add_column("Distance", justify="right")

    malformed = 0
    for index, record in enumerate(frame.to_dict("records")):
        try:
            value = _show(function.get_double(record))
        except MalformedGeometryText as exc:
            if not skip_malformed:
                raise click.ClickException(f"row {index}: {exc}")
            logger.warning("row %d: %s", index, exc)
            malformed += 1
            value = "[red]error[/]"
        if index < limit:
            table.add_row(str(index), _show(record[column]), value)

    console.print(table)
    if malformed:
        console.print(f"{malformed} malformed row(s) skipped", style="yellow")
