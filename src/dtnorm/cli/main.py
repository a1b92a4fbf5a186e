from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ..clock import FixedClock, HostClock, parse_offset
from ..comparison import compare
from ..formatting import STRATEGIES, format, to_local, to_utc, utc_to_local
from ..oadates import from_oadate, oadate_to_local_string, to_oadate
from ..offsets import (
    local_offset_minutes,
    local_offset_string,
    standard_offset_minutes,
    to_standard_offset_local,
)
from .base import configure_logging, format_result, get_dtnorm_version, get_logger, handle_errors

logger = get_logger(__name__)

app = typer.Typer(
    help="Datetime normalization console",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
)

ValueArg = Annotated[str, typer.Argument(help="Datetime string, or epoch ms with --epoch-ms")]
PatternArg = Annotated[str, typer.Argument(help="Output pattern, e.g. 'YYYY-MM-DD HH:mm:ss Z'")]
GivenPatternOpt = Annotated[
    str | None,
    typer.Option("-g", "--given-pattern", help="Input pattern for non-standard strings"),
]
EpochMsOpt = Annotated[
    bool,
    typer.Option("--epoch-ms", help="Treat VALUE as epoch milliseconds"),
]


def _version_callback(show: bool) -> None:
    if show:
        typer.echo(get_dtnorm_version())
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    utc_offset: Annotated[
        str | None,
        typer.Option(
            "--utc-offset",
            help="Pin the host offset (e.g. '+08:00', '-0530', 'Z' or minutes)",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Enable debug logging"),
    ] = False,
    show_version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """Format, convert and compare datetimes over numeric UTC offsets."""
    configure_logging(logging.DEBUG if verbose else logging.WARNING)
    clock: HostClock | None = None
    if utc_offset is not None:
        with handle_errors("--utc-offset", logger=logger):
            clock = FixedClock(parse_offset(utc_offset))
    ctx.obj = clock


def _coerce(value: str, epoch_ms: bool) -> str | float:
    if not epoch_ms:
        return value
    try:
        return float(value)
    except ValueError as exc:
        raise typer.BadParameter(f"not a number: {value!r}") from exc


@app.command("format")
def format_command(
    ctx: typer.Context,
    value: ValueArg,
    pattern: PatternArg,
    given_pattern: GivenPatternOpt = None,
    epoch_ms: EpochMsOpt = False,
    strategy: Annotated[
        str,
        typer.Option("--strategy", help=f"Zero-offset resolution: {', '.join(STRATEGIES)}"),
    ] = "tagged",
) -> None:
    """Format a datetime, keeping the offset it was written with."""
    with handle_errors("format", logger=logger):
        result = format(
            _coerce(value, epoch_ms), pattern, given_pattern, strategy=strategy, clock=ctx.obj
        )
        typer.echo(format_result(result))


@app.command("local")
def local_command(
    ctx: typer.Context,
    value: ValueArg,
    pattern: PatternArg,
    given_pattern: GivenPatternOpt = None,
    epoch_ms: EpochMsOpt = False,
) -> None:
    """Render a datetime in host-local time."""
    with handle_errors("local", logger=logger):
        typer.echo(to_local(_coerce(value, epoch_ms), pattern, given_pattern, clock=ctx.obj))


@app.command("utc")
def utc_command(
    ctx: typer.Context,
    value: ValueArg,
    pattern: PatternArg,
    given_pattern: GivenPatternOpt = None,
    epoch_ms: EpochMsOpt = False,
) -> None:
    """Render a datetime in UTC."""
    with handle_errors("utc", logger=logger):
        typer.echo(to_utc(_coerce(value, epoch_ms), pattern, given_pattern, clock=ctx.obj))


@app.command("utc-to-local")
def utc_to_local_command(
    ctx: typer.Context,
    value: ValueArg,
    pattern: PatternArg,
    given_pattern: GivenPatternOpt = None,
) -> None:
    """Render a UTC datetime (offset marker optional) in host-local time."""
    with handle_errors("utc-to-local", logger=logger):
        typer.echo(utc_to_local(value, pattern, given_pattern, clock=ctx.obj))


@app.command("dst")
def dst_command(
    ctx: typer.Context,
    value: ValueArg,
    pattern: PatternArg,
    given_pattern: GivenPatternOpt = None,
    epoch_ms: EpochMsOpt = False,
) -> None:
    """Render a datetime as local time with the active DST shift removed."""
    with handle_errors("dst", logger=logger):
        typer.echo(
            to_standard_offset_local(_coerce(value, epoch_ms), pattern, given_pattern, clock=ctx.obj)
        )


@app.command("offsets")
def offsets_command(ctx: typer.Context) -> None:
    """Show the host's current and standard UTC offsets."""
    with handle_errors("offsets", logger=logger):
        current = local_offset_minutes(clock=ctx.obj)
        standard = standard_offset_minutes(clock=ctx.obj)
        table = Table(title="Host offsets")
        table.add_column("offset")
        table.add_column("value", justify="right")
        table.add_row("current", local_offset_string(clock=ctx.obj))
        table.add_row("current (minutes)", str(current))
        table.add_row("standard (minutes)", str(standard))
        table.add_row("dst active", "yes" if current != standard else "no")
        Console().print(table)


@app.command("oadate")
def oadate_command(
    ctx: typer.Context,
    value: ValueArg,
    epoch_ms: EpochMsOpt = False,
) -> None:
    """Convert a datetime to an OLE Automation date."""
    with handle_errors("oadate", logger=logger):
        typer.echo(format_result(to_oadate(_coerce(value, epoch_ms), clock=ctx.obj)))


@app.command("from-oadate")
def from_oadate_command(
    ctx: typer.Context,
    value: Annotated[float, typer.Argument(help="OADate day count")],
    pattern: Annotated[
        str | None,
        typer.Option("-p", "--pattern", help="Render as local time instead of epoch ms"),
    ] = None,
) -> None:
    """Convert an OLE Automation date to epoch ms or a local datetime string."""
    with handle_errors("from-oadate", logger=logger):
        if pattern:
            typer.echo(oadate_to_local_string(value, pattern, clock=ctx.obj))
        else:
            typer.echo(format_result(from_oadate(value)))


@app.command("compare")
def compare_command(
    ctx: typer.Context,
    a: Annotated[str, typer.Argument(help="First datetime")],
    b: Annotated[str, typer.Argument(help="Second datetime")],
) -> None:
    """Print 1, -1 or 0 as A is after, before or in the same second as B."""
    with handle_errors("compare", logger=logger):
        typer.echo(format_result(compare(a, b, clock=ctx.obj)))


def main() -> None:
    """Main entry point for package CLI.

    Invokes the Typer application, which handles command parsing and
    execution.

    Side Effects:
        - Processes CLI arguments and executes commands.
        - May exit with non-zero code on errors.
    """
    app()


if __name__ == "__main__":
    main()
