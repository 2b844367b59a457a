"""
Command-line interface for PyGNSS-Obs.

Provides a CLI using Click for parsing RINEX observation files and
exporting the GPS measurements.
"""

from __future__ import annotations

import io
import sys
from pathlib import Path

import click

from pygnss_obs import __version__


@click.group()
@click.version_option(version=__version__, prog_name="PyGNSS-Obs")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug mode",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None, verbose: bool, debug: bool) -> None:
    """PyGNSS-Obs: RINEX observation file parser

    Reads GPS observations from RINEX 2, 3 and 4 observation files.
    """
    from pygnss_obs.core.config import load_settings
    from pygnss_obs.core.exceptions import ConfigurationError
    from pygnss_obs.utils.logging import setup_logging_from_config

    try:
        settings = load_settings(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    level = None
    if verbose:
        level = "INFO"
    if debug:
        level = "DEBUG"
    setup_logging_from_config(settings.logging, level)

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings
    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug


@cli.command()
@click.argument("rinex_file", type=click.Path(path_type=Path))
@click.option(
    "--format", "-f",
    type=click.Choice(["summary", "csv", "json"]),
    default="summary",
    help="Output format",
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    help="Output file path (default: stdout)",
)
@click.pass_context
def parse(
    ctx: click.Context,
    rinex_file: Path,
    format: str,
    output: Path | None,
) -> None:
    """Parse a RINEX observation file.

    Examples:

        # Show a summary
        pygnss-obs parse algo0150.24o

        # Export L1/L2 per epoch and satellite to CSV
        pygnss-obs parse ALGO00CAN_R_20240150000_01D_30S_MO.rnx -f csv -o algo.csv
    """
    from pygnss_obs.rinex.reader import parse as parse_file
    from pygnss_obs.rinex.writers import to_json, write_csv, write_csv_stream

    settings = ctx.obj["settings"]
    result = parse_file(rinex_file, settings.parser)

    if not result.success:
        click.echo(f"Error [{result.error_kind.value}]: {result.error}", err=True)
        sys.exit(1)

    obs = result.observations

    if format == "summary":
        text = obs.summary()
        if output:
            output.write_text(text + "\n")
        else:
            click.echo(text)

    elif format == "csv":
        if output:
            rows = write_csv(obs, output)
            click.echo(f"Wrote {rows} rows to {output}")
        else:
            buffer = io.StringIO()
            write_csv_stream(obs, buffer)
            click.echo(buffer.getvalue(), nl=False)

    elif format == "json":
        text = to_json(obs)
        if output:
            output.write_text(text + "\n")
            click.echo(f"Wrote {len(obs.epochs)} epochs to {output}")
        else:
            click.echo(text)


@cli.command()
@click.argument("rinex_file", type=click.Path(path_type=Path))
@click.pass_context
def header(ctx: click.Context, rinex_file: Path) -> None:
    """Show the version and GPS observation types of a file.

    Only the header is read; the data section is not parsed.
    """
    from pygnss_obs.core.exceptions import PyGNSSObsError
    from pygnss_obs.rinex.reader import RinexObsReader

    settings = ctx.obj["settings"]

    try:
        obs_header = RinexObsReader(settings.parser).read_header(rinex_file)
    except PyGNSSObsError as e:
        click.echo(f"Error [{e.kind.value}]: {e}", err=True)
        sys.exit(1)

    click.echo(f"RINEX version: {obs_header.version_string}")
    click.echo(f"Obs types ({obs_header.declared_count}): {' '.join(obs_header.obs_types)}")
    if obs_header.skipped_systems:
        click.echo(f"Skipped systems: {' '.join(obs_header.skipped_systems)}")


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
