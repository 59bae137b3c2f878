"""
CLI tool for geohash_lib.

Computes today's geohash for the caller's position. Latitude and
longitude come from the command line (two arguments) or are prompted
for on stdin (no arguments); only their integer parts matter.
"""

import asyncio
import logging
import sys
from datetime import date

import click
from pydantic import ValidationError

from geohash_lib.config_schemas import load_settings
from geohash_lib.data_fetchers.index_price_fetcher import IndexPriceFetcher
from geohash_lib.exceptions import GeohashError, InvalidInputError
from geohash_lib.hashing.canonical_key import format_canonical_date
from geohash_lib.hashing.geohasher import compute_destination
from geohash_lib.interfaces.coordinate import Coordinate
from geohash_lib.logging_config import configure_structlog

logger = logging.getLogger(__name__)


def _read_position(coords) -> Coordinate:
    """Position from the two positional arguments, or from prompts."""
    if len(coords) == 2:
        latitude, longitude = coords
    elif len(coords) == 0:
        latitude = click.prompt("Enter latitude", type=str)
        longitude = click.prompt("Enter longitude", type=str)
    else:
        raise click.UsageError(
            "Give latitude and longitude as two arguments, or none to be prompted"
        )

    try:
        return Coordinate.of(latitude, longitude)
    except InvalidInputError as e:
        raise click.BadParameter(str(e), param_hint="LATITUDE LONGITUDE") from e


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument('coords', nargs=-1)
@click.option('--date', 'day', type=click.DateTime(formats=["%Y-%m-%d"]),
              help='Geohash date (default: today)')
@click.option('--precision', type=int, help='Fractional digits per offset (default 14)')
@click.option('--digits', type=int, help='Significant digits in the short output (default 5)')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              envvar='GEOHASH_CONFIG', help='YAML settings file')
@click.option('--debug/--no-debug', default=False, help='Enable debug logging')
def cli(coords, day, precision, digits, config_path, debug):
    """Compute the xkcd geohash for LATITUDE LONGITUDE."""
    try:
        settings = load_settings(
            config_path,
            precision=precision,
            display_digits=digits,
            log_level='DEBUG' if debug else None,
        )
    except (ValidationError, ValueError) as e:
        click.echo(f"Error: invalid settings: {e}", err=True)
        sys.exit(1)

    configure_structlog(settings.log_level)

    today = day.date() if day else date.today()
    position = _read_position(coords)

    click.echo(f"Today's date: {format_canonical_date(today)}")

    fetcher = IndexPriceFetcher.from_settings(settings)
    try:
        result = asyncio.run(
            compute_destination(today, position, settings.precision, fetcher)
        )
    except GeohashError as e:
        click.echo(f"Error: {e}", err=True)
        logger.debug("Geohash computation failed", exc_info=True)
        sys.exit(1)

    click.echo(f"Most recent Dow opening: {result.index_opening}")
    click.echo("Your geohash:")
    destination = result.destination
    click.echo(
        f"{destination.to_simple_string(settings.display_digits)} "
        f"{destination.to_google_maps_url()}"
    )


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == '__main__':
    main()
