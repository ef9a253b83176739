import logging

import click
from importlib.metadata import version as importlib_version

from .demo import demo, inspect_store

LOG_LEVELS = ["error", "warning", "info", "debug"]

_LOGGER = logging.getLogger(__name__)


@click.group()
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default="warning")
def cli(log_level: str) -> None:
    level = getattr(logging, log_level.upper())
    logging.basicConfig(level=level)
    _LOGGER.debug("lzoned version: %s", get_version())


@cli.command()
def version() -> None:
    """Print installed package version."""
    print(get_version())


def get_version() -> str:
    return importlib_version("lzoned")


cli.add_command(demo)
cli.add_command(inspect_store)

if __name__ == "__main__":
    cli()
