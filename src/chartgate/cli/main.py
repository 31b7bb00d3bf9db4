#!/usr/bin/env python3
"""chartgate CLI main entry point."""

import logging
from pathlib import Path
from typing import Optional

import click

from . import __version__
from ..exceptions import ConfigurationError
from ..logging_integration import configure_logging_from_config, ensure_logging_configured, get_logger
from .commands import auth, config, download
from .utils.config_utils import get_or_create_config_manager

VERBOSITY_LEVELS = {0: None, 1: "INFO", 2: "DEBUG"}


def setup_logging(config_file: Optional[Path] = None, verbose: int = 0):
    """Set up logging from the configuration; returns the config manager."""
    config_manager = get_or_create_config_manager(config_file)
    level_override = VERBOSITY_LEVELS.get(min(verbose, 2))
    try:
        app_config = config_manager.load_config()
    except ConfigurationError as e:
        # Commands report the configuration error themselves
        ensure_logging_configured()
        logging.getLogger("chartgate.cli").debug(f"Using default logging: {e.message}")
        return config_manager

    configure_logging_from_config(app_config, service_name="chartgate-cli", version=__version__,
                                  level_override=level_override)
    logger = get_logger("chartgate.cli")
    logger.debug("chartgate CLI started", version=__version__, verbose_level=verbose)
    return config_manager


@click.group()
@click.version_option(version=__version__, prog_name="chartgate")
@click.option(
    "--config", "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file path"
)
@click.option(
    "--verbose", "-v",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG)"
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: int) -> None:
    """chartgate: historical prices from Yahoo Finance through a real browser session.

    \b
    Examples:
        chartgate download -t AAPL
        chartgate download -t MSFT --start 2023-01-01 --end 2024-01-01
        chartgate download -t GOOGL --start 2024-12-01 --interval 1h
        chartgate auth status
    """
    config_manager = setup_logging(config, verbose)

    ctx.ensure_object(dict)
    ctx.obj['config_file'] = config
    ctx.obj['config_manager'] = config_manager
    ctx.obj['verbose'] = verbose


cli.add_command(download.download)
cli.add_command(auth.auth)
cli.add_command(config.config)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
