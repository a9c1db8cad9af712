"""
Gitor server entry point.

Usage:
    gitor-server
    gitor-server --config /etc/gitor/server-config.yml --verbose
"""

import logging
import sys

import click
import uvicorn

from gitor_server import __version__
from gitor_server.config import load_config
from gitor_server.exceptions import ConfigError
from gitor_server.main import create_app


def setup_logging(level: str = "INFO", verbose: bool = False):
    """Configure logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@click.command()
@click.option(
    "--config", "-c", "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Server config file (default: GITOR_SERVER_CONFIG env or ~/.config/gitor/server-config.yml)",
)
@click.option("--host", default=None, help="Address to listen on (overrides config)")
@click.option("--port", "-p", type=int, default=None, help="Port to listen on (overrides config)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(__version__)
def main(config_path: str | None, host: str | None, port: int | None, verbose: bool):
    """Serve the Gitor repository management API."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    setup_logging(config.log_level, verbose)
    app = create_app(config)

    uvicorn.run(
        app,
        host=host or config.host,
        port=port or config.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
