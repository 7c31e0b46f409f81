"""Entry point: load config.yml and serve the bridge with uvicorn."""

from __future__ import annotations

import sys

import click
import uvicorn

from ghbridge.app import create_app
from ghbridge.config import (
    DEFAULT_CONFIG_PATH,
    ConfigurationError,
    ensure_config_file,
    load_settings,
)
from ghbridge.logs import get_logger, setup_logging

log = get_logger(__name__)


@click.command()
@click.option(
    "--config",
    "config_path",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    type=click.Path(dir_okay=False),
    help="Path to the YAML config file.",
)
def main(config_path: str) -> None:
    """Forward GitHub webhooks to a Discord channel."""
    setup_logging()
    try:
        if ensure_config_file(config_path):
            log.info("config_created", path=config_path, msg="Please update it with your Discord webhook URL")
            sys.exit(0)
        settings = load_settings(config_path)
    except ConfigurationError as exc:
        log.critical("config_error", path=config_path, error=str(exc))
        sys.exit(1)

    # Reconfigure with the level/format from the file
    setup_logging(settings.logging.level, settings.logging.json)
    if settings.discord.is_placeholder:
        log.warning("discord_webhook_placeholder", path=config_path)

    app = create_app(settings)
    log.info("server_starting", address=settings.listen_address)
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
