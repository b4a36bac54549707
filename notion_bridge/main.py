"""Main entry point for the Notion bridge."""

import asyncio
import logging
import sys
from typing import List, Optional

from .config.config_loader import load_config
from .config.config_schema import AppConfig
from .notion.client import NotionClient
from .utils.logging import parse_verbosity, setup_logging, strip_verbosity
from .web.server import NotionBridgeServer

logger = logging.getLogger(__name__)


def create_server(config: AppConfig, notion: Optional[NotionClient] = None) -> NotionBridgeServer:
    """
    Build the server and its Notion client from configuration.

    Args:
        config: Application configuration
        notion: Client to use instead of one built from config.notion

    Returns:
        NotionBridgeServer ready to start
    """
    if notion is None:
        notion = NotionClient(
            api_key=config.notion.api_key,
            page_size=config.notion.page_size,
        )
    return NotionBridgeServer(config, notion)


async def main(argv: Optional[List[str]] = None) -> None:
    """Load configuration, set up logging and serve until stopped."""
    argv = sys.argv[1:] if argv is None else argv
    verbosity = parse_verbosity(argv)
    args = strip_verbosity(argv)
    config_path = args[0] if args else None

    try:
        config = load_config(config_path)
    except Exception as e:
        setup_logging(verbosity=verbosity)
        logger.error(f"✗ Failed to load configuration: {e}")
        sys.exit(1)

    setup_logging(verbosity=verbosity, log_file=config.logging.log_file)
    logger.info("Notion Bridge - Starting")
    if not config.auth.api_key:
        logger.warning("auth.api_key is not set; every request will fail with 500")

    server = create_server(config)
    logger.info(f"Listening on {server.get_url()}")
    await server.start()


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
