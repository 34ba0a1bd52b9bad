# MCP server for the Adobe Target Admin API
# Main module initialization

import sys

__version__ = "2.0.0"


def main() -> None:
    """CLI entry point: serve MCP over stdio.

    Exits 0 on SIGINT/SIGTERM and 1 when startup fails.
    """
    import asyncio
    import logging

    from .config import get_settings
    from .server import configure_logging, serve

    logger = logging.getLogger(__name__)

    try:
        settings = get_settings()
    except Exception as e:
        configure_logging()
        logger.error(f"Fatal error: invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)

    try:
        asyncio.run(serve(settings))
    except (KeyboardInterrupt, asyncio.CancelledError):
        logger.info("Shutting down...")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)
