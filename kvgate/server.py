#!/usr/bin/env python3
"""
KV-Gate Server Entry Point

This is the main entry point for starting the KV-Gate server.

Usage:
    python -m kvgate.server      # Listens on 0.0.0.0:8080 with 100 slots
    kvgate                       # Same, via the console script

The port and store capacity are fixed in kvgate.config.settings; there
are no command line flags or environment variables.
"""

import asyncio
import logging
import signal
import sys

from .cache.store import KVStore
from .config.settings import StoreConfig, settings
from .network.http_server import KVServer


def setup_logging(debug: bool = False) -> None:
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL, logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


def build_server() -> KVServer:
    """Create the store from settings and wire it into a server."""
    store = KVStore(StoreConfig.from_settings(settings))
    return KVServer(host=settings.HOST, port=settings.PORT, store=store)


def main() -> None:
    """Main entry point for the server."""
    setup_logging(debug=settings.DEBUG)
    logger = logging.getLogger(__name__)

    server = build_server()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    async def shutdown(sig: signal.Signals) -> None:
        """Handle shutdown signal."""
        logger.info(f"Received signal {sig.name}, initiating shutdown...")
        await server.stop()

    # Register signal handlers (Unix only)
    if sys.platform != 'win32':
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.add_signal_handler(
                sig,
                lambda s=sig: asyncio.create_task(shutdown(s))
            )

    logger.info("Starting KV-Gate server")
    logger.info(f"  Host: {server.host}")
    logger.info(f"  Port: {server.port}")
    logger.info(f"  Capacity: {server.store.capacity}")

    try:
        loop.run_until_complete(server.start())
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received")
        loop.run_until_complete(server.stop())
    except Exception as e:
        logger.error(f"Server error: {e}")
        raise
    finally:
        loop.run_until_complete(loop.shutdown_asyncgens())
        loop.close()
        logger.info("Server shutdown complete")


if __name__ == "__main__":
    main()
