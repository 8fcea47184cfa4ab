"""
HTTP Server Module

This module implements the request gateway for KV-Gate: an aiohttp
application whose three routes each map one request onto exactly one
KVStore call.

Endpoints:
  POST   /add            {"key": k, "value": v}  -> 201 | 409 | 400 | 413
  GET    /get?key=k                              -> 200 | 404
  DELETE /delete?key=k                           -> 200 | 404

Any other method on these paths gets 405 before the store is touched.
Store calls are handed to worker threads with asyncio.to_thread, so
requests reach the store in parallel and only ever wait on its lock.
"""

import asyncio
import logging
from typing import Optional

from aiohttp import hdrs, web

from ..cache.store import KVStore
from ..config.settings import settings
from ..protocol.commands import Response
from ..protocol.parser import ProtocolParser

logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", KVStore)
PARSER_KEY = web.AppKey("parser", ProtocolParser)


def create_app(store: KVStore) -> web.Application:
    """Create the aiohttp web application serving `store`."""
    app = web.Application(
        client_max_size=settings.MAX_BODY_SIZE,
        middlewares=[not_found_middleware],
    )
    app[STORE_KEY] = store
    app[PARSER_KEY] = ProtocolParser()

    # "*" so a wrong method reaches the handler and gets the gateway's 405
    app.router.add_route("*", "/add", handle_add)
    app.router.add_route("*", "/get", handle_get)
    app.router.add_route("*", "/delete", handle_delete)

    return app


@web.middleware
async def not_found_middleware(request: web.Request, handler):
    """Answer unrouted paths with a plain-text 404."""
    try:
        return await handler(request)
    except web.HTTPNotFound:
        return Response.page_not_found().to_web()


def _wrong_method(request: web.Request, expected: str) -> bool:
    if request.method == expected:
        return False
    logger.warning(f"Invalid request method {request.method} for {request.path}")
    return True


async def handle_add(request: web.Request) -> web.Response:
    """POST /add: insert or overwrite one entry."""
    if _wrong_method(request, hdrs.METH_POST):
        return Response.method_not_allowed().to_web()

    try:
        body = await request.read()
    except web.HTTPRequestEntityTooLarge:
        logger.warning(f"Request body too large for {request.path}")
        return Response.body_too_large().to_web()

    pair = request.app[PARSER_KEY].parse_insert_body(body)
    if pair is None:
        logger.warning(f"Invalid request body for {request.path}")
        return Response.invalid_body().to_web()

    key, value = pair
    store = request.app[STORE_KEY]
    if await asyncio.to_thread(store.insert, key, value):
        return Response.added(key, value).to_web()

    logger.info(f"Store is full, rejected insert of {key!r}")
    return Response.store_full().to_web()


async def handle_get(request: web.Request) -> web.Response:
    """GET /get?key=k: fetch one entry. A missing key parameter is the empty key."""
    if _wrong_method(request, hdrs.METH_GET):
        return Response.method_not_allowed().to_web()

    key = request.query.get("key", "")
    value, found = await asyncio.to_thread(request.app[STORE_KEY].fetch, key)
    if found:
        return Response.retrieved(key, value).to_web()
    return Response.key_not_found().to_web()


async def handle_delete(request: web.Request) -> web.Response:
    """DELETE /delete?key=k: remove one entry."""
    if _wrong_method(request, hdrs.METH_DELETE):
        return Response.method_not_allowed().to_web()

    key = request.query.get("key", "")
    if await asyncio.to_thread(request.app[STORE_KEY].remove, key):
        return Response.deleted(key).to_web()
    return Response.key_not_found().to_web()


class KVServer:
    """
    Lifecycle wrapper around the KV-Gate application.

    Usage:
        store = KVStore(StoreConfig(capacity=100))
        server = KVServer(host='0.0.0.0', port=8080, store=store)
        await server.start()  # Runs until stop()

    Attributes:
        host: Server bind address (e.g., '0.0.0.0')
        port: Server port number (e.g., 8080)
        store: The KVStore instance shared by all requests
        app: The aiohttp application
    """

    def __init__(
            self,
            host: str = None,
            port: int = None,
            store: KVStore = None,
    ):
        """
        Initialize the server.

        Args:
            host: Bind address (default from settings)
            port: Port number (default from settings)
            store: KVStore instance (creates new one if not provided)
        """
        self.host = host if host is not None else settings.HOST
        self.port = port if port is not None else settings.PORT
        self.store = store if store is not None else KVStore()
        self.app = create_app(self.store)

        # Server state
        self._running = False
        self._stopping: Optional[asyncio.Event] = None
        self._closed: Optional[asyncio.Event] = None

    async def start(self) -> None:
        """
        Start serving and block until stop() is called or the task is cancelled.

        Example:
            server = KVServer(port=8080)
            asyncio.run(server.start())
        """
        if self._running:
            return

        runner = web.AppRunner(self.app)
        await runner.setup()
        site = web.TCPSite(runner, self.host, self.port)
        await site.start()

        self._stopping = asyncio.Event()
        self._closed = asyncio.Event()
        self._running = True
        logger.info(f"Server is running on {self.host}:{self.port}")

        try:
            await self._stopping.wait()
        except asyncio.CancelledError:
            # Expected during shutdown/fixture cleanup
            logger.debug("Server start cancelled")
        finally:
            self._running = False
            self._stopping = None
            # Closes idle keep-alive connections too
            await runner.cleanup()
            self._closed.set()

    async def stop(self) -> None:
        """Stop the server and wait until its sockets are closed."""
        stopping, closed = self._stopping, self._closed
        if stopping is None:
            return

        stopping.set()
        await closed.wait()

    def is_running(self) -> bool:
        """Check if the server is currently running."""
        return self._running

    def get_stats(self) -> dict:
        """
        Get server statistics.

        Returns:
            Dictionary with the server address, running state and
            store statistics.
        """
        return {
            "running": self._running,
            "host": self.host,
            "port": self.port,
            "store_stats": self.store.get_stats(),
        }
