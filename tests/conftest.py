"""
Pytest Configuration and Fixtures

This module provides shared fixtures and configuration for all tests.
The `aiohttp_client` fixture comes from pytest-aiohttp.
"""

import asyncio
import socket
import pytest
import pytest_asyncio
from contextlib import closing
from typing import AsyncGenerator

from aiohttp import web
from aiohttp.test_utils import TestClient

from kvgate.cache.store import KVStore
from kvgate.config.settings import StoreConfig
from kvgate.network.http_server import KVServer, create_app
from kvgate.protocol.parser import ProtocolParser


def find_free_port() -> int:
    """Find an available port for testing."""
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(('', 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]


# ============================================================================
# KVStore Fixtures
# ============================================================================

@pytest.fixture
def store() -> KVStore:
    """Create a fresh KVStore instance with default size (100 keys)."""
    return KVStore(StoreConfig(capacity=100))


@pytest.fixture
def small_store() -> KVStore:
    """Create a KVStore with room for two entries, for capacity testing."""
    return KVStore(StoreConfig(capacity=2))


# ============================================================================
# Protocol Fixtures
# ============================================================================

@pytest.fixture
def parser() -> ProtocolParser:
    """Create a ProtocolParser instance."""
    return ProtocolParser()


# ============================================================================
# Application Fixtures
# ============================================================================

@pytest.fixture
def app(store: KVStore) -> web.Application:
    """Create the gateway application backed by the `store` fixture."""
    return create_app(store)


@pytest.fixture
def small_app(small_store: KVStore) -> web.Application:
    """Create the gateway application backed by a two-entry store."""
    return create_app(small_store)


@pytest_asyncio.fixture
async def client(app, aiohttp_client) -> TestClient:
    """Test client talking to `app` over a real local socket."""
    return await aiohttp_client(app)


@pytest_asyncio.fixture
async def small_client(small_app, aiohttp_client) -> TestClient:
    """Test client talking to `small_app`."""
    return await aiohttp_client(small_app)


# ============================================================================
# Server Fixtures
# ============================================================================

@pytest.fixture
def server_port() -> int:
    """Get a free port for server testing."""
    return find_free_port()


@pytest_asyncio.fixture
async def server(store: KVStore, server_port: int) -> AsyncGenerator[KVServer, None]:
    """
    Create and start a KVServer for lifecycle testing.

    This fixture:
    1. Creates a KVServer on a random free port
    2. Starts it in a background task
    3. Yields the server for testing
    4. Cleans up after the test
    """
    srv = KVServer(host='127.0.0.1', port=server_port, store=store)

    # Start server in background task
    server_task = asyncio.create_task(srv.start())

    # Wait for server to be ready
    await asyncio.sleep(0.1)

    yield srv

    # Cleanup
    await srv.stop()
    server_task.cancel()
    try:
        await server_task
    except asyncio.CancelledError:
        pass


async def send_raw(port: int, data: bytes) -> bytes:
    """Write raw bytes to a local port and read until the server closes."""
    reader, writer = await asyncio.open_connection('127.0.0.1', port)
    try:
        writer.write(data)
        await writer.drain()
        return await asyncio.wait_for(reader.read(), timeout=5)
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except ConnectionError:
            pass


@pytest.fixture
def raw_request():
    """
    Fixture exposing send_raw for framing tests.

    Usage:
        async def test_something(client, raw_request):
            data = await raw_request(client.port, b"NONSENSE\\r\\n\\r\\n")
    """
    return send_raw


# ============================================================================
# Pytest Configuration
# ============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
