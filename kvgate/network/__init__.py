"""Network module for KV-Gate."""

from .http_server import KVServer

__all__ = ["KVServer"]
