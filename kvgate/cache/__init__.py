"""Cache module for KV-Gate."""

from .store import KVStore

__all__ = ["KVStore"]
