"""
KV-Gate: Bounded In-Memory Key-Value Store

A capacity-bounded, thread-safe key-value store served over HTTP,
built with Python asyncio.
"""

__version__ = "1.0.0"
