"""Protocol module for KV-Gate."""

from .commands import Response
from .parser import ProtocolParser

__all__ = [
    "Response",
    "ProtocolParser",
]
