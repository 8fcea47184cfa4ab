"""
Protocol Parser Module

This module decodes insert payloads. HTTP framing, query strings and
method matching are left to aiohttp; the parser only turns a raw
request body into a (key, value) pair.

Decoding follows the usual JSON-to-struct rules:
- member names match case-insensitively, an exact "key"/"value" wins
- a missing or null member is the empty string
- any other non-string member makes the payload malformed
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class ProtocolParser:
    """
    Parser for KV-Gate insert payloads.

    Payload Format:
        {"key": "<key>", "value": "<value>"}

    Unknown members are ignored.
    """

    FIELDS = ("key", "value")

    def parse_insert_body(self, body: bytes) -> Optional[Tuple[str, str]]:
        """
        Decode an insert payload.

        Args:
            body: Raw request body, expected to be a JSON object

        Returns:
            (key, value), or None if the payload is malformed.

        Examples:
            >>> ProtocolParser().parse_insert_body(b'{"key": "a", "value": "1"}')
            ('a', '1')
            >>> ProtocolParser().parse_insert_body(b'{"Key": "a", "VALUE": null}')
            ('a', '')
            >>> ProtocolParser().parse_insert_body(b'[1, 2]') is None
            True
        """
        try:
            payload = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            logger.debug("Insert body is not valid UTF-8 JSON")
            return None

        if not isinstance(payload, dict):
            logger.debug(f"Insert body is a {type(payload).__name__}, expected an object")
            return None

        fields = []
        for name in self.FIELDS:
            member = self._lookup(payload, name)
            if member is None:
                member = ""
            if not isinstance(member, str):
                logger.debug(f"Insert body member {name!r} is not a string")
                return None
            fields.append(member)

        key, value = fields
        return key, value

    @staticmethod
    def _lookup(payload: Dict[str, Any], name: str) -> Any:
        """Find a member by exact name, else by the last case-insensitive match."""
        if name in payload:
            return payload[name]

        found = None
        for member, value in payload.items():
            if member.lower() == name:
                found = value
        return found
