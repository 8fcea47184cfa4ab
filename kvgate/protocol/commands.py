"""
Protocol Response Definitions

This module defines the outcome of a gateway request as a status code and
a plain-text message, with named constructors for every outcome the
gateway can report.
"""

from dataclasses import dataclass

from aiohttp import web


@dataclass
class Response:
    """
    Represents a gateway response.

    Attributes:
        status: HTTP status code
        message: Plain-text response body (without trailing newline)
    """
    status: int
    message: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def to_web(self) -> web.Response:
        """Render as a newline-terminated text/plain aiohttp response."""
        return web.Response(text=f"{self.message}\n", status=self.status)

    @classmethod
    def ok(cls, message: str = "") -> "Response":
        """Create a successful response."""
        return cls(status=200, message=message)

    @classmethod
    def error(cls, message: str, status: int = 400) -> "Response":
        """Create an error response."""
        return cls(status=status, message=message)

    @classmethod
    def added(cls, key: str, value: str) -> "Response":
        """Create an 'added' response for inserts."""
        return cls(status=201, message=f"Added: {key} -> {value}")

    @classmethod
    def retrieved(cls, key: str, value: str) -> "Response":
        """Create a fetch response with a value."""
        return cls.ok(f"Retrieved: {key} -> {value}")

    @classmethod
    def deleted(cls, key: str) -> "Response":
        """Create a 'deleted' response for removals."""
        return cls.ok(f"Deleted key: {key}")

    @classmethod
    def store_full(cls) -> "Response":
        return cls.error("Store is full", status=409)

    @classmethod
    def key_not_found(cls) -> "Response":
        return cls.error("Key not found", status=404)

    @classmethod
    def method_not_allowed(cls) -> "Response":
        return cls.error("Invalid request method", status=405)

    @classmethod
    def invalid_body(cls) -> "Response":
        return cls.error("Invalid request body", status=400)

    @classmethod
    def body_too_large(cls) -> "Response":
        return cls.error("Request body too large", status=413)

    @classmethod
    def page_not_found(cls) -> "Response":
        """Create the response for a path with no route."""
        return cls.error("404 page not found", status=404)
