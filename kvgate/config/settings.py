"""
KV-Gate Configuration Settings

This module contains all configuration constants for the KV-Gate server.
The values are fixed for this version; nothing is read from the
environment or the command line.
"""

from dataclasses import dataclass


@dataclass
class Settings:
    """Server configuration settings."""

    # Network settings
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Store settings
    MAX_KEYS: int = 100

    # Request limits (enforced by aiohttp via client_max_size)
    MAX_BODY_SIZE: int = 1024 * 1024

    # Logging settings
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


@dataclass(frozen=True)
class StoreConfig:
    """
    Construction parameters for a KVStore.

    Attributes:
        capacity: Maximum number of live entries the store will hold
    """
    capacity: int

    def __post_init__(self):
        if self.capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {self.capacity}")

    @classmethod
    def from_settings(cls, source: Settings = None) -> "StoreConfig":
        """Build a StoreConfig from server settings (global settings by default)."""
        source = source if source is not None else settings
        return cls(capacity=source.MAX_KEYS)


# Global settings instance
settings = Settings()
