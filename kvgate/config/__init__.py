"""Configuration module for KV-Gate."""

from .settings import Settings, StoreConfig, settings

__all__ = ["Settings", "StoreConfig", "settings"]
