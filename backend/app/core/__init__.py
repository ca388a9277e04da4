"""Core module for shared utilities: config, errors, logging, security."""

from app.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
