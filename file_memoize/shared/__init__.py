"""
Shared utilities module.

This module contains configuration and logging helpers used across all layers
of the package.
"""

from file_memoize.shared.config import Settings, default_cache_path, get_settings

__all__ = ["Settings", "default_cache_path", "get_settings"]
