"""
Application configuration for the API layer.

Re-exports from core.config; import from there in new code:
    from core.config import get_settings, Settings
"""

from core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
