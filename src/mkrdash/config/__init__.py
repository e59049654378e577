"""
mkrdash configuration.

Settings come from MACKEREL_* environment variables, an optional .env file,
and CLI flags (which take precedence).
"""

from mkrdash.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
