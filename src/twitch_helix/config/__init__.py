"""Configuration package for twitch-helix.

Re-exports the settings symbols so that callers can write::

    from twitch_helix.config import get_settings
"""

from __future__ import annotations

from twitch_helix.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
