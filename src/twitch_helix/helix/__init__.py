"""Helix REST API components.

:class:`Helix` groups one instance of each component around a shared
:class:`~twitch_helix.core.http.HttpCallHandler`::

    helix = Helix(http)
    await helix.moderation.get_moderators("1234")
"""

from __future__ import annotations

from twitch_helix.core.http import HttpCallHandler
from twitch_helix.helix.channels import Channels
from twitch_helix.helix.chat import Chat
from twitch_helix.helix.eventsub import EventSub
from twitch_helix.helix.moderation import Moderation

__all__ = ["Channels", "Chat", "EventSub", "Helix", "Moderation"]


class Helix:
    """Container for the Helix components sharing one call handler."""

    def __init__(self, http: HttpCallHandler) -> None:
        self.moderation = Moderation(http)
        self.channels = Channels(http)
        self.chat = Chat(http)
        self.eventsub = EventSub(http)
