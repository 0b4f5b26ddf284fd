"""Emote schemas for the ``/chat/emotes`` endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from twitch_helix.schemas.common import HelixModel


class EmoteImages(HelixModel):
    url_1x: Optional[str] = None
    url_2x: Optional[str] = None
    url_4x: Optional[str] = None


class Emote(HelixModel):
    id: Optional[str] = None
    name: Optional[str] = None
    images: Optional[EmoteImages] = None
    format: list[str] = Field(default_factory=list)
    scale: list[str] = Field(default_factory=list)
    theme_mode: list[str] = Field(default_factory=list)


class ChannelEmote(Emote):
    tier: Optional[str] = None
    emote_type: Optional[str] = None
    emote_set_id: Optional[str] = None


class EmoteSet(Emote):
    emote_type: Optional[str] = None
    emote_set_id: Optional[str] = None
    owner_id: Optional[str] = None


class _EmoteResponse(HelixModel):
    template: Optional[str] = None

    def image_url(
        self,
        emote: Emote,
        format: str = "static",
        theme_mode: str = "light",
        scale: str = "1.0",
    ) -> str | None:
        """Fill the CDN ``template`` for *emote*, or ``None`` without a template."""
        if not self.template or not emote.id:
            return None
        return (
            self.template.replace("{{id}}", emote.id)
            .replace("{{format}}", format)
            .replace("{{theme_mode}}", theme_mode)
            .replace("{{scale}}", scale)
        )


class GetChannelEmotesResponse(_EmoteResponse):
    data: list[ChannelEmote] = Field(default_factory=list)


class GetGlobalEmotesResponse(_EmoteResponse):
    data: list[Emote] = Field(default_factory=list)


class GetEmoteSetsResponse(_EmoteResponse):
    data: list[EmoteSet] = Field(default_factory=list)
