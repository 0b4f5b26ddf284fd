"""Responses of the legacy ``id.twitch.tv/oauth2`` endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import Field

from twitch_helix.schemas.common import HelixModel


class AuthCodeResponse(HelixModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scopes: list[str] = Field(default_factory=list, alias="scope")
    token_type: Optional[str] = None


class RefreshResponse(HelixModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scopes: list[str] = Field(default_factory=list, alias="scope")
    token_type: Optional[str] = None


class AppAccessTokenResponse(HelixModel):
    access_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: Optional[str] = None


class ValidateAccessTokenResponse(HelixModel):
    client_id: Optional[str] = None
    login: Optional[str] = None
    user_id: Optional[str] = None
    scopes: list[str] = Field(default_factory=list)
    expires_in: Optional[int] = None
