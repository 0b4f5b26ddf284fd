"""Request and response schemas for the ``/moderation`` endpoints."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field

from twitch_helix.schemas.common import (
    DataResponse,
    HelixModel,
    HelixRequestModel,
    PaginatedResponse,
)

# ---------------------------------------------------------------------------
# AutoMod
# ---------------------------------------------------------------------------


class ManageHeldAutoModMessageRequest(HelixRequestModel):
    user_id: str
    msg_id: str
    action: Literal["ALLOW", "DENY"]


class AutoModCheckMessage(HelixRequestModel):
    """One message to run through AutoMod without posting it."""

    msg_id: str
    msg_text: str


class CheckAutoModStatusRequest(HelixRequestModel):
    data: list[AutoModCheckMessage]


class AutoModStatus(HelixModel):
    msg_id: Optional[str] = None
    is_permitted: Optional[bool] = None


class CheckAutoModStatusResponse(DataResponse[AutoModStatus]):
    pass


class AutomodSettings(HelixModel):
    """A broadcaster's AutoMod levels (0 = off, 4 = most aggressive)."""

    broadcaster_id: Optional[str] = None
    moderator_id: Optional[str] = None
    overall_level: Optional[int] = None
    disability: Optional[int] = None
    aggression: Optional[int] = None
    sexuality_sex_or_gender: Optional[int] = None
    misogyny: Optional[int] = None
    bullying: Optional[int] = None
    swearing: Optional[int] = None
    race_ethnicity_or_religion: Optional[int] = None
    sex_based_terms: Optional[int] = None


class AutomodSettingsRequest(HelixRequestModel):
    """Either ``overall_level`` or any of the individual levels, not both."""

    overall_level: Optional[int] = None
    disability: Optional[int] = None
    aggression: Optional[int] = None
    sexuality_sex_or_gender: Optional[int] = None
    misogyny: Optional[int] = None
    bullying: Optional[int] = None
    swearing: Optional[int] = None
    race_ethnicity_or_religion: Optional[int] = None
    sex_based_terms: Optional[int] = None

    def individual_levels(self) -> dict[str, int]:
        return {
            name: value
            for name, value in self.model_dump(exclude={"overall_level"}).items()
            if value is not None
        }


class GetAutomodSettingsResponse(DataResponse[AutomodSettings]):
    pass


class UpdateAutomodSettingsResponse(DataResponse[AutomodSettings]):
    pass


# ---------------------------------------------------------------------------
# Bans
# ---------------------------------------------------------------------------


class BannedUser(HelixModel):
    user_id: Optional[str] = None
    user_login: Optional[str] = None
    user_name: Optional[str] = None
    expires_at: Optional[str] = None
    created_at: Optional[str] = None
    reason: Optional[str] = None
    moderator_id: Optional[str] = None
    moderator_login: Optional[str] = None
    moderator_name: Optional[str] = None


class GetBannedUsersResponse(PaginatedResponse[BannedUser]):
    pass


class BanUserRequest(HelixRequestModel):
    """Ban (``duration`` unset) or time out (``duration`` in seconds) a user."""

    user_id: str
    duration: Optional[int] = None
    reason: Optional[str] = None


class BanUserBody(HelixRequestModel):
    data: BanUserRequest


class BanResult(HelixModel):
    broadcaster_id: Optional[str] = None
    moderator_id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None
    end_time: Optional[str] = None


class BanUserResponse(DataResponse[BanResult]):
    pass


# ---------------------------------------------------------------------------
# Moderators
# ---------------------------------------------------------------------------


class Moderator(HelixModel):
    user_id: Optional[str] = None
    user_login: Optional[str] = None
    user_name: Optional[str] = None


class GetModeratorsResponse(PaginatedResponse[Moderator]):
    pass


class ModeratedChannel(HelixModel):
    broadcaster_id: Optional[str] = None
    broadcaster_login: Optional[str] = None
    broadcaster_name: Optional[str] = None


class GetModeratedChannelsResponse(PaginatedResponse[ModeratedChannel]):
    pass


# ---------------------------------------------------------------------------
# Blocked terms
# ---------------------------------------------------------------------------


class BlockedTerm(HelixModel):
    broadcaster_id: Optional[str] = None
    moderator_id: Optional[str] = None
    id: Optional[str] = None
    text: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    expires_at: Optional[str] = None


class GetBlockedTermsResponse(PaginatedResponse[BlockedTerm]):
    pass


class AddBlockedTermRequest(HelixRequestModel):
    text: str


class AddBlockedTermResponse(DataResponse[BlockedTerm]):
    pass


# ---------------------------------------------------------------------------
# Shield Mode
# ---------------------------------------------------------------------------


class ShieldModeStatus(HelixModel):
    is_active: Optional[bool] = None
    moderator_id: Optional[str] = None
    moderator_login: Optional[str] = None
    moderator_name: Optional[str] = None
    last_activated_at: Optional[str] = None


class GetShieldModeStatusResponse(DataResponse[ShieldModeStatus]):
    pass


class ShieldModeStatusRequest(HelixRequestModel):
    is_active: bool


class UpdateShieldModeStatusResponse(DataResponse[ShieldModeStatus]):
    """A list that contains a single object with the updated status."""


# ---------------------------------------------------------------------------
# Unban requests
# ---------------------------------------------------------------------------


class UnbanRequest(HelixModel):
    id: Optional[str] = None
    broadcaster_id: Optional[str] = None
    broadcaster_login: Optional[str] = None
    broadcaster_name: Optional[str] = None
    moderator_id: Optional[str] = None
    moderator_login: Optional[str] = None
    moderator_name: Optional[str] = None
    user_id: Optional[str] = None
    user_login: Optional[str] = None
    user_name: Optional[str] = None
    text: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    resolved_at: Optional[str] = None
    resolution_text: Optional[str] = None


class GetUnbanRequestsResponse(PaginatedResponse[UnbanRequest]):
    pass


class ResolveUnbanRequestsResponse(DataResponse[UnbanRequest]):
    pass


# ---------------------------------------------------------------------------
# Warnings
# ---------------------------------------------------------------------------


class WarnChatUserRequest(HelixRequestModel):
    user_id: str
    reason: str = Field(default="")


class WarnChatUserBody(HelixRequestModel):
    data: WarnChatUserRequest


class ChatWarning(HelixModel):
    broadcaster_id: Optional[str] = None
    user_id: Optional[str] = None
    moderator_id: Optional[str] = None
    reason: Optional[str] = None


class WarnChatUserResponse(DataResponse[ChatWarning]):
    pass
