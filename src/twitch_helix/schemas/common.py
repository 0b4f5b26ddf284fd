"""Shared pydantic building blocks for Helix request and response schemas.

Every response field carries a default, so a field Twitch omits decodes as
``None`` (or an empty list) instead of failing the whole call.  Only a body
that is not JSON, or whose top-level shape is wrong, is rejected.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class HelixModel(BaseModel):
    """Base for response DTOs: immutable, unknown keys ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class HelixRequestModel(BaseModel):
    """Base for typed request bodies, serialized by ``encode_body()``."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class Pagination(HelixModel):
    """Cursor block returned by paginated list endpoints."""

    cursor: Optional[str] = None


class DataResponse(HelixModel, Generic[T]):
    """The conventional ``{"data": [...]}`` envelope."""

    data: list[T] = Field(default_factory=list)


class PaginatedResponse(DataResponse[T], Generic[T]):
    """``{"data": [...], "pagination": {"cursor": ...}}``."""

    pagination: Optional[Pagination] = None

    @property
    def cursor(self) -> str | None:
        """Cursor for the next page, or ``None`` on the last page."""
        return self.pagination.cursor if self.pagination else None


class TotalPaginatedResponse(PaginatedResponse[T], Generic[T]):
    """Paginated envelope that also reports the total number of items."""

    total: Optional[int] = None
