from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from cafe_gacha.utils.misc import get_utc_iso_now

T = TypeVar("T")


class PaginationData(BaseModel):
    page: int
    page_size: int
    total_items: int
    total_pages: int


class APIResponse(BaseModel, Generic[T]):
    status: Literal["success", "error"] = "success"
    data: T | None = None
    message: str | None = None
    code: str | None = None
    """Machine-readable error code for outcomes the client must handle specifically"""
    timestamp: str = Field(default_factory=get_utc_iso_now)

    pagination: PaginationData | None = None


class PaginatedResponse(APIResponse[T], Generic[T]):
    """API response format for paginated results."""

    data: T | None = None
    pagination: PaginationData  # pyright: ignore[reportGeneralTypeIssues]
