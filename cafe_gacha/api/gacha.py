from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cafe_gacha.api.dependencies import get_gacha_service
from cafe_gacha.schemas.common import APIResponse
from cafe_gacha.schemas.gacha import (
    CostQuote,
    GachaPityResponse,
    GachaPullRequest,
    PullBatchResult,
)
from cafe_gacha.services.gacha import GachaService
from cafe_gacha.services.player import PlayerService

router = APIRouter(prefix="/gacha", tags=["gacha"])


@router.post("/pull")
async def pull(
    request: GachaPullRequest, service: Annotated[GachaService, Depends(get_gacha_service)]
) -> APIResponse[PullBatchResult]:
    """Spend tickets (or diamonds converted to tickets) on a banner."""
    result = await service.pull(request.player_id, request.banner_id, request.count)
    return APIResponse(data=result, message=f"Pulled {request.count} time(s)")


@router.get("/quote")
async def quote(
    service: Annotated[GachaService, Depends(get_gacha_service)],
    player_id: int,
    banner_id: str,
    count: Annotated[int, Query(ge=1, le=10)] = 1,
) -> APIResponse[CostQuote]:
    """Show how a pull would be paid for, including any diamond conversion."""
    cost = await service.preview_cost(player_id, banner_id, count)
    return APIResponse(data=cost)


@router.get("/pity/{player_id}/{banner_id}")
async def get_pity(
    player_id: int,
    banner_id: str,
    service: Annotated[GachaService, Depends(get_gacha_service)],
    player_service: Annotated[PlayerService, Depends()],
) -> APIResponse[GachaPityResponse]:
    banner = service.banners.get(banner_id)
    await player_service.require_player(player_id)
    current_pity = await service.get_pity_count(player_id, banner_id)
    return APIResponse(
        data=GachaPityResponse(
            banner_id=banner.id,
            banner_name=banner.display_name,
            current_pity=current_pity,
            hard_pity_count=banner.pity.hard_pity_count if banner.pity else None,
        )
    )
