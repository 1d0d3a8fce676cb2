from collections.abc import Sequence
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from cafe_gacha.api.dependencies import get_item_catalog
from cafe_gacha.models.gacha_pull import GachaPull
from cafe_gacha.models.player import Player
from cafe_gacha.schemas.common import APIResponse, PaginatedResponse
from cafe_gacha.schemas.player import CurrencyAdjustment, OwnedItemResponse, PlayerCreate
from cafe_gacha.services.item_catalog import ItemCatalog
from cafe_gacha.services.player import PlayerService

router = APIRouter(prefix="/players", tags=["players"])


@router.get("/")
async def get_players(
    service: Annotated[PlayerService, Depends()],
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1)] = 10,
) -> PaginatedResponse[Sequence[Player]]:
    players, pagination = await service.get_players(page=page, page_size=page_size)
    return PaginatedResponse(data=players, pagination=pagination)


@router.get("/{player_id}")
async def get_player(
    player_id: int, service: Annotated[PlayerService, Depends()]
) -> APIResponse[Player]:
    player = await service.get_player(player_id)
    if not player:
        raise HTTPException(status_code=404, detail="Player not found")
    return APIResponse(data=player)


@router.post("/")
async def create_player(
    player: PlayerCreate, service: Annotated[PlayerService, Depends()]
) -> APIResponse[Player]:
    created_player = await service.create_player(player)
    return APIResponse(data=created_player, message="Player created successfully")


@router.get("/{player_id}/items")
async def get_owned_items(
    player_id: int,
    service: Annotated[PlayerService, Depends()],
    catalog: Annotated[ItemCatalog, Depends(get_item_catalog)],
) -> APIResponse[list[OwnedItemResponse]]:
    owned_items = await service.get_owned_items(player_id)
    data = []
    for owned in owned_items:
        item = catalog.get_item(owned.item_id)
        data.append(
            OwnedItemResponse(
                item_id=item.id,
                display_name=item.display_name,
                rarity=item.rarity,
                level=owned.level,
                acquired_at=owned.acquired_at,
            )
        )
    return APIResponse(data=data)


@router.get("/{player_id}/pulls")
async def get_pull_history(
    player_id: int,
    service: Annotated[PlayerService, Depends()],
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(ge=1)] = 10,
    banner_id: Annotated[str | None, Query(description="Filter by banner ID")] = None,
) -> PaginatedResponse[Sequence[GachaPull]]:
    pulls, pagination = await service.get_pull_history(
        player_id, page=page, page_size=page_size, banner_id=banner_id
    )
    return PaginatedResponse(data=pulls, pagination=pagination)


@router.post("/{player_id}/currency/increase")
async def increase_currency(
    player_id: int, adjustment: CurrencyAdjustment, service: Annotated[PlayerService, Depends()]
) -> APIResponse[Player]:
    """Increase one of a player's balances."""
    player = await service.increase_currency(
        player_id, adjustment.currency, adjustment.amount, adjustment.reason
    )
    return APIResponse(
        data=player, message=f"Increased {adjustment.currency} by {adjustment.amount}"
    )


@router.post("/{player_id}/currency/decrease")
async def decrease_currency(
    player_id: int, adjustment: CurrencyAdjustment, service: Annotated[PlayerService, Depends()]
) -> APIResponse[Player]:
    """Decrease one of a player's balances."""
    player = await service.decrease_currency(
        player_id, adjustment.currency, adjustment.amount, adjustment.reason
    )
    return APIResponse(
        data=player, message=f"Decreased {adjustment.currency} by {adjustment.amount}"
    )
