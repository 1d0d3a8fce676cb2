from typing import Annotated

from fastapi import APIRouter, Depends, Query

from cafe_gacha.api.dependencies import get_item_catalog
from cafe_gacha.core.enums import Rarity
from cafe_gacha.schemas.catalog import Item
from cafe_gacha.schemas.common import APIResponse
from cafe_gacha.services.item_catalog import ItemCatalog

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/")
async def get_items(
    catalog: Annotated[ItemCatalog, Depends(get_item_catalog)],
    rarity: Annotated[Rarity | None, Query(description="Filter by rarity")] = None,
) -> APIResponse[list[Item]]:
    items = catalog.list_items() if rarity is None else catalog.list_by_rarity(rarity)
    return APIResponse(data=items)


@router.get("/{item_id}")
async def get_item(
    item_id: str, catalog: Annotated[ItemCatalog, Depends(get_item_catalog)]
) -> APIResponse[Item]:
    return APIResponse(data=catalog.get_item(item_id))
