from typing import Annotated

from fastapi import APIRouter, Depends

from cafe_gacha.api.dependencies import get_banner_catalog
from cafe_gacha.schemas.catalog import Banner
from cafe_gacha.schemas.common import APIResponse
from cafe_gacha.schemas.gacha import BannerPoolEntry
from cafe_gacha.services.banner_catalog import BannerCatalog
from cafe_gacha.utils.misc import get_utc_now

router = APIRouter(prefix="/banners", tags=["banners"])


@router.get("/")
async def get_active_banners(
    catalog: Annotated[BannerCatalog, Depends(get_banner_catalog)],
) -> APIResponse[list[Banner]]:
    """Get banners that are open right now, in catalog order."""
    return APIResponse(data=catalog.list_active(get_utc_now()))


@router.get("/{banner_id}")
async def get_banner(
    banner_id: str, catalog: Annotated[BannerCatalog, Depends(get_banner_catalog)]
) -> APIResponse[Banner]:
    return APIResponse(data=catalog.get(banner_id))


@router.get("/{banner_id}/pool")
async def get_banner_pool(
    banner_id: str, catalog: Annotated[BannerCatalog, Depends(get_banner_catalog)]
) -> APIResponse[list[BannerPoolEntry]]:
    """Get every item in a banner's pool with its drop probability."""
    banner = catalog.get(banner_id)
    total_weight = banner.total_weight
    data = [
        BannerPoolEntry(
            item=catalog.items.get_item(entry.item_id),
            weight=entry.weight,
            probability=entry.weight / total_weight,
        )
        for entry in banner.pool
    ]
    return APIResponse(data=data)
