import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import ValidationError

from cafe_gacha.core.exceptions import CatalogIntegrityError
from cafe_gacha.schemas.catalog import Banner, WeightedEntry
from cafe_gacha.schemas.catalog_file import BannerDefinition, CatalogFile
from cafe_gacha.services.banner_catalog import BannerCatalog
from cafe_gacha.services.item_catalog import ItemCatalog

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "data" / "catalog.json"


def _build_banner(definition: BannerDefinition, items: ItemCatalog) -> Banner:
    pool = list(definition.pool)
    for rarity, weight in definition.rarity_weights.items():
        pool.extend(
            WeightedEntry(item_id=item.id, weight=weight) for item in items.list_by_rarity(rarity)
        )

    return Banner(
        id=definition.id,
        display_name=definition.display_name,
        active_from=definition.active_from,
        active_until=definition.active_until,
        pool=tuple(pool),
        pity=definition.pity,
        cost_per_pull=definition.cost_per_pull,
    )


def parse_catalogs(data: dict[str, Any]) -> tuple[ItemCatalog, BannerCatalog]:
    """Build both catalogs from already-decoded catalog data.

    Raises:
        CatalogIntegrityError: If the data does not match the catalog schema or
            any banner fails validation.
    """
    try:
        catalog_file = CatalogFile.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid catalog data: {e}"
        raise CatalogIntegrityError(msg) from e

    items = ItemCatalog(catalog_file.items)
    banners = BannerCatalog(
        (_build_banner(definition, items) for definition in catalog_file.banners), items
    )
    return items, banners


def load_catalogs(path: Path | None = None) -> tuple[ItemCatalog, BannerCatalog]:
    """Load the item and banner catalogs from a JSON file.

    Args:
        path: Catalog file to read; the bundled catalog is used when omitted.
    """
    catalog_path = path or DEFAULT_CATALOG_PATH
    try:
        data = json.loads(catalog_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot read catalog file {catalog_path}: {e}"
        raise CatalogIntegrityError(msg) from e

    items, banners = parse_catalogs(data)
    logger.info(
        f"Loaded catalog from {catalog_path}: {len(items)} items, "
        f"{len(banners.list_banners())} banners"
    )
    return items, banners
