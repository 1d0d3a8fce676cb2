import datetime
import math
from collections.abc import Iterable

from cafe_gacha.core.enums import Rarity
from cafe_gacha.core.exceptions import BannerNotFoundError, CatalogIntegrityError
from cafe_gacha.schemas.catalog import Banner, WeightedEntry
from cafe_gacha.services.item_catalog import ItemCatalog


class BannerCatalog:
    """Named, time-windowed pull configurations.

    Every banner is validated against the item catalog when the catalog is
    built; a single bad banner raises ``CatalogIntegrityError``.
    """

    def __init__(self, banners: Iterable[Banner], items: ItemCatalog) -> None:
        self.items = items
        self._banners: dict[str, Banner] = {}
        self._top_tiers: dict[str, Rarity] = {}

        for banner in banners:
            if banner.id in self._banners:
                msg = f"Duplicate banner id {banner.id!r}"
                raise CatalogIntegrityError(msg)
            self._validate(banner)
            self._banners[banner.id] = banner
            self._top_tiers[banner.id] = self._resolve_top_tier(banner)

    def _validate(self, banner: Banner) -> None:
        if banner.cost_per_pull <= 0:
            msg = f"Banner {banner.id!r} has non-positive cost per pull {banner.cost_per_pull}"
            raise CatalogIntegrityError(msg)

        if banner.active_until <= banner.active_from:
            msg = f"Banner {banner.id!r} has an empty active window"
            raise CatalogIntegrityError(msg)

        for entry in banner.pool:
            if entry.item_id not in self.items:
                msg = f"Banner {banner.id!r} references unknown item {entry.item_id!r}"
                raise CatalogIntegrityError(msg)
            if not math.isfinite(entry.weight):
                msg = f"Banner {banner.id!r} has non-finite weight for {entry.item_id!r}"
                raise CatalogIntegrityError(msg)
            if entry.weight <= 0:
                msg = f"Banner {banner.id!r} has non-positive weight for {entry.item_id!r}"
                raise CatalogIntegrityError(msg)

        if banner.total_weight <= 0:
            msg = f"Banner {banner.id!r} pool has no positive weight"
            raise CatalogIntegrityError(msg)

        pity = banner.pity
        if pity is None:
            return

        if not pity.has_hard_pity:
            msg = f"Banner {banner.id!r} defines pity without a hard pity count and tier"
            raise CatalogIntegrityError(msg)
        if pity.hard_pity_count is not None and pity.hard_pity_count < 1:
            msg = f"Banner {banner.id!r} hard pity count must be at least 1"
            raise CatalogIntegrityError(msg)
        if pity.has_soft_pity and (pity.soft_pity_interval is None or pity.soft_pity_tier is None):
            msg = f"Banner {banner.id!r} soft pity needs both an interval and a tier"
            raise CatalogIntegrityError(msg)
        if pity.soft_pity_interval is not None and pity.soft_pity_interval < 1:
            msg = f"Banner {banner.id!r} soft pity interval must be at least 1"
            raise CatalogIntegrityError(msg)

    def _resolve_top_tier(self, banner: Banner) -> Rarity:
        if banner.pity is not None and banner.pity.hard_pity_tier is not None:
            return banner.pity.hard_pity_tier
        return max(self.items.get_item(entry.item_id).rarity for entry in banner.pool)

    def get(self, banner_id: str) -> Banner:
        banner = self._banners.get(banner_id)
        if banner is None:
            raise BannerNotFoundError(banner_id)
        return banner

    def get_active(self, banner_id: str, now: datetime.datetime) -> Banner:
        banner = self.get(banner_id)
        if not banner.is_active(now):
            raise BannerNotFoundError(banner_id, inactive=True)
        return banner

    def list_banners(self) -> list[Banner]:
        return list(self._banners.values())

    def list_active(self, now: datetime.datetime) -> list[Banner]:
        """Banners open at ``now``, in declaration order."""
        return [banner for banner in self._banners.values() if banner.is_active(now)]

    def top_tier(self, banner: Banner) -> Rarity:
        """The rarity whose arrival resets the banner's pity counter."""
        return self._top_tiers[banner.id]

    def pool_for_rarity(self, banner: Banner, rarity: Rarity) -> tuple[WeightedEntry, ...]:
        """A fresh view of the banner pool restricted to one rarity."""
        return tuple(
            entry for entry in banner.pool if self.items.get_item(entry.item_id).rarity == rarity
        )
