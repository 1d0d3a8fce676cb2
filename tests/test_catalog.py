import datetime

import pytest

from cafe_gacha.core.enums import Rarity
from cafe_gacha.core.exceptions import (
    BannerNotFoundError,
    CatalogIntegrityError,
    ItemNotFoundError,
)
from cafe_gacha.schemas.catalog import PityRule
from cafe_gacha.services.banner_catalog import BannerCatalog
from cafe_gacha.services.item_catalog import ItemCatalog

from .conftest import NOW, make_banner, make_item

HARD_AND_SOFT = PityRule(
    hard_pity_count=60,
    hard_pity_tier=Rarity.FIVE_STAR,
    soft_pity_interval=10,
    soft_pity_tier=Rarity.FOUR_STAR,
)


class TestItemCatalog:
    def test_get_item(self, items: ItemCatalog) -> None:
        item = items.get_item("sweet_truffle")
        assert item.rarity == Rarity.FOUR_STAR
        assert item.display_name == "Sweet Truffle"

    def test_unknown_item_raises(self, items: ItemCatalog) -> None:
        with pytest.raises(ItemNotFoundError):
            items.get_item("mystery_flavor")

    def test_list_by_rarity_keeps_declaration_order(self, items: ItemCatalog) -> None:
        assert [item.id for item in items.list_by_rarity(Rarity.FOUR_STAR)] == [
            "sweet_truffle",
            "bitter_espresso",
        ]
        assert [item.id for item in items.list_by_rarity(Rarity.FIVE_STAR)] == ["sweet_ambrosia"]

    def test_duplicate_item_id_is_rejected(self) -> None:
        with pytest.raises(CatalogIntegrityError, match="Duplicate item id"):
            ItemCatalog(
                [
                    make_item("sweet_vanilla", Rarity.THREE_STAR),
                    make_item("sweet_vanilla", Rarity.FOUR_STAR),
                ]
            )

    def test_rarity_ordering(self) -> None:
        assert Rarity.THREE_STAR < Rarity.FOUR_STAR < Rarity.FIVE_STAR
        assert max([Rarity.FOUR_STAR, Rarity.FIVE_STAR, Rarity.THREE_STAR]) == Rarity.FIVE_STAR


class TestBannerCatalog:
    def test_list_active_uses_half_open_window_and_declaration_order(
        self, items: ItemCatalog
    ) -> None:
        later = make_banner(
            {"sweet_vanilla": 1},
            banner_id="later",
            active_from=NOW,
            active_until=NOW + datetime.timedelta(days=1),
        )
        ended = make_banner(
            {"sweet_vanilla": 1},
            banner_id="ended",
            active_from=NOW - datetime.timedelta(days=1),
            active_until=NOW,
        )
        standard = make_banner({"sweet_vanilla": 1}, banner_id="standard")
        catalog = BannerCatalog([later, ended, standard], items)

        assert [banner.id for banner in catalog.list_active(NOW)] == ["later", "standard"]
        assert [banner.id for banner in catalog.list_banners()] == ["later", "ended", "standard"]

    def test_get_unknown_banner(self, items: ItemCatalog) -> None:
        catalog = BannerCatalog([make_banner({"sweet_vanilla": 1})], items)
        with pytest.raises(BannerNotFoundError):
            catalog.get("limited")

    def test_get_active_rejects_inactive_banner(self, items: ItemCatalog) -> None:
        catalog = BannerCatalog([make_banner({"sweet_vanilla": 1})], items)
        with pytest.raises(BannerNotFoundError) as exc_info:
            catalog.get_active("standard", NOW + datetime.timedelta(days=30))
        assert exc_info.value.inactive

    def test_unknown_item_reference_is_rejected(self, items: ItemCatalog) -> None:
        with pytest.raises(CatalogIntegrityError, match="unknown item"):
            BannerCatalog([make_banner({"sweet_vanilla": 1, "mystery_flavor": 1})], items)

    @pytest.mark.parametrize("cost", [0, -1])
    def test_non_positive_cost_is_rejected(self, items: ItemCatalog, cost: int) -> None:
        with pytest.raises(CatalogIntegrityError, match="cost per pull"):
            BannerCatalog([make_banner({"sweet_vanilla": 1}, cost_per_pull=cost)], items)

    def test_non_positive_weight_is_rejected(self, items: ItemCatalog) -> None:
        with pytest.raises(CatalogIntegrityError, match="non-positive weight"):
            BannerCatalog([make_banner({"sweet_vanilla": 5, "salty_pretzel": -5})], items)

    @pytest.mark.parametrize("weight", [float("nan"), float("inf")])
    def test_non_finite_weight_is_rejected(self, items: ItemCatalog, weight: float) -> None:
        with pytest.raises(CatalogIntegrityError, match="non-finite weight"):
            BannerCatalog([make_banner({"sweet_vanilla": weight, "sweet_ambrosia": 1})], items)

    def test_empty_pool_is_rejected(self, items: ItemCatalog) -> None:
        with pytest.raises(CatalogIntegrityError, match="no positive weight"):
            BannerCatalog([make_banner({})], items)

    def test_soft_pity_without_hard_pity_is_rejected(self, items: ItemCatalog) -> None:
        pity = PityRule(soft_pity_interval=10, soft_pity_tier=Rarity.FOUR_STAR)
        with pytest.raises(CatalogIntegrityError, match="hard pity"):
            BannerCatalog([make_banner({"sweet_vanilla": 1}, pity=pity)], items)

    def test_soft_pity_needs_interval_and_tier(self, items: ItemCatalog) -> None:
        pity = PityRule(hard_pity_count=60, hard_pity_tier=Rarity.FIVE_STAR, soft_pity_interval=10)
        with pytest.raises(CatalogIntegrityError, match="soft pity"):
            BannerCatalog([make_banner({"sweet_vanilla": 1}, pity=pity)], items)

    def test_duplicate_banner_id_is_rejected(self, items: ItemCatalog) -> None:
        banner = make_banner({"sweet_vanilla": 1})
        with pytest.raises(CatalogIntegrityError, match="Duplicate banner id"):
            BannerCatalog([banner, banner], items)

    def test_empty_window_is_rejected(self, items: ItemCatalog) -> None:
        banner = make_banner({"sweet_vanilla": 1}, active_from=NOW, active_until=NOW)
        with pytest.raises(CatalogIntegrityError, match="active window"):
            BannerCatalog([banner], items)

    def test_top_tier_comes_from_hard_pity(self, items: ItemCatalog) -> None:
        pity = PityRule(hard_pity_count=10, hard_pity_tier=Rarity.FOUR_STAR)
        banner = make_banner({"sweet_vanilla": 90, "sweet_truffle": 10}, pity=pity)
        catalog = BannerCatalog([banner], items)
        assert catalog.top_tier(banner) == Rarity.FOUR_STAR

    def test_top_tier_without_pity_is_highest_pool_rarity(self, items: ItemCatalog) -> None:
        banner = make_banner({"sweet_vanilla": 90, "bitter_espresso": 10})
        catalog = BannerCatalog([banner], items)
        assert catalog.top_tier(banner) == Rarity.FOUR_STAR

    def test_pool_for_rarity_leaves_banner_pool_untouched(self, items: ItemCatalog) -> None:
        banner = make_banner(
            {"sweet_vanilla": 70, "sweet_truffle": 27, "sweet_ambrosia": 3}, pity=HARD_AND_SOFT
        )
        catalog = BannerCatalog([banner], items)

        restricted = catalog.pool_for_rarity(banner, Rarity.FIVE_STAR)

        assert [entry.item_id for entry in restricted] == ["sweet_ambrosia"]
        assert len(banner.pool) == 3
        assert banner.total_weight == 100
