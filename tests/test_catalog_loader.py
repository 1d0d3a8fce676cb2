import json
from pathlib import Path
from typing import Any

import pytest

from cafe_gacha.core.enums import Rarity
from cafe_gacha.core.exceptions import CatalogIntegrityError
from cafe_gacha.services.catalog_loader import load_catalogs, parse_catalogs


def _catalog_data(**banner_overrides: Any) -> dict[str, Any]:
    banner = {
        "id": "standard",
        "display_name": "Standard",
        "active_from": "2025-01-01T00:00:00Z",
        "active_until": "2030-01-01T00:00:00Z",
        "cost_per_pull": 1,
        "pool": [{"item_id": "sweet_vanilla", "weight": 5}],
        "rarity_weights": {"4★": 2},
    }
    banner.update(banner_overrides)
    return {
        "items": [
            {
                "id": "sweet_vanilla",
                "display_name": "Vanilla Delight",
                "affinity": "Sweet",
                "rarity": "3★",
                "base_power": 10,
            },
            {
                "id": "sweet_truffle",
                "display_name": "Truffle",
                "affinity": "Sweet",
                "rarity": "4★",
                "base_power": 30,
            },
            {
                "id": "salty_ocean",
                "display_name": "Ocean Breeze",
                "affinity": "Salty",
                "rarity": "4★",
                "base_power": 30,
            },
        ],
        "banners": [banner],
    }


def test_bundled_catalog() -> None:
    items, banners = load_catalogs()

    assert len(items) == 30
    assert len(items.list_by_rarity(Rarity.THREE_STAR)) == 15
    assert len(items.list_by_rarity(Rarity.FOUR_STAR)) == 10
    assert len(items.list_by_rarity(Rarity.FIVE_STAR)) == 5
    assert [banner.id for banner in banners.list_banners()] == ["standard", "featured"]

    standard = banners.get("standard")
    assert len(standard.pool) == 30
    assert standard.total_weight == 15 * 70 + 10 * 27 + 5 * 3
    assert standard.pity is not None
    assert standard.pity.hard_pity_count == 60
    assert banners.top_tier(standard) == Rarity.FIVE_STAR

    featured = banners.get("featured")
    assert featured.total_weight == 15 * 65 + 10 * 27 + 5 * 8


def test_rarity_weights_expand_after_explicit_pool() -> None:
    _, banners = parse_catalogs(_catalog_data())

    pool = banners.get("standard").pool
    assert [(entry.item_id, entry.weight) for entry in pool] == [
        ("sweet_vanilla", 5),
        ("sweet_truffle", 2),
        ("salty_ocean", 2),
    ]


def test_schema_errors_become_integrity_errors() -> None:
    data = _catalog_data()
    data["items"][0]["rarity"] = "6★"

    with pytest.raises(CatalogIntegrityError, match="Invalid catalog data"):
        parse_catalogs(data)


def test_naive_window_is_rejected() -> None:
    with pytest.raises(CatalogIntegrityError):
        parse_catalogs(_catalog_data(active_from="2025-01-01T00:00:00"))


def test_unknown_pool_item_is_rejected() -> None:
    data = _catalog_data(pool=[{"item_id": "mystery_flavor", "weight": 1}])

    with pytest.raises(CatalogIntegrityError, match="mystery_flavor"):
        parse_catalogs(data)


def test_load_from_file(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(_catalog_data()), encoding="utf-8")

    items, banners = load_catalogs(path)

    assert len(items) == 3
    assert banners.get("standard").cost_per_pull == 1


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(CatalogIntegrityError, match="Cannot read catalog file"):
        load_catalogs(tmp_path / "missing.json")


def test_malformed_json(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(CatalogIntegrityError, match="Cannot read catalog file"):
        load_catalogs(path)


@pytest.mark.parametrize("literal", ["NaN", "Infinity"])
def test_non_finite_weight_in_file_is_rejected(tmp_path: Path, literal: str) -> None:
    path = tmp_path / "catalog.json"
    text = json.dumps(_catalog_data(pool=[{"item_id": "sweet_vanilla", "weight": 1}]))
    path.write_text(text.replace('"weight": 1', f'"weight": {literal}'), encoding="utf-8")

    with pytest.raises(CatalogIntegrityError, match="non-finite weight"):
        load_catalogs(path)


def test_non_finite_rarity_weight_is_rejected() -> None:
    data = _catalog_data(rarity_weights={"4★": float("nan")})

    with pytest.raises(CatalogIntegrityError, match="non-finite weight"):
        parse_catalogs(data)
