from collections.abc import Iterable

from cafe_gacha.core.enums import Rarity
from cafe_gacha.core.exceptions import CatalogIntegrityError, ItemNotFoundError
from cafe_gacha.schemas.catalog import Item


class ItemCatalog:
    """Read-only lookup table of every pullable item, in declaration order."""

    def __init__(self, items: Iterable[Item]) -> None:
        self._items: dict[str, Item] = {}
        for item in items:
            if item.id in self._items:
                msg = f"Duplicate item id {item.id!r}"
                raise CatalogIntegrityError(msg)
            self._items[item.id] = item

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def get_item(self, item_id: str) -> Item:
        item = self._items.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)
        return item

    def list_items(self) -> list[Item]:
        return list(self._items.values())

    def list_by_rarity(self, rarity: Rarity) -> list[Item]:
        return [item for item in self._items.values() if item.rarity == rarity]
