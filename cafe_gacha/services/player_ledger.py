from typing import Annotated

from fastapi import Depends
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from cafe_gacha.core.db import get_db
from cafe_gacha.core.enums import Currency
from cafe_gacha.core.exceptions import InsufficientFundsError, PlayerNotFoundError
from cafe_gacha.models.gacha_pity import GachaPity
from cafe_gacha.models.gacha_pull import GachaPull
from cafe_gacha.models.owned_item import OwnedItem
from cafe_gacha.models.player import Player
from cafe_gacha.schemas.gacha import PullOutcome


class DatabaseLedger:
    """Ledger stored in the players, owned_items and gacha_pity tables.

    Every mutation is flushed immediately so that later reads in the same
    batch observe it, but nothing is committed until ``save`` is called.
    """

    def __init__(self, db: Annotated[AsyncSession, Depends(get_db)]) -> None:
        self.db = db

    async def _get_player(self, player_id: int) -> Player:
        result = await self.db.exec(select(Player).where(Player.id == player_id))
        player = result.first()
        if not player:
            raise PlayerNotFoundError(player_id)
        return player

    async def _get_pity_record(self, player_id: int, banner_id: str) -> GachaPity | None:
        result = await self.db.exec(
            select(GachaPity).where(
                GachaPity.player_id == player_id, GachaPity.banner_id == banner_id
            )
        )
        return result.first()

    async def get_balance(self, player_id: int, currency: Currency) -> int:
        player = await self._get_player(player_id)
        return getattr(player, currency.value)

    async def debit(self, player_id: int, currency: Currency, amount: int) -> None:
        player = await self._get_player(player_id)
        balance: int = getattr(player, currency.value)
        if balance < amount:
            raise InsufficientFundsError(currency, required=amount, available=balance)

        setattr(player, currency.value, balance - amount)
        self.db.add(player)
        await self.db.flush()

    async def credit(self, player_id: int, currency: Currency, amount: int) -> None:
        player = await self._get_player(player_id)
        setattr(player, currency.value, getattr(player, currency.value) + amount)
        self.db.add(player)
        await self.db.flush()

    async def has_item(self, player_id: int, item_id: str) -> bool:
        result = await self.db.exec(
            select(OwnedItem).where(OwnedItem.player_id == player_id, OwnedItem.item_id == item_id)
        )
        return result.first() is not None

    async def add_item(self, player_id: int, item_id: str) -> None:
        self.db.add(OwnedItem(player_id=player_id, item_id=item_id, level=1))
        await self.db.flush()

    async def get_pity(self, player_id: int, banner_id: str) -> int:
        pity = await self._get_pity_record(player_id, banner_id)
        return pity.pity_count if pity else 0

    async def set_pity(self, player_id: int, banner_id: str, value: int) -> None:
        pity = await self._get_pity_record(player_id, banner_id)
        if pity:
            pity.pity_count = value
        else:
            pity = GachaPity(player_id=player_id, banner_id=banner_id, pity_count=value)

        self.db.add(pity)
        await self.db.flush()

    async def record_pull(self, player_id: int, banner_id: str, outcome: PullOutcome) -> None:
        pull_log = GachaPull(
            player_id=player_id,
            banner_id=banner_id,
            item_id=outcome.item_id,
            rarity=outcome.rarity,
            is_duplicate=outcome.is_duplicate,
            was_guaranteed=outcome.was_guaranteed,
            tokens_awarded=outcome.tokens_awarded,
        )
        self.db.add(pull_log)

    async def save(self) -> None:
        await self.db.commit()
