from collections.abc import Sequence
from typing import Annotated

from fastapi import Depends
from sqlmodel import col, desc, func, select
from sqlmodel.ext.asyncio.session import AsyncSession

from cafe_gacha.core.db import get_db
from cafe_gacha.core.enums import Currency, EventType
from cafe_gacha.core.exceptions import InsufficientFundsError, PlayerNotFoundError
from cafe_gacha.models.event_log import EventLog
from cafe_gacha.models.gacha_pull import GachaPull
from cafe_gacha.models.owned_item import OwnedItem
from cafe_gacha.models.player import Player
from cafe_gacha.schemas.common import PaginationData
from cafe_gacha.schemas.player import PlayerCreate


class PlayerService:
    def __init__(self, db: Annotated[AsyncSession, Depends(get_db)]) -> None:
        self.db = db

    async def get_players(
        self, *, page: int, page_size: int
    ) -> tuple[Sequence[Player], PaginationData]:
        offset = (page - 1) * page_size

        total_items_result = await self.db.exec(select(func.count()).select_from(Player))
        total_items = total_items_result.one()

        total_pages = (total_items + page_size - 1) // page_size

        result = await self.db.exec(select(Player).offset(offset).limit(page_size))
        players = result.all()

        pagination = PaginationData(
            page=page, page_size=page_size, total_items=total_items, total_pages=total_pages
        )

        return players, pagination

    async def get_player(self, player_id: int) -> Player | None:
        result = await self.db.exec(select(Player).where(Player.id == player_id))
        return result.first()

    async def require_player(self, player_id: int) -> Player:
        player = await self.get_player(player_id)
        if not player:
            raise PlayerNotFoundError(player_id)
        return player

    async def create_player(self, data: PlayerCreate) -> Player:
        player = Player(**data.model_dump())
        self.db.add(player)
        await self.db.flush()

        event_log = EventLog(
            player_id=player.id,
            event_type=EventType.PLAYER_CREATED,
            context=data.model_dump(),
        )
        self.db.add(event_log)

        await self.db.commit()
        await self.db.refresh(player)
        return player

    async def get_owned_items(self, player_id: int) -> Sequence[OwnedItem]:
        """Get every item a player owns, oldest acquisition first."""
        await self.require_player(player_id)

        result = await self.db.exec(
            select(OwnedItem)
            .where(OwnedItem.player_id == player_id)
            .order_by(col(OwnedItem.acquired_at), col(OwnedItem.id))
        )
        return result.all()

    async def get_pull_history(
        self, player_id: int, *, page: int, page_size: int, banner_id: str | None = None
    ) -> tuple[Sequence[GachaPull], PaginationData]:
        """Get a player's individual pulls, newest first."""
        await self.require_player(player_id)
        offset = (page - 1) * page_size

        filters = [col(GachaPull.player_id) == player_id]
        if banner_id is not None:
            filters.append(col(GachaPull.banner_id) == banner_id)

        total_items_result = await self.db.exec(
            select(func.count()).select_from(GachaPull).where(*filters)
        )
        total_items = total_items_result.one()

        total_pages = (total_items + page_size - 1) // page_size

        result = await self.db.exec(
            select(GachaPull)
            .where(*filters)
            .order_by(desc(col(GachaPull.id)))
            .offset(offset)
            .limit(page_size)
        )
        pulls = result.all()

        pagination = PaginationData(
            page=page, page_size=page_size, total_items=total_items, total_pages=total_pages
        )

        return pulls, pagination

    async def _log_currency_event(  # noqa: PLR0913, PLR0917
        self, player_id: int, event_type: EventType, currency: Currency, amount: int, reason: str
    ) -> None:
        """Log a currency event to the event log."""
        event_log = EventLog(
            player_id=player_id,
            event_type=event_type,
            context={"currency": currency.value, "amount": amount, "reason": reason},
        )
        self.db.add(event_log)

    async def increase_currency(
        self, player_id: int, currency: Currency, amount: int, reason: str
    ) -> Player:
        """Increase one of a player's balances and log the event."""
        player = await self.require_player(player_id)

        setattr(player, currency.value, getattr(player, currency.value) + amount)
        self.db.add(player)

        await self._log_currency_event(
            player_id, EventType.ADMIN_INCREASE_CURRENCY, currency, amount, reason
        )

        await self.db.commit()
        await self.db.refresh(player)
        return player

    async def decrease_currency(
        self, player_id: int, currency: Currency, amount: int, reason: str
    ) -> Player:
        """Decrease one of a player's balances and log the event.

        Raises:
            PlayerNotFoundError: If the player does not exist.
            InsufficientFundsError: If the balance is lower than ``amount``.
        """
        player = await self.require_player(player_id)

        balance: int = getattr(player, currency.value)
        if balance < amount:
            raise InsufficientFundsError(currency, required=amount, available=balance)

        setattr(player, currency.value, balance - amount)
        self.db.add(player)

        await self._log_currency_event(
            player_id, EventType.ADMIN_DECREASE_CURRENCY, currency, amount, reason
        )

        await self.db.commit()
        await self.db.refresh(player)
        return player
