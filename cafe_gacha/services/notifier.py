from typing import Annotated, Protocol

from fastapi import Depends
from loguru import logger
from sqlmodel.ext.asyncio.session import AsyncSession

from cafe_gacha.core.db import get_db
from cafe_gacha.core.enums import EventType
from cafe_gacha.models.event_log import EventLog
from cafe_gacha.schemas.gacha import PullCompletedEvent


class NotificationSink(Protocol):
    async def emit(self, player_id: int, event: PullCompletedEvent) -> None: ...


class LoggingSink:
    async def emit(self, player_id: int, event: PullCompletedEvent) -> None:
        logger.bind(event=event.event).info(
            f"Player {player_id} completed {event.pull_count} pull(s) on {event.banner_id} "
            f"(tickets={event.tickets_spent}, diamonds={event.premium_spent})"
        )


class EventLogSink:
    """Stores pull notifications in the event_logs table."""

    def __init__(self, db: Annotated[AsyncSession, Depends(get_db)]) -> None:
        self.db = db

    async def emit(self, player_id: int, event: PullCompletedEvent) -> None:
        event_log = EventLog(
            player_id=player_id,
            event_type=EventType.PULL_COMPLETED,
            context=event.model_dump(exclude={"event", "player_id"}),
        )
        self.db.add(event_log)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise


class CompositeSink:
    """Fans an event out to every sink.

    Events arrive after the batch is saved; a failing sink is logged and skipped.
    """

    def __init__(self, *sinks: NotificationSink) -> None:
        self.sinks = sinks

    async def emit(self, player_id: int, event: PullCompletedEvent) -> None:
        for sink in self.sinks:
            try:
                await sink.emit(player_id, event)
            except Exception:  # noqa: BLE001
                logger.opt(exception=True).error(
                    f"{type(sink).__name__} failed to deliver {event.event} for player {player_id}"
                )
