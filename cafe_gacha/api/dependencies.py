from typing import Annotated

from fastapi import Depends, Request

from cafe_gacha.services.banner_catalog import BannerCatalog
from cafe_gacha.services.gacha import GachaService
from cafe_gacha.services.item_catalog import ItemCatalog
from cafe_gacha.services.notifier import CompositeSink, EventLogSink, LoggingSink
from cafe_gacha.services.player_ledger import DatabaseLedger
from cafe_gacha.utils.locks import PlayerLocks


def get_item_catalog(request: Request) -> ItemCatalog:
    return request.app.state.item_catalog


def get_banner_catalog(request: Request) -> BannerCatalog:
    return request.app.state.banner_catalog


def get_player_locks(request: Request) -> PlayerLocks:
    return request.app.state.player_locks


def get_gacha_service(
    ledger: Annotated[DatabaseLedger, Depends()],
    event_log_sink: Annotated[EventLogSink, Depends()],
    items: Annotated[ItemCatalog, Depends(get_item_catalog)],
    banners: Annotated[BannerCatalog, Depends(get_banner_catalog)],
    locks: Annotated[PlayerLocks, Depends(get_player_locks)],
) -> GachaService:
    sink = CompositeSink(LoggingSink(), event_log_sink)
    return GachaService(ledger, items, banners, sink, locks=locks)
