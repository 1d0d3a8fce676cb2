import os
import tempfile
from pathlib import Path

# Settings are read at import time, so point them at a scratch database first
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="cafe_gacha_tests_"))
os.environ["DB_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'api.db'}"
os.environ["CREATE_TABLES"] = "true"
os.environ.pop("CATALOG_PATH", None)

import datetime  # noqa: E402
import random  # noqa: E402
from collections.abc import AsyncGenerator, Callable, Iterable  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402
from sqlmodel.ext.asyncio.session import AsyncSession  # noqa: E402

import cafe_gacha.models  # noqa: E402, F401
from cafe_gacha.core.enums import Affinity, Rarity  # noqa: E402
from cafe_gacha.schemas.catalog import Banner, Item, PityRule, WeightedEntry  # noqa: E402
from cafe_gacha.schemas.gacha import PullCompletedEvent  # noqa: E402
from cafe_gacha.services.banner_catalog import BannerCatalog  # noqa: E402
from cafe_gacha.services.gacha import GachaService  # noqa: E402
from cafe_gacha.services.item_catalog import ItemCatalog  # noqa: E402
from cafe_gacha.services.ledger import InMemoryLedger  # noqa: E402

NOW = datetime.datetime(2026, 10, 19, 12, 0, tzinfo=datetime.UTC)
PLAYER_ID = 1


class ScriptedRandom(random.Random):
    """Returns a fixed sequence of rolls, repeating the last one once exhausted."""

    def __init__(self, rolls: Iterable[float]) -> None:
        super().__init__(0)
        self.rolls = list(rolls)

    def random(self) -> float:
        if len(self.rolls) > 1:
            return self.rolls.pop(0)
        return self.rolls[0]


class RecordingSink:
    def __init__(self) -> None:
        self.events: list[tuple[int, PullCompletedEvent]] = []

    async def emit(self, player_id: int, event: PullCompletedEvent) -> None:
        self.events.append((player_id, event))


def make_item(item_id: str, rarity: Rarity, affinity: Affinity = Affinity.SWEET) -> Item:
    return Item(
        id=item_id,
        display_name=item_id.replace("_", " ").title(),
        affinity=affinity,
        rarity=rarity,
        base_power=rarity.stars * 10,
    )


def make_banner(
    pool: dict[str, float],
    *,
    banner_id: str = "standard",
    pity: PityRule | None = None,
    cost_per_pull: int = 1,
    active_from: datetime.datetime = NOW - datetime.timedelta(days=7),
    active_until: datetime.datetime = NOW + datetime.timedelta(days=7),
) -> Banner:
    return Banner(
        id=banner_id,
        display_name=banner_id.title(),
        active_from=active_from,
        active_until=active_until,
        pool=tuple(
            WeightedEntry(item_id=item_id, weight=weight) for item_id, weight in pool.items()
        ),
        pity=pity,
        cost_per_pull=cost_per_pull,
    )


@pytest.fixture
def items() -> ItemCatalog:
    return ItemCatalog(
        [
            make_item("sweet_vanilla", Rarity.THREE_STAR),
            make_item("salty_pretzel", Rarity.THREE_STAR, Affinity.SALTY),
            make_item("sweet_truffle", Rarity.FOUR_STAR),
            make_item("bitter_espresso", Rarity.FOUR_STAR, Affinity.BITTER),
            make_item("sweet_ambrosia", Rarity.FIVE_STAR),
        ]
    )


@pytest.fixture
def ledger() -> InMemoryLedger:
    return InMemoryLedger()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def make_service(
    items: ItemCatalog, ledger: InMemoryLedger, sink: RecordingSink
) -> Callable[..., GachaService]:
    def factory(
        *banners: Banner, rng: random.Random | None = None, now: datetime.datetime = NOW
    ) -> GachaService:
        return GachaService(
            ledger,
            items,
            BannerCatalog(banners, items),
            sink,
            rng=rng or random.Random(1234),
            clock=lambda: now,
        )

    return factory


@pytest.fixture
async def db_session() -> AsyncGenerator[AsyncSession]:
    engine = create_async_engine(
        "sqlite+aiosqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(
        engine, autocommit=False, autoflush=False, expire_on_commit=False
    ) as session:
        yield session

    await engine.dispose()
