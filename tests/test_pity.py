from cafe_gacha.services.ledger import InMemoryLedger
from cafe_gacha.services.pity import PityTracker


async def test_counter_starts_at_zero() -> None:
    tracker = PityTracker(InMemoryLedger())
    assert await tracker.get(1, "standard") == 0


async def test_advance_returns_new_value() -> None:
    tracker = PityTracker(InMemoryLedger())

    assert await tracker.advance(1, "standard") == 1
    assert await tracker.advance(1, "standard") == 2
    assert await tracker.get(1, "standard") == 2


async def test_reset() -> None:
    tracker = PityTracker(InMemoryLedger())
    for _ in range(5):
        await tracker.advance(1, "standard")

    await tracker.reset(1, "standard")

    assert await tracker.get(1, "standard") == 0


async def test_counters_are_keyed_by_player_and_banner() -> None:
    ledger = InMemoryLedger()
    tracker = PityTracker(ledger)

    await tracker.advance(1, "standard")
    await tracker.advance(1, "featured")
    await tracker.advance(1, "featured")
    await tracker.advance(2, "standard")

    assert await tracker.get(1, "standard") == 1
    assert await tracker.get(1, "featured") == 2
    assert await tracker.get(2, "standard") == 1
    assert await ledger.get_pity(2, "featured") == 0
