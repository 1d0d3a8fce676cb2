import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class PlayerLocks:
    """One ``asyncio.Lock`` per player.

    A pull reads balances, debits, credits and rewrites the pity counter;
    holding the player's lock for the whole call keeps two pulls for the same
    player from interleaving those steps. A lock is dropped once no caller holds
    or waits on it, so only players with a pull in flight are tracked.
    """

    def __init__(self) -> None:
        self._locks: dict[int, asyncio.Lock] = {}
        self._users: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, player_id: int) -> AsyncIterator[None]:
        lock = self._locks.setdefault(player_id, asyncio.Lock())
        self._users[player_id] = self._users.get(player_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[player_id] -= 1
            if not self._users[player_id]:
                del self._users[player_id]
                del self._locks[player_id]
