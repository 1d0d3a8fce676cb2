from cafe_gacha.services.ledger import PityStore


class PityTracker:
    """Per-(player, banner) pull counter kept in the ledger's pity store."""

    def __init__(self, store: PityStore) -> None:
        self.store = store

    async def get(self, player_id: int, banner_id: str) -> int:
        return await self.store.get_pity(player_id, banner_id)

    async def advance(self, player_id: int, banner_id: str) -> int:
        count = await self.store.get_pity(player_id, banner_id) + 1
        await self.store.set_pity(player_id, banner_id, count)
        return count

    async def reset(self, player_id: int, banner_id: str) -> None:
        await self.store.set_pity(player_id, banner_id, 0)
