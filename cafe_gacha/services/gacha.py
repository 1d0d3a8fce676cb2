import datetime
import random
from collections.abc import Callable

from loguru import logger

from cafe_gacha.core.enums import Currency, Rarity
from cafe_gacha.core.exceptions import InsufficientFundsError, InvalidPullCountError
from cafe_gacha.schemas.catalog import Banner, WeightedEntry
from cafe_gacha.schemas.gacha import (
    CostQuote,
    PullBatchResult,
    PullCompletedEvent,
    PullOutcome,
)
from cafe_gacha.services.banner_catalog import BannerCatalog
from cafe_gacha.services.item_catalog import ItemCatalog
from cafe_gacha.services.ledger import Ledger
from cafe_gacha.services.notifier import NotificationSink
from cafe_gacha.services.pity import PityTracker
from cafe_gacha.utils.locks import PlayerLocks
from cafe_gacha.utils.misc import get_utc_now

PREMIUM_PER_TICKET = 10
TEN_PULL_COUNT = 10
DUPLICATE_TOKEN_VALUES: dict[Rarity, int] = {
    Rarity.THREE_STAR: 1,
    Rarity.FOUR_STAR: 5,
    Rarity.FIVE_STAR: 20,
}


class GachaService:
    def __init__(  # noqa: PLR0913
        self,
        ledger: Ledger,
        items: ItemCatalog,
        banners: BannerCatalog,
        sink: NotificationSink,
        *,
        locks: PlayerLocks | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime.datetime] = get_utc_now,
    ) -> None:
        self.ledger = ledger
        self.items = items
        self.banners = banners
        self.sink = sink
        self.pity = PityTracker(ledger)
        self.locks = locks or PlayerLocks()
        self.rng = rng or random.Random()
        self.clock = clock

    @staticmethod
    def token_value(rarity: Rarity) -> int:
        """Tokens awarded for pulling an item the player already owns."""
        return DUPLICATE_TOKEN_VALUES[rarity]

    async def get_pity_count(self, player_id: int, banner_id: str) -> int:
        banner = self.banners.get(banner_id)
        return await self.pity.get(player_id, banner.id)

    async def _quote(self, player_id: int, banner: Banner, count: int) -> CostQuote:
        total_cost = banner.cost_per_pull * count
        tickets = await self.ledger.get_balance(player_id, Currency.TICKETS)
        diamonds = await self.ledger.get_balance(player_id, Currency.DIAMONDS)
        shortfall = max(total_cost - tickets, 0)

        return CostQuote(
            banner_id=banner.id,
            count=count,
            total_cost=total_cost,
            ticket_balance=tickets,
            ticket_shortfall=shortfall,
            premium_required=shortfall * PREMIUM_PER_TICKET,
            premium_balance=diamonds,
        )

    async def preview_cost(self, player_id: int, banner_id: str, count: int) -> CostQuote:
        """Work out how a batch would be paid for without changing anything.

        Lets callers ask the player to confirm a diamond conversion before
        pulling.
        """
        if count < 1:
            raise InvalidPullCountError(count)

        banner = self.banners.get_active(banner_id, self.clock())
        return await self._quote(player_id, banner, count)

    async def _settle_cost(self, player_id: int, quote: CostQuote) -> None:
        """Charge a batch; the quote must already be known to be affordable."""
        if quote.ticket_shortfall > 0:
            await self.ledger.debit(player_id, Currency.DIAMONDS, quote.premium_required)
            await self.ledger.credit(player_id, Currency.TICKETS, quote.ticket_shortfall)

        await self.ledger.debit(player_id, Currency.TICKETS, quote.total_cost)

    def _guarantee_for(self, banner: Banner, pity_count: int) -> tuple[Rarity | None, bool]:
        """Pick the rarity a pull is forced to, if any.

        Returns:
            Tuple of (guaranteed rarity, whether it is the hard pity guarantee)
        """
        pity = banner.pity
        if pity is None or pity.hard_pity_count is None:
            return None, False

        if pity_count >= pity.hard_pity_count:
            return pity.hard_pity_tier, True

        if (
            pity.soft_pity_interval is not None
            and pity_count > 0
            and pity_count % pity.soft_pity_interval == 0
        ):
            return pity.soft_pity_tier, False

        return None, False

    def _effective_pool(
        self, banner: Banner, guaranteed: Rarity | None
    ) -> tuple[WeightedEntry, ...]:
        if guaranteed is None:
            return banner.pool

        pool = self.banners.pool_for_rarity(banner, guaranteed)
        if not pool:
            logger.warning(
                f"Banner {banner.id} has no {guaranteed} items for its guarantee, "
                "rolling on the full pool"
            )
            return banner.pool
        return pool

    def _sample(self, pool: tuple[WeightedEntry, ...]) -> WeightedEntry:
        """Select an entry with probability weight / total weight.

        The first entry whose cumulative weight reaches the roll wins, so ties
        go to the earlier entry in pool order.
        """
        total_weight = sum(entry.weight for entry in pool)
        roll = self.rng.random() * total_weight

        cumulative = 0.0
        for entry in pool:
            cumulative += entry.weight
            if cumulative >= roll:
                return entry

        # Only reachable through floating point drift; resolve to the last boundary crossed
        logger.warning(
            f"Weighted roll {roll} exceeded cumulative weight {cumulative}, "
            f"selecting last entry {pool[-1].item_id}"
        )
        return pool[-1]

    async def _perform_single_pull(self, player_id: int, banner: Banner) -> PullOutcome:
        pity_count = await self.pity.advance(player_id, banner.id)
        guaranteed, is_hard_pity = self._guarantee_for(banner, pity_count)
        if guaranteed is not None:
            logger.debug(
                f"Player {player_id} pity {pity_count} on {banner.id}: guaranteed {guaranteed}"
            )

        entry = self._sample(self._effective_pool(banner, guaranteed))
        item = self.items.get_item(entry.item_id)

        if is_hard_pity or item.rarity == self.banners.top_tier(banner):
            await self.pity.reset(player_id, banner.id)

        # Checked against the ledger every time; earlier pulls in the batch may own it now
        is_duplicate = await self.ledger.has_item(player_id, item.id)
        tokens = 0
        if is_duplicate:
            tokens = self.token_value(item.rarity)
            await self.ledger.credit(player_id, Currency.TOKENS, tokens)
        else:
            await self.ledger.add_item(player_id, item.id)

        outcome = PullOutcome(
            item_id=item.id,
            rarity=item.rarity,
            is_duplicate=is_duplicate,
            was_guaranteed=guaranteed is not None,
            tokens_awarded=tokens,
        )
        await self.ledger.record_pull(player_id, banner.id, outcome)
        return outcome

    async def pull(self, player_id: int, banner_id: str, count: int) -> PullBatchResult:
        """Perform gacha pulls for a player.

        Args:
            player_id: ID of the player
            banner_id: ID of a currently active banner
            count: Number of pulls

        Returns:
            The outcomes in pull order plus the batch totals

        Raises:
            InvalidPullCountError: If count is lower than 1.
            BannerNotFoundError: If the banner is unknown or not active.
            InsufficientFundsError: If neither tickets nor converted diamonds
                cover the cost. Balances and pity are left untouched.
        """
        if count < 1:
            raise InvalidPullCountError(count)

        banner = self.banners.get_active(banner_id, self.clock())

        async with self.locks.hold(player_id):
            quote = await self._quote(player_id, banner, count)
            if not quote.affordable:
                raise InsufficientFundsError(
                    Currency.DIAMONDS,
                    required=quote.premium_required,
                    available=quote.premium_balance,
                )

            await self._settle_cost(player_id, quote)

            outcomes: list[PullOutcome] = []
            for _ in range(count):
                outcomes.append(await self._perform_single_pull(player_id, banner))

            pity_count = await self.pity.get(player_id, banner.id)
            await self.ledger.save()

        result = PullBatchResult(
            banner_id=banner.id,
            outcomes=outcomes,
            tokens_gained=sum(outcome.tokens_awarded for outcome in outcomes),
            tickets_spent=quote.total_cost,
            premium_spent=quote.premium_required,
            pity_count=pity_count,
        )
        logger.info(
            f"Player {player_id} pulled {count}x on {banner.id}: "
            f"{result.new_items} new, {result.duplicates} duplicate, "
            f"{result.tokens_gained} tokens, pity {pity_count}"
        )

        await self.sink.emit(
            player_id,
            PullCompletedEvent(
                player_id=player_id,
                banner_id=banner.id,
                pull_count=count,
                tickets_spent=quote.total_cost,
                premium_spent=quote.premium_required,
            ),
        )
        return result

    async def pull_single(self, player_id: int, banner_id: str) -> PullBatchResult:
        return await self.pull(player_id, banner_id, 1)

    async def pull_ten(self, player_id: int, banner_id: str) -> PullBatchResult:
        return await self.pull(player_id, banner_id, TEN_PULL_COUNT)
