from typing import Literal

from pydantic import BaseModel, Field

from cafe_gacha.core.enums import Rarity
from cafe_gacha.schemas.catalog import Item


class GachaPullRequest(BaseModel):
    """Request to pull from a gacha banner."""

    player_id: int
    banner_id: str = Field(description="ID of the banner to pull from")
    count: int = Field(default=1, ge=1, le=10, description="Number of pulls (1 to 10)")


class PullOutcome(BaseModel):
    """Result of a single gacha pull."""

    item_id: str
    rarity: Rarity
    is_duplicate: bool
    """Whether the player already owned the item before this pull"""
    was_guaranteed: bool = False
    tokens_awarded: int = 0


class PullBatchResult(BaseModel):
    """Outcomes of one pull call, in pull order."""

    banner_id: str
    outcomes: list[PullOutcome]
    tokens_gained: int
    tickets_spent: int
    premium_spent: int
    pity_count: int
    """Banner pity counter after the last pull"""

    @property
    def new_items(self) -> int:
        return sum(1 for outcome in self.outcomes if not outcome.is_duplicate)

    @property
    def duplicates(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.is_duplicate)


class CostQuote(BaseModel):
    """How a pull batch would be paid for."""

    banner_id: str
    count: int
    total_cost: int
    """In tickets"""
    ticket_balance: int
    ticket_shortfall: int
    premium_required: int
    """Diamonds converted to cover the ticket shortfall"""
    premium_balance: int

    @property
    def affordable(self) -> bool:
        return self.premium_balance >= self.premium_required


class PullCompletedEvent(BaseModel):
    event: Literal["pull_completed"] = "pull_completed"
    player_id: int
    banner_id: str
    pull_count: int
    tickets_spent: int
    premium_spent: int


class GachaPityResponse(BaseModel):
    """Response for checking pity count."""

    banner_id: str
    banner_name: str
    current_pity: int
    hard_pity_count: int | None


class BannerPoolEntry(BaseModel):
    """Item with its weight and probability in a banner pool."""

    item: Item
    weight: float
    probability: float
