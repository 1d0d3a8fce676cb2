from pydantic import AwareDatetime, BaseModel, ConfigDict, Field

from cafe_gacha.core.enums import Affinity, Rarity


class Item(BaseModel):
    """A pullable collectible (a cafe flavor)."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    affinity: Affinity
    rarity: Rarity
    base_power: int = Field(ge=0)
    description: str = ""


class WeightedEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    item_id: str
    weight: float


class PityRule(BaseModel):
    """Guarantee thresholds for a banner.

    Hard pity is the terminal guarantee: reaching ``hard_pity_count`` forces
    ``hard_pity_tier`` and resets the counter. Soft pity forces
    ``soft_pity_tier`` every ``soft_pity_interval`` pulls without resetting.
    """

    model_config = ConfigDict(frozen=True)

    hard_pity_count: int | None = None
    hard_pity_tier: Rarity | None = None
    soft_pity_interval: int | None = None
    soft_pity_tier: Rarity | None = None

    @property
    def has_hard_pity(self) -> bool:
        return self.hard_pity_count is not None and self.hard_pity_tier is not None

    @property
    def has_soft_pity(self) -> bool:
        return self.soft_pity_interval is not None or self.soft_pity_tier is not None


class Banner(BaseModel):
    """A time-windowed pull offer.

    Field values are checked by ``BannerCatalog``, which rejects banners that
    reference unknown items or carry non-positive costs or weights.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    active_from: AwareDatetime
    active_until: AwareDatetime
    pool: tuple[WeightedEntry, ...]
    pity: PityRule | None = None
    cost_per_pull: int

    @property
    def total_weight(self) -> float:
        return sum(entry.weight for entry in self.pool)

    def is_active(self, now: AwareDatetime) -> bool:
        return self.active_from <= now < self.active_until
