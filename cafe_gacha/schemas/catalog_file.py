from pydantic import AwareDatetime, BaseModel, Field

from cafe_gacha.core.enums import Rarity
from cafe_gacha.schemas.catalog import Item, PityRule, WeightedEntry


class BannerDefinition(BaseModel):
    """A banner as written in the catalog file.

    ``rarity_weights`` expands to one pool entry per catalog item of that
    rarity, appended after any explicit ``pool`` entries.
    """

    id: str
    display_name: str
    active_from: AwareDatetime
    active_until: AwareDatetime
    cost_per_pull: int
    pity: PityRule | None = None
    pool: list[WeightedEntry] = Field(default_factory=list)
    rarity_weights: dict[Rarity, float] = Field(default_factory=dict)


class CatalogFile(BaseModel):
    items: list[Item]
    banners: list[BannerDefinition]
