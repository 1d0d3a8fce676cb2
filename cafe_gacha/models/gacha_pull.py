import sqlmodel

from cafe_gacha.core.enums import Rarity

from ._base import BaseModel


class GachaPull(BaseModel, table=True):
    """Log each individual gacha pull made by a player."""

    __tablename__: str = "gacha_pulls"

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    player_id: int = sqlmodel.Field(foreign_key="players.id", index=True)
    banner_id: str = sqlmodel.Field(max_length=64, index=True)
    item_id: str = sqlmodel.Field(max_length=64, index=True)
    rarity: Rarity
    is_duplicate: bool = sqlmodel.Field(default=False)
    was_guaranteed: bool = sqlmodel.Field(default=False)
    """Whether a pity guarantee restricted the pool for this pull"""
    tokens_awarded: int = sqlmodel.Field(default=0, ge=0)
