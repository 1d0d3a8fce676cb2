import sqlmodel

from ._base import BaseModel


class GachaPity(BaseModel, table=True):
    """Track player's pity count for each banner."""

    __tablename__: str = "gacha_pity"
    __table_args__ = (
        sqlmodel.UniqueConstraint("player_id", "banner_id", name="uq_gacha_pity_player_banner"),
    )

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    player_id: int = sqlmodel.Field(foreign_key="players.id", index=True)
    banner_id: str = sqlmodel.Field(max_length=64, index=True)
    pity_count: int = sqlmodel.Field(default=0, ge=0)
    """Number of pulls since the banner's top rarity was last obtained"""
