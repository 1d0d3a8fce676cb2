import datetime

import sqlmodel

from cafe_gacha.utils.misc import get_utc_now

from ._base import BaseModel


class OwnedItem(BaseModel, table=True):
    __tablename__: str = "owned_items"
    __table_args__ = (
        sqlmodel.UniqueConstraint("player_id", "item_id", name="uq_owned_items_player_item"),
    )

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    player_id: int = sqlmodel.Field(foreign_key="players.id", index=True)
    item_id: str = sqlmodel.Field(max_length=64, index=True)
    level: int = sqlmodel.Field(default=1, ge=1)
    acquired_at: datetime.datetime = sqlmodel.Field(
        default_factory=get_utc_now, sa_type=sqlmodel.DateTime(timezone=True)
    )
