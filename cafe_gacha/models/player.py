import sqlmodel

from ._base import BaseModel


class Player(BaseModel, table=True):
    __tablename__: str = "players"

    id: int = sqlmodel.Field(primary_key=True, index=True, default=None)
    name: str | None = sqlmodel.Field(default=None, nullable=True, max_length=100)
    tickets: int = sqlmodel.Field(default=0, ge=0)
    diamonds: int = sqlmodel.Field(default=0, ge=0)
    tokens: int = sqlmodel.Field(default=0, ge=0)
    """Earned by pulling items the player already owns"""
