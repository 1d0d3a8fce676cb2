import datetime

from pydantic import BaseModel, Field

from cafe_gacha.core.enums import Currency, Rarity


class PlayerCreate(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    tickets: int = Field(default=0, ge=0)
    diamonds: int = Field(default=50, ge=0, description="New players start with 50 diamonds")
    tokens: int = Field(default=0, ge=0)


class CurrencyAdjustment(BaseModel):
    """Schema for adjusting player currency (increase or decrease)."""

    currency: Currency
    amount: int = Field(gt=0, description="Amount to adjust (must be positive)")
    reason: str = Field(min_length=1, max_length=255, description="Reason for adjustment")


class OwnedItemResponse(BaseModel):
    item_id: str
    display_name: str
    rarity: Rarity
    level: int
    acquired_at: datetime.datetime
