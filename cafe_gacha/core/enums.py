from enum import StrEnum


class Rarity(StrEnum):
    THREE_STAR = "3★"
    FOUR_STAR = "4★"
    FIVE_STAR = "5★"

    @property
    def stars(self) -> int:
        return int(self.value[0])

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.stars < other.stars

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.stars <= other.stars

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.stars > other.stars

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Rarity):
            return NotImplemented
        return self.stars >= other.stars


class Affinity(StrEnum):
    SWEET = "Sweet"
    SALTY = "Salty"
    BITTER = "Bitter"
    SPICY = "Spicy"
    FRESH = "Fresh"


class Currency(StrEnum):
    TICKETS = "tickets"
    """Primary pull currency"""
    DIAMONDS = "diamonds"
    """Premium currency, convertible into tickets"""
    TOKENS = "tokens"
    """Awarded for duplicate pulls"""


class EventType(StrEnum):
    PLAYER_CREATED = "player_created"
    PULL_COMPLETED = "pull_completed"
    ADMIN_INCREASE_CURRENCY = "admin_increase_currency"
    ADMIN_DECREASE_CURRENCY = "admin_decrease_currency"
