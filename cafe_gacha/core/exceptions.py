from cafe_gacha.core.enums import Currency


class GachaError(Exception):
    """Base class for every error raised by the gacha engine."""


class CatalogIntegrityError(GachaError):
    """The static item or banner configuration is inconsistent.

    Raised while the catalogs are built, so the process refuses to start
    instead of silently skipping a broken banner.
    """


class BannerNotFoundError(GachaError):
    def __init__(self, banner_id: str, *, inactive: bool = False) -> None:
        self.banner_id = banner_id
        self.inactive = inactive
        reason = "is not currently active" if inactive else "does not exist"
        super().__init__(f"Banner {banner_id!r} {reason}")


class ItemNotFoundError(GachaError):
    def __init__(self, item_id: str) -> None:
        self.item_id = item_id
        super().__init__(f"Item {item_id!r} does not exist")


class PlayerNotFoundError(GachaError):
    def __init__(self, player_id: int) -> None:
        self.player_id = player_id
        super().__init__(f"Player {player_id} does not exist")


class InvalidPullCountError(GachaError):
    def __init__(self, count: int) -> None:
        self.count = count
        super().__init__(f"Pull count must be at least 1, got {count}")


class InsufficientFundsError(GachaError):
    """The player cannot afford the requested operation.

    This is an expected business outcome: callers should offer a currency
    conversion or block the action rather than report a generic failure.
    """

    def __init__(self, currency: Currency, *, required: int, available: int) -> None:
        self.currency = currency
        self.required = required
        self.available = available
        super().__init__(
            f"Insufficient {currency.value}: required {required}, available {available}"
        )
