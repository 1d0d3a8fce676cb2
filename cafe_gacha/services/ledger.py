"""Player ledger seen by the pull engine.

The engine owns no persistent state: balances, owned items and pity counters
all live behind the ``Ledger`` protocol. ``InMemoryLedger`` keeps everything in
process memory; ``cafe_gacha.services.player_ledger.DatabaseLedger`` stores it
in the SQL tables.
"""

import datetime
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Protocol

from cafe_gacha.core.enums import Currency
from cafe_gacha.core.exceptions import InsufficientFundsError
from cafe_gacha.schemas.gacha import PullOutcome
from cafe_gacha.utils.misc import get_utc_now


class PityStore(Protocol):
    async def get_pity(self, player_id: int, banner_id: str) -> int: ...

    async def set_pity(self, player_id: int, banner_id: str, value: int) -> None: ...


class Ledger(PityStore, Protocol):
    async def get_balance(self, player_id: int, currency: Currency) -> int: ...

    async def debit(self, player_id: int, currency: Currency, amount: int) -> None:
        """Remove ``amount`` from a balance.

        Raises:
            InsufficientFundsError: If the balance is lower than ``amount``.
        """
        ...

    async def credit(self, player_id: int, currency: Currency, amount: int) -> None: ...

    async def has_item(self, player_id: int, item_id: str) -> bool: ...

    async def add_item(self, player_id: int, item_id: str) -> None: ...

    async def record_pull(self, player_id: int, banner_id: str, outcome: PullOutcome) -> None: ...

    async def save(self) -> None:
        """Persist everything changed since the last save."""
        ...


@dataclass
class OwnedItemRecord:
    item_id: str
    level: int = 1
    acquired_at: datetime.datetime = field(default_factory=get_utc_now)


@dataclass
class PlayerAccount:
    balances: dict[Currency, int] = field(default_factory=lambda: dict.fromkeys(Currency, 0))
    items: dict[str, OwnedItemRecord] = field(default_factory=dict)
    pity: dict[str, int] = field(default_factory=dict)
    pulls: list[tuple[str, PullOutcome]] = field(default_factory=list)


class InMemoryLedger:
    """Ledger backed by plain dictionaries; players are created on first use."""

    def __init__(self) -> None:
        self.accounts: defaultdict[int, PlayerAccount] = defaultdict(PlayerAccount)
        self.save_count = 0

    def set_balance(self, player_id: int, currency: Currency, amount: int) -> None:
        self.accounts[player_id].balances[currency] = amount

    def owned_item_ids(self, player_id: int) -> list[str]:
        return list(self.accounts[player_id].items)

    async def get_balance(self, player_id: int, currency: Currency) -> int:
        return self.accounts[player_id].balances[currency]

    async def debit(self, player_id: int, currency: Currency, amount: int) -> None:
        balances = self.accounts[player_id].balances
        if balances[currency] < amount:
            raise InsufficientFundsError(currency, required=amount, available=balances[currency])
        balances[currency] -= amount

    async def credit(self, player_id: int, currency: Currency, amount: int) -> None:
        self.accounts[player_id].balances[currency] += amount

    async def has_item(self, player_id: int, item_id: str) -> bool:
        return item_id in self.accounts[player_id].items

    async def add_item(self, player_id: int, item_id: str) -> None:
        self.accounts[player_id].items[item_id] = OwnedItemRecord(item_id=item_id)

    async def get_pity(self, player_id: int, banner_id: str) -> int:
        return self.accounts[player_id].pity.get(banner_id, 0)

    async def set_pity(self, player_id: int, banner_id: str, value: int) -> None:
        self.accounts[player_id].pity[banner_id] = value

    async def record_pull(self, player_id: int, banner_id: str, outcome: PullOutcome) -> None:
        self.accounts[player_id].pulls.append((banner_id, outcome))

    async def save(self) -> None:
        self.save_count += 1
