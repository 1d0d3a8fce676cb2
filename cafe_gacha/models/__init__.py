from .event_log import EventLog
from .gacha_pity import GachaPity
from .gacha_pull import GachaPull
from .owned_item import OwnedItem
from .player import Player

__all__ = ("EventLog", "GachaPity", "GachaPull", "OwnedItem", "Player")
