"""
Player intents accepted by the game engine.
"""

from dataclasses import dataclass
from typing import Optional

from .magic import MagicOption


@dataclass(frozen=True)
class SelectToggle:
    index: int


@dataclass(frozen=True)
class Play:
    indices: Optional[tuple[int, ...]] = None  # None plays the current selection


@dataclass(frozen=True)
class Pass:
    pass


@dataclass(frozen=True)
class Redraw:
    pass


@dataclass(frozen=True)
class ChooseMagic:
    option: MagicOption
    card_index: Optional[int] = None


@dataclass(frozen=True)
class BuyShopItem:
    item_id: int


@dataclass(frozen=True)
class LeaveShop:
    pass


@dataclass(frozen=True)
class Restart:
    pass


Intent = SelectToggle | Play | Pass | Redraw | ChooseMagic | BuyShopItem | LeaveShop | Restart
