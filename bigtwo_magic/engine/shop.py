"""
Shop for Big Two Magic.
Six permanent hand bonuses with fixed gold costs. Stock is unlimited and
repeat purchases stack.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .hand_detector import HandType
from .magic import Modifiers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShopItem:
    """A permanent additive bonus to one combination."""
    item_id: int
    name: str
    cost: int
    hand_type: HandType
    bonus: int

    @property
    def description(self) -> str:
        return f"+{self.bonus} points to {self.hand_type.label}"

    def __str__(self):
        return f"{self.name} ({self.cost} gold)"


SHOP_ITEMS = [
    ShopItem(1, "Pair Bonus", 30, HandType.PAIR, 5),
    ShopItem(2, "Straight Bonus", 40, HandType.STRAIGHT, 7),
    ShopItem(3, "Flush Bonus", 50, HandType.FLUSH, 8),
    ShopItem(4, "Full House Bonus", 60, HandType.FULL_HOUSE, 10),
    ShopItem(5, "Four of a Kind Bonus", 75, HandType.FOUR_OF_A_KIND, 12),
    ShopItem(6, "Straight Flush Bonus", 100, HandType.STRAIGHT_FLUSH, 15),
]


@dataclass
class PurchaseResult:
    success: bool
    item: Optional[ShopItem]
    gold_remaining: float
    message: str


class Shop:
    """Fixed catalogue, no inventory."""

    def __init__(self, items: list[ShopItem] = None):
        self.items = list(items or SHOP_ITEMS)
        self._by_id = {item.item_id: item for item in self.items}

    def get_item(self, item_id: int) -> Optional[ShopItem]:
        return self._by_id.get(item_id)

    def affordable(self, gold: float) -> list[ShopItem]:
        return [item for item in self.items if item.cost <= gold]

    def purchase(self, item_id: int, gold: float, modifiers: Modifiers) -> PurchaseResult:
        """
        Buy an item, applying its bonus to `modifiers`.
        The caller owns the gold balance and should store `gold_remaining`.
        """
        item = self.get_item(item_id)
        if item is None:
            return PurchaseResult(False, None, gold, f"No such shop item: {item_id}")

        if gold < item.cost:
            return PurchaseResult(
                False, item, gold,
                f"Not enough gold for {item.name} (need {item.cost}, have {gold:.0f})"
            )

        modifiers.add_bonus(item.hand_type, item.bonus)
        remaining = gold - item.cost
        logger.debug("Bought %s, %s bonus now %d", item.name, item.hand_type.name,
                     modifiers.bonus_for(item.hand_type))
        return PurchaseResult(True, item, remaining, f"Bought: +{item.bonus} {item.hand_type.label} Bonus")
