"""
Magic upgrades and the accumulated modifier set.

Magic is picked once per cleared level from a fixed menu. Permanent effects
(hand bonuses, the rank multiplier) last for the whole run; the Draw Boost
and Discard/Redraw abilities are one-time and consumed when used.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .deck import Card
from .hand_detector import HandType


class AbilityState(Enum):
    AVAILABLE = "available"
    CONSUMED = "consumed"


@dataclass
class OneTimeAbility:
    """A single-use ability. Starts consumed until granted by magic."""
    state: AbilityState = AbilityState.CONSUMED

    @property
    def available(self) -> bool:
        return self.state == AbilityState.AVAILABLE

    def grant(self) -> None:
        self.state = AbilityState.AVAILABLE

    def consume(self) -> bool:
        """Use the ability. Returns False if it was not available."""
        if not self.available:
            return False
        self.state = AbilityState.CONSUMED
        return True


SCORING_HANDS = [ht for ht in HandType if ht != HandType.INVALID]


@dataclass
class Modifiers:
    """Everything magic choices and shop purchases have granted this run."""
    bonuses: dict[HandType, int] = field(
        default_factory=lambda: {ht: 0 for ht in SCORING_HANDS})
    draw_boost: OneTimeAbility = field(default_factory=OneTimeAbility)
    discard_redraw: OneTimeAbility = field(default_factory=OneTimeAbility)
    multiplier_rank: Optional[int] = None
    multiplier_factor: int = 1

    def add_bonus(self, hand_type: HandType, amount: int) -> None:
        if hand_type == HandType.INVALID:
            raise ValueError("Cannot grant a bonus to an invalid hand")
        self.bonuses[hand_type] = self.bonuses.get(hand_type, 0) + amount

    def bonus_for(self, hand_type: HandType) -> int:
        return self.bonuses.get(hand_type, 0)

    def set_rank_multiplier(self, rank: int, factor: int = 2) -> None:
        """Overwrites any previous target rank."""
        self.multiplier_rank = rank
        self.multiplier_factor = factor

    def rank_multiplier_for(self, cards: list[Card]) -> int:
        """
        Factor applied once if any played card has the target rank.
        Membership only: two matching cards still apply the factor once.
        """
        if self.multiplier_rank is None or self.multiplier_factor < 2:
            return 1
        if any(c.rank == self.multiplier_rank for c in cards):
            return self.multiplier_factor
        return 1


class MagicOption(Enum):
    HAND_SCORE_UPGRADE = "hand_score_upgrade"
    SUIT_CHANGE = "suit_change"
    CARD_MULTIPLIER = "card_multiplier"
    DISCARD_REDRAW = "discard_redraw"
    DRAW_BOOST = "draw_boost"

    @property
    def title(self) -> str:
        return MAGIC_TITLES[self]

    @property
    def description(self) -> str:
        return MAGIC_DESCRIPTIONS[self]

    @property
    def needs_card(self) -> bool:
        """Options that need a follow-up hand card selection."""
        return self in (MagicOption.SUIT_CHANGE, MagicOption.CARD_MULTIPLIER)


MAGIC_TITLES = {
    MagicOption.HAND_SCORE_UPGRADE: "Hand Score Upgrade",
    MagicOption.SUIT_CHANGE: "Suit Change",
    MagicOption.CARD_MULTIPLIER: "Card Multiplier",
    MagicOption.DISCARD_REDRAW: "Discard / Redraw",
    MagicOption.DRAW_BOOST: "Draw Boost",
}

MAGIC_DESCRIPTIONS = {
    MagicOption.HAND_SCORE_UPGRADE: "+3 to Pairs (perm)",
    MagicOption.SUIT_CHANGE: "Change the suit of a card in hand",
    MagicOption.CARD_MULTIPLIER: "Double points for a rank",
    MagicOption.DISCARD_REDRAW: "Discard & redraw hand (one-time)",
    MagicOption.DRAW_BOOST: "+extra draws after next play (one-time)",
}

PAIR_UPGRADE_BONUS = 3
CARD_MULTIPLIER_FACTOR = 2
