"""
Chain multiplier tracking.

A chain continues when a play repeats the last combination or moves exactly
one step up the progression. The first play of a chain scores x1.0 and each
continuation adds 0.25.
"""

from dataclasses import dataclass

from .hand_detector import HandType


CHAIN_PROGRESSION = (
    HandType.SINGLE,
    HandType.PAIR,
    HandType.STRAIGHT,
    HandType.FLUSH,
    HandType.FULL_HOUSE,
    HandType.FOUR_OF_A_KIND,
    HandType.STRAIGHT_FLUSH,
)

CHAIN_STEP = 0.25


@dataclass
class ChainState:
    last_hand_type: HandType = HandType.INVALID
    chain_count: int = 0

    @property
    def multiplier(self) -> float:
        if self.chain_count <= 1:
            return 1.0
        return 1.0 + CHAIN_STEP * (self.chain_count - 1)

    @property
    def active(self) -> bool:
        return self.last_hand_type != HandType.INVALID

    def continues(self, current: HandType) -> bool:
        """Whether playing `current` keeps the chain going."""
        if not self.active or current not in CHAIN_PROGRESSION:
            return False
        if current == self.last_hand_type:
            return True
        last_pos = CHAIN_PROGRESSION.index(self.last_hand_type)
        return CHAIN_PROGRESSION.index(current) == last_pos + 1

    def update(self, current: HandType) -> float:
        """
        Track a scored play and return the multiplier to apply to it.
        A break starts a new chain of length 1 at x1.0.
        """
        if current == HandType.INVALID:
            raise ValueError("Invalid plays are never tracked")
        if self.continues(current):
            self.chain_count += 1
        else:
            self.chain_count = 1
        self.last_hand_type = current
        return self.multiplier

    def reset(self) -> None:
        self.last_hand_type = HandType.INVALID
        self.chain_count = 0
