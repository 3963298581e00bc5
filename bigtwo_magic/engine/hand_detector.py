"""
Hand detection for Big Two Magic.
Classifies 1, 2 or 5 played cards into a combination.
"""

from dataclasses import dataclass
from enum import Enum
from collections import Counter

from .deck import Card


class HandType(Enum):
    """Combination kinds, ordered by strength (also the chain progression)."""
    INVALID = 0
    SINGLE = 1
    PAIR = 2
    STRAIGHT = 3
    FLUSH = 4
    FULL_HOUSE = 5
    FOUR_OF_A_KIND = 6
    STRAIGHT_FLUSH = 7

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()


PLAYABLE_SIZES = (1, 2, 5)


@dataclass
class DetectedHand:
    """Result of hand detection."""
    hand_type: HandType
    cards: list[Card]

    @property
    def is_valid(self) -> bool:
        return self.hand_type != HandType.INVALID

    @property
    def ranks(self) -> set[int]:
        return {c.rank for c in self.cards}


class HandDetector:
    """Detects the combination formed by the played cards."""

    def detect(self, cards: list[Card]) -> DetectedHand:
        cards = list(cards)
        return DetectedHand(self.classify(cards), cards)

    def classify(self, cards: list[Card]) -> HandType:
        if len(cards) not in PLAYABLE_SIZES:
            return HandType.INVALID

        if len(cards) == 1:
            return HandType.SINGLE

        if len(cards) == 2:
            if cards[0].rank == cards[1].rank:
                return HandType.PAIR
            return HandType.INVALID

        is_flush = self._is_flush(cards)
        is_straight = self._is_straight(cards)
        counts = sorted(Counter(c.rank for c in cards).values(), reverse=True)

        # Determine hand type (from best to worst)
        if is_straight and is_flush:
            return HandType.STRAIGHT_FLUSH

        if counts[0] == 4:
            return HandType.FOUR_OF_A_KIND

        if counts[0] == 3 and counts[1] == 2:
            return HandType.FULL_HOUSE

        if is_flush:
            return HandType.FLUSH

        if is_straight:
            return HandType.STRAIGHT

        return HandType.INVALID

    @staticmethod
    def _is_flush(cards: list[Card]) -> bool:
        return len({c.suit for c in cards}) == 1

    @staticmethod
    def _is_straight(cards: list[Card]) -> bool:
        """Five strictly consecutive ranks. Ace is high only, no wheel."""
        ranks = sorted(c.rank for c in cards)
        return all(b == a + 1 for a, b in zip(ranks, ranks[1:]))


def detect_hand(cards: list[Card]) -> DetectedHand:
    """Convenience function to detect a hand."""
    return HandDetector().detect(cards)
