"""
Scoring engine for Big Two Magic.
Calculates points and gold for a played combination.
"""

from dataclasses import dataclass, field

from .hand_detector import DetectedHand, HandType
from .magic import Modifiers


BASE_POINTS = {
    HandType.INVALID: 0,
    HandType.SINGLE: 1,
    HandType.PAIR: 2,
    HandType.STRAIGHT: 5,
    HandType.FLUSH: 6,
    HandType.FULL_HOUSE: 8,
    HandType.FOUR_OF_A_KIND: 10,
    HandType.STRAIGHT_FLUSH: 12,
}

# Replace (not add to) the base value at a given level
LEVEL_OVERRIDES = {
    2: {HandType.SINGLE: 0.5, HandType.PAIR: 4},
    3: {HandType.SINGLE: 0},
}

GOLD_PER_POINT = 0.5


def base_points(hand_type: HandType, level: int) -> float:
    """Base value for a hand type at a level; unknown levels use level 1."""
    overrides = LEVEL_OVERRIDES.get(level, {})
    return overrides.get(hand_type, BASE_POINTS[hand_type])


@dataclass
class ScoreBreakdown:
    """Detailed breakdown of how points were calculated."""
    hand_type: HandType
    base_points: float
    bonus_points: int
    chain_multiplier: float
    rank_multiplier: int
    final_points: float
    gold_earned: float
    details: list[str] = field(default_factory=list)

    @property
    def subtotal(self) -> float:
        return self.base_points + self.bonus_points


class ScoringEngine:
    """
    Points = (Base + Bonus) × Chain Multiplier × Rank Multiplier
    Gold = Points × 0.5
    """

    def score_hand(self, hand: DetectedHand, level: int = 1,
                   modifiers: Modifiers = None,
                   chain_multiplier: float = 1.0) -> ScoreBreakdown:
        if not hand.is_valid:
            raise ValueError("Cannot score an invalid hand")

        modifiers = modifiers or Modifiers()
        details = []

        base = base_points(hand.hand_type, level)
        details.append(f"{base:g} ({hand.hand_type.label} base, level {level})")

        bonus = modifiers.bonus_for(hand.hand_type)
        if bonus:
            details.append(f"+{bonus} ({hand.hand_type.label} bonus)")

        points = (base + bonus) * chain_multiplier
        if chain_multiplier != 1.0:
            details.append(f"x{chain_multiplier:.2f} (chain)")

        rank_mult = modifiers.rank_multiplier_for(hand.cards)
        if rank_mult > 1:
            points *= rank_mult
            details.append(f"x{rank_mult} (card multiplier)")

        return ScoreBreakdown(
            hand_type=hand.hand_type,
            base_points=base,
            bonus_points=bonus,
            chain_multiplier=chain_multiplier,
            rank_multiplier=rank_mult,
            final_points=points,
            gold_earned=points * GOLD_PER_POINT,
            details=details
        )


def calculate_points(hand: DetectedHand, level: int = 1, modifiers: Modifiers = None,
                     chain_multiplier: float = 1.0) -> float:
    """Convenience function to calculate points."""
    engine = ScoringEngine()
    return engine.score_hand(hand, level, modifiers, chain_multiplier).final_points


def score_breakdown(hand: DetectedHand, level: int = 1, modifiers: Modifiers = None,
                    chain_multiplier: float = 1.0) -> ScoreBreakdown:
    """Get detailed score breakdown."""
    engine = ScoringEngine()
    return engine.score_hand(hand, level, modifiers, chain_multiplier)
