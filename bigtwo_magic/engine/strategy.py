"""
Card selection strategies for Big Two Magic simulation.
"""

from itertools import combinations
from collections import Counter
from dataclasses import dataclass, replace
from typing import Optional

from .deck import Card
from .hand_detector import HandType, PLAYABLE_SIZES
from .magic import MagicOption
from .scoring import ScoreBreakdown


@dataclass
class PlayOption:
    """A possible play with its expected points."""
    indices: list[int]
    cards: list[Card]
    hand_type: HandType
    points: float
    breakdown: ScoreBreakdown


class BasicStrategy:
    """
    Greedy strategy: play whatever scores most right now, buy bonuses for
    the hands it plays most, and take the pair upgrade unless a rank is
    worth multiplying.
    """

    def evaluate_all_plays(self, game) -> list[PlayOption]:
        """Score every legal 1, 2 and 5 card play in hand, best first."""
        cards = game.hand.cards
        options = []

        for size in PLAYABLE_SIZES:
            if size > len(cards):
                continue
            for indices in combinations(range(len(cards)), size):
                played = [cards[i] for i in indices]
                detected = game.hand_detector.detect(played)
                if not detected.is_valid:
                    continue
                # Score against a copy so the real chain is untouched
                chain_mult = replace(game.chain).update(detected.hand_type)
                breakdown = game.scoring_engine.score_hand(
                    detected, game.level, game.modifiers, chain_mult
                )
                options.append(PlayOption(
                    indices=list(indices),
                    cards=played,
                    hand_type=detected.hand_type,
                    points=breakdown.final_points,
                    breakdown=breakdown
                ))

        # Fewer cards wins a tie so the deck lasts longer
        options.sort(key=lambda opt: (opt.points, -len(opt.cards)), reverse=True)
        return options

    def select_cards_to_play(self, game) -> list[int]:
        """Indices of the best play, or [] when the hand is empty."""
        options = self.evaluate_all_plays(game)
        if not options:
            return []
        return options[0].indices

    def should_redraw(self, game) -> bool:
        """Burn the redraw when the hand is weak and the discard pile can refill it."""
        if not game.modifiers.discard_redraw.available:
            return False
        if game.discard_pile.size() < game.hand.size():
            return False
        options = self.evaluate_all_plays(game)
        return not options or options[0].points <= 1

    def select_purchase(self, game) -> Optional[int]:
        """Shop item id to buy next, or None to stop shopping."""
        affordable = game.shop.affordable(game.gold)
        if not affordable:
            return None

        played = Counter(e.data.get("hand_type") for e in game.log.events_of("play"))
        wanted = [item for item in affordable if played[item.hand_type.name] > 0]
        if not wanted:
            return None
        best = max(wanted, key=lambda item: (played[item.hand_type.name], -item.cost))
        return best.item_id

    def select_magic(self, game) -> tuple[MagicOption, Optional[int]]:
        """Magic option and, if it needs one, a hand card index."""
        cards = game.hand.cards
        if game.modifiers.multiplier_rank is None and cards:
            rank_counts = Counter(c.rank for c in cards)
            rank, count = rank_counts.most_common(1)[0]
            if count >= 2:
                index = next(i for i, c in enumerate(cards) if c.rank == rank)
                return MagicOption.CARD_MULTIPLIER, index
        return MagicOption.HAND_SCORE_UPGRADE, None
