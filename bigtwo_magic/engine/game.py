"""
Game state and progression for Big Two Magic.

GameState owns everything a run needs (deck, hand, discard pile, score,
gold, chain, modifiers, log) and processes one player intent at a time.
Player mistakes are rejected with a log message and leave state untouched.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Union

from .deck import Deck, Hand, DiscardPile, Card
from .hand_detector import HandDetector, HandType, DetectedHand
from .scoring import ScoringEngine, ScoreBreakdown
from .chain import ChainState
from .magic import Modifiers, MagicOption, PAIR_UPGRADE_BONUS, CARD_MULTIPLIER_FACTOR
from .shop import Shop
from .history import GameLog, DEFAULT_CAPACITY
from .intents import (
    SelectToggle, Play, Pass, Redraw, ChooseMagic, BuyShopItem, LeaveShop, Restart, Intent
)

logger = logging.getLogger(__name__)


class Phase(Enum):
    PLAYING = auto()
    SHOPPING = auto()
    CHOOSING_MAGIC = auto()
    FAILED = auto()
    FINISHED = auto()


LEVEL_TARGETS = {1: 55, 2: 60, 3: 65}
DECK_SIZE = 52


@dataclass
class GameConfig:
    """Configuration for a game run."""
    hand_size: int = 7
    level_targets: dict = field(default_factory=lambda: dict(LEVEL_TARGETS))
    log_capacity: int = DEFAULT_CAPACITY
    seed: Optional[int] = None

    def __post_init__(self):
        if self.hand_size < 1:
            raise ValueError("hand_size must be at least 1")
        if not self.level_targets:
            raise ValueError("level_targets must define at least one level")
        if sorted(self.level_targets) != list(range(1, len(self.level_targets) + 1)):
            raise ValueError("level_targets must cover levels 1..N with no gaps")
        if any(t <= 0 for t in self.level_targets.values()):
            raise ValueError("level targets must be positive")

    @property
    def max_level(self) -> int:
        return max(self.level_targets)


@dataclass
class PlayResult:
    """Result of a scored play."""
    detected: DetectedHand
    breakdown: ScoreBreakdown
    chain_continued: bool
    cards_drawn: int       # refill from the deck
    boost_drawn: int = 0   # recovered from the discard pile by Draw Boost

    @property
    def points(self) -> float:
        return self.breakdown.final_points


@dataclass
class GameSnapshot:
    """Read-only view of the game for rendering."""
    phase: Phase
    level: int
    score: float
    target: float
    gold: float
    chain_count: int
    chain_multiplier: float
    last_hand_type: HandType
    deck_size: int
    hand_size: int
    discard_size: int
    hand: list[Card]
    selected: list[int]
    draw_boost_available: bool
    discard_redraw_available: bool
    multiplier_rank: Optional[int]
    multiplier_factor: int
    bonuses: dict
    log: list[str]

    def to_dict(self):
        return {
            "phase": self.phase.name,
            "level": self.level,
            "score": self.score,
            "target": self.target,
            "gold": self.gold,
            "chain_count": self.chain_count,
            "chain_multiplier": self.chain_multiplier,
            "last_hand_type": self.last_hand_type.name,
            "deck_size": self.deck_size,
            "hand_size": self.hand_size,
            "discard_size": self.discard_size,
            "hand": [{"rank": c.rank, "suit": c.suit.value, "label": str(c)} for c in self.hand],
            "selected": list(self.selected),
            "draw_boost_available": self.draw_boost_available,
            "discard_redraw_available": self.discard_redraw_available,
            "multiplier_rank": self.multiplier_rank,
            "multiplier_factor": self.multiplier_factor,
            "bonuses": {ht.name: v for ht, v in self.bonuses.items()},
            "log": list(self.log),
        }


class GameState:
    """
    Tracks the full state of a run.
    """

    def __init__(self, config: GameConfig = None, rng: random.Random = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)

        self.hand_detector = HandDetector()
        self.scoring_engine = ScoringEngine()
        self.shop = Shop()

        self._new_run()
        self._log("start", "Welcome. Multi-select cards then PLAY. Use PASS to skip.")

    def _new_run(self) -> None:
        """(Re)initialise every piece of run state."""
        self.deck = Deck.new_shuffled(self.rng)
        self.hand = Hand(self.deck.draw(self.config.hand_size))
        self.discard_pile = DiscardPile()

        self.level = 1
        self.score = 0.0
        self.gold = 0.0
        self.phase = Phase.PLAYING

        self.modifiers = Modifiers()
        self.chain = ChainState()
        self.selected: list[int] = []
        self.log = GameLog(capacity=self.config.log_capacity)

    # ----- queries -----

    @property
    def target(self) -> float:
        return self.config.level_targets.get(self.level, 0)

    @property
    def is_over(self) -> bool:
        return self.phase in (Phase.FAILED, Phase.FINISHED)

    def total_cards(self) -> int:
        """Cards across deck, hand and discard pile. Constant within a run."""
        return self.deck.size() + self.hand.size() + self.discard_pile.size()

    def preview(self, indices: list[int]) -> DetectedHand:
        """Classify a selection without playing it."""
        return self.hand_detector.detect(self.hand.select(indices))

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            phase=self.phase,
            level=self.level,
            score=self.score,
            target=self.target,
            gold=self.gold,
            chain_count=self.chain.chain_count,
            chain_multiplier=self.chain.multiplier,
            last_hand_type=self.chain.last_hand_type,
            deck_size=self.deck.size(),
            hand_size=self.hand.size(),
            discard_size=self.discard_pile.size(),
            hand=list(self.hand.cards),
            selected=list(self.selected),
            draw_boost_available=self.modifiers.draw_boost.available,
            discard_redraw_available=self.modifiers.discard_redraw.available,
            multiplier_rank=self.modifiers.multiplier_rank,
            multiplier_factor=self.modifiers.multiplier_factor,
            bonuses=dict(self.modifiers.bonuses),
            log=self.log.recent,
        )

    # ----- intents -----

    def apply(self, intent: Intent):
        """Dispatch an intent to its handler and return the handler's result."""
        if isinstance(intent, SelectToggle):
            return self.toggle_select(intent.index)
        elif isinstance(intent, Play):
            indices = list(intent.indices) if intent.indices is not None else None
            return self.play(indices)
        elif isinstance(intent, Pass):
            return self.pass_turn()
        elif isinstance(intent, Redraw):
            return self.redraw()
        elif isinstance(intent, ChooseMagic):
            return self.choose_magic(intent.option, intent.card_index)
        elif isinstance(intent, BuyShopItem):
            return self.buy(intent.item_id)
        elif isinstance(intent, LeaveShop):
            return self.leave_shop()
        elif isinstance(intent, Restart):
            return self.restart()
        raise TypeError(f"Unknown intent: {intent!r}")

    def toggle_select(self, index: int) -> bool:
        """Select or deselect a hand card. Selection stays sorted."""
        if not self._require_phase(Phase.PLAYING, "select cards"):
            return False
        if not 0 <= index < self.hand.size():
            self._log("rejected", f"No card at position {index}.")
            return False

        if index in self.selected:
            self.selected.remove(index)
        else:
            self.selected.append(index)
            self.selected.sort()
        return True

    def play(self, indices: list[int] = None) -> Optional[PlayResult]:
        """
        Play cards from hand. With no indices, plays the current selection.

        Returns None if the play was rejected.
        """
        if not self._require_phase(Phase.PLAYING, "play"):
            return None

        indices = sorted(set(self.selected if indices is None else indices))
        if any(not 0 <= i < self.hand.size() for i in indices):
            self._log("rejected", "Invalid selection: card position out of range.")
            return None

        played = self.hand.select(indices)
        detected = self.hand_detector.detect(played)
        if not detected.is_valid:
            self._log("rejected", "Invalid play. Try 1, 2 (pair), or 5-card combos.")
            return None

        # Chain decision comes first; its multiplier applies to this play
        chain_continued = self.chain.continues(detected.hand_type)
        chain_mult = self.chain.update(detected.hand_type)
        if chain_continued:
            self._log("chain", f"CHAIN x{chain_mult:.2f}! (chain {self.chain.chain_count})",
                      chain_count=self.chain.chain_count)

        breakdown = self.scoring_engine.score_hand(
            detected, level=self.level, modifiers=self.modifiers, chain_multiplier=chain_mult
        )
        self.score += breakdown.final_points
        self.gold += breakdown.gold_earned
        self._log(
            "play",
            f"Played {len(played)} cards => {detected.hand_type.label}, "
            f"+{breakdown.final_points:.1f} pts, +{breakdown.gold_earned:.1f} gold",
            hand_type=detected.hand_type.name,
            cards=[str(c) for c in played],
            points=breakdown.final_points,
            gold=breakdown.gold_earned,
        )

        self.discard_pile.add(self.hand.remove_indices(indices))
        self.selected.clear()

        cards_drawn = self._refill_hand()
        boost_drawn = 0
        if self.modifiers.draw_boost.consume():
            recovered = self.discard_pile.draw_random(len(played), self.rng)
            self.hand.add(recovered)
            boost_drawn = len(recovered)
            self._log("draw_boost",
                      f"Draw Boost: drew {boost_drawn} random cards from discard (used up).")

        self._check_progress()
        return PlayResult(
            detected=detected,
            breakdown=breakdown,
            chain_continued=chain_continued,
            cards_drawn=cards_drawn,
            boost_drawn=boost_drawn
        )

    def pass_turn(self) -> bool:
        """Skip playing and draw up to hand size from the deck."""
        if not self._require_phase(Phase.PLAYING, "pass"):
            return False

        self.selected.clear()
        drawn = self._refill_hand()
        self._log("pass", f"Passed. Drew {drawn} cards.", drawn=drawn)
        self._check_progress()
        return True

    def redraw(self) -> bool:
        """
        One-time Discard/Redraw: swap the whole hand for random cards from the
        discard pile. Falls back to the deck only if nothing came back.
        """
        if not self._require_phase(Phase.PLAYING, "redraw"):
            return False
        if not self.modifiers.discard_redraw.available:
            self._log("rejected", "No redraw available.")
            return False

        hand_size = self.hand.size()
        new_cards = self.discard_pile.draw_random(hand_size, self.rng)
        self.discard_pile.add(self.hand.clear())
        self.hand.add(new_cards)

        drawn_from_deck = 0
        if not new_cards:
            drawn_from_deck = len(self._draw_into_hand(hand_size))

        self.modifiers.discard_redraw.consume()
        self.selected.clear()

        if not self.hand.cards and self.deck.is_empty() and self.discard_pile.is_empty():
            self.phase = Phase.FAILED
            self._log("failed", "No cards available after REDRAW -> failed.")
            return True

        self._log(
            "redraw",
            f"REDRAW complete: hand={self.hand.size()}, deck={self.deck.size()}, "
            f"discard={self.discard_pile.size()} (deck draws: {drawn_from_deck})",
        )
        self._check_progress()
        return True

    def buy(self, item_id: int) -> bool:
        """Buy a shop item. Only allowed while shopping."""
        if not self._require_phase(Phase.SHOPPING, "buy"):
            return False

        result = self.shop.purchase(item_id, self.gold, self.modifiers)
        if not result.success:
            self._log("rejected", result.message)
            return False

        self.gold = result.gold_remaining
        self._log("purchase", result.message, item=result.item.name, cost=result.item.cost)
        return True

    def leave_shop(self) -> bool:
        if not self._require_phase(Phase.SHOPPING, "leave the shop"):
            return False
        self.phase = Phase.CHOOSING_MAGIC
        self._log("shop_closed", "Shop closed. Now choose Magic upgrade.")
        return True

    def choose_magic(self, option: Union[MagicOption, str], card_index: int = None) -> bool:
        """
        Apply one magic option and advance to the next level.
        Suit Change and Card Multiplier need the index of a hand card.
        """
        if not self._require_phase(Phase.CHOOSING_MAGIC, "choose magic"):
            return False
        try:
            option = MagicOption(option)
        except ValueError:
            self._log("rejected", f"Unknown magic option: {option}")
            return False

        if option.needs_card and (card_index is None or not 0 <= card_index < self.hand.size()):
            self._log("rejected", f"{option.title}: select a card in your hand first.")
            return False

        if option == MagicOption.HAND_SCORE_UPGRADE:
            self.modifiers.add_bonus(HandType.PAIR, PAIR_UPGRADE_BONUS)
            message = f"Chosen: Hand Score Upgrade (+{PAIR_UPGRADE_BONUS} to Pairs)"
        elif option == MagicOption.SUIT_CHANGE:
            card = self.hand.cards[card_index]
            changed = card.with_suit(card.suit.next())
            self.hand.replace(card_index, changed)
            message = f"Chosen: Suit Change ({card} -> {changed})"
        elif option == MagicOption.CARD_MULTIPLIER:
            card = self.hand.cards[card_index]
            self.modifiers.set_rank_multiplier(card.rank, CARD_MULTIPLIER_FACTOR)
            message = f"Card Multiplier set to rank {card.rank_name} (x{CARD_MULTIPLIER_FACTOR})"
        elif option == MagicOption.DISCARD_REDRAW:
            self.modifiers.discard_redraw.grant()
            message = "Chosen: Discard/Redraw (one-time)"
        else:
            self.modifiers.draw_boost.grant()
            message = "Chosen: Draw Boost (extra draw on next play only)"

        self._log("magic", message, option=option.value)
        self.selected.clear()
        self._advance_level()
        return True

    def restart(self) -> bool:
        """Start a brand new run. Nothing carries over."""
        self._new_run()
        self._log("restart", "Restarted.")
        return True

    # ----- internals -----

    def _require_phase(self, phase: Phase, action: str) -> bool:
        if self.phase == phase:
            return True
        self._log("rejected", f"Cannot {action} now ({self.phase.name.lower()}).")
        return False

    def _draw_into_hand(self, count: int) -> list[Card]:
        drawn = self.deck.draw(count)
        self.hand.add(drawn)
        return drawn

    def _refill_hand(self) -> int:
        """Draw from the deck (never the discard pile) up to hand size."""
        needed = self.config.hand_size - self.hand.size()
        if needed <= 0:
            return 0
        return len(self._draw_into_hand(needed))

    def _check_progress(self) -> None:
        """Level clear / failure checks after a playing-phase intent."""
        if self.phase != Phase.PLAYING:
            return

        if self.score >= self.target:
            self.phase = Phase.SHOPPING
            self._log("level_cleared",
                      f"Level {self.level} cleared! Visit Shop. Gold:{self.gold:.0f}",
                      score=self.score, gold=self.gold)
        elif self.deck.is_empty() and not self.hand.cards:
            # The discard pile does not count: it never refills the hand by itself
            self.phase = Phase.FAILED
            self._log("failed", "Deck empty and hand empty -> GAME OVER.", score=self.score)

    def _advance_level(self) -> None:
        self.level += 1
        if self.level > self.config.max_level:
            self.phase = Phase.FINISHED
            self._log("finished", "All levels cleared!", score=self.score)
        else:
            self.phase = Phase.PLAYING
            self._log("level_start", f"Starting Level {self.level} (target {self.target:g})")
            # Score carries over, so the new target may already be met
            self._check_progress()
        logger.debug("Advanced to level %d, phase %s", self.level, self.phase.name)

    def _log(self, event_type: str, message: str, **data) -> None:
        self.log.add(self.level, event_type, message, **data)
