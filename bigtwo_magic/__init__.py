"""
Big Two Magic - solitaire card scoring game engine
"""

from .engine.deck import Card, Deck, Hand, DiscardPile, Suit
from .engine.hand_detector import HandType, DetectedHand, HandDetector, detect_hand
from .engine.scoring import ScoringEngine, ScoreBreakdown, calculate_points, score_breakdown
from .engine.game import GameState, GameConfig, GameSnapshot, Phase
from .engine.magic import MagicOption

__version__ = "0.1.0"
