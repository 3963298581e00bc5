"""
Big Two Magic rules engine components.
"""

from .deck import Card, Deck, Hand, DiscardPile, Suit, RANKS, RANK_NAMES
from .hand_detector import HandType, DetectedHand, HandDetector, detect_hand
from .scoring import ScoringEngine, ScoreBreakdown, base_points, calculate_points, score_breakdown
from .chain import ChainState, CHAIN_PROGRESSION
from .magic import Modifiers, MagicOption, OneTimeAbility, AbilityState
from .shop import Shop, ShopItem, SHOP_ITEMS, PurchaseResult
from .history import GameLog, GameEvent
from .intents import SelectToggle, Play, Pass, Redraw, ChooseMagic, BuyShopItem, LeaveShop, Restart
from .game import GameState, GameConfig, GameSnapshot, PlayResult, Phase, LEVEL_TARGETS
