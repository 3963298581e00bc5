"""
Deck management for Big Two Magic.
Handles card creation, shuffling, drawing, the hand and the discard pile.
"""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Suit(Enum):
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"
    HEARTS = "Hearts"
    SPADES = "Spades"

    @property
    def letter(self) -> str:
        return self.value[0]

    def next(self) -> "Suit":
        """Next suit in canonical order, wrapping Spades back to Diamonds."""
        suits = list(Suit)
        return suits[(suits.index(self) + 1) % len(suits)]


RANKS = list(range(2, 15))  # 14 = Ace, ranked high
RANK_NAMES = {
    2: "2", 3: "3", 4: "4", 5: "5", 6: "6", 7: "7", 8: "8", 9: "9", 10: "10",
    11: "J", 12: "Q", 13: "K", 14: "A"
}


@dataclass(frozen=True)
class Card:
    rank: int
    suit: Suit

    def __post_init__(self):
        if self.rank not in RANK_NAMES:
            raise ValueError(f"Invalid rank: {self.rank}")

    @property
    def rank_name(self) -> str:
        return RANK_NAMES[self.rank]

    @property
    def is_red(self) -> bool:
        return self.suit in (Suit.HEARTS, Suit.DIAMONDS)

    def with_suit(self, suit: Suit) -> "Card":
        return Card(rank=self.rank, suit=suit)

    def __str__(self) -> str:
        return f"{self.rank_name}{self.suit.letter}"

    def __repr__(self) -> str:
        return self.__str__()


@dataclass
class Deck:
    cards: list[Card] = field(default_factory=list)

    @classmethod
    def standard_52(cls) -> "Deck":
        """Create a standard 52-card deck in canonical order."""
        cards = []
        for suit in Suit:
            for rank in RANKS:
                cards.append(Card(rank=rank, suit=suit))
        return cls(cards=cards)

    @classmethod
    def new_shuffled(cls, rng: random.Random = None) -> "Deck":
        deck = cls.standard_52()
        deck.shuffle(rng)
        return deck

    def shuffle(self, rng: random.Random = None) -> None:
        """Shuffle the deck in place (Fisher-Yates via random.shuffle)."""
        (rng or random).shuffle(self.cards)

    def draw_one(self) -> Optional[Card]:
        """Draw the top card. Returns None when the deck is empty."""
        if not self.cards:
            return None
        return self.cards.pop()

    def draw(self, n: int = 1) -> list[Card]:
        """Draw up to n cards; fewer if the deck runs out."""
        drawn = []
        for _ in range(n):
            card = self.draw_one()
            if card is None:
                break
            drawn.append(card)
        return drawn

    def is_empty(self) -> bool:
        return not self.cards

    def size(self) -> int:
        return len(self.cards)


class Hand:
    """Represents cards currently held in hand, in display order."""

    def __init__(self, cards: list[Card] = None):
        self.cards: list[Card] = cards or []

    def add(self, cards: list[Card]) -> None:
        self.cards.extend(cards)

    def select(self, indices: list[int]) -> list[Card]:
        """Get cards at specified indices, ignoring out-of-range ones."""
        return [self.cards[i] for i in indices if 0 <= i < len(self.cards)]

    def remove_indices(self, indices: list[int]) -> list[Card]:
        """
        Remove cards at the given indices, highest index first so the
        remaining indices stay valid. Returns cards in removal order.
        """
        removed = []
        for i in sorted(set(indices), reverse=True):
            if 0 <= i < len(self.cards):
                removed.append(self.cards.pop(i))
        return removed

    def replace(self, index: int, card: Card) -> Card:
        """Swap the card at index, returning the old one."""
        old = self.cards[index]
        self.cards[index] = card
        return old

    def clear(self) -> list[Card]:
        """Remove and return all cards."""
        cards = self.cards
        self.cards = []
        return cards

    def size(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.__str__()})"


class DiscardPile:
    """Played and discarded cards; the only source for recycling cards."""

    def __init__(self, cards: list[Card] = None):
        self.cards: list[Card] = cards or []

    def add(self, cards: list[Card]) -> None:
        self.cards.extend(cards)

    def draw_random(self, n: int, rng: random.Random = None) -> list[Card]:
        """
        Draw up to n cards uniformly at random without replacement.
        Stops early when the pile empties.
        """
        rng = rng or random
        drawn = []
        for _ in range(n):
            if not self.cards:
                break
            drawn.append(self.cards.pop(rng.randrange(len(self.cards))))
        return drawn

    def is_empty(self) -> bool:
        return not self.cards

    def size(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)
