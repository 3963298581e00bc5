from typing import Callable, Iterable, Optional

import pytest

from bigtwo_magic.engine.deck import Card, Deck, Hand, DiscardPile, Suit
from bigtwo_magic.engine.game import GameState, GameConfig

SUIT_LETTERS = {suit.letter: suit for suit in Suit}
RANK_LETTERS = {"J": 11, "Q": 12, "K": 13, "A": 14}


def card(spec: str) -> Card:
    """Build a card from a short spec like '10H', 'AS' or '2d'."""
    spec = spec.upper()
    rank, suit = spec[:-1], spec[-1]
    return Card(RANK_LETTERS.get(rank) or int(rank), SUIT_LETTERS[suit])


def cards(*specs: str) -> list[Card]:
    return [card(s) for s in specs]


@pytest.fixture
def make_game() -> Callable[..., GameState]:
    """
    Factory for games with a rigged hand. Cards not placed in the hand or
    discard pile go to the deck (unless a deck is given), so a rigged game
    still holds all 52 cards.
    """

    def _factory(hand: Iterable[str] = (), deck: Optional[Iterable[str]] = None,
                 discard: Iterable[str] = (), seed: int = 1, **config) -> GameState:
        game = GameState(GameConfig(seed=seed, **config))
        hand_cards = cards(*hand)
        discard_cards = cards(*discard)
        if deck is None:
            used = set(hand_cards) | set(discard_cards)
            deck_cards = [c for c in Deck.standard_52().cards if c not in used]
        else:
            deck_cards = cards(*deck)

        game.hand = Hand(hand_cards)
        game.deck = Deck(deck_cards)
        game.discard_pile = DiscardPile(discard_cards)
        game.selected = []
        return game

    return _factory
