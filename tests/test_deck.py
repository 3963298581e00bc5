import random

import pytest

from bigtwo_magic.engine.deck import Card, Deck, Hand, DiscardPile, Suit

from conftest import cards


def test_new_shuffled_is_a_permutation_of_52():
    for seed in range(20):
        deck = Deck.new_shuffled(random.Random(seed))
        assert len(deck.cards) == 52
        assert set(deck.cards) == set(Deck.standard_52().cards)


def test_standard_52_canonical_order():
    deck = Deck.standard_52()
    assert deck.cards[0] == Card(2, Suit.DIAMONDS)
    assert deck.cards[12] == Card(14, Suit.DIAMONDS)
    assert deck.cards[-1] == Card(14, Suit.SPADES)


def test_shuffle_is_seeded():
    a = Deck.new_shuffled(random.Random(42))
    b = Deck.new_shuffled(random.Random(42))
    assert a.cards == b.cards


def test_draw_one_from_empty_deck_returns_none():
    deck = Deck(cards("2H"))
    assert deck.draw_one() == Card(2, Suit.HEARTS)
    assert deck.draw_one() is None
    assert deck.is_empty()


def test_draw_stops_when_deck_runs_out():
    deck = Deck(cards("2H", "3H", "4H"))
    assert deck.draw(5) == cards("4H", "3H", "2H")
    assert deck.size() == 0


def test_card_rejects_bad_rank():
    with pytest.raises(ValueError):
        Card(1, Suit.CLUBS)
    with pytest.raises(ValueError):
        Card(15, Suit.CLUBS)


def test_card_display():
    assert str(Card(10, Suit.HEARTS)) == "10H"
    assert str(Card(14, Suit.SPADES)) == "AS"
    assert Card(14, Suit.SPADES).rank_name == "A"


def test_suit_cycle_wraps():
    assert Suit.DIAMONDS.next() == Suit.CLUBS
    assert Suit.CLUBS.next() == Suit.HEARTS
    assert Suit.HEARTS.next() == Suit.SPADES
    assert Suit.SPADES.next() == Suit.DIAMONDS


def test_hand_remove_indices_highest_first():
    hand = Hand(cards("2H", "3H", "4H", "5H", "6H"))
    removed = hand.remove_indices([1, 3])
    assert removed == cards("5H", "3H")
    assert hand.cards == cards("2H", "4H", "6H")


def test_hand_remove_ignores_out_of_range_and_duplicates():
    hand = Hand(cards("2H", "3H"))
    removed = hand.remove_indices([0, 0, 9])
    assert removed == cards("2H")
    assert hand.cards == cards("3H")


def test_hand_select_keeps_order():
    hand = Hand(cards("2H", "3H", "4H"))
    assert hand.select([2, 0]) == cards("4H", "2H")


def test_discard_draw_random_without_replacement():
    pile = DiscardPile(cards("2H", "3H", "4H", "5H"))
    drawn = pile.draw_random(3, random.Random(0))
    assert len(drawn) == 3
    assert len(set(drawn)) == 3
    assert pile.size() == 1
    assert set(drawn) | set(pile.cards) == set(cards("2H", "3H", "4H", "5H"))


def test_discard_draw_random_smaller_pile():
    pile = DiscardPile(cards("2H", "3H"))
    drawn = pile.draw_random(5, random.Random(0))
    assert sorted(c.rank for c in drawn) == [2, 3]
    assert pile.is_empty()
