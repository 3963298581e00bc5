import pytest

from bigtwo_magic.engine.chain import ChainState
from bigtwo_magic.engine.hand_detector import HandType


def play_sequence(kinds):
    chain = ChainState()
    return chain, [chain.update(kind) for kind in kinds]


def test_progression_builds_multiplier():
    chain, mults = play_sequence([HandType.SINGLE, HandType.PAIR, HandType.STRAIGHT])
    assert mults == [1.0, 1.25, 1.5]
    assert chain.chain_count == 3
    assert chain.last_hand_type == HandType.STRAIGHT


def test_out_of_sequence_resets_on_that_play():
    chain, mults = play_sequence(
        [HandType.SINGLE, HandType.PAIR, HandType.STRAIGHT, HandType.SINGLE]
    )
    assert mults[-1] == 1.0
    assert chain.chain_count == 1
    assert chain.last_hand_type == HandType.SINGLE


def test_repeating_a_kind_continues():
    _, mults = play_sequence([HandType.PAIR, HandType.PAIR, HandType.PAIR])
    assert mults == [1.0, 1.25, 1.5]


def test_skipping_a_step_breaks():
    chain, mults = play_sequence([HandType.SINGLE, HandType.STRAIGHT])
    assert mults == [1.0, 1.0]
    assert chain.chain_count == 1


def test_regression_breaks():
    chain = ChainState()
    chain.update(HandType.STRAIGHT)
    assert not chain.continues(HandType.PAIR)
    assert chain.update(HandType.PAIR) == 1.0


def test_full_ladder():
    ladder = [HandType.SINGLE, HandType.PAIR, HandType.STRAIGHT, HandType.FLUSH,
              HandType.FULL_HOUSE, HandType.FOUR_OF_A_KIND, HandType.STRAIGHT_FLUSH]
    chain, mults = play_sequence(ladder)
    assert mults[-1] == pytest.approx(2.5)
    assert chain.continues(HandType.STRAIGHT_FLUSH)
    assert not chain.continues(HandType.SINGLE)


def test_fresh_chain_never_continues():
    chain = ChainState()
    assert not chain.active
    assert not chain.continues(HandType.SINGLE)
    assert chain.multiplier == 1.0


def test_reset():
    chain, _ = play_sequence([HandType.SINGLE, HandType.PAIR])
    chain.reset()
    assert chain.chain_count == 0
    assert chain.last_hand_type == HandType.INVALID
    assert chain.multiplier == 1.0


def test_invalid_is_never_tracked():
    with pytest.raises(ValueError):
        ChainState().update(HandType.INVALID)
