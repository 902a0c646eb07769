"""Tests for the keystream state machine."""

from __future__ import annotations

from typing import Sequence

import pytest

from solitaire import deck as engine
from solitaire import errors
from solitaire.cards import ordered_deck
from solitaire.encoding import JOKER_A, JOKER_B

# Published vector for the unkeyed deck; one joker round falls between 10 and 24.
ORDERED_KEYSTREAM = (4, 49, 10, 24, 8, 51, 44, 6, 4, 33)


def reposition(deck: Sequence[int], card: int, target: int) -> tuple[int, ...]:
    working = list(deck)
    working.remove(card)
    working.insert(target, card)
    return tuple(working)


def manual_triple_cut(deck: Sequence[int]) -> tuple[int, ...]:
    first = min(deck.index(JOKER_A), deck.index(JOKER_B))
    second = max(deck.index(JOKER_A), deck.index(JOKER_B))
    return tuple(deck[second + 1 :]) + tuple(deck[first : second + 1]) + tuple(deck[:first])


@pytest.mark.parametrize(
    ("deck", "card", "steps", "expected"),
    [
        ((1, JOKER_A, 2, 3, 4), JOKER_A, 1, (1, 2, JOKER_A, 3, 4)),
        ((1, 2, 3, JOKER_A), JOKER_A, 1, (1, JOKER_A, 2, 3)),
        ((1, 2, 3, JOKER_B), JOKER_B, 2, (1, 2, JOKER_B, 3)),
        ((JOKER_B, 1, 2, 3, 4), JOKER_B, 2, (1, 2, JOKER_B, 3, 4)),
        ((1, 2, JOKER_B, 3), JOKER_B, 2, (1, JOKER_B, 2, 3)),
    ],
)
def test_move_card_down_small_decks(
    deck: tuple[int, ...], card: int, steps: int, expected: tuple[int, ...]
) -> None:
    assert engine.move_card_down(deck, card, steps) == expected


def test_joker_a_wraps_from_bottom_to_second_position() -> None:
    deck = tuple(card for card in ordered_deck() if card != JOKER_A) + (JOKER_A,)
    result = engine.move_card_down(deck, JOKER_A, 1)

    assert result == (1, JOKER_A) + tuple(range(2, 53)) + (JOKER_B,)
    assert result.index(JOKER_A) == 1


def test_joker_b_wraps_from_bottom_to_third_position() -> None:
    result = engine.move_card_down(ordered_deck(), JOKER_B, 2)
    assert result == (1, 2, JOKER_B) + tuple(range(3, 53)) + (JOKER_A,)


def test_joker_b_second_from_bottom_wraps_to_second_position() -> None:
    deck = reposition(ordered_deck(), JOKER_B, 52)
    result = engine.move_card_down(deck, JOKER_B, 2)
    assert result == (1, JOKER_B) + tuple(range(2, 53)) + (JOKER_A,)


def test_triple_cut_keeps_middle_segment_intact() -> None:
    deck = (1, 2, JOKER_A, 3, JOKER_B, 4, 5)
    assert engine.triple_cut(deck) == (4, 5, JOKER_A, 3, JOKER_B, 1, 2)


def test_triple_cut_with_jokers_at_both_ends() -> None:
    deck = (JOKER_B, 1, 2, JOKER_A)
    assert engine.triple_cut(deck) == deck


def test_count_cut_keeps_bottom_card() -> None:
    deck = (10, 11, 12, 13, 14, 2)
    assert engine.count_cut(deck) == (12, 13, 14, 10, 11, 2)


@pytest.mark.parametrize("joker", [JOKER_A, JOKER_B])
def test_count_cut_with_bottom_joker_is_unchanged(joker: int) -> None:
    deck = reposition(ordered_deck(), joker, 53)
    assert engine.count_cut(deck) == deck


def test_output_card_uses_top_value_as_index() -> None:
    deck = (1, 9) + tuple(range(2, 9)) + tuple(range(10, 55))
    assert engine.output_card(deck) == 9


def test_output_card_returns_none_for_joker() -> None:
    deck = (1, JOKER_A) + tuple(range(2, 53)) + (JOKER_B,)
    assert engine.output_card(deck) is None


def test_output_card_counts_top_joker_as_53() -> None:
    deck = (JOKER_B,) + tuple(range(1, 53)) + (JOKER_A,)
    assert engine.output_card(deck) is None
    deck = (JOKER_B,) + tuple(range(1, 52)) + (JOKER_A, 52)
    assert engine.output_card(deck) == 52


@pytest.mark.parametrize(
    ("joker_a_at", "joker_b_at"),
    [(0, 10), (20, 32), (40, 45), (10, 53), (5, 15)],
)
def test_advance_one_step_matches_manual_composition(joker_a_at: int, joker_b_at: int) -> None:
    deck = reposition(ordered_deck(), JOKER_A, joker_a_at)
    deck = reposition(deck, JOKER_B, joker_b_at)

    moved = engine.move_card_down(engine.move_card_down(deck, JOKER_A, 1), JOKER_B, 2)
    cut = manual_triple_cut(moved)
    bottom = cut[-1]
    value = 53 if bottom >= JOKER_A else bottom
    expected = cut if value == 53 else cut[value:-1] + cut[:value] + (bottom,)

    result = engine.advance_one_step(deck)
    assert result == expected
    assert sorted(result) == list(range(1, 55))


def test_advance_one_step_does_not_mutate_input() -> None:
    deck = list(ordered_deck())
    engine.advance_one_step(deck)
    assert deck == list(range(1, 55))


def test_advance_one_step_rejects_invalid_deck() -> None:
    with pytest.raises(errors.WrongCardCount):
        engine.advance_one_step([1, 2, 3])


def test_perform_round_from_ordered_deck() -> None:
    result = engine.perform_round(ordered_deck())
    assert result.output == 4
    assert result.deck == tuple(range(2, 53)) + (JOKER_A, JOKER_B, 1)


def test_generate_keystream_known_vector() -> None:
    result = engine.generate_keystream(ordered_deck(), 10)

    assert result.keystream == ORDERED_KEYSTREAM
    assert result.rounds == 11
    assert result.skipped == 1


def test_generate_keystream_final_deck_continues_the_stream() -> None:
    first = engine.generate_keystream(ordered_deck(), 4)
    second = engine.generate_keystream(first.deck, 6)
    assert first.keystream + second.keystream == ORDERED_KEYSTREAM


def test_generate_keystream_zero_length_is_noop() -> None:
    start = ordered_deck()
    result = engine.generate_keystream(start, 0)

    assert result.keystream == ()
    assert result.deck == start
    assert result.rounds == 0


def test_generate_keystream_rejects_negative_length() -> None:
    with pytest.raises(ValueError):
        engine.generate_keystream(ordered_deck(), -1)


@pytest.mark.parametrize(
    ("modulus", "expected"),
    [
        (26, (4, 23, 10, 24, 8, 25, 18, 6, 4, 7)),
        (4, (4, 1, 2, 4, 4, 3, 4, 2, 4, 1)),
    ],
)
def test_keystream_values_wrap_into_one_based_range(modulus: int, expected: tuple[int, ...]) -> None:
    assert engine.generate_keystream(ordered_deck(), 10, modulus).keystream == expected


def test_keystream_values_stay_in_range() -> None:
    result = engine.generate_keystream(ordered_deck(), 500)
    assert len(result.keystream) == 500
    assert all(1 <= value <= 52 for value in result.keystream)


def test_iter_rounds_matches_perform_round() -> None:
    rounds = engine.iter_rounds(ordered_deck())
    first = next(rounds)
    second = next(rounds)

    assert first == engine.perform_round(ordered_deck())
    assert second == engine.perform_round(first.deck)
