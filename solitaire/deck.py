"""Keystream state machine driven by the order of a 54-card deck.

One round moves Joker A down one card and Joker B down two cards (a joker
leaving the bottom re-enters just below the top card), performs a triple cut
around the jokers, then a count cut sized by the bottom card.  The top card's
value selects the output card; a joker there yields no output for the round.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Sequence

from . import encoding
from .validation import Deck, assert_valid_deck

__all__ = [
    "RoundResult",
    "KeystreamResult",
    "DEFAULT_MODULUS",
    "move_card_down",
    "triple_cut",
    "count_cut",
    "output_card",
    "advance_one_step",
    "perform_round",
    "iter_rounds",
    "generate_keystream",
]

logger = logging.getLogger(__name__)

DEFAULT_MODULUS = 52


@dataclass(frozen=True, slots=True)
class RoundResult:
    """Deck state after one round and the raw card it produced, if any."""

    deck: Deck
    output: int | None


@dataclass(frozen=True, slots=True)
class KeystreamResult:
    """Keystream values together with the deck state that follows them."""

    keystream: tuple[int, ...]
    deck: Deck
    rounds: int
    skipped: int


def move_card_down(deck: Sequence[int], card: int, steps: int) -> Deck:
    """Return ``deck`` with ``card`` moved ``steps`` single positions down.

    A card moved off the bottom wraps to index 1, never to the top.
    """

    working = list(deck)
    for _ in range(steps):
        index = working.index(card)
        del working[index]
        target = index + 1
        if target > len(working):
            target = 1
        working.insert(target, card)
    return tuple(working)


def triple_cut(deck: Sequence[int]) -> Deck:
    """Swap the cards above the first joker with those below the second."""

    first, second = sorted((deck.index(encoding.JOKER_A), deck.index(encoding.JOKER_B)))
    top = tuple(deck[:first])
    middle = tuple(deck[first : second + 1])
    bottom = tuple(deck[second + 1 :])
    return bottom + middle + top


def count_cut(deck: Sequence[int]) -> Deck:
    """Cut as many cards as the bottom card's value, keeping the bottom card fixed."""

    bottom_card = deck[-1]
    cut_value = encoding.joker_value(bottom_card)
    if cut_value == len(deck) - 1:
        return tuple(deck)
    top = tuple(deck[:cut_value])
    middle = tuple(deck[cut_value:-1])
    return middle + top + (bottom_card,)


def output_card(deck: Sequence[int]) -> int | None:
    """Return the card indexed by the top card's value, or ``None`` for a joker."""

    card = deck[encoding.joker_value(deck[0])]
    if encoding.is_joker(card):
        return None
    return card


def _advance(deck: Deck) -> Deck:
    working = move_card_down(deck, encoding.JOKER_A, 1)
    working = move_card_down(working, encoding.JOKER_B, 2)
    working = triple_cut(working)
    return count_cut(working)


def advance_one_step(deck: Sequence[int]) -> Deck:
    """Return the deck that follows ``deck`` after one full round."""

    return _advance(assert_valid_deck(deck))


def perform_round(deck: Sequence[int]) -> RoundResult:
    """Advance ``deck`` one round and extract that round's output card."""

    successor = advance_one_step(deck)
    return RoundResult(successor, output_card(successor))


def iter_rounds(deck: Sequence[int]) -> Iterator[RoundResult]:
    """Yield successive rounds starting from ``deck`` without end."""

    working = assert_valid_deck(deck)
    while True:
        working = _advance(working)
        yield RoundResult(working, output_card(working))


def generate_keystream(deck: Sequence[int], length: int, modulus: int = DEFAULT_MODULUS) -> KeystreamResult:
    """Collect ``length`` keystream values in ``[1, modulus]`` from ``deck``.

    Rounds that land on a joker are discarded and another round is run.  A
    request for zero values performs no rounds and returns ``deck`` unchanged.
    """

    if length < 0:
        raise ValueError("keystream length must be non-negative")
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    start = assert_valid_deck(deck)
    if length == 0:
        return KeystreamResult((), start, 0, 0)

    keystream: list[int] = []
    final_deck = start
    rounds = 0
    skipped = 0
    for result in iter_rounds(start):
        rounds += 1
        final_deck = result.deck
        if result.output is None:
            skipped += 1
            continue
        keystream.append(result.output % modulus or modulus)
        if len(keystream) == length:
            break

    logger.debug("generated %d keystream values in %d rounds (%d joker rounds skipped)", length, rounds, skipped)
    return KeystreamResult(tuple(keystream), final_deck, rounds, skipped)
