"""Permutation validator shared by the deck engine, codec and parser."""

from __future__ import annotations

from numbers import Integral
from typing import Sequence

from . import encoding
from .errors import CardOutOfRange, DeckError, DuplicateCard, MissingJoker, WrongCardCount

__all__ = ["Deck", "validate_deck", "assert_valid_deck", "is_valid_deck"]

Deck = tuple[int, ...]


def _is_card_value(candidate: object) -> bool:
    if isinstance(candidate, bool) or not isinstance(candidate, Integral):
        return False
    return encoding.MIN_CARD <= int(candidate) <= encoding.MAX_CARD


def validate_deck(candidate: Sequence[object]) -> DeckError | None:
    """Return the first problem found in ``candidate`` or ``None`` if it is a deck.

    Checks run in a fixed order and stop at the first failure: card count,
    card range, duplicates, then the presence of both jokers.
    """

    if len(candidate) != encoding.DECK_SIZE:
        return WrongCardCount(len(candidate))

    for position, card in enumerate(candidate):
        if not _is_card_value(card):
            return CardOutOfRange(card, position)

    seen: set[int] = set()
    for position, card in enumerate(candidate):
        value = int(card)  # type: ignore[call-overload]
        if value in seen:
            return DuplicateCard(value, position)
        seen.add(value)

    missing = [joker for joker in encoding.JOKER_IDS if joker not in seen]
    if missing:
        return MissingJoker(missing)
    return None


def is_valid_deck(candidate: Sequence[object]) -> bool:
    """Return ``True`` when ``candidate`` is a legal 54-card permutation."""

    return validate_deck(candidate) is None


def assert_valid_deck(candidate: Sequence[object]) -> Deck:
    """Return ``candidate`` as an immutable deck or raise its validation error."""

    error = validate_deck(candidate)
    if error is not None:
        raise error
    return tuple(int(card) for card in candidate)  # type: ignore[call-overload]
