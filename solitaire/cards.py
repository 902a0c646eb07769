"""High-level card helpers and deck assembly utilities."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence

from . import encoding
from .validation import Deck


@dataclass(frozen=True)
class Card:
    """Convenience wrapper for the low-level card value."""

    value: int

    @property
    def meta(self) -> encoding.CardDecoding:
        return encoding.decode_card(self.value)

    @property
    def is_joker(self) -> bool:
        return self.meta.is_joker

    @property
    def label(self) -> str:
        return encoding.card_label(self.value)

    @property
    def face(self) -> str:
        return encoding.card_face(self.value)


def ordered_deck() -> Deck:
    """Return the deck in its factory order ``1..54``."""

    return tuple(range(encoding.MIN_CARD, encoding.MAX_CARD + 1))


def shuffle_deck(rng: random.Random | None = None) -> Deck:
    """Return a freshly shuffled deck.

    Without an explicit ``rng`` the operating system's entropy source is used;
    pass a seeded :class:`random.Random` for reproducible decks.
    """

    generator = rng if rng is not None else random.SystemRandom()
    cards: List[int] = list(ordered_deck())
    generator.shuffle(cards)
    return tuple(cards)


def iter_cards(deck: Iterable[int]) -> Iterator[Card]:
    for value in deck:
        yield Card(value)


def format_faces(deck: Sequence[int]) -> str:
    return " ".join(card.face for card in iter_cards(deck))
