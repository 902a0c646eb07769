"""Reading and writing the human deck vector text format."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Final, Sequence

from . import encoding
from .errors import DeckError, EmptyDeckInput, UnrecognizedToken, WrongCardCount
from .validation import Deck, validate_deck

__all__ = ["ParseResult", "parse_deck_vector", "parse_deck", "format_deck_vector"]

_SEPARATORS: Final = re.compile(r"[\s,\[\]()]+")
_NON_WORD: Final = re.compile(r"[^\w]")
_DIGITS: Final = re.compile(r"^\d+$")


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome of parsing a deck vector: a deck or the reason there is none."""

    deck: Deck | None
    error: DeckError | None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str | None:
        return None if self.error is None else self.error.message


def _parse_token(token: str) -> int | None:
    normalized = _NON_WORD.sub("", token)
    if not normalized:
        return None
    if normalized in ("A", "a"):
        return encoding.JOKER_A
    if normalized in ("B", "b"):
        return encoding.JOKER_B
    if _DIGITS.match(normalized) and normalized.isascii():
        return int(normalized, 10)
    return None


def parse_deck_vector(text: str) -> ParseResult:
    """Parse 54 separated tokens into a deck.

    Tokens are decimal card values or the joker letters ``A``/``B``.  Range,
    duplicate and joker problems are reported by the deck validator.
    """

    tokens = [token for token in _SEPARATORS.split(text) if token]
    if not tokens:
        return ParseResult(None, EmptyDeckInput())
    if len(tokens) != encoding.DECK_SIZE:
        return ParseResult(None, WrongCardCount(len(tokens)))

    cards: list[int] = []
    for token in tokens:
        card = _parse_token(token)
        if card is None:
            return ParseResult(None, UnrecognizedToken(token))
        cards.append(card)

    error = validate_deck(cards)
    if error is not None:
        return ParseResult(None, error)
    return ParseResult(tuple(cards), None)


def parse_deck(text: str) -> Deck:
    """Parse ``text`` and raise the parse error instead of returning it."""

    result = parse_deck_vector(text)
    if result.error is not None:
        raise result.error
    assert result.deck is not None
    return result.deck


def format_deck_vector(deck: Sequence[int]) -> str:
    """Render ``deck`` as comma separated values with jokers as ``A``/``B``."""

    return ", ".join(encoding.card_label(card) for card in deck)
