"""Compact, reversible identities for 54-card deck arrangements.

A deck is ranked among all ``54!`` permutations with the factorial number
system (Lehmer code): at each position the card's rank among the cards not yet
placed becomes one factorial digit.  The resulting integer in ``[0, 54! - 1]``
is written in base 62 to form the *deck code*.  Lexicographic order is
preserved, so the ordered deck ``1..54`` encodes as ``"0"`` and the fully
descending deck encodes as ``54! - 1``.
"""

from __future__ import annotations

import hashlib
import logging
import math
from functools import lru_cache
from typing import Final, Sequence

from . import encoding
from .errors import DeckCodeMalformed, DeckCodeOutOfRange, NoHashPrimitiveAvailable
from .validation import Deck, assert_valid_deck

__all__ = [
    "DECK_CODE_ALPHABET",
    "MAX_INDEX",
    "MAX_CODE_LENGTH",
    "deck_to_index",
    "index_to_deck",
    "encode_index",
    "decode_index",
    "deck_to_code",
    "code_to_deck",
    "deck_fingerprint",
]

logger = logging.getLogger(__name__)

DECK_CODE_ALPHABET: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
_DECK_CODE_BASE: Final[int] = len(DECK_CODE_ALPHABET)
_SYMBOL_TO_DIGIT: Final[dict[str, int]] = {symbol: idx for idx, symbol in enumerate(DECK_CODE_ALPHABET)}

MAX_INDEX: Final[int] = math.factorial(encoding.DECK_SIZE) - 1


@lru_cache(maxsize=1)
def _factorials() -> tuple[int, ...]:
    """Return ``(0!, 1!, ..., 54!)``, built on first use."""

    table = [1]
    for n in range(1, encoding.DECK_SIZE + 1):
        table.append(table[-1] * n)
    return tuple(table)


def deck_to_index(deck: Sequence[int]) -> int:
    """Return the lexicographic permutation index of ``deck``."""

    cards = assert_valid_deck(deck)
    factorials = _factorials()
    remaining = list(range(encoding.MIN_CARD, encoding.MAX_CARD + 1))
    index = 0
    for position, card in enumerate(cards):
        rank = remaining.index(card)
        index += rank * factorials[encoding.DECK_SIZE - 1 - position]
        del remaining[rank]
    return index


def index_to_deck(index: int) -> Deck:
    """Return the deck whose lexicographic permutation index is ``index``."""

    if index < 0 or index > MAX_INDEX:
        raise DeckCodeOutOfRange(index)
    factorials = _factorials()
    remaining = list(range(encoding.MIN_CARD, encoding.MAX_CARD + 1))
    deck: list[int] = []
    remainder = index
    for count in range(encoding.DECK_SIZE, 0, -1):
        rank, remainder = divmod(remainder, factorials[count - 1])
        deck.append(remaining.pop(rank))
    return tuple(deck)


def encode_index(index: int) -> str:
    """Write a non-negative integer in the 62-symbol deck code alphabet."""

    if index < 0:
        raise DeckCodeOutOfRange(index)
    if index == 0:
        return DECK_CODE_ALPHABET[0]
    symbols: list[str] = []
    remainder = index
    while remainder > 0:
        remainder, digit = divmod(remainder, _DECK_CODE_BASE)
        symbols.append(DECK_CODE_ALPHABET[digit])
    return "".join(reversed(symbols))


def decode_index(code: str) -> int:
    """Read an integer written by :func:`encode_index`.

    Surrounding whitespace is ignored.  Any other symbol outside the alphabet
    raises :class:`DeckCodeMalformed`.
    """

    trimmed = code.strip()
    if not trimmed:
        raise DeckCodeMalformed(code)
    value = 0
    for position, symbol in enumerate(trimmed):
        digit = _SYMBOL_TO_DIGIT.get(symbol)
        if digit is None:
            raise DeckCodeMalformed(code, symbol, position)
        value = value * _DECK_CODE_BASE + digit
    return value


MAX_CODE_LENGTH: Final[int] = len(encode_index(MAX_INDEX))


def deck_to_code(deck: Sequence[int]) -> str:
    """Return the deck code naming ``deck``; invalid decks are refused."""

    code = encode_index(deck_to_index(deck))
    logger.debug("encoded deck as %d-symbol code", len(code))
    return code


def code_to_deck(code: str) -> Deck:
    """Return the deck named by ``code``."""

    index = decode_index(code)
    if index > MAX_INDEX:
        raise DeckCodeOutOfRange(index)
    deck = index_to_deck(index)
    # The reconstruction is checked again before it is handed out.
    return assert_valid_deck(deck)


def deck_fingerprint(deck: Sequence[int], *, algorithm: str = "sha256", length: int | None = 16) -> str:
    """Return a short hexadecimal fingerprint of ``deck`` for display.

    The digest covers the comma-joined card values (``"1,2,...,54"``).  It is
    advisory only; use :func:`deck_to_code` to share a deck.
    """

    cards = assert_valid_deck(deck)
    if algorithm not in hashlib.algorithms_available:
        raise NoHashPrimitiveAvailable(algorithm)
    try:
        digest = hashlib.new(algorithm)
    except ValueError as exc:
        raise NoHashPrimitiveAvailable(algorithm) from exc
    digest.update(",".join(str(card) for card in cards).encode("utf-8"))
    if digest.digest_size == 0:
        raise NoHashPrimitiveAvailable(algorithm)
    hexdigest = digest.hexdigest()
    return hexdigest if length is None else hexdigest[:length]
