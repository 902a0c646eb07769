"""Exception taxonomy shared by the validator, codec, parser and cipher."""

from __future__ import annotations

from typing import Sequence

from . import encoding

__all__ = [
    "SolitaireError",
    "DeckError",
    "WrongCardCount",
    "CardOutOfRange",
    "DuplicateCard",
    "MissingJoker",
    "UnrecognizedToken",
    "EmptyDeckInput",
    "DeckCodeError",
    "DeckCodeMalformed",
    "DeckCodeOutOfRange",
    "UnsupportedCharacter",
    "NoHashPrimitiveAvailable",
    "ConfigurationError",
]


class SolitaireError(Exception):
    """Root of every error raised by the ``solitaire`` package."""

    @property
    def message(self) -> str:
        return str(self)


class DeckError(SolitaireError, ValueError):
    """Raised when a candidate card sequence is not a legal 54-card deck."""


class WrongCardCount(DeckError):
    """Raised when a deck does not hold exactly 54 cards."""

    def __init__(self, received: int, expected: int = encoding.DECK_SIZE) -> None:
        self.received = received
        self.expected = expected
        super().__init__(f"Expected {expected} cards, received {received}.")


class CardOutOfRange(DeckError):
    """Raised when a card is not an integer in ``[1, 54]``."""

    def __init__(self, card: object, position: int | None = None) -> None:
        self.card = card
        self.position = position
        super().__init__(
            f"Card {card} must be an integer between {encoding.MIN_CARD} and {encoding.MAX_CARD}."
        )


class DuplicateCard(DeckError):
    """Raised when a card value appears more than once."""

    def __init__(self, card: int, position: int | None = None) -> None:
        self.card = card
        self.position = position
        super().__init__(f"Card {encoding.card_label(card)} appears more than once.")


class MissingJoker(DeckError):
    """Raised when one or both jokers are absent."""

    def __init__(self, missing: Sequence[int]) -> None:
        self.missing = tuple(missing)
        super().__init__("Deck must include exactly one A joker and one B joker.")


class UnrecognizedToken(DeckError):
    """Raised by the deck vector parser for a token it cannot read."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f'Unrecognized token "{token}". Use 1-52 or jokers A/B.')


class EmptyDeckInput(DeckError):
    """Raised by the deck vector parser when no tokens are present."""

    def __init__(self) -> None:
        super().__init__("Paste a 54-card vector to continue.")


class DeckCodeError(SolitaireError, ValueError):
    """Base class for deck code decoding failures."""


class DeckCodeMalformed(DeckCodeError):
    """Raised for an empty deck code or one containing foreign symbols."""

    def __init__(self, code: str, symbol: str | None = None, position: int | None = None) -> None:
        self.code = code
        self.symbol = symbol
        self.position = position
        if symbol is None:
            detail = "Deck code cannot be empty."
        else:
            detail = f'Invalid character "{symbol}" at position {position} in deck code.'
        super().__init__(detail)


class DeckCodeOutOfRange(DeckCodeError):
    """Raised when a deck code names an index outside ``[0, 54! - 1]``."""

    def __init__(self, index: int) -> None:
        self.index = index
        super().__init__("Deck code is out of range for a 54-card deck.")


class UnsupportedCharacter(SolitaireError, ValueError):
    """Raised when cipher input contains a symbol outside the cipher alphabet."""

    def __init__(self, char: str, position: int | None = None) -> None:
        self.char = char
        self.position = position
        where = "" if position is None else f" at position {position}"
        super().__init__(f'Character "{char}"{where} is not in the cipher alphabet.')


class NoHashPrimitiveAvailable(SolitaireError, RuntimeError):
    """Raised when the host cannot provide the fingerprint hash algorithm."""

    def __init__(self, algorithm: str) -> None:
        self.algorithm = algorithm
        super().__init__(f"Unable to compute deck fingerprint: hash algorithm {algorithm!r} is unavailable.")


class ConfigurationError(SolitaireError, ValueError):
    """Raised when ``SOLITAIRE_*`` settings cannot be parsed."""
