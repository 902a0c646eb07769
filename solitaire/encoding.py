"""Card identifier encoding utilities for the Solitaire deck."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

DECK_SIZE: Final[int] = 54
JOKER_A: Final[int] = 53
JOKER_B: Final[int] = 54
JOKER_IDS: Final[tuple[int, int]] = (JOKER_A, JOKER_B)
MIN_CARD: Final[int] = 1
MAX_CARD: Final[int] = DECK_SIZE

RANKS: Final[list[str]] = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
# Bridge order: clubs, diamonds, hearts, spades.
SUITS: Final[list[str]] = ["C", "D", "H", "S"]
SUIT_SYMBOLS: Final[dict[str, str]] = {"C": "♣", "D": "♦", "H": "♥", "S": "♠"}
JOKER_LABELS: Final[dict[int, str]] = {JOKER_A: "A", JOKER_B: "B"}


@dataclass(frozen=True, slots=True)
class CardDecoding:
    """Typed container describing a decoded card value."""

    is_joker: bool
    rank_idx: int
    suit_idx: int


def is_joker(card: int) -> bool:
    """Return ``True`` when ``card`` is one of the two jokers."""

    return card in JOKER_IDS


def card_label(card: int) -> str:
    """Return the short label used in user-facing messages.

    Jokers are reported as ``"A"``/``"B"``; every other card as its number.
    """

    return JOKER_LABELS.get(card, str(card))


def joker_value(card: int) -> int:
    """Return the counting value of ``card`` where both jokers count as 53."""

    return JOKER_A if card >= JOKER_A else card


def decode_card(card: int) -> CardDecoding:
    """Decode a card value into its rank and suit indices."""

    if not MIN_CARD <= card <= MAX_CARD:
        raise ValueError(f"card value {card} out of range")
    if is_joker(card):
        return CardDecoding(True, -1, -1)
    base = card - 1
    return CardDecoding(False, base % 13, base // 13)


def card_face(card: int) -> str:
    """Return a playing-card face such as ``"10♥"`` or ``"JokerA"``."""

    decoded = decode_card(card)
    if decoded.is_joker:
        return f"Joker{card_label(card)}"
    suit = SUITS[decoded.suit_idx]
    return f"{RANKS[decoded.rank_idx]}{SUIT_SYMBOLS[suit]}"
