from __future__ import annotations

import random

import pytest

from solitaire import cards, encoding
from solitaire.cli.render import format_card
from solitaire.validation import is_valid_deck


def test_ordered_deck_is_factory_order() -> None:
    deck = cards.ordered_deck()
    assert deck == tuple(range(1, 55))
    assert isinstance(deck, tuple)


def test_shuffle_deck_is_reproducible_with_seed() -> None:
    first = cards.shuffle_deck(random.Random(1234))
    second = cards.shuffle_deck(random.Random(1234))

    assert first == second
    assert is_valid_deck(first)
    assert first != cards.ordered_deck()


def test_shuffle_deck_without_rng_returns_valid_deck() -> None:
    assert is_valid_deck(cards.shuffle_deck())


@pytest.mark.parametrize(
    ("value", "face"),
    [
        (1, "A♣"),
        (13, "K♣"),
        (14, "A♦"),
        (36, "10♥"),
        (52, "K♠"),
        (53, "JokerA"),
        (54, "JokerB"),
    ],
)
def test_card_faces(value: int, face: str) -> None:
    assert cards.Card(value).face == face


def test_card_wrapper_properties() -> None:
    ten_of_hearts = cards.Card(36)
    joker_b = cards.Card(encoding.JOKER_B)

    assert ten_of_hearts.meta.suit_idx == encoding.SUITS.index("H")
    assert not ten_of_hearts.is_joker
    assert joker_b.is_joker
    assert joker_b.label == "B"


@pytest.mark.parametrize(
    ("value", "markup"),
    [
        (36, "[red]10♥[/red]"),
        (1, "[green]A♣[/green]"),
        (53, "[bold yellow]A[/bold yellow]"),
    ],
)
def test_format_card_markup(value: int, markup: str) -> None:
    assert format_card(value) == markup


def test_decode_card_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        encoding.decode_card(0)
    with pytest.raises(ValueError):
        encoding.decode_card(55)


def test_format_faces_lists_every_card() -> None:
    rendered = cards.format_faces(cards.ordered_deck())
    assert rendered.startswith("A♣ 2♣")
    assert rendered.endswith("JokerA JokerB")
