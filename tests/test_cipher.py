"""Integration tests for encrypt/decrypt on top of the keystream engine."""

from __future__ import annotations

import logging

import pytest

from solitaire import cipher, errors
from solitaire.analysis import divergence_ratio, swap_cards
from solitaire.cards import ordered_deck
from solitaire.deck import generate_keystream


def test_hello_world_from_ordered_deck() -> None:
    encrypted = cipher.encrypt("HELLOWORLD", ordered_deck())

    assert encrypted.text == "LBV9WVGXP "
    assert encrypted.keystream == (4, 49, 10, 24, 8, 51, 44, 6, 4, 33)
    assert cipher.decrypt(encrypted.text, ordered_deck()).text == "HELLOWORLD"


def test_all_a_plaintext_matches_keystream_offsets() -> None:
    assert cipher.encrypt("AAAAAAAAAA", ordered_deck()).text == "E_KYI&;GE7"


@pytest.mark.parametrize(
    "plaintext",
    ["HELLOWORLD", "NUMBERS12345", "MEET AT 0900!", "CAN-THIS,WORK?", "&&&&", '"QUOTED" (SIC) /_@'],
)
def test_round_trip_samples(plaintext: str) -> None:
    deck = ordered_deck()
    encrypted = cipher.encrypt(plaintext, deck)
    decrypted = cipher.decrypt(encrypted.text, deck)

    assert len(encrypted.keystream) == len(plaintext)
    assert decrypted.text == plaintext
    assert decrypted.final_deck == encrypted.final_deck
    assert decrypted.keystream == encrypted.keystream


def test_encryption_is_deterministic() -> None:
    first = cipher.encrypt("CONSISTENCY", ordered_deck())
    second = cipher.encrypt("CONSISTENCY", list(ordered_deck()))

    assert first == second


def test_empty_input_is_noop() -> None:
    deck = ordered_deck()
    encrypted = cipher.encrypt("", deck)
    decrypted = cipher.decrypt("", deck)

    assert encrypted.text == ""
    assert encrypted.keystream == ()
    assert encrypted.final_deck == deck
    assert decrypted.text == ""
    assert decrypted.final_deck == deck
    assert encrypted.warning is None


def test_final_deck_is_not_applied_to_caller_state() -> None:
    deck = list(ordered_deck())
    result = cipher.encrypt("ABC", deck)

    assert deck == list(ordered_deck())
    assert result.final_deck != tuple(deck)


def test_chaining_messages_through_final_deck() -> None:
    whole = cipher.encrypt("ATTACKATDAWN", ordered_deck())
    first = cipher.encrypt("ATTACK", ordered_deck())
    second = cipher.encrypt("ATDAWN", first.final_deck, cipher.CipherOptions(continued_from_previous_run=True))

    assert first.text + second.text == whole.text
    assert second.final_deck == whole.final_deck


def test_continued_run_sets_warning(caplog: pytest.LogCaptureFixture) -> None:
    options = cipher.CipherOptions(continued_from_previous_run=True)
    with caplog.at_level(logging.WARNING, logger="solitaire.cipher"):
        result = cipher.encrypt("AAAA", ordered_deck(), options)

    assert result.warning == cipher.KeystreamWarning(reused_keystream=True)
    assert result.text == cipher.encrypt("AAAA", ordered_deck()).text
    assert "previously used keystream" in caplog.text


def test_unsupported_character_is_named() -> None:
    with pytest.raises(errors.UnsupportedCharacter) as excinfo:
        cipher.encrypt("HELLO world", ordered_deck())
    assert excinfo.value.char == "w"
    assert excinfo.value.position == 6
    assert '"w"' in excinfo.value.message


def test_invalid_deck_is_rejected() -> None:
    deck = list(ordered_deck())
    deck[0] = 2
    with pytest.raises(errors.DuplicateCard):
        cipher.encrypt("HELLO", deck)
    with pytest.raises(errors.DuplicateCard):
        cipher.decrypt("", deck)


def test_long_plaintext_round_trips() -> None:
    text = "A" * 1000
    encrypted = cipher.encrypt(text, ordered_deck())
    decrypted = cipher.decrypt(encrypted.text, ordered_deck())

    assert len(encrypted.text) == 1000
    assert len(encrypted.final_deck) == 54
    assert decrypted.text == text


def test_swapping_two_cards_changes_most_of_the_keystream() -> None:
    baseline = generate_keystream(ordered_deck(), 64).keystream
    perturbed = generate_keystream(swap_cards(ordered_deck(), 0, 1), 64).keystream

    assert perturbed != baseline
    assert divergence_ratio(baseline, perturbed) > 0.6
