"""Encrypt and decrypt alphabet text with the Solitaire keystream."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from .alphabet import DEFAULT_ALPHABET, CipherAlphabet
from .deck import generate_keystream
from .validation import Deck, assert_valid_deck

__all__ = [
    "Direction",
    "CipherOptions",
    "KeystreamWarning",
    "CipherResult",
    "encrypt",
    "decrypt",
    "transform",
]

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


@dataclass(frozen=True, slots=True)
class CipherOptions:
    """Caller intent for a single encrypt or decrypt call.

    ``continued_from_previous_run`` declares that the deck passed in is the
    final deck of an earlier message, so the keystream region is being chained
    on purpose.  The arithmetic is unchanged; the result carries a warning.
    """

    continued_from_previous_run: bool = False


@dataclass(frozen=True, slots=True)
class KeystreamWarning:
    reused_keystream: bool = True


@dataclass(frozen=True, slots=True)
class CipherResult:
    """Transformed text, the keystream used and the deck that follows it.

    ``final_deck`` is never applied on the caller's behalf; adopt it
    explicitly to continue the sequence with the next message.
    """

    text: str
    keystream: tuple[int, ...]
    final_deck: Deck
    warning: KeystreamWarning | None = None


def _combine(value: int, key: int, size: int, direction: Direction) -> int:
    if direction is Direction.ENCRYPT:
        return ((value + key - 1) % size) + 1
    return ((value - key + size - 1) % size) + 1


def transform(
    text: str,
    deck: Sequence[int],
    direction: Direction,
    options: CipherOptions | None = None,
    *,
    alphabet: CipherAlphabet = DEFAULT_ALPHABET,
) -> CipherResult:
    """Apply the keystream generated from ``deck`` to ``text`` in ``direction``."""

    opts = options or CipherOptions()
    values = alphabet.to_ranks(text)
    start = assert_valid_deck(deck)

    stream = generate_keystream(start, len(values), alphabet.size)
    output = alphabet.from_ranks(
        _combine(value, key, alphabet.size, direction) for value, key in zip(values, stream.keystream)
    )

    warning = None
    if opts.continued_from_previous_run:
        warning = KeystreamWarning(reused_keystream=True)
        logger.warning("%s continues a previously used keystream region", direction.value)

    logger.debug("%s processed %d characters in %d rounds", direction.value, len(values), stream.rounds)
    return CipherResult(output, stream.keystream, stream.deck, warning)


def encrypt(
    text: str,
    deck: Sequence[int],
    options: CipherOptions | None = None,
    *,
    alphabet: CipherAlphabet = DEFAULT_ALPHABET,
) -> CipherResult:
    """Encrypt ``text`` with the keystream that starts at ``deck``."""

    return transform(text, deck, Direction.ENCRYPT, options, alphabet=alphabet)


def decrypt(
    text: str,
    deck: Sequence[int],
    options: CipherOptions | None = None,
    *,
    alphabet: CipherAlphabet = DEFAULT_ALPHABET,
) -> CipherResult:
    """Decrypt ``text`` with the keystream that starts at ``deck``."""

    return transform(text, deck, Direction.DECRYPT, options, alphabet=alphabet)
