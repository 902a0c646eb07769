"""Top-level package for the Solitaire card cipher."""

from . import alphabet, cards, cipher, codec, deck, encoding, errors, parsing, validation

__all__ = [
    "alphabet",
    "cards",
    "cipher",
    "codec",
    "deck",
    "encoding",
    "errors",
    "parsing",
    "validation",
]
