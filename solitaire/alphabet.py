"""The fixed cipher alphabet and normalisation of free text into it."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Iterable, Sequence

from .errors import UnsupportedCharacter

__all__ = [
    "CIPHER_ALPHABET",
    "CipherAlphabet",
    "DEFAULT_ALPHABET",
    "SanitizationAction",
    "SanitizationChange",
    "SanitizationResult",
    "sanitize",
]

CIPHER_ALPHABET: Final[str] = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789 .,'-?!:;\"()/_@&"

FALLBACK_SYMBOL: Final[str] = "?"

_WHITESPACE = "\t\n\r\u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a\u202f\u205f\u3000"

SUBSTITUTIONS: Final[dict[str, str]] = {
    **{char: " " for char in _WHITESPACE},
    "‘": "'",
    "’": "'",
    "‚": "'",
    "′": "'",
    "ʼ": "'",
    "“": '"',
    "”": '"',
    "„": '"',
    "″": '"',
    "˝": '"',
    "–": "-",
    "—": "-",
    "―": "-",
    "−": "-",
    "⁃": "-",
    "…": "...",
    "·": ".",
    "•": ".",
    "⁄": "/",
    "∕": "/",
    "×": "X",
    "✕": "X",
    "✖": "X",
    "÷": "/",
    "\u204e": "*",
}

_ASCII_UPPER = re.compile(r"^[A-Z]+$")


@dataclass(frozen=True, slots=True)
class CipherAlphabet:
    """An ordered set of symbols; ranks are 1-based."""

    symbols: str
    _ranks: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.symbols:
            raise ValueError("alphabet must not be empty")
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError("alphabet symbols must be unique")
        object.__setattr__(self, "_ranks", {symbol: idx for idx, symbol in enumerate(self.symbols, start=1)})

    @property
    def size(self) -> int:
        return len(self.symbols)

    def __contains__(self, char: object) -> bool:
        return char in self._ranks

    def rank(self, char: str) -> int:
        """Return the 1-based rank of ``char``."""

        try:
            return self._ranks[char]
        except KeyError:
            raise UnsupportedCharacter(char) from None

    def symbol(self, rank: int) -> str:
        """Return the symbol for a 1-based ``rank``."""

        if not 1 <= rank <= self.size:
            raise ValueError(f"rank {rank} outside 1..{self.size}")
        return self.symbols[rank - 1]

    def to_ranks(self, text: str) -> list[int]:
        """Map every character of ``text`` to its rank."""

        ranks: list[int] = []
        for position, char in enumerate(text):
            rank = self._ranks.get(char)
            if rank is None:
                raise UnsupportedCharacter(char, position)
            ranks.append(rank)
        return ranks

    def from_ranks(self, ranks: Iterable[int]) -> str:
        return "".join(self.symbol(rank) for rank in ranks)


DEFAULT_ALPHABET: Final[CipherAlphabet] = CipherAlphabet(CIPHER_ALPHABET)


class SanitizationAction(str, Enum):
    """How a character was changed while normalising text."""

    NORMALIZED = "normalized"
    REPLACED = "replaced"


@dataclass(frozen=True, slots=True)
class SanitizationChange:
    original: str
    replacement: str
    index: int
    action: SanitizationAction
    reason: str


@dataclass(frozen=True, slots=True)
class SanitizationResult:
    """Normalised text plus the non-trivial changes made to reach it."""

    value: str
    changes: Sequence[SanitizationChange]

    @property
    def changed(self) -> bool:
        return bool(self.changes)


def _strip_marks(text: str) -> str:
    return "".join(char for char in text if not unicodedata.category(char).startswith("M"))


def _fold(text: str) -> str:
    return _strip_marks(unicodedata.normalize("NFKD", text))


def _ascii_letters(char: str) -> str | None:
    folded = _fold(char).upper()
    if folded and _ASCII_UPPER.match(folded):
        return folded
    return None


def _fallback(char: str, alphabet: CipherAlphabet) -> str:
    if char.isascii() and char.isdigit():
        return char
    return FALLBACK_SYMBOL if FALLBACK_SYMBOL in alphabet else alphabet.symbols[0]


def sanitize(text: str, alphabet: CipherAlphabet = DEFAULT_ALPHABET) -> SanitizationResult:
    """Convert arbitrary text into symbols of ``alphabet``.

    Input is NFKD-folded, stripped of combining marks and upper-cased.  Common
    typographic punctuation and exotic whitespace are substituted from a fixed
    table; anything else unrepresentable becomes ``?``.  Indices in the change
    log refer to the folded text.
    """

    normalized = _fold(text).upper()
    pieces: list[str] = []
    changes: list[SanitizationChange] = []

    for index, char in enumerate(normalized):
        if char in alphabet:
            pieces.append(char)
            continue

        substitution = SUBSTITUTIONS.get(char)
        if substitution is not None:
            replacement = "".join(
                piece if piece in alphabet else (_ascii_letters(piece) or _fallback(piece, alphabet))
                for piece in _fold(substitution).upper()
            )
            pieces.append(replacement)
            changes.append(SanitizationChange(char, replacement, index, SanitizationAction.REPLACED, "substitution"))
            continue

        letters = _ascii_letters(char)
        if letters is not None:
            pieces.append(letters)
            changes.append(SanitizationChange(char, letters, index, SanitizationAction.NORMALIZED, "ascii-folding"))
            continue

        if char.isspace():
            pieces.append(" ")
            changes.append(SanitizationChange(char, " ", index, SanitizationAction.REPLACED, "whitespace"))
            continue

        fallback = _fallback(char, alphabet)
        pieces.append(fallback)
        changes.append(SanitizationChange(char, fallback, index, SanitizationAction.REPLACED, "fallback"))

    return SanitizationResult("".join(pieces), tuple(changes))
