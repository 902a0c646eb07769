"""Statistical checks on generated keystreams."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .deck import DEFAULT_MODULUS, generate_keystream
from .validation import Deck, assert_valid_deck

__all__ = [
    "KeystreamReport",
    "AvalancheReport",
    "keystream_histogram",
    "chi_square_uniformity",
    "divergence_ratio",
    "swap_cards",
    "analyze_keystream",
    "run_avalanche",
]


@dataclass(frozen=True, slots=True)
class KeystreamReport:
    """Distribution summary for one keystream."""

    length: int
    rounds: int
    skipped_rounds: int
    mean: float
    chi_square: float
    most_common: int
    least_common: int


@dataclass(frozen=True, slots=True)
class AvalancheReport:
    """How far keystreams drift after swapping two cards of the starting deck."""

    trials: int
    length: int
    mean_divergence: float
    min_divergence: float
    max_divergence: float

    def passes(self, threshold: float = 0.6) -> bool:
        return self.min_divergence > threshold


def keystream_histogram(keystream: Sequence[int], modulus: int = DEFAULT_MODULUS) -> np.ndarray:
    """Return counts of each value ``1..modulus``; index 0 counts value 1."""

    values = np.asarray(keystream, dtype=np.int64)
    if values.size and (values.min() < 1 or values.max() > modulus):
        raise ValueError(f"keystream values must lie in 1..{modulus}")
    return np.bincount(values - 1, minlength=modulus) if values.size else np.zeros(modulus, dtype=np.int64)


def chi_square_uniformity(keystream: Sequence[int], modulus: int = DEFAULT_MODULUS) -> float:
    """Return Pearson's chi-square statistic against a uniform distribution."""

    if not keystream:
        raise ValueError("keystream must not be empty")
    observed = keystream_histogram(keystream, modulus).astype(np.float64)
    expected = len(keystream) / modulus
    return float(np.sum((observed - expected) ** 2) / expected)


def divergence_ratio(first: Sequence[int], second: Sequence[int]) -> float:
    """Return the fraction of positions at which two keystreams disagree."""

    if len(first) != len(second):
        raise ValueError("keystreams must have equal length")
    if not first:
        return 0.0
    return float(np.mean(np.asarray(first) != np.asarray(second)))


def swap_cards(deck: Sequence[int], first: int, second: int) -> Deck:
    """Return a copy of ``deck`` with the cards at two positions exchanged."""

    cards = list(deck)
    cards[first], cards[second] = cards[second], cards[first]
    return tuple(cards)


def analyze_keystream(deck: Sequence[int], length: int, modulus: int = DEFAULT_MODULUS) -> KeystreamReport:
    """Generate ``length`` values from ``deck`` and summarise their distribution."""

    if length <= 0:
        raise ValueError("length must be positive")
    stream = generate_keystream(deck, length, modulus)
    counts = keystream_histogram(stream.keystream, modulus)
    return KeystreamReport(
        length=length,
        rounds=stream.rounds,
        skipped_rounds=stream.skipped,
        mean=float(np.mean(stream.keystream)),
        chi_square=chi_square_uniformity(stream.keystream, modulus),
        most_common=int(np.argmax(counts)) + 1,
        least_common=int(np.argmin(counts)) + 1,
    )


def run_avalanche(
    deck: Sequence[int],
    *,
    length: int = 64,
    trials: int = 16,
    rng: random.Random | None = None,
) -> AvalancheReport:
    """Swap two random cards ``trials`` times and measure keystream divergence."""

    if trials <= 0:
        raise ValueError("trials must be positive")
    generator = rng or random.Random()
    base = assert_valid_deck(deck)
    baseline = generate_keystream(base, length).keystream
    ratios = np.empty(trials, dtype=np.float64)
    for trial in range(trials):
        first, second = generator.sample(range(len(base)), 2)
        perturbed = generate_keystream(swap_cards(base, first, second), length).keystream
        ratios[trial] = divergence_ratio(baseline, perturbed)
    return AvalancheReport(
        trials=trials,
        length=length,
        mean_divergence=float(ratios.mean()),
        min_divergence=float(ratios.min()),
        max_divergence=float(ratios.max()),
    )
