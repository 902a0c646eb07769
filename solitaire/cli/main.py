"""Typer entry-point wiring for the Solitaire CLI."""

from __future__ import annotations

import logging
import random

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .. import analysis, cards, codec
from ..alphabet import sanitize
from ..cipher import CipherOptions, CipherResult, Direction, transform
from ..config import LOG_LEVELS, load_config
from ..deck import generate_keystream
from ..errors import SolitaireError
from ..parsing import format_deck_vector, parse_deck
from ..validation import Deck
from .render import render_deck, render_result

app = typer.Typer(add_completion=False, rich_markup_mode="rich", no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("solitaire.cli")


def _configure_logging(level: str) -> None:
    package_logger = logging.getLogger("solitaire")
    for existing in [h for h in package_logger.handlers if isinstance(h, RichHandler)]:
        package_logger.removeHandler(existing)
    handler = RichHandler(console=err_console, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)


def _fail(exc: SolitaireError) -> typer.Exit:
    err_console.print(f"[bold red]Error:[/bold red] {escape(exc.message)}", soft_wrap=True)
    return typer.Exit(code=1)


def _load_deck(deck: str | None, code: str | None) -> Deck:
    """Resolve the deck given either as vector text or as a deck code."""

    if deck is not None and code is not None:
        raise typer.BadParameter("Pass either --deck or --code, not both.")
    if deck is None and code is None:
        raise typer.BadParameter("A starting deck is required: pass --deck or --code.")
    if deck is not None:
        return parse_deck(deck)
    assert code is not None
    return codec.code_to_deck(code)


def _fingerprint(deck: Deck) -> str:
    config = load_config()
    return codec.deck_fingerprint(
        deck, algorithm=config.fingerprint_algorithm, length=config.fingerprint_length
    )


DeckOption = typer.Option(None, "--deck", "-d", help="Deck vector: 54 values, jokers as A/B.")
CodeOption = typer.Option(None, "--code", "-c", help="Deck code produced by 'encode' or 'shuffle'.")


@app.callback()
def main_callback(
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging verbosity: DEBUG, INFO, WARNING, ERROR or CRITICAL. "
        "Defaults to SOLITAIRE_LOG_LEVEL or WARNING.",
    ),
) -> None:
    """Solitaire card cipher: keystreams, messages and deck codes."""

    if log_level is None:
        try:
            level = load_config().log_level
        except SolitaireError as exc:
            raise _fail(exc) from exc
    else:
        level = log_level.upper()
        if level not in LOG_LEVELS:
            raise typer.BadParameter(f"unknown log level {log_level!r}", param_hint="--log-level")
    _configure_logging(level)


def _run_cipher(
    direction: Direction,
    text: str,
    deck: str | None,
    code: str | None,
    *,
    continued: bool,
    clean: bool,
    show_keystream: bool,
    raw: bool,
) -> None:
    try:
        start = _load_deck(deck, code)
        if clean:
            cleaned = sanitize(text)
            if cleaned.changed:
                logger.info("sanitized %d character(s) before %s", len(cleaned.changes), direction.value)
            text = cleaned.value
        result: CipherResult = transform(
            text, start, direction, CipherOptions(continued_from_previous_run=continued)
        )
        final_code = codec.deck_to_code(result.final_deck)
    except SolitaireError as exc:
        raise _fail(exc) from exc

    if raw:
        console.print(escape(result.text), soft_wrap=True, highlight=False)
        return
    console.print(
        render_result(
            result,
            final_code=final_code,
            show_keystream=show_keystream,
            title=direction.value.title(),
        )
    )


@app.command()
def encrypt(
    text: str = typer.Argument(..., help="Plaintext in the cipher alphabet."),
    deck: str | None = DeckOption,
    code: str | None = CodeOption,
    continued: bool = typer.Option(
        False, "--continued", help="Declare that this deck continues an earlier message."
    ),
    clean: bool = typer.Option(
        False, "--sanitize", help="Fold arbitrary text into the cipher alphabet first."
    ),
    show_keystream: bool = typer.Option(False, "--show-keystream", help="Print the keystream used."),
    raw: bool = typer.Option(False, "--raw", help="Print only the ciphertext."),
) -> None:
    """Encrypt TEXT starting from the given deck."""

    _run_cipher(
        Direction.ENCRYPT,
        text,
        deck,
        code,
        continued=continued,
        clean=clean,
        show_keystream=show_keystream,
        raw=raw,
    )


@app.command()
def decrypt(
    text: str = typer.Argument(..., help="Ciphertext in the cipher alphabet."),
    deck: str | None = DeckOption,
    code: str | None = CodeOption,
    continued: bool = typer.Option(
        False, "--continued", help="Declare that this deck continues an earlier message."
    ),
    show_keystream: bool = typer.Option(False, "--show-keystream", help="Print the keystream used."),
    raw: bool = typer.Option(False, "--raw", help="Print only the plaintext."),
) -> None:
    """Decrypt TEXT starting from the given deck."""

    _run_cipher(
        Direction.DECRYPT,
        text,
        deck,
        code,
        continued=continued,
        clean=False,
        show_keystream=show_keystream,
        raw=raw,
    )


@app.command()
def keystream(
    length: int = typer.Option(10, "--length", "-n", min=0, help="Number of keystream values."),
    deck: str | None = DeckOption,
    code: str | None = CodeOption,
) -> None:
    """Print keystream values generated from the given deck."""

    try:
        start = _load_deck(deck, code)
        stream = generate_keystream(start, length)
        final_code = codec.deck_to_code(stream.deck)
    except SolitaireError as exc:
        raise _fail(exc) from exc

    console.print(" ".join(str(value) for value in stream.keystream), soft_wrap=True, highlight=False)
    console.print(
        f"[dim]{stream.rounds} round(s), {stream.skipped} joker round(s) skipped; final deck code {final_code}[/dim]",
        soft_wrap=True,
    )


@app.command()
def shuffle(
    seed: int | None = typer.Option(None, help="Seed for a reproducible shuffle (omit for OS entropy)."),
    raw: bool = typer.Option(False, "--raw", help="Print only the deck code."),
) -> None:
    """Shuffle a fresh deck and print its code."""

    rng = random.Random(seed) if seed is not None else None
    deck = cards.shuffle_deck(rng)
    code = codec.deck_to_code(deck)
    if raw:
        console.print(code, soft_wrap=True, highlight=False)
        return
    try:
        value = _fingerprint(deck)
    except SolitaireError as exc:
        raise _fail(exc) from exc
    console.print(render_deck(deck, code=code, fingerprint=value, title="Shuffled Deck"))


@app.command()
def encode(
    vector: str = typer.Argument(..., help="Deck vector: 54 values, jokers as A/B."),
) -> None:
    """Convert a deck vector into its deck code."""

    try:
        code = codec.deck_to_code(parse_deck(vector))
    except SolitaireError as exc:
        raise _fail(exc) from exc
    console.print(code, soft_wrap=True, highlight=False)


@app.command()
def decode(
    code: str = typer.Argument(..., help="Deck code to expand."),
    faces: bool = typer.Option(False, "--faces", help="Show playing-card faces instead of numbers."),
) -> None:
    """Convert a deck code back into a deck vector."""

    try:
        deck = codec.code_to_deck(code)
    except SolitaireError as exc:
        raise _fail(exc) from exc
    rendered = cards.format_faces(deck) if faces else format_deck_vector(deck)
    console.print(rendered, soft_wrap=True, highlight=False)


@app.command()
def fingerprint(
    deck: str | None = DeckOption,
    code: str | None = CodeOption,
) -> None:
    """Print the short fingerprint of a deck."""

    try:
        start = _load_deck(deck, code)
        value = _fingerprint(start)
    except SolitaireError as exc:
        raise _fail(exc) from exc
    console.print(value, soft_wrap=True, highlight=False)


@app.command()
def analyze(
    deck: str | None = DeckOption,
    code: str | None = CodeOption,
    length: int = typer.Option(1000, min=1, help="Keystream length to sample."),
    trials: int = typer.Option(16, min=1, help="Random two-card swaps for the avalanche check."),
    seed: int = typer.Option(123, help="Seed choosing the swapped positions."),
) -> None:
    """Report keystream distribution and avalanche statistics."""

    try:
        start = _load_deck(deck, code)
        report = analysis.analyze_keystream(start, length)
        avalanche = analysis.run_avalanche(start, trials=trials, rng=random.Random(seed))
    except SolitaireError as exc:
        raise _fail(exc) from exc

    table = Table(title="Keystream Analysis", box=box.SIMPLE_HEAVY)
    table.add_column("Metric", justify="left")
    table.add_column("Value", justify="right")
    table.add_row("Values", str(report.length))
    table.add_row("Rounds", str(report.rounds))
    table.add_row("Joker rounds", str(report.skipped_rounds))
    table.add_row("Mean", f"{report.mean:.2f}")
    table.add_row("Chi-square", f"{report.chi_square:.2f}")
    table.add_row("Most common", str(report.most_common))
    table.add_row("Least common", str(report.least_common))
    table.add_row("Avalanche mean", f"{avalanche.mean_divergence:.3f}")
    table.add_row("Avalanche min", f"{avalanche.min_divergence:.3f}")
    status = "[green]pass[/green]" if avalanche.passes() else "[red]fail[/red]"
    table.add_row("Avalanche > 0.6", status)
    console.print(table)


def main() -> None:
    """Entry-point for ``python -m solitaire.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
