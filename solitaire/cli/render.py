"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich.console import RenderableType
from rich.panel import Panel

from .. import encoding
from ..cards import Card
from ..cipher import CipherResult
from .views import CipherResultView, DeckView

_SUIT_COLORS = {
    "C": "green",
    "D": "magenta",
    "H": "red",
    "S": "cyan",
}


def format_card(card: int) -> str:
    """Return a Rich-rendered label for ``card``."""

    wrapped = Card(card)
    if wrapped.is_joker:
        return f"[bold yellow]{wrapped.label}[/bold yellow]"
    suit_code = encoding.SUITS[wrapped.meta.suit_idx]
    color = _SUIT_COLORS.get(suit_code, "white")
    return f"[{color}]{wrapped.face}[/{color}]"


def render_deck(deck: Sequence[int], *, code: str, fingerprint: str, title: str = "Deck") -> RenderableType:
    """Return a Rich panel listing ``deck`` with its code and fingerprint."""

    view = DeckView(deck=deck, code=code, fingerprint=fingerprint, card_formatter=format_card)
    return Panel(view.render(), title=title, padding=(0, 1), border_style="cyan")


def render_result(
    result: CipherResult,
    *,
    final_code: str,
    show_keystream: bool = False,
    title: str = "Result",
) -> RenderableType:
    """Return a Rich panel describing an encrypt or decrypt result."""

    view = CipherResultView(result=result, final_code=final_code, show_keystream=show_keystream)
    border = "yellow" if result.warning is not None else "green"
    return Panel(view.render(), title=title, padding=(0, 1), border_style=border)
