"""Composable view primitives for the Solitaire CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from ..cipher import CipherResult
from ..parsing import format_deck_vector

CARDS_PER_ROW = 9


@dataclass(slots=True)
class DeckView:
    """Renderable grid of a deck, top card first."""

    deck: Sequence[int]
    code: str
    fingerprint: str
    card_formatter: Callable[[int], str]

    def render(self) -> RenderableType:
        grid = Table(box=box.MINIMAL, show_header=False, expand=True)
        for _ in range(CARDS_PER_ROW):
            grid.add_column(justify="right")
        for start in range(0, len(self.deck), CARDS_PER_ROW):
            row = [self.card_formatter(card) for card in self.deck[start : start + CARDS_PER_ROW]]
            row.extend("" for _ in range(CARDS_PER_ROW - len(row)))
            grid.add_row(*row)

        meta = Table.grid(expand=True)
        meta.add_column(justify="left")
        meta.add_row(f"[cyan]Vector[/cyan]: {format_deck_vector(self.deck)}")
        meta.add_row(f"[cyan]Code[/cyan]: {self.code}")
        meta.add_row(f"[cyan]Fingerprint[/cyan]: {self.fingerprint}")
        return Group(grid, meta)


@dataclass(slots=True)
class CipherResultView:
    """Renderable summary of a cipher result."""

    result: CipherResult
    final_code: str
    show_keystream: bool = False

    def render(self) -> RenderableType:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(Text.assemble(("Output", "cyan"), ": ", self.result.text))
        grid.add_row(f"[cyan]Characters[/cyan]: {len(self.result.text)}")
        if self.show_keystream:
            keystream = " ".join(str(value) for value in self.result.keystream) or "—"
            grid.add_row(f"[cyan]Keystream[/cyan]: {keystream}")
        grid.add_row(f"[cyan]Final deck code[/cyan]: {self.final_code}")
        if self.result.warning is not None and self.result.warning.reused_keystream:
            grid.add_row("[bold yellow]Warning[/bold yellow]: this message continues a keystream already used once.")
        return grid
