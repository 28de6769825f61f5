"""Composable view primitives for the Klondike CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card
from ..piles import Pile
from ..session import GameSession

CardFormatter = Callable[[Card, bool], str]


@dataclass(slots=True)
class BoardView:
    """Renderable summarising the piles and score of a session."""

    session: GameSession
    card_formatter: CardFormatter

    def _top_markup(self, pile: Pile) -> str:
        if pile.is_empty():
            return "[dim]—[/dim]"
        card, face_up = pile.card_at(-1)
        return self.card_formatter(card, face_up)

    def _upper_row(self) -> Table:
        table = Table(box=box.ROUNDED, expand=True)
        table.add_column("M Stock", justify="center")
        table.add_column("P Waste", justify="center")
        for label in "ABCD":
            table.add_column(f"{label} Foundation", justify="center")

        stock = self.session.stock
        waste = self.session.waste
        stock_text = f"{len(stock)} card(s)" if not stock.is_empty() else "[dim]empty[/dim]"
        waste_text = self._top_markup(waste)
        if not waste.is_empty():
            waste_text += f" ({len(waste)})"
        table.add_row(stock_text, waste_text, *(self._top_markup(f) for f in self.session.foundations))
        return table

    def _tableau_grid(self) -> Table:
        table = Table(box=box.SIMPLE, expand=True)
        for tableau in self.session.tableaus:
            table.add_column(str((tableau.index or 0) + 1), justify="center")

        depth = max((len(tableau) for tableau in self.session.tableaus), default=0)
        if depth == 0:
            table.add_row(*("[dim]—[/dim]" for _ in self.session.tableaus))
        for row in range(depth):
            cells: list[str] = []
            for tableau in self.session.tableaus:
                if row < len(tableau):
                    card, face_up = tableau.card_at(row)
                    cells.append(self.card_formatter(card, face_up))
                else:
                    cells.append("")
            table.add_row(*cells)
        return table

    def _metadata_panel(self) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Score[/cyan]: {self.session.score:.2f}")
        grid.add_row(f"[cyan]Moves[/cyan]: {self.session.moves}")
        pending = self.session.pending_command or "—"
        grid.add_row(f"[cyan]Command[/cyan]: {pending}")
        return Panel(grid, title="Status", box=box.SQUARE, border_style="blue")

    def render(self) -> RenderableType:
        return Group(self._upper_row(), self._tableau_grid(), self._metadata_panel())
