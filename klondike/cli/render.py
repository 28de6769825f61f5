"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich import box
from rich.console import RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card, Color
from ..session import GameSession
from .views import BoardView

_COLOR_STYLES = {
    Color.RED: "red",
    Color.BLACK: "bold white",
}

FACE_DOWN_MARKUP = "[blue]##[/blue]"


def format_card(card: Card, face_up: bool = True) -> str:
    """Return a Rich-rendered label for ``card``, hiding it when face-down."""

    if not face_up:
        return FACE_DOWN_MARKUP
    style = _COLOR_STYLES[card.color]
    return f"[{style}]{card.label()}[/{style}]"


def render_session(session: GameSession, *, title: str = "Klondike") -> RenderableType:
    """Return a Rich panel describing the current table state."""

    view = BoardView(session=session, card_formatter=format_card)
    return Panel(view.render(), title=title, padding=(0, 1), border_style="green")


def render_events(events: Sequence[str], *, limit: int) -> Panel:
    """Return the event log panel, newest entries last."""

    log_table = Table.grid(expand=True)
    log_table.add_column(justify="left")
    if events:
        for line in events[-limit:]:
            log_table.add_row(line)
    else:
        log_table.add_row("[dim]Event log will appear here[/dim]")
    return Panel(log_table, title="Event Log", border_style="magenta", box=box.SIMPLE)
