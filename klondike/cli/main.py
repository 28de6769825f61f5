"""Typer entry-point wiring for the Klondike CLI."""

from __future__ import annotations

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .. import scoreboard
from ..deck import ShuffleMethod
from ..session import GameSession, KlondikeConfig
from .render import render_events, render_session

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

PROMPT = "Move> "
HELP_TEXT = (
    "[bold]Commands[/bold]: [cyan]m[/cyan] draw, [cyan]p[/cyan] recycle waste, "
    "[cyan](1-7)(1-7)[/cyan], [cyan](1-7)(a-d)[/cyan], [cyan](a-d)(1-7)[/cyan], "
    "[cyan]p(1-7)[/cyan], [cyan]p(a-d)[/cyan], [cyan]f[/cyan] quit"
)


def _make_config(seed: int | None, legacy_shuffle: bool, round_number: int = 1) -> KlondikeConfig:
    method = ShuffleMethod.LEGACY if legacy_shuffle else ShuffleMethod.UNIFORM
    round_seed = None if seed is None else seed + round_number - 1
    return KlondikeConfig(shuffle_method=method, seed=round_seed)


def _read_command() -> str:
    try:
        return console.input(PROMPT)
    except (EOFError, KeyboardInterrupt):
        return "f"


def _submit(session: GameSession, line: str) -> bool | None:
    """Type ``line`` into the session key by key and press Enter."""

    for key in line.strip():
        session.type_key(key)
    return session.type_key("\n")


def _run_round(session: GameSession) -> None:
    while not session.is_over():
        console.print(render_session(session))
        console.print(render_events(session.events, limit=session.config.max_event_log))
        console.print(HELP_TEXT)
        result = _submit(session, _read_command())
        if result is False and not session.quit:
            console.print("[red]Cannot move![/red]")

    if session.is_won():
        console.print(render_session(session, title="Klondike • Solved"))
        console.print(f"[bold green]Congratulations, you won![/bold green] Score: {session.final_score():.2f}")
    else:
        console.print("[yellow]Round abandoned.[/yellow]")


def _summarize(session: GameSession, round_number: int) -> scoreboard.RoundSummary:
    return scoreboard.RoundSummary(
        round_number=round_number,
        score=session.final_score(),
        won=session.is_won(),
        moves=session.moves,
    )


def _render_match_summary(history: scoreboard.MatchHistory) -> Table:
    """Return the aggregated table of all rounds played in this sitting."""

    table = Table(title="Match Summary", box=box.DOUBLE_EDGE)
    table.add_column("Round", justify="center")
    table.add_column("Result", justify="center")
    table.add_column("Moves", justify="right")
    table.add_column("Score", justify="right")

    for summary in history.rounds:
        result = "[bold green]Win[/bold green]" if summary.won else "Quit"
        table.add_row(str(summary.round_number), result, str(summary.moves), f"{summary.score:.2f}")

    totals = history.totals()
    table.add_section()
    table.add_row(
        "[bold]Total[/bold]",
        f"{totals.wins}/{totals.rounds}",
        "",
        f"[bold blue]{totals.total_score:.2f}[/bold blue]",
    )
    return table


@app.command()
def play(
    seed: int | None = typer.Option(None, help="Random seed for reproducible deals (omit for clock seeding)."),
    legacy_shuffle: bool = typer.Option(
        False,
        "--legacy-shuffle/--uniform-shuffle",
        help="Use the three-pass half-swapping shuffle instead of Fisher-Yates.",
    ),
    rounds: int | None = typer.Option(None, min=1, help="Stop after this many rounds."),
) -> None:
    """Play Klondike interactively in the terminal."""

    history = scoreboard.MatchHistory()
    while True:
        round_number = history.next_round_number
        session = GameSession.new(_make_config(seed, legacy_shuffle, round_number))
        _run_round(session)
        summary = _summarize(session, round_number)
        history.record(summary)

        if rounds is not None and len(history.rounds) >= rounds:
            break
        if summary.score == 0:
            break
        if not typer.confirm("Play again?", default=True):
            break

    console.print(_render_match_summary(history))


@app.command()
def deal(
    seed: int | None = typer.Option(None, help="Random seed for the deal (omit for clock seeding)."),
    legacy_shuffle: bool = typer.Option(
        False,
        "--legacy-shuffle/--uniform-shuffle",
        help="Use the three-pass half-swapping shuffle instead of Fisher-Yates.",
    ),
) -> None:
    """Deal a single round and print the opening table."""

    session = GameSession.new(_make_config(seed, legacy_shuffle))
    console.print(render_session(session, title="Klondike • New Deal"))


def main() -> None:
    """Entry-point for ``python -m klondike.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()
