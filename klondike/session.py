"""Game session owning every pile, the score and the scoring clock."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Callable, List

from . import deck, rules
from .commands import (
    Command,
    CommandBuffer,
    IllegalCommand,
    MalformedCommand,
    PileKind,
    PileRef,
    apply_command,
    parse_command,
)
from .deck import ShuffleMethod
from .piles import Pile, PileRole

Clock = Callable[[], float]

MAX_EVENT_LOG = 12


@dataclass(slots=True)
class KlondikeConfig:
    """Runtime configuration for a Klondike round."""

    shuffle_method: ShuffleMethod = ShuffleMethod.UNIFORM
    seed: int | None = None
    max_event_log: int = MAX_EVENT_LOG

    def make_rng(self) -> random.Random:
        """Return the random source used to shuffle a new deal."""

        if self.seed is None:
            return deck.clock_seeded_rng()
        return random.Random(self.seed)


def _foundations() -> List[Pile]:
    return [Pile(role=PileRole.FOUNDATION, index=i) for i in range(rules.FOUNDATION_COUNT)]


def _tableaus() -> List[Pile]:
    return [Pile(role=PileRole.TABLEAU, index=i) for i in range(rules.TABLEAU_COUNT)]


@dataclass(slots=True)
class GameSession:
    """Mutable state of one Klondike round.

    Build it with :meth:`new` (or call :meth:`deal` on an empty session),
    then feed it commands through :meth:`play` or :meth:`type_key` until
    :meth:`is_over` reports the end of the round.
    """

    config: KlondikeConfig = field(default_factory=KlondikeConfig)
    clock: Clock = time.monotonic
    stock: Pile = field(default_factory=lambda: Pile(role=PileRole.STOCK))
    waste: Pile = field(default_factory=lambda: Pile(role=PileRole.WASTE))
    foundations: List[Pile] = field(default_factory=_foundations)
    tableaus: List[Pile] = field(default_factory=_tableaus)
    score: float = 0.0
    last_scored_at: float = 0.0
    quit: bool = False
    moves: int = 0
    command: CommandBuffer = field(default_factory=CommandBuffer)
    events: List[str] = field(default_factory=list)

    @classmethod
    def new(cls, config: KlondikeConfig | None = None, clock: Clock | None = None) -> "GameSession":
        """Create a session and deal a fresh round."""

        session = cls(config=config or KlondikeConfig(), clock=clock or time.monotonic)
        session.deal()
        return session

    def piles(self) -> List[Pile]:
        """Return every pile on the table."""

        return [self.stock, self.waste, *self.foundations, *self.tableaus]

    def pile_for(self, ref: PileRef) -> Pile:
        if ref.kind is PileKind.STOCK:
            return self.stock
        if ref.kind is PileKind.WASTE:
            return self.waste
        if ref.kind is PileKind.FOUNDATION:
            return self.foundations[ref.index or 0]
        return self.tableaus[ref.index or 0]

    def deal(self, now: float | None = None) -> None:
        """Shuffle a full deck and lay out the seven tableaus.

        Tableau ``i`` receives ``i + 1`` cards with only its top card face-up;
        the remaining 24 cards stay face-down in the stock.
        """

        for pile in self.piles():
            pile.clear()

        fresh = deck.build_deck()
        deck.shuffle(fresh, self.config.make_rng(), self.config.shuffle_method)
        self.stock.cards = fresh.cards
        self.stock.closed = fresh.closed

        for index, tableau in enumerate(self.tableaus):
            for _ in range(index + 1):
                tableau.push(self.stock.pop_top())
            tableau.close_all()
            tableau.open_top_face()

        self.score = 0.0
        self.last_scored_at = self.clock() if now is None else now
        self.quit = False
        self.moves = 0
        self.command.clear()
        self.events.clear()

    def _append_event(self, message: str) -> None:
        self.events.append(message)
        excess = len(self.events) - self.config.max_event_log
        if excess > 0:
            del self.events[:excess]

    def _describe(self, command: Command, gained: float) -> str:
        if command.source is None or command.dest is None:
            return command.label()
        dest = self.pile_for(command.dest)
        text = f"{command.source.label()} → {command.dest.label()}"
        if command.dest.kind is not PileKind.STOCK and not dest.is_empty():
            text += f": {dest.peek_top().label()}"
        if gained:
            text += f" ({gained:+.2f})"
        return text

    def play(self, text: str | None, now: float | None = None) -> bool:
        """Apply a command token; returns ``True`` when a move was made."""

        if now is None:
            now = self.clock()
        try:
            command = parse_command(text)
            before = self.score
            applied = apply_command(self, command, now)
        except (MalformedCommand, IllegalCommand):
            return False
        if command.quit:
            self._append_event("Quit")
        if applied:
            self.moves += 1
            self._append_event(self._describe(command, self.score - before))
        return applied

    def type_key(self, key: str, now: float | None = None) -> bool | None:
        """Feed a keystroke into the pending command.

        Returns ``None`` until Enter completes a command, then the result of
        :meth:`play` for it.
        """

        completed = self.command.type_key(key)
        if completed is None:
            return None
        return self.play(completed, now)

    @property
    def pending_command(self) -> str:
        return self.command.text

    def total_cards(self) -> int:
        return sum(len(pile) for pile in self.piles())

    def is_won(self) -> bool:
        """Return ``True`` once all 52 cards sit on the foundations."""

        return sum(len(foundation) for foundation in self.foundations) == rules.DECK_SIZE

    def is_over(self) -> bool:
        return self.quit or self.is_won()

    def final_score(self) -> float:
        """Return the score credited for the round; quitting forfeits it."""

        if self.quit and not self.is_won():
            return 0.0
        return self.score
