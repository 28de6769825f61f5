"""Command parsing and dispatch for short textual Klondike moves.

A command names a source pile and a destination pile with one character
each: ``M`` for the stock, ``P`` for the waste, ``A``-``D`` for the
foundations and ``1``-``7`` for the tableaus. ``m``, ``p`` and ``f`` are
single-character shorthands for drawing, recycling and quitting.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Final

from . import moves, rules

if TYPE_CHECKING:
    from .session import GameSession

MAX_COMMAND_CHARS: Final[int] = 2
QUIT_TOKEN: Final[str] = "F"
ENTER_KEYS: Final[frozenset[str]] = frozenset({"\n", "\r"})
BACKSPACE_KEYS: Final[frozenset[str]] = frozenset({"\b", "\x7f"})

_SHORTHANDS: Final[dict[str, str]] = {"M": "MP", "P": "PM"}

__all__ = [
    "MAX_COMMAND_CHARS",
    "MalformedCommand",
    "IllegalCommand",
    "PileKind",
    "PileRef",
    "MoveKind",
    "Command",
    "parse_pile_ref",
    "parse_command",
    "resolve_move",
    "execute_command",
    "CommandBuffer",
]


class MalformedCommand(ValueError):
    """Raised when a command token cannot be parsed."""


class IllegalCommand(ValueError):
    """Raised when a well-formed command names an unsupported pile pairing."""


class PileKind(str, Enum):
    """Kinds of piles a command can reference."""

    STOCK = "stock"
    WASTE = "waste"
    FOUNDATION = "foundation"
    TABLEAU = "tableau"


@dataclass(frozen=True, slots=True)
class PileRef:
    """Reference to a pile on the table; ``index`` is set for foundations and tableaus."""

    kind: PileKind
    index: int | None = None

    def label(self) -> str:
        if self.kind is PileKind.STOCK:
            return "M"
        if self.kind is PileKind.WASTE:
            return "P"
        if self.kind is PileKind.FOUNDATION:
            return "ABCD"[self.index or 0]
        return str((self.index or 0) + 1)


class MoveKind(str, Enum):
    """The source/destination pairings the interpreter can dispatch."""

    STOCK_TO_WASTE = "stock_to_waste"
    WASTE_TO_STOCK = "waste_to_stock"
    WASTE_TO_FOUNDATION = "waste_to_foundation"
    WASTE_TO_TABLEAU = "waste_to_tableau"
    TABLEAU_TO_FOUNDATION = "tableau_to_foundation"
    FOUNDATION_TO_TABLEAU = "foundation_to_tableau"
    TABLEAU_TO_TABLEAU = "tableau_to_tableau"


@dataclass(frozen=True, slots=True)
class Command:
    """A parsed command: either a quit request or a move between two piles."""

    source: PileRef | None = None
    dest: PileRef | None = None
    quit: bool = False

    def label(self) -> str:
        if self.quit or self.source is None or self.dest is None:
            return QUIT_TOKEN
        return f"{self.source.label()}{self.dest.label()}"


_MOVE_TABLE: Final[dict[tuple[PileKind, PileKind], MoveKind]] = {
    (PileKind.STOCK, PileKind.WASTE): MoveKind.STOCK_TO_WASTE,
    (PileKind.WASTE, PileKind.STOCK): MoveKind.WASTE_TO_STOCK,
    (PileKind.WASTE, PileKind.FOUNDATION): MoveKind.WASTE_TO_FOUNDATION,
    (PileKind.WASTE, PileKind.TABLEAU): MoveKind.WASTE_TO_TABLEAU,
    (PileKind.TABLEAU, PileKind.FOUNDATION): MoveKind.TABLEAU_TO_FOUNDATION,
    (PileKind.FOUNDATION, PileKind.TABLEAU): MoveKind.FOUNDATION_TO_TABLEAU,
    (PileKind.TABLEAU, PileKind.TABLEAU): MoveKind.TABLEAU_TO_TABLEAU,
}


def parse_pile_ref(char: str) -> PileRef:
    """Translate a single command character into a :class:`PileRef`."""

    if len(char) != 1:
        raise MalformedCommand(f"expected a single pile character, got {char!r}")
    upper = char.upper()
    if upper == "M":
        return PileRef(PileKind.STOCK)
    if upper == "P":
        return PileRef(PileKind.WASTE)
    if upper in "ABCD":
        return PileRef(PileKind.FOUNDATION, "ABCD".index(upper))
    if upper in "1234567":
        return PileRef(PileKind.TABLEAU, int(upper) - 1)
    raise MalformedCommand(f"unknown pile {char!r}")


def parse_command(text: str | None) -> Command:
    """Parse a 1-2 character command token into a :class:`Command`."""

    if text is None:
        raise MalformedCommand("empty command")
    token = text.upper()
    if not token:
        raise MalformedCommand("empty command")
    if len(token) > MAX_COMMAND_CHARS:
        raise MalformedCommand(f"command {text!r} is longer than {MAX_COMMAND_CHARS} characters")
    if len(token) == 1:
        if token == QUIT_TOKEN:
            return Command(quit=True)
        if token not in _SHORTHANDS:
            raise MalformedCommand(f"incomplete command {text!r}")
        token = _SHORTHANDS[token]
    return Command(source=parse_pile_ref(token[0]), dest=parse_pile_ref(token[1]))


def resolve_move(source: PileRef, dest: PileRef) -> MoveKind:
    """Return the operation for a source/destination pairing."""

    try:
        return _MOVE_TABLE[(source.kind, dest.kind)]
    except KeyError:
        raise IllegalCommand(f"cannot move from {source.kind.value} to {dest.kind.value}") from None


def _dispatchers() -> dict[MoveKind, Callable[["GameSession", PileRef, PileRef, float], bool]]:
    return {
        MoveKind.STOCK_TO_WASTE: lambda s, src, dst, now: moves.draw_from_stock(s, now),
        MoveKind.WASTE_TO_STOCK: lambda s, src, dst, now: moves.recycle_waste(s, now),
        MoveKind.WASTE_TO_FOUNDATION: lambda s, src, dst, now: moves.waste_to_foundation(s, dst.index, now),
        MoveKind.WASTE_TO_TABLEAU: lambda s, src, dst, now: moves.waste_to_tableau(s, dst.index, now),
        MoveKind.TABLEAU_TO_FOUNDATION: lambda s, src, dst, now: moves.tableau_to_foundation(
            s, src.index, dst.index, now
        ),
        MoveKind.FOUNDATION_TO_TABLEAU: lambda s, src, dst, now: moves.foundation_to_tableau(
            s, src.index, dst.index, now
        ),
        MoveKind.TABLEAU_TO_TABLEAU: lambda s, src, dst, now: moves.tableau_to_tableau(
            s, src.index, dst.index, now
        ),
    }


_DISPATCH = _dispatchers()


def apply_command(session: "GameSession", command: Command, now: float) -> bool:
    """Apply an already parsed command to ``session``.

    Raises :class:`IllegalCommand` for unsupported pairings. A quit command
    raises the session's quit flag and reports that no move was made.
    """

    if command.quit:
        session.quit = True
        return False
    if command.source is None or command.dest is None:
        raise IllegalCommand("move command is missing a pile")
    kind = resolve_move(command.source, command.dest)
    return _DISPATCH[kind](session, command.source, command.dest, now)


def execute_command(session: "GameSession", text: str | None, now: float) -> bool:
    """Parse ``text`` and apply it, returning ``True`` only when a move was made."""

    try:
        command = parse_command(text)
        return apply_command(session, command, now)
    except (MalformedCommand, IllegalCommand):
        return False


class CommandBuffer:
    """Pending keystrokes for the next command, at most two characters long."""

    def __init__(self) -> None:
        self._chars: list[str] = []

    @property
    def text(self) -> str:
        return "".join(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def clear(self) -> None:
        self._chars.clear()

    def type_key(self, key: str) -> str | None:
        """Feed one key; returns the finished command when Enter completes it."""

        if key in ENTER_KEYS:
            if not self._chars:
                return None
            command = self.text
            self._chars.clear()
            return command
        if key in BACKSPACE_KEYS:
            if self._chars:
                self._chars.pop()
            return None
        if len(key) == 1 and len(self._chars) < MAX_COMMAND_CHARS:
            self._chars.append(key)
        return None
