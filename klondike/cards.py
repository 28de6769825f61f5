"""Card abstractions and helpers for Klondike."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Iterable

ACE: Final[int] = 1
JACK: Final[int] = 11
QUEEN: Final[int] = 12
KING: Final[int] = 13
RANKS_PER_SUIT: Final[int] = 13

RANK_LABELS: Final[dict[int, str]] = {ACE: "A", JACK: "J", QUEEN: "Q", KING: "K"}


class Color(str, Enum):
    """Card colors; tableau sequences must alternate between them."""

    RED = "red"
    BLACK = "black"


class Suit(str, Enum):
    """Enumeration of the four suits, in canonical deck order."""

    DIAMONDS = "D"
    HEARTS = "H"
    SPADES = "S"
    CLUBS = "C"

    @property
    def color(self) -> Color:
        if self in (Suit.DIAMONDS, Suit.HEARTS):
            return Color.RED
        return Color.BLACK

    @property
    def symbol(self) -> str:
        return _SUIT_SYMBOLS[self]


_SUIT_SYMBOLS = {
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
    Suit.CLUBS: "♣",
}


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a single playing card."""

    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if not ACE <= self.rank <= KING:
            raise ValueError(f"rank must be between {ACE} and {KING}, got {self.rank}")

    @property
    def color(self) -> Color:
        """Return the card's color as derived from its suit."""

        return self.suit.color

    @property
    def is_ace(self) -> bool:
        return self.rank == ACE

    @property
    def is_king(self) -> bool:
        return self.rank == KING

    def rank_label(self) -> str:
        return RANK_LABELS.get(self.rank, str(self.rank))

    def label(self) -> str:
        """Create a display label such as ``10♥`` or ``A♠``."""

        return f"{self.rank_label()}{self.suit.symbol}"

    def __str__(self) -> str:
        return self.label()


def iter_full_deck() -> Iterable[Card]:
    """Yield all 52 cards: every rank of the first suit, then the next suit."""

    for suit in Suit:
        for rank in range(ACE, KING + 1):
            yield Card(rank=rank, suit=suit)
