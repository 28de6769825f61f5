"""Pile data structure with a face-down prefix and face-up suffix."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Iterator, List

from .cards import Card

MAX_PILE_CARDS: Final[int] = 52

__all__ = [
    "MAX_PILE_CARDS",
    "PileContractError",
    "PileRole",
    "Pile",
    "can_transfer",
    "transfer_in_order",
]


class PileContractError(RuntimeError):
    """Raised when a pile operation is called with a violated precondition."""


class PileRole(str, Enum):
    """Roles a pile can play on the Klondike table."""

    STOCK = "stock"
    WASTE = "waste"
    FOUNDATION = "foundation"
    TABLEAU = "tableau"


@dataclass(slots=True)
class Pile:
    """Ordered stack of cards, bottom first.

    The first ``closed`` cards are face-down and every card after them is
    face-up, so the last card is the visible top whenever ``closed`` is
    smaller than the pile size.
    """

    role: PileRole
    index: int | None = None
    cards: List[Card] = field(default_factory=list)
    closed: int = 0

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    @property
    def name(self) -> str:
        """Return a short human-readable name, e.g. ``tableau 3``."""

        if self.index is None:
            return self.role.value
        return f"{self.role.value} {self.index + 1}"

    def is_empty(self) -> bool:
        return not self.cards

    def is_full(self) -> bool:
        return len(self.cards) >= MAX_PILE_CARDS

    def is_fully_closed(self) -> bool:
        """Return ``True`` when every card in the pile is face-down."""

        return self.closed == len(self.cards)

    def count_open(self) -> int:
        return len(self.cards) - self.closed

    def push(self, card: Card) -> None:
        """Place ``card`` on top of the pile.

        A card pushed onto a face-down top stays face-down; on an empty pile
        or a face-up top it lands face-up.
        """

        if self.is_full():
            raise PileContractError(f"{self.name} is already holding {MAX_PILE_CARDS} cards")
        if self.cards and self.is_fully_closed():
            self.closed += 1
        self.cards.append(card)

    def peek_top(self) -> Card:
        """Return the top card without removing it."""

        if not self.cards:
            raise PileContractError(f"cannot peek at empty {self.name}")
        return self.cards[-1]

    def pop_top(self) -> Card:
        """Remove and return the top card, keeping the closed count consistent."""

        if not self.cards:
            raise PileContractError(f"cannot pop from empty {self.name}")
        if self.is_fully_closed() and self.closed > 0:
            self.closed -= 1
        return self.cards.pop()

    def open_top_face(self) -> None:
        """Flip the top card face-up; the pile must be non-empty and fully closed."""

        if not self.cards or not self.is_fully_closed():
            raise PileContractError(f"{self.name} top is not a face-down card")
        self.closed -= 1

    def close_all(self) -> None:
        """Turn every card in the pile face-down."""

        if not self.cards:
            raise PileContractError(f"cannot close empty {self.name}")
        self.closed = len(self.cards)

    def clear(self) -> None:
        self.cards.clear()
        self.closed = 0

    def is_valid_position(self, position: int) -> bool:
        """Return whether ``position`` addresses a card, allowing negative indices."""

        if position >= 0:
            return position < len(self.cards)
        return len(self.cards) + position >= 0

    def card_at(self, position: int) -> tuple[Card, bool]:
        """Return the card at ``position`` together with its face-up flag.

        Negative positions count from the top, so ``-1`` is the top card.
        """

        if not self.is_valid_position(position):
            raise PileContractError(f"position {position} is out of range for {self.name}")
        resolved = position if position >= 0 else len(self.cards) + position
        return self.cards[resolved], resolved >= self.closed

    def open_cards(self) -> list[Card]:
        """Return the face-up cards, bottom first."""

        return self.cards[self.closed :]


def can_transfer(source: Pile, dest: Pile, count: int) -> bool:
    """Return ``True`` when ``count`` cards fit structurally from ``source`` into ``dest``."""

    return len(source) >= count and len(dest) + count <= MAX_PILE_CARDS


def transfer_in_order(source: Pile, dest: Pile, count: int) -> None:
    """Move the top ``count`` cards of ``source`` onto ``dest`` preserving order.

    Only face-up cards are ever moved as a group, and they stay face-up.
    """

    if count < 0 or not can_transfer(source, dest, count):
        raise PileContractError(f"cannot transfer {count} card(s) from {source.name} to {dest.name}")
    if count > source.count_open():
        raise PileContractError(f"cannot transfer face-down cards from {source.name}")
    start = len(source.cards) - count
    moved = source.cards[start:]
    del source.cards[start:]
    dest.cards.extend(moved)
