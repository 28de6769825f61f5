"""Move legality predicates for Klondike."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from .cards import Card
from .piles import MAX_PILE_CARDS, Pile, can_transfer

if TYPE_CHECKING:
    from .session import GameSession

FOUNDATION_COUNT: Final[int] = 4
TABLEAU_COUNT: Final[int] = 7
DECK_SIZE: Final[int] = MAX_PILE_CARDS

__all__ = [
    "FOUNDATION_COUNT",
    "TABLEAU_COUNT",
    "DECK_SIZE",
    "is_valid_foundation_index",
    "is_valid_tableau_index",
    "can_stack",
    "can_move_to_foundation",
    "can_move_to_tableau",
    "can_move_count",
    "can_transfer",
]


def is_valid_foundation_index(index: int) -> bool:
    return 0 <= index < FOUNDATION_COUNT


def is_valid_tableau_index(index: int) -> bool:
    return 0 <= index < TABLEAU_COUNT


def can_stack(card: Card, pile: Pile) -> bool:
    """Return whether ``card`` may be placed on a tableau-style ``pile``.

    An empty pile only accepts a King; otherwise the card must be of the
    opposite color and exactly one rank below the current top.
    """

    if pile.is_empty():
        return card.is_king
    top = pile.peek_top()
    if card.color == top.color:
        return False
    return card.rank == top.rank - 1


def can_move_to_foundation(session: "GameSession", foundation_index: int, card: Card) -> bool:
    """Return whether ``card`` may be played onto the given foundation.

    Out-of-range indices are rejected rather than treated as errors.
    """

    if not is_valid_foundation_index(foundation_index):
        return False
    foundation = session.foundations[foundation_index]
    if foundation.is_empty():
        return card.is_ace
    top = foundation.peek_top()
    return card.suit == top.suit and card.rank == top.rank + 1


def can_move_to_tableau(session: "GameSession", tableau_index: int, card: Card) -> bool:
    """Return whether ``card`` may be played onto the given tableau."""

    if not is_valid_tableau_index(tableau_index):
        return False
    return can_stack(card, session.tableaus[tableau_index])


def can_move_count(session: "GameSession", tableau_index: int, count: int) -> bool:
    """Return ``True`` when ``count`` face-up cards can leave the tableau."""

    if not is_valid_tableau_index(tableau_index):
        return False
    return count <= session.tableaus[tableau_index].count_open()
