"""Move execution with scoring side effects.

Every operation either applies completely and returns ``True`` or leaves the
session untouched and returns ``False``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import rules, scoring
from .piles import Pile, transfer_in_order

if TYPE_CHECKING:
    from .session import GameSession

__all__ = [
    "draw_from_stock",
    "recycle_waste",
    "waste_to_foundation",
    "waste_to_tableau",
    "tableau_to_foundation",
    "foundation_to_tableau",
    "tableau_to_tableau",
    "auto_move_count",
]


def _award_with_bonus(session: "GameSession", base_points: int, now: float) -> None:
    award = scoring.time_bonus(now, session.last_scored_at, base_points)
    session.score += base_points + award.bonus
    session.last_scored_at = award.scored_at


def _reveal_after_removal(session: "GameSession", pile: Pile, now: float) -> None:
    """Flip a newly exposed face-down tableau top and pay the reveal bonus."""

    if len(pile) > 0 and pile.closed > 0 and pile.is_fully_closed():
        pile.open_top_face()
        _award_with_bonus(session, scoring.REVEAL_POINTS, now)


def draw_from_stock(session: "GameSession", now: float) -> bool:
    """Turn the top stock card face-up onto the waste."""

    if session.stock.is_empty():
        return False
    session.waste.push(session.stock.pop_top())
    return True


def recycle_waste(session: "GameSession", now: float) -> bool:
    """Return the whole waste to an empty stock, face-down, and reset the score.

    Cards are moved one by one from the waste top, so the stock ends up in
    reverse waste order.
    """

    if not session.stock.is_empty() or session.waste.is_empty():
        return False
    while not session.waste.is_empty():
        session.stock.push(session.waste.pop_top())
    session.stock.close_all()
    session.score = 0.0
    return True


def waste_to_foundation(session: "GameSession", foundation_index: int, now: float) -> bool:
    if session.waste.is_empty():
        return False
    if not rules.can_move_to_foundation(session, foundation_index, session.waste.peek_top()):
        return False
    session.foundations[foundation_index].push(session.waste.pop_top())
    session.score += scoring.FOUNDATION_POINTS
    session.last_scored_at = now
    return True


def waste_to_tableau(session: "GameSession", tableau_index: int, now: float) -> bool:
    if session.waste.is_empty():
        return False
    if not rules.can_move_to_tableau(session, tableau_index, session.waste.peek_top()):
        return False
    session.tableaus[tableau_index].push(session.waste.pop_top())
    _award_with_bonus(session, scoring.WASTE_TO_TABLEAU_POINTS, now)
    return True


def tableau_to_foundation(session: "GameSession", tableau_index: int, foundation_index: int, now: float) -> bool:
    """Play a tableau top onto a foundation, revealing the card beneath if needed."""

    if not rules.is_valid_tableau_index(tableau_index):
        return False
    source = session.tableaus[tableau_index]
    if source.is_empty():
        return False
    if not rules.can_move_to_foundation(session, foundation_index, source.peek_top()):
        return False
    session.foundations[foundation_index].push(source.pop_top())
    session.score += scoring.FOUNDATION_POINTS
    _reveal_after_removal(session, source, now)
    return True


def foundation_to_tableau(session: "GameSession", foundation_index: int, tableau_index: int, now: float) -> bool:
    """Take a card back from a foundation, paying the withdrawal penalty."""

    if not rules.is_valid_foundation_index(foundation_index):
        return False
    source = session.foundations[foundation_index]
    if source.is_empty():
        return False
    if not rules.can_move_to_tableau(session, tableau_index, source.peek_top()):
        return False
    session.tableaus[tableau_index].push(source.pop_top())
    session.score = scoring.withdraw_points(session.score, scoring.FOUNDATION_POINTS)
    session.last_scored_at = now
    return True


def auto_move_count(session: "GameSession", source_index: int, dest_index: int) -> int:
    """Return how many cards a tableau-to-tableau move should carry.

    Scans the face-up run of the source from its deepest card towards the
    top and stops at the first card that can be stacked on the destination.
    Returns 0 when no face-up card qualifies.
    """

    if not (rules.is_valid_tableau_index(source_index) and rules.is_valid_tableau_index(dest_index)):
        return 0
    source = session.tableaus[source_index]
    dest = session.tableaus[dest_index]
    for position in range(source.closed, len(source)):
        card, _ = source.card_at(position)
        if rules.can_stack(card, dest):
            return len(source) - position
    return 0


def tableau_to_tableau(
    session: "GameSession",
    source_index: int,
    dest_index: int,
    now: float,
    count: int | None = None,
) -> bool:
    """Move face-up cards between tableaus.

    With ``count`` omitted the number of cards is chosen by
    :func:`auto_move_count`. An explicit ``count`` must cover only face-up
    cards, and the deepest moved card must stack on the destination.
    """

    if not (rules.is_valid_tableau_index(source_index) and rules.is_valid_tableau_index(dest_index)):
        return False
    if source_index == dest_index:
        return False
    if count is None:
        count = auto_move_count(session, source_index, dest_index)
    if count < 1:
        return False

    source = session.tableaus[source_index]
    dest = session.tableaus[dest_index]
    if not rules.can_move_count(session, source_index, count) or not rules.can_transfer(source, dest, count):
        return False
    if not rules.can_stack(source.cards[-count], dest):
        return False

    transfer_in_order(source, dest, count)
    _reveal_after_removal(session, source, now)
    return True
