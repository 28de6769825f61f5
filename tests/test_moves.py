"""Tests covering move execution and scoring side effects."""

from __future__ import annotations

import pytest

from klondike import moves
from klondike.cards import Card, Suit
from klondike.piles import Pile
from klondike.session import GameSession


def _fill(pile: Pile, cards: list[Card], closed: int = 0) -> None:
    pile.cards = list(cards)
    pile.closed = closed


def _snapshot(session: GameSession) -> tuple[object, ...]:
    piles = tuple((tuple(pile.cards), pile.closed) for pile in session.piles())
    return piles, session.score, session.last_scored_at


def _session(score: float = 0.0, last_scored_at: float = 0.0) -> GameSession:
    session = GameSession()
    session.score = score
    session.last_scored_at = last_scored_at
    return session


def test_draw_moves_stock_top_face_up_to_waste() -> None:
    session = _session()
    _fill(session.stock, [Card(4, Suit.CLUBS), Card(9, Suit.HEARTS)], closed=2)

    assert moves.draw_from_stock(session, now=1.0)
    assert session.stock.cards == [Card(4, Suit.CLUBS)]
    assert session.stock.closed == 1
    assert session.waste.cards == [Card(9, Suit.HEARTS)]
    assert session.waste.closed == 0

    assert moves.draw_from_stock(session, now=2.0)
    assert session.waste.count_open() == 2
    assert session.stock.is_empty()
    assert session.score == 0.0


def test_draw_from_empty_stock_fails() -> None:
    session = _session()
    before = _snapshot(session)

    assert not moves.draw_from_stock(session, now=1.0)
    assert _snapshot(session) == before


def test_recycle_reverses_waste_into_closed_stock_and_resets_score() -> None:
    session = _session(score=85.5)
    waste_cards = [Card(1, Suit.DIAMONDS), Card(2, Suit.DIAMONDS), Card(3, Suit.DIAMONDS)]
    _fill(session.waste, waste_cards)

    assert moves.recycle_waste(session, now=4.0)
    assert session.stock.cards == list(reversed(waste_cards))
    assert session.stock.is_fully_closed()
    assert session.waste.is_empty()
    assert session.score == 0.0
    assert session.last_scored_at == 0.0


def test_recycle_requires_empty_stock_and_non_empty_waste() -> None:
    session = _session(score=30.0)
    _fill(session.stock, [Card(5, Suit.SPADES)], closed=1)
    _fill(session.waste, [Card(6, Suit.SPADES)])
    before = _snapshot(session)

    assert not moves.recycle_waste(session, now=1.0)
    assert _snapshot(session) == before

    empty = _session(score=30.0)
    assert not moves.recycle_waste(empty, now=1.0)
    assert empty.score == 30.0


def test_waste_to_foundation_scores_without_bonus_but_refreshes_timestamp() -> None:
    session = _session(last_scored_at=100.0)
    _fill(session.waste, [Card(1, Suit.SPADES)])

    assert moves.waste_to_foundation(session, 2, now=101.0)
    assert session.foundations[2].cards == [Card(1, Suit.SPADES)]
    assert session.score == 15.0
    assert session.last_scored_at == 101.0


def test_waste_to_foundation_rejects_wrong_card() -> None:
    session = _session(last_scored_at=100.0)
    _fill(session.waste, [Card(2, Suit.SPADES)])
    before = _snapshot(session)

    assert not moves.waste_to_foundation(session, 0, now=101.0)
    assert not moves.waste_to_foundation(session, 9, now=101.0)
    assert _snapshot(session) == before


def test_waste_to_tableau_awards_decaying_bonus() -> None:
    session = _session(last_scored_at=100.0)
    _fill(session.tableaus[0], [Card(8, Suit.SPADES)])
    _fill(session.waste, [Card(7, Suit.HEARTS)])

    assert moves.waste_to_tableau(session, 0, now=103.0)
    assert session.tableaus[0].cards == [Card(8, Suit.SPADES), Card(7, Suit.HEARTS)]
    assert session.tableaus[0].count_open() == 2
    assert session.score == pytest.approx(27.142857, rel=1e-6)
    assert session.last_scored_at == 103.0


def test_waste_to_tableau_late_move_earns_base_points_only() -> None:
    session = _session(last_scored_at=100.0)
    _fill(session.tableaus[0], [Card(8, Suit.SPADES)])
    _fill(session.waste, [Card(7, Suit.HEARTS)])

    assert moves.waste_to_tableau(session, 0, now=108.0)
    assert session.score == 10.0
    assert session.last_scored_at == 108.0


def test_waste_king_onto_empty_tableau_lands_face_up() -> None:
    session = _session()
    _fill(session.waste, [Card(13, Suit.DIAMONDS)])

    assert moves.waste_to_tableau(session, 6, now=50.0)
    assert session.tableaus[6].card_at(-1) == (Card(13, Suit.DIAMONDS), True)


def test_tableau_to_foundation_reveals_and_pays_bonus() -> None:
    session = _session(last_scored_at=100.0)
    _fill(session.tableaus[0], [Card(5, Suit.CLUBS), Card(1, Suit.HEARTS)], closed=1)

    assert moves.tableau_to_foundation(session, 0, 1, now=100.0)
    assert session.foundations[1].cards == [Card(1, Suit.HEARTS)]
    assert session.tableaus[0].cards == [Card(5, Suit.CLUBS)]
    assert session.tableaus[0].closed == 0
    assert session.score == pytest.approx(15 + 20 + 60)
    assert session.last_scored_at == 100.0


def test_tableau_to_foundation_without_reveal_keeps_timestamp() -> None:
    session = _session(last_scored_at=100.0)
    _fill(session.tableaus[3], [Card(13, Suit.CLUBS), Card(1, Suit.HEARTS)])

    assert moves.tableau_to_foundation(session, 3, 0, now=102.0)
    assert session.score == 15.0
    assert session.last_scored_at == 100.0
    assert session.tableaus[3].cards == [Card(13, Suit.CLUBS)]


def test_tableau_to_foundation_emptying_pile_has_no_reveal() -> None:
    session = _session(last_scored_at=100.0)
    _fill(session.tableaus[0], [Card(1, Suit.HEARTS)])

    assert moves.tableau_to_foundation(session, 0, 0, now=101.0)
    assert session.tableaus[0].is_empty()
    assert session.score == 15.0


def test_tableau_to_foundation_rejections() -> None:
    session = _session()
    _fill(session.tableaus[0], [Card(2, Suit.HEARTS)])
    before = _snapshot(session)

    assert not moves.tableau_to_foundation(session, 0, 0, now=1.0)
    assert not moves.tableau_to_foundation(session, 1, 0, now=1.0)
    assert not moves.tableau_to_foundation(session, 7, 0, now=1.0)
    assert _snapshot(session) == before


def test_foundation_to_tableau_penalty_and_floor() -> None:
    session = _session(score=40.0, last_scored_at=10.0)
    _fill(session.foundations[0], [Card(rank, Suit.HEARTS) for rank in range(1, 13)])
    _fill(session.tableaus[0], [Card(13, Suit.SPADES)])

    assert moves.foundation_to_tableau(session, 0, 0, now=12.0)
    assert session.tableaus[0].cards[-1] == Card(12, Suit.HEARTS)
    assert session.score == 25.0
    assert session.last_scored_at == 12.0

    _fill(session.tableaus[1], [Card(12, Suit.CLUBS)])
    assert moves.foundation_to_tableau(session, 0, 1, now=13.0)
    assert session.score == 10.0

    _fill(session.tableaus[2], [Card(11, Suit.SPADES)])
    assert moves.foundation_to_tableau(session, 0, 2, now=14.0)
    assert session.score == 0.0
    assert session.last_scored_at == 14.0


def test_foundation_to_tableau_rejections() -> None:
    session = _session(score=20.0)
    _fill(session.foundations[0], [Card(1, Suit.HEARTS)])
    before = _snapshot(session)

    assert not moves.foundation_to_tableau(session, 0, 0, now=1.0)
    assert not moves.foundation_to_tableau(session, 1, 0, now=1.0)
    assert not moves.foundation_to_tableau(session, 4, 0, now=1.0)
    assert _snapshot(session) == before


def _run_session() -> GameSession:
    session = _session(last_scored_at=100.0)
    _fill(
        session.tableaus[4],
        [Card(2, Suit.CLUBS), Card(9, Suit.HEARTS), Card(8, Suit.SPADES), Card(7, Suit.HEARTS)],
        closed=1,
    )
    return session


def test_auto_count_moves_whole_run_and_reveals() -> None:
    session = _run_session()
    _fill(session.tableaus[0], [Card(10, Suit.CLUBS)])

    assert moves.auto_move_count(session, 4, 0) == 3
    assert moves.tableau_to_tableau(session, 4, 0, now=102.0)
    assert session.tableaus[0].cards == [
        Card(10, Suit.CLUBS),
        Card(9, Suit.HEARTS),
        Card(8, Suit.SPADES),
        Card(7, Suit.HEARTS),
    ]
    assert session.tableaus[4].cards == [Card(2, Suit.CLUBS)]
    assert session.tableaus[4].closed == 0
    assert session.score == pytest.approx(20 + (7 - 2) / 7 * 3 * 20)
    assert session.last_scored_at == 102.0


def test_auto_count_picks_partial_run() -> None:
    session = _run_session()
    _fill(session.tableaus[1], [Card(9, Suit.DIAMONDS)])

    assert moves.auto_move_count(session, 4, 1) == 2
    assert moves.tableau_to_tableau(session, 4, 1, now=101.0)
    assert session.tableaus[1].cards[-2:] == [Card(8, Suit.SPADES), Card(7, Suit.HEARTS)]
    assert session.tableaus[4].cards == [Card(2, Suit.CLUBS), Card(9, Suit.HEARTS)]
    assert session.tableaus[4].closed == 1
    assert session.score == 0.0
    assert session.last_scored_at == 100.0


def test_auto_count_without_candidate_is_rejected() -> None:
    session = _run_session()
    _fill(session.tableaus[0], [Card(5, Suit.CLUBS)])
    before = _snapshot(session)

    assert moves.auto_move_count(session, 4, 0) == 0
    assert not moves.tableau_to_tableau(session, 4, 0, now=101.0)
    assert _snapshot(session) == before


def test_king_run_moves_to_empty_tableau() -> None:
    session = _session()
    _fill(session.tableaus[2], [Card(4, Suit.SPADES), Card(13, Suit.HEARTS), Card(12, Suit.SPADES)], closed=1)

    assert moves.tableau_to_tableau(session, 2, 5, now=1.0)
    assert session.tableaus[5].cards == [Card(13, Suit.HEARTS), Card(12, Suit.SPADES)]
    assert session.tableaus[5].closed == 0
    assert session.tableaus[2].closed == 0


def test_explicit_count_moves_only_requested_cards() -> None:
    session = _run_session()
    _fill(session.tableaus[0], [Card(8, Suit.CLUBS)])

    assert moves.tableau_to_tableau(session, 4, 0, now=101.0, count=1)
    assert session.tableaus[0].cards == [Card(8, Suit.CLUBS), Card(7, Suit.HEARTS)]
    assert len(session.tableaus[4]) == 3


@pytest.mark.parametrize(
    ("count", "dest_top"),
    [(1, Card(2, Suit.CLUBS)), (2, Card(10, Suit.SPADES)), (3, Card(10, Suit.HEARTS))],
)
def test_explicit_count_must_stack_on_destination(count: int, dest_top: Card) -> None:
    session = _run_session()
    _fill(session.tableaus[0], [dest_top])
    before = _snapshot(session)

    assert not moves.tableau_to_tableau(session, 4, 0, now=101.0, count=count)
    assert _snapshot(session) == before


@pytest.mark.parametrize("count", [0, 4, 10])
def test_explicit_count_beyond_open_cards_is_rejected(count: int) -> None:
    session = _run_session()
    before = _snapshot(session)

    assert not moves.tableau_to_tableau(session, 4, 0, now=101.0, count=count)
    assert _snapshot(session) == before


@pytest.mark.parametrize(("source", "dest"), [(4, 4), (-1, 0), (4, 7)])
def test_tableau_to_tableau_rejects_bad_indices(source: int, dest: int) -> None:
    session = _run_session()
    before = _snapshot(session)

    assert not moves.tableau_to_tableau(session, source, dest, now=101.0)
    assert _snapshot(session) == before
