"""Scoring constants and the time-decayed bonus rule."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

FOUNDATION_POINTS: Final[int] = 15
WASTE_TO_TABLEAU_POINTS: Final[int] = 10
REVEAL_POINTS: Final[int] = 20
BONUS_WINDOW: Final[float] = 7.0
BONUS_MULTIPLIER: Final[float] = 3.0

__all__ = [
    "FOUNDATION_POINTS",
    "WASTE_TO_TABLEAU_POINTS",
    "REVEAL_POINTS",
    "BONUS_WINDOW",
    "BONUS_MULTIPLIER",
    "BonusAward",
    "time_bonus",
    "withdraw_points",
]


@dataclass(frozen=True, slots=True)
class BonusAward:
    """Bonus granted for a scoring move and the timestamp to remember."""

    bonus: float
    scored_at: float


def time_bonus(now: float, last_scored_at: float, base_points: int) -> BonusAward:
    """Compute the quick-play bonus for a move worth ``base_points``.

    Moves made within :data:`BONUS_WINDOW` time units of the previous
    scoring move earn up to three times their base points, decaying linearly
    to zero at the edge of the window. The returned ``scored_at`` always
    equals ``now``.
    """

    elapsed = now - last_scored_at
    if elapsed < BONUS_WINDOW:
        bonus = (BONUS_WINDOW - elapsed) / BONUS_WINDOW * BONUS_MULTIPLIER * base_points
    else:
        bonus = 0.0
    return BonusAward(bonus=bonus, scored_at=now)


def withdraw_points(score: float, points: int) -> float:
    """Subtract ``points`` from ``score`` without going below zero."""

    return max(score - points, 0.0)
