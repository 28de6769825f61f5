"""Helpers for tracking results across consecutive Klondike rounds."""

from __future__ import annotations

from dataclasses import dataclass, field

__all__ = ["RoundSummary", "MatchTotals", "MatchHistory"]


@dataclass(frozen=True, slots=True)
class RoundSummary:
    """Summary captured after a single round."""

    round_number: int
    score: float
    won: bool
    moves: int


@dataclass(frozen=True, slots=True)
class MatchTotals:
    """Aggregate totals accumulated across all recorded rounds."""

    rounds: int
    wins: int
    best_score: float
    total_score: float


@dataclass(slots=True)
class MatchHistory:
    """Mutable tracker that accumulates round summaries for a sitting."""

    rounds: list[RoundSummary] = field(default_factory=list)

    @property
    def next_round_number(self) -> int:
        return len(self.rounds) + 1

    def record(self, summary: RoundSummary) -> None:
        """Record ``summary``; rounds must arrive in order."""

        if summary.round_number != self.next_round_number:
            raise ValueError(
                f"expected round {self.next_round_number}, got round {summary.round_number}"
            )
        if summary.score < 0:
            raise ValueError("round score cannot be negative")
        self.rounds.append(summary)

    def totals(self) -> MatchTotals:
        """Return the cumulative totals for the recorded rounds."""

        return MatchTotals(
            rounds=len(self.rounds),
            wins=sum(1 for summary in self.rounds if summary.won),
            best_score=max((summary.score for summary in self.rounds), default=0.0),
            total_score=sum(summary.score for summary in self.rounds),
        )
