"""Top-level package for the Klondike solitaire engine."""

from . import cards, commands, deck, moves, piles, rules, scoreboard, scoring, session
from .session import GameSession, KlondikeConfig

__all__ = [
    "GameSession",
    "KlondikeConfig",
    "cards",
    "commands",
    "deck",
    "moves",
    "piles",
    "rules",
    "scoreboard",
    "scoring",
    "session",
]
