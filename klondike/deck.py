"""Deck construction and shuffling procedures."""

from __future__ import annotations

import random
import time
from enum import Enum

from .cards import iter_full_deck
from .piles import MAX_PILE_CARDS, Pile, PileContractError, PileRole

__all__ = ["ShuffleMethod", "build_deck", "clock_seeded_rng", "shuffle", "shuffle_legacy", "shuffle_uniform"]

_HALF_DECK = MAX_PILE_CARDS // 2


class ShuffleMethod(str, Enum):
    """Available shuffling procedures."""

    UNIFORM = "uniform"
    LEGACY = "legacy"


def build_deck() -> Pile:
    """Return a face-down stock holding all 52 cards in canonical order."""

    stock = Pile(role=PileRole.STOCK, cards=list(iter_full_deck()))
    stock.close_all()
    return stock


def clock_seeded_rng() -> random.Random:
    """Return a random source seeded from the current wall-clock time."""

    return random.Random(time.time_ns())


def shuffle_uniform(pile: Pile, rng: random.Random) -> None:
    """Fisher-Yates shuffle of the pile contents using ``rng.shuffle``."""

    rng.shuffle(pile.cards)


def _other_half(rng: random.Random, position: int) -> int:
    if position < _HALF_DECK:
        return rng.randrange(_HALF_DECK) + _HALF_DECK
    return rng.randrange(_HALF_DECK)


def _same_half(rng: random.Random, position: int) -> int:
    if position < _HALF_DECK:
        return rng.randrange(_HALF_DECK)
    return rng.randrange(_HALF_DECK) + _HALF_DECK


def shuffle_legacy(pile: Pile, rng: random.Random) -> None:
    """Three-pass half-swapping shuffle of a full 52-card pile.

    The first pass swaps every even position with a random slot in the
    opposite half, the second swaps every odd position with a random slot in
    its own half, and the last swaps every position with the opposite half.
    """

    if len(pile) != MAX_PILE_CARDS:
        raise PileContractError("the legacy shuffle needs a full deck")
    cards = pile.cards

    for i in range(MAX_PILE_CARDS):
        j = _other_half(rng, i) if i % 2 == 0 else i
        cards[i], cards[j] = cards[j], cards[i]

    for i in range(MAX_PILE_CARDS):
        j = _same_half(rng, i) if i % 2 != 0 else i
        cards[i], cards[j] = cards[j], cards[i]

    for i in range(MAX_PILE_CARDS):
        j = _other_half(rng, i)
        cards[i], cards[j] = cards[j], cards[i]


def shuffle(pile: Pile, rng: random.Random | None = None, method: ShuffleMethod = ShuffleMethod.UNIFORM) -> None:
    """Shuffle ``pile`` in place and leave it fully face-down.

    When ``rng`` is omitted a generator seeded from the wall clock at call
    time is used.
    """

    if pile.is_empty():
        raise PileContractError(f"cannot shuffle empty {pile.name}")
    if rng is None:
        rng = clock_seeded_rng()
    if method is ShuffleMethod.LEGACY:
        shuffle_legacy(pile, rng)
    else:
        shuffle_uniform(pile, rng)
    pile.close_all()
