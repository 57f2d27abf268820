"""Deck construction, shuffling and dealing."""

from __future__ import annotations

import logging
import random
from typing import Optional, Protocol, Sequence

from warsim.simulation.state import Card, IdleState, Rank, Suit

logger = logging.getLogger(__name__)


class DeckError(Exception):
    """Error raised while preparing a deck, before any game exists."""

    pass


class InvalidDeckSize(DeckError):
    """Deck cannot be split into two equal hands."""

    def __init__(self, size: int):
        super().__init__(f"Cannot deal {size} cards evenly between two players")
        self.size = size


class RandomSource(Protocol):
    """Anything that can supply uniform integers (e.g. ``random.Random``)."""

    def randrange(self, stop: int) -> int: ...


def create_deck() -> tuple[Card, ...]:
    """Return all 52 cards in a fixed order (suit by suit, Two to Ace)."""
    return tuple(Card(rank=rank, suit=suit) for suit in Suit for rank in Rank)


def shuffle(deck: Sequence[Card], rng: RandomSource) -> tuple[Card, ...]:
    """Return a uniformly shuffled copy of ``deck`` (Fisher-Yates).

    Args:
        deck: Cards to shuffle; left untouched
        rng: Injected randomness source

    Returns:
        A new tuple holding a permutation of ``deck``
    """
    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randrange(i + 1)
        cards[i], cards[j] = cards[j], cards[i]
    return tuple(cards)


def deal(deck: Sequence[Card]) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
    """Split a deck in two: first half to the player, rest to the opponent.

    Raises:
        InvalidDeckSize: If the deck has an odd number of cards
    """
    if len(deck) % 2 != 0:
        raise InvalidDeckSize(len(deck))
    half = len(deck) // 2
    return tuple(deck[:half]), tuple(deck[half:])


def new_game(
    rng: Optional[RandomSource] = None,
    deck: Optional[Sequence[Card]] = None,
) -> IdleState:
    """Deal a fresh game.

    A supplied ``deck`` is dealt in the given order; otherwise the
    canonical deck is shuffled with ``rng`` (a fresh ``random.Random``
    when omitted).
    """
    if deck is None:
        deck = shuffle(create_deck(), rng if rng is not None else random.Random())
    player_hand, opponent_hand = deal(deck)
    logger.debug(f"Dealt {len(player_hand)} cards to each side")
    return IdleState(
        player_hand=player_hand,
        opponent_hand=opponent_hand,
        logs=("Game initialized. Decks shuffled and dealt.",),
    )
