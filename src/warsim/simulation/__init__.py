"""Game rules: deck factory, turn resolver and run-to-completion driver."""

from warsim.simulation.state import (
    Battle,
    Card,
    EndReason,
    FinishedState,
    GameState,
    GameStatus,
    IdleState,
    Outcome,
    PausedState,
    PlayerNames,
    PlayingState,
    Rank,
    Side,
    SpoilEntry,
    Suit,
    WarChain,
    WarEvent,
    WarTier,
)
from warsim.simulation.deck import DeckError, InvalidDeckSize, create_deck, deal, new_game, shuffle
from warsim.simulation.resolver import resolve
from warsim.simulation.driver import run_to_end

__all__ = [
    "Battle",
    "Card",
    "EndReason",
    "FinishedState",
    "GameState",
    "GameStatus",
    "IdleState",
    "Outcome",
    "PausedState",
    "PlayerNames",
    "PlayingState",
    "Rank",
    "Side",
    "SpoilEntry",
    "Suit",
    "WarChain",
    "WarEvent",
    "WarTier",
    "DeckError",
    "InvalidDeckSize",
    "create_deck",
    "deal",
    "new_game",
    "shuffle",
    "resolve",
    "run_to_end",
]
