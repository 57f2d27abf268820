"""Run a game to completion with a safety bound."""

from __future__ import annotations

import logging

from warsim.simulation.resolver import resolve
from warsim.simulation.state import (
    EndReason,
    FinishedState,
    GameState,
    GameStatus,
    Outcome,
    PlayerNames,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_TURNS = 5000
FORCED_END_LOG_TAIL = 50
LOG_TAIL = 100
SKIPPED_LOGS_MARKER = "... (previous turns skipped for brevity) ..."


def run_to_end(
    state: GameState,
    names: PlayerNames,
    max_iterations: int = DEFAULT_MAX_TURNS,
    trim_logs: bool = True,
) -> GameState:
    """Resolve rounds until the game finishes or the bound is reached.

    Idle and paused games are switched to playing first. If the bound is
    hit while still playing, the game is forced to finish without a
    winner.

    Args:
        state: Starting snapshot
        names: Display names for logs
        max_iterations: Maximum number of resolutions to apply
        trim_logs: Keep only the tail of the log. With ``False`` the
            result is exactly what stepping ``resolve`` by hand gives.

    Returns:
        The final snapshot (always finished)
    """
    if isinstance(state, FinishedState):
        return state

    current: GameState = state.to_playing()
    iterations = 0
    while current.status is GameStatus.PLAYING and iterations < max_iterations:
        current = resolve(current, names)
        iterations += 1

    if current.status is GameStatus.PLAYING:
        return force_finish(current, max_iterations, trim_logs)

    logger.debug(f"Game finished after {iterations} resolutions")
    if trim_logs and len(current.logs) > LOG_TAIL:
        current = current.copy_with(logs=(SKIPPED_LOGS_MARKER,) + current.logs[-LOG_TAIL:])
    return current


def force_finish(state: GameState, max_turns: int, trim_logs: bool = True) -> FinishedState:
    """End a game that hit the turn limit, without a winner."""
    logger.warning(f"Turn limit of {max_turns} reached, forcing game end")
    logs = state.logs[-FORCED_END_LOG_TAIL:] if trim_logs else state.logs
    return state.finish(
        Outcome(winner=None, reason=EndReason.TURN_LIMIT),
        f"[System] Max turns ({max_turns}) reached. "
        "Game ended to prevent infinite stalemate.",
        logs=logs,
    )
