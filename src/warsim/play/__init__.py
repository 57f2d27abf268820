"""Driving loop and terminal display."""

from warsim.play.display import StateRenderer, war_label
from warsim.play.scheduler import TickScheduler
from warsim.play.session import GameSession, SessionConfig, Speed

__all__ = [
    "StateRenderer",
    "war_label",
    "TickScheduler",
    "GameSession",
    "SessionConfig",
    "Speed",
]
