"""Terminal display for game state."""

from __future__ import annotations

from warsim.simulation.resolver import format_card
from warsim.simulation.state import (
    EndReason,
    FinishedState,
    GameState,
    PausedState,
    PlayerNames,
    PlayingState,
)

FULL_DECK = 52


def war_label(depth: int) -> str:
    """Banner shown while a war of the given depth is on the table."""
    if depth <= 1:
        return "WAR!"
    if depth == 2:
        return "DOUBLE WAR!"
    if depth == 3:
        return "TRIPLE WAR!"
    if depth == 4:
        return "QUADRUPLE WAR!"
    return "MEGA WAR!"


class StateRenderer:
    """Renders visible game state to terminal."""

    def __init__(self, bar_width: int = 20):
        self.bar_width = bar_width

    def render(self, state: GameState, names: PlayerNames) -> str:
        """Render the table: hand sizes, face-up cards, pot and war banner."""
        lines: list[str] = []

        lines.append(f"=== Turn {state.turn} [{state.status.value}] ===")
        lines.append(self._strength_line(names.player, len(state.player_hand)))
        lines.append(self._strength_line(names.opponent, len(state.opponent_hand)))

        if isinstance(state, (PlayingState, PausedState)) and state.face_up:
            lines.append(
                f"Battle: {format_card(state.face_up.player_card)} vs "
                f"{format_card(state.face_up.opponent_card)}"
            )

        if state.pot:
            lines.append(f"Pot: {len(state.pot)} cards at stake")

        if state.war_mode:
            lines.append(war_label(state.war_depth))

        if isinstance(state, FinishedState):
            lines.append(self.render_result(state, names))

        return "\n".join(lines)

    def render_result(self, state: FinishedState, names: PlayerNames) -> str:
        outcome = state.outcome
        if outcome.reason is EndReason.TURN_LIMIT:
            return "Result: stopped at the turn limit"
        if outcome.winner is None:
            return "Result: draw"
        return f"Result: {names.of(outcome.winner)} is victorious after {state.turn} turns"

    def render_logs(self, state: GameState, tail: int = 5) -> str:
        return "\n".join(state.logs[-tail:])

    def _strength_line(self, name: str, count: int) -> str:
        filled = min(self.bar_width, round(self.bar_width * count / FULL_DECK))
        bar = "#" * filled + "." * (self.bar_width - filled)
        return f"{name:<16} [{bar}] {count:>2}"
