"""LLM-powered battle report generator."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from warsim.simulation.state import FinishedState, PlayerNames, Side, WarEvent, WarTier

logger = logging.getLogger(__name__)

# Suppress verbose HTTP logging from anthropic SDK
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("anthropic").setLevel(logging.WARNING)

DEFAULT_MODEL = "claude-sonnet-4-20250514"
MAX_NOTABLE_WARS = 10

NO_API_KEY_REPORT = "API Key not configured. Unable to generate battle report."
BACKEND_ERROR_REPORT = "The telegraph lines are down! (Error generating report)"
EMPTY_REPORT = "Report got lost in transmission."


@dataclass(frozen=True)
class BattleSummary:
    """What the report writer needs to know about a finished game."""

    winner: str
    loser: str
    turn_count: int
    war_history: tuple[WarEvent, ...]
    winner_score: int
    loser_score: int


def summarize(state: FinishedState, names: PlayerNames) -> BattleSummary:
    """Build a summary of a finished game.

    Draws and forced endings have no recorded winner; the side holding
    more cards is reported as the victor (the player on a tie).
    """
    winner = state.outcome.winner
    if winner is None:
        winner = (
            Side.PLAYER
            if len(state.player_hand) >= len(state.opponent_hand)
            else Side.OPPONENT
        )
    loser = winner.other
    return BattleSummary(
        winner=names.of(winner),
        loser=names.of(loser),
        turn_count=state.turn,
        war_history=state.war_history,
        winner_score=len(state.hand(winner)),
        loser_score=len(state.hand(loser)),
    )


def build_prompt(summary: BattleSummary) -> str:
    """Compose the correspondent prompt; Single wars are left out of the highlights."""
    notable = [w for w in summary.war_history if w.tier is not WarTier.SINGLE][:MAX_NOTABLE_WARS]
    if notable:
        battles = "\n".join(
            f"- Turn {w.turn}: A {w.tier.value} occurred! Winner: {w.winner}. "
            f"Spoils: {w.spoils_count} cards."
            for w in notable
        )
    else:
        battles = "No multi-stage wars occurred, just a steady grind of single skirmishes."

    return f"""You are an enthusiastic, dramatic, old-timey war correspondent reporting on a card game of "War".

Match Summary:
- Victor: {summary.winner} (Score: {summary.winner_score} cards)
- Defeated: {summary.loser} (Score: {summary.loser_score} cards)
- Total Turns: {summary.turn_count}
- Total Conflicts (Wars): {len(summary.war_history)}

Notable Battles (Wars):
{battles}

Write a short, spirited newspaper column style report (approx 150 words) summarizing the flow of the game, the intensity of the "wars", and the ultimate victory. Use military metaphors appropriate for a card game."""


def generate_battle_report(
    summary: BattleSummary,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
) -> str:
    """Generate a newspaper-style report of a finished game.

    Never raises: a missing key, a backend error or an empty reply each
    yield a fixed fallback sentence instead.

    Args:
        summary: Finished game summary
        api_key: Anthropic key (defaults to ``ANTHROPIC_API_KEY``)
        model: Model name (defaults to ``WARSIM_REPORT_MODEL`` or DEFAULT_MODEL)

    Returns:
        Report text or a fallback string
    """
    api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
    if not api_key:
        logger.warning("ANTHROPIC_API_KEY not set, skipping battle report")
        return NO_API_KEY_REPORT

    model = model or os.environ.get("WARSIM_REPORT_MODEL", DEFAULT_MODEL)

    try:
        import anthropic
        client = anthropic.Anthropic(api_key=api_key)

        message = client.messages.create(
            model=model,
            max_tokens=400,
            messages=[
                {"role": "user", "content": build_prompt(summary)}
            ]
        )

        text = message.content[0].text.strip() if message.content else ""
        return text or EMPTY_REPORT

    except Exception as e:
        logger.warning(f"Failed to generate battle report: {e}")
        return BACKEND_ERROR_REPORT
