"""Turn resolution for War (burn-card variant).

``resolve`` is the only place game rules live. It takes a state snapshot
and returns the next one without touching the input, so it can be called
from a timer tick, a tight loop, or a test with equal safety.
"""

from __future__ import annotations

import logging
from typing import Sequence

from warsim.simulation.state import (
    Battle,
    Card,
    EndReason,
    FinishedState,
    GameState,
    GameStatus,
    Outcome,
    PausedState,
    PlayerNames,
    PlayingState,
    Side,
    SpoilEntry,
    WarChain,
    WarEvent,
    WarTier,
)

logger = logging.getLogger(__name__)

WAR_REINFORCEMENTS = 2  # one burn card + one face-up card


def format_card(card: Card) -> str:
    """Card as written in the battle log, e.g. ``Queen♦`` or ``7♣``."""
    return f"{card.rank.full_name}{card.suit.value}"


def resolve(state: GameState, names: PlayerNames) -> GameState:
    """Advance the game by one round.

    Game-ending situations (an empty hand, a side unable to reinforce a
    war, both sides exhausted) come back as a ``FinishedState`` carrying
    the cause; nothing here raises for game conditions.

    Args:
        state: Current snapshot (any status)
        names: Display names used in logs and war records

    Returns:
        The next snapshot. A finished state is returned unchanged.
    """
    if isinstance(state, FinishedState):
        return state

    if not state.war_mode:
        finished = _check_empty_hands(state, names)
        if finished is not None:
            return finished

    player_hand = list(state.player_hand)
    opponent_hand = list(state.opponent_hand)
    pot = list(state.pot)
    war = state.war

    if war is not None:
        finished = _check_reinforcements(state, names)
        if finished is not None:
            return finished

        pot.append(SpoilEntry(player_hand.pop(0), Side.PLAYER))
        pot.append(SpoilEntry(opponent_hand.pop(0), Side.OPPONENT))
        war = war.escalate()

    player_card = player_hand.pop(0)
    opponent_card = opponent_hand.pop(0)
    battle = Battle(player_card=player_card, opponent_card=opponent_card)
    turn = state.turn + 1

    logs = list(state.logs)
    war_history = state.war_history
    last_winner = state.last_winner

    if player_card.value == opponent_card.value:
        pot.append(SpoilEntry(player_card, Side.PLAYER))
        pot.append(SpoilEntry(opponent_card, Side.OPPONENT))
        war = war if war is not None else WarChain()
        logs.append(
            f"TIE! {player_card.rank.full_name} vs {opponent_card.rank.full_name}. "
            "PREPARE FOR WAR!"
        )
        logger.debug(f"Turn {turn}: tie at war depth {war.depth}")
    else:
        winner = Side.PLAYER if player_card.value > opponent_card.value else Side.OPPONENT
        spoils = pot + [
            SpoilEntry(player_card, Side.PLAYER),
            SpoilEntry(opponent_card, Side.OPPONENT),
        ]
        winning_hand = player_hand if winner is Side.PLAYER else opponent_hand
        winning_hand.extend(entry.card for entry in spoils)

        logs.append(_victory_log(winner, battle, spoils, names, in_war=war is not None))
        if war is not None:
            tier = WarTier.from_depth(war.depth)
            war_history = war_history + (
                WarEvent(
                    turn=turn,
                    tier=tier,
                    winner=names.of(winner),
                    spoils_count=len(spoils),
                ),
            )
            logs.append(f"WAR RESOLVED! {names.of(winner)} wins the {tier.value} War!")
            logger.debug(f"Turn {turn}: {tier.value} war won by {winner.value}")

        pot = []
        war = None
        last_winner = winner

    next_cls = PausedState if state.status is GameStatus.PAUSED else PlayingState
    return next_cls(
        player_hand=tuple(player_hand),
        opponent_hand=tuple(opponent_hand),
        turn=turn,
        pot=tuple(pot),
        war=war,
        last_winner=last_winner,
        war_history=war_history,
        logs=tuple(logs),
        face_up=battle,
    )


def _check_empty_hands(state: GameState, names: PlayerNames) -> FinishedState | None:
    """Finish the game when a side has no cards left outside a war."""
    player_empty = not state.player_hand
    opponent_empty = not state.opponent_hand
    if player_empty and opponent_empty:
        return state.finish(
            Outcome(winner=None, reason=EndReason.MUTUAL_DEPLETION),
            "Game Over! Both sides are out of cards. It's a draw.",
            turn=state.turn + 1,
        )
    if player_empty or opponent_empty:
        winner = Side.OPPONENT if player_empty else Side.PLAYER
        logger.info(f"Game over after {state.turn} turns: {names.of(winner)} wins")
        return state.finish(
            Outcome(winner=winner, reason=EndReason.HAND_EMPTY),
            f"Game Over! {names.of(winner)} wins!",
            turn=state.turn + 1,
        )
    return None


def _check_reinforcements(state: GameState, names: PlayerNames) -> FinishedState | None:
    """Finish the game when a side cannot put up a burn card and a face-up card.

    A side holding a single card still loses here; it does not get to
    play that card as a plain round first.
    """
    player_short = len(state.player_hand) < WAR_REINFORCEMENTS
    opponent_short = len(state.opponent_hand) < WAR_REINFORCEMENTS

    if player_short and opponent_short:
        logger.info(f"Game drawn after {state.turn} turns: both sides exhausted in war")
        return state.finish(
            Outcome(winner=None, reason=EndReason.MUTUAL_DEPLETION),
            "Both armies annihilated during WAR! It's a draw.",
            turn=state.turn + 1,
        )
    if not (player_short or opponent_short):
        return None

    loser = Side.PLAYER if player_short else Side.OPPONENT
    winner = loser.other
    gathered = state.hand(winner) + state.hand(loser) + state.pot_cards
    hands = {winner: gathered, loser: ()}
    logger.info(f"Game over after {state.turn} turns: {names.of(loser)} cannot reinforce")
    return state.finish(
        Outcome(winner=winner, reason=EndReason.NO_REINFORCEMENTS),
        f"{names.of(loser)} ran out of reinforcements during WAR!",
        player_hand=hands[Side.PLAYER],
        opponent_hand=hands[Side.OPPONENT],
        pot=(),
        last_winner=winner,
        turn=state.turn + 1,
    )


def _victory_log(
    winner: Side,
    battle: Battle,
    spoils: Sequence[SpoilEntry],
    names: PlayerNames,
    in_war: bool,
) -> str:
    if winner is Side.PLAYER:
        high, low = battle.player_card, battle.opponent_card
    else:
        high, low = battle.opponent_card, battle.player_card
    captured = ", ".join(format_card(e.card) for e in spoils if e.origin is not winner)
    recovered = ", ".join(format_card(e.card) for e in spoils if e.origin is winner)

    log = f"{names.of(winner)} wins with {high.rank.full_name} vs {low.rank.full_name}."
    if in_war:
        log += f"\nSpoils of Victory: {captured}"
        log += f"\nRisked & Recovered: {recovered}"
    else:
        log += f" Won: {captured}, {recovered}"
    return log
