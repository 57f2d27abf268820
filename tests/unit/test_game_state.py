"""Tests for immutable game state."""

import pytest
from warsim.simulation.state import (
    Battle,
    Card,
    EndReason,
    FinishedState,
    GameStatus,
    IdleState,
    Outcome,
    PausedState,
    PlayingState,
    PlayerNames,
    Rank,
    Side,
    SpoilEntry,
    Suit,
    WarChain,
    WarTier,
)


def test_card_values() -> None:
    """Ranks map to 2-14 with Ace high."""
    assert Card(Rank.TWO, Suit.CLUBS).value == 2
    assert Card(Rank.TEN, Suit.CLUBS).value == 10
    assert Card(Rank.JACK, Suit.CLUBS).value == 11
    assert Card(Rank.KING, Suit.CLUBS).value == 13
    assert Card(Rank.ACE, Suit.SPADES).value == 14


def test_card_str_and_full_name() -> None:
    card = Card(Rank.QUEEN, Suit.DIAMONDS)
    assert str(card) == "Q♦"
    assert card.rank.full_name == "Queen"
    assert Rank.SEVEN.full_name == "7"


def test_card_immutability() -> None:
    """Test Card is immutable."""
    card = Card(rank=Rank.ACE, suit=Suit.HEARTS)

    with pytest.raises(AttributeError):
        card.rank = Rank.KING  # type: ignore


def test_game_state_immutability() -> None:
    """Test GameState is immutable."""
    state = PlayingState(player_hand=(Card(Rank.ACE, Suit.HEARTS),))

    with pytest.raises(AttributeError):
        state.turn = 1  # type: ignore


def test_status_tags() -> None:
    """Each state class carries its own status."""
    outcome = Outcome(winner=Side.PLAYER, reason=EndReason.HAND_EMPTY)
    assert IdleState().status is GameStatus.IDLE
    assert PlayingState().status is GameStatus.PLAYING
    assert PausedState().status is GameStatus.PAUSED
    assert FinishedState(outcome=outcome).status is GameStatus.FINISHED


def test_war_chain_tracking() -> None:
    state = PlayingState()
    assert state.war_mode is False
    assert state.war_depth == 0

    at_war = state.copy_with(war=WarChain().escalate().escalate())
    assert at_war.war_mode is True
    assert at_war.war_depth == 2
    assert state.war is None


def test_pause_and_resume_keep_table() -> None:
    """Switching between playing and paused keeps every field."""
    battle = Battle(Card(Rank.TWO, Suit.CLUBS), Card(Rank.THREE, Suit.CLUBS))
    playing = PlayingState(
        player_hand=(Card(Rank.ACE, Suit.HEARTS),),
        turn=4,
        pot=(SpoilEntry(Card(Rank.FOUR, Suit.SPADES), Side.OPPONENT),),
        logs=("x",),
        face_up=battle,
    )

    paused = playing.to_paused()
    assert isinstance(paused, PausedState)
    assert paused.face_up == battle
    assert paused.player_active == battle.player_card
    assert paused.to_playing() == playing


def test_finish_appends_log() -> None:
    state = PlayingState(logs=("first",), turn=3)
    finished = state.finish(Outcome(None, EndReason.MUTUAL_DEPLETION), "done", turn=4)

    assert isinstance(finished, FinishedState)
    assert finished.logs == ("first", "done")
    assert finished.turn == 4
    assert finished.outcome.is_draw
    assert state.logs == ("first",)


def test_pot_cards_and_count() -> None:
    a = Card(Rank.FIVE, Suit.SPADES)
    b = Card(Rank.FIVE, Suit.HEARTS)
    state = PlayingState(
        player_hand=(Card(Rank.ACE, Suit.HEARTS),),
        pot=(SpoilEntry(a, Side.PLAYER), SpoilEntry(b, Side.OPPONENT)),
    )
    assert state.pot_cards == (a, b)
    assert state.card_count() == 3


def test_war_tier_from_depth() -> None:
    assert WarTier.from_depth(1) is WarTier.SINGLE
    assert WarTier.from_depth(2) is WarTier.DOUBLE
    assert WarTier.from_depth(3) is WarTier.TRIPLE
    assert WarTier.from_depth(4) is WarTier.QUADRUPLE
    assert WarTier.from_depth(5) is WarTier.MEGA
    assert WarTier.from_depth(12) is WarTier.MEGA


def test_player_names() -> None:
    names = PlayerNames("Ada")
    assert names.of(Side.PLAYER) == "Ada"
    assert names.of(Side.OPPONENT) == "The General"
    assert Side.PLAYER.other is Side.OPPONENT
