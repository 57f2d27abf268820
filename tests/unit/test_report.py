"""Tests for battle report generation."""

from unittest.mock import Mock, patch

import pytest
from warsim.narrative.report import (
    BACKEND_ERROR_REPORT,
    EMPTY_REPORT,
    NO_API_KEY_REPORT,
    BattleSummary,
    build_prompt,
    generate_battle_report,
    summarize,
)
from warsim.simulation.state import (
    Card,
    EndReason,
    FinishedState,
    Outcome,
    PlayerNames,
    Rank,
    Side,
    Suit,
    WarEvent,
    WarTier,
)

NAMES = PlayerNames(player="Ada", opponent="Bob")


def make_summary(wars: tuple[WarEvent, ...] = ()) -> BattleSummary:
    return BattleSummary(
        winner="Ada",
        loser="Bob",
        turn_count=321,
        war_history=wars,
        winner_score=52,
        loser_score=0,
    )


class TestSummarize:
    """Tests for summarize()."""

    def test_uses_outcome_winner(self):
        state = FinishedState(
            player_hand=(),
            opponent_hand=(Card(Rank.ACE, Suit.SPADES),) * 4,
            turn=88,
            outcome=Outcome(Side.OPPONENT, EndReason.HAND_EMPTY),
        )

        summary = summarize(state, NAMES)

        assert summary.winner == "Bob"
        assert summary.loser == "Ada"
        assert summary.turn_count == 88
        assert summary.winner_score == 4
        assert summary.loser_score == 0

    def test_forced_end_picks_larger_hand(self):
        state = FinishedState(
            player_hand=(Card(Rank.ACE, Suit.SPADES),) * 30,
            opponent_hand=(Card(Rank.TWO, Suit.SPADES),) * 22,
            outcome=Outcome(None, EndReason.TURN_LIMIT),
        )

        summary = summarize(state, NAMES)

        assert summary.winner == "Ada"
        assert summary.winner_score == 30
        assert summary.loser_score == 22


class TestBuildPrompt:
    """Tests for build_prompt()."""

    def test_mentions_match_summary(self):
        prompt = build_prompt(make_summary())

        assert "Victor: Ada (Score: 52 cards)" in prompt
        assert "Defeated: Bob (Score: 0 cards)" in prompt
        assert "Total Turns: 321" in prompt
        assert "steady grind of single skirmishes" in prompt

    def test_lists_only_multi_stage_wars(self):
        wars = (
            WarEvent(turn=4, tier=WarTier.SINGLE, winner="Ada", spoils_count=6),
            WarEvent(turn=9, tier=WarTier.DOUBLE, winner="Bob", spoils_count=10),
        )

        prompt = build_prompt(make_summary(wars))

        assert "Total Conflicts (Wars): 2" in prompt
        assert "- Turn 9: A Double occurred! Winner: Bob. Spoils: 10 cards." in prompt
        assert "Turn 4" not in prompt

    def test_caps_notable_wars(self):
        wars = tuple(
            WarEvent(turn=t, tier=WarTier.TRIPLE, winner="Ada", spoils_count=14)
            for t in range(1, 16)
        )

        prompt = build_prompt(make_summary(wars))

        assert prompt.count("A Triple occurred!") == 10


class TestGenerateBattleReport:
    """Tests for generate_battle_report() fallbacks."""

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        assert generate_battle_report(make_summary()) == NO_API_KEY_REPORT

    def test_backend_failure_returns_fallback(self):
        with patch("anthropic.Anthropic", side_effect=RuntimeError("boom")):
            report = generate_battle_report(make_summary(), api_key="test-key")

        assert report == BACKEND_ERROR_REPORT

    def test_returns_model_text(self):
        client = Mock()
        client.messages.create.return_value = Mock(content=[Mock(text="  EXTRA! Ada triumphs!  ")])

        with patch("anthropic.Anthropic", return_value=client):
            report = generate_battle_report(make_summary(), api_key="test-key", model="m")

        assert report == "EXTRA! Ada triumphs!"
        kwargs = client.messages.create.call_args.kwargs
        assert kwargs["model"] == "m"
        assert "Victor: Ada" in kwargs["messages"][0]["content"]

    def test_empty_reply(self):
        client = Mock()
        client.messages.create.return_value = Mock(content=[Mock(text="   ")])

        with patch("anthropic.Anthropic", return_value=client):
            report = generate_battle_report(make_summary(), api_key="test-key")

        assert report == EMPTY_REPORT

    def test_model_from_environment(self, monkeypatch):
        monkeypatch.setenv("WARSIM_REPORT_MODEL", "env-model")
        client = Mock()
        client.messages.create.return_value = Mock(content=[Mock(text="ok")])

        with patch("anthropic.Anthropic", return_value=client):
            generate_battle_report(make_summary(), api_key="test-key")

        assert client.messages.create.call_args.kwargs["model"] == "env-model"
