"""Immutable game state representation."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Optional, Union


class Rank(Enum):
    """Playing card ranks."""

    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def value_points(self) -> int:
        """Numeric value used for comparisons (2-14, Ace high)."""
        return RANK_VALUES[self]

    @property
    def full_name(self) -> str:
        return FULL_RANK_NAMES.get(self, self.value)


class Suit(Enum):
    """Playing card suits."""

    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"


RANK_VALUES = {rank: index + 2 for index, rank in enumerate(Rank)}

FULL_RANK_NAMES = {
    Rank.JACK: "Jack",
    Rank.QUEEN: "Queen",
    Rank.KING: "King",
    Rank.ACE: "Ace",
}


@dataclass(frozen=True)
class Card:
    """Immutable playing card."""

    rank: Rank
    suit: Suit

    @property
    def value(self) -> int:
        return self.rank.value_points

    def __str__(self) -> str:
        return f"{self.rank.value}{self.suit.value}"


class Side(Enum):
    """The two seats at the table."""

    PLAYER = "player"
    OPPONENT = "opponent"

    @property
    def other(self) -> "Side":
        return Side.OPPONENT if self is Side.PLAYER else Side.PLAYER


@dataclass(frozen=True)
class PlayerNames:
    """Display names for both sides."""

    player: str
    opponent: str = "The General"

    def of(self, side: Side) -> str:
        return self.player if side is Side.PLAYER else self.opponent


@dataclass(frozen=True)
class SpoilEntry:
    """A card at stake, tagged with the hand it was drawn from."""

    card: Card
    origin: Side


@dataclass(frozen=True)
class Battle:
    """The face-up pair compared in a round."""

    player_card: Card
    opponent_card: Card


class WarTier(Enum):
    """Label of a resolved war, keyed by escalation depth."""

    SINGLE = "Single"
    DOUBLE = "Double"
    TRIPLE = "Triple"
    QUADRUPLE = "Quadruple"
    MEGA = "Mega"

    @classmethod
    def from_depth(cls, depth: int) -> "WarTier":
        if depth <= 1:
            return cls.SINGLE
        if depth == 2:
            return cls.DOUBLE
        if depth == 3:
            return cls.TRIPLE
        if depth == 4:
            return cls.QUADRUPLE
        return cls.MEGA


@dataclass(frozen=True)
class WarChain:
    """An unresolved run of ties.

    ``depth`` counts burn-and-compare sub-rounds played so far; it is 0
    right after the first tie and grows by one with every war draw.
    """

    depth: int = 0

    def escalate(self) -> "WarChain":
        return WarChain(depth=self.depth + 1)


@dataclass(frozen=True)
class WarEvent:
    """Record of one resolved war."""

    turn: int
    tier: WarTier
    winner: str
    spoils_count: int


class GameStatus(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    FINISHED = "finished"


class EndReason(Enum):
    """Why a game finished."""

    HAND_EMPTY = "hand_empty"
    NO_REINFORCEMENTS = "no_reinforcements"
    MUTUAL_DEPLETION = "mutual_depletion"
    TURN_LIMIT = "turn_limit"


@dataclass(frozen=True)
class Outcome:
    """Result of a finished game. ``winner`` is None for draws and forced ends."""

    winner: Optional[Side]
    reason: EndReason

    @property
    def is_draw(self) -> bool:
        return self.winner is None and self.reason is EndReason.MUTUAL_DEPLETION


@dataclass(frozen=True)
class TableState:
    """Fields shared by every game status.

    All nested structures are tuples so snapshots can be shared freely
    between the driving loop and observers.
    """

    status: ClassVar[GameStatus]

    player_hand: tuple[Card, ...] = ()
    opponent_hand: tuple[Card, ...] = ()
    turn: int = 0
    pot: tuple[SpoilEntry, ...] = ()
    war: Optional[WarChain] = None
    last_winner: Optional[Side] = None
    war_history: tuple[WarEvent, ...] = ()
    logs: tuple[str, ...] = ()

    @property
    def war_mode(self) -> bool:
        return self.war is not None

    @property
    def war_depth(self) -> int:
        return self.war.depth if self.war is not None else 0

    @property
    def pot_cards(self) -> tuple[Card, ...]:
        return tuple(entry.card for entry in self.pot)

    def hand(self, side: Side) -> tuple[Card, ...]:
        return self.player_hand if side is Side.PLAYER else self.opponent_hand

    def card_count(self) -> int:
        """Cards held in both hands and the pot."""
        return len(self.player_hand) + len(self.opponent_hand) + len(self.pot)

    def copy_with(self, **changes) -> "GameState":  # type: ignore
        """Create a new state of the same status with specified changes."""
        return replace(self, **changes)

    def common_fields(self) -> dict:
        return {
            "player_hand": self.player_hand,
            "opponent_hand": self.opponent_hand,
            "turn": self.turn,
            "pot": self.pot,
            "war": self.war,
            "last_winner": self.last_winner,
            "war_history": self.war_history,
            "logs": self.logs,
        }

    def to_playing(self) -> "PlayingState":
        return PlayingState(face_up=getattr(self, "face_up", None), **self.common_fields())

    def to_paused(self) -> "PausedState":
        return PausedState(face_up=getattr(self, "face_up", None), **self.common_fields())

    def finish(self, outcome: Outcome, *entries: str, **changes) -> "FinishedState":
        fields = self.common_fields()
        fields.update(changes)
        fields["logs"] = fields["logs"] + entries
        return FinishedState(outcome=outcome, **fields)


@dataclass(frozen=True)
class IdleState(TableState):
    """Freshly dealt game waiting for its first round."""

    status: ClassVar[GameStatus] = GameStatus.IDLE


class _FaceUpMixin:
    """Accessors for the pair of cards compared by the last resolution."""

    face_up: Optional[Battle]

    @property
    def player_active(self) -> Optional[Card]:
        return self.face_up.player_card if self.face_up else None

    @property
    def opponent_active(self) -> Optional[Card]:
        return self.face_up.opponent_card if self.face_up else None


@dataclass(frozen=True)
class PlayingState(_FaceUpMixin, TableState):
    """Game being advanced round by round."""

    status: ClassVar[GameStatus] = GameStatus.PLAYING

    face_up: Optional[Battle] = None


@dataclass(frozen=True)
class PausedState(_FaceUpMixin, TableState):
    """Auto-play suspended; rounds may still be stepped manually."""

    status: ClassVar[GameStatus] = GameStatus.PAUSED

    face_up: Optional[Battle] = None


@dataclass(frozen=True)
class FinishedState(TableState):
    """Terminal state, kept read-only for reporting."""

    status: ClassVar[GameStatus] = GameStatus.FINISHED

    outcome: Outcome = field(kw_only=True)


GameState = Union[IdleState, PlayingState, PausedState, FinishedState]
