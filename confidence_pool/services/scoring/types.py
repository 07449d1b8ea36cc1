"""
Value types shared by the scoring core.

Everything here is immutable. The scoring functions take these as input
and return new instances; nothing in the core holds a database session
or mutates what it is given.
"""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Tuple


class PickStatus(str, Enum):
    """Outcome of a single pick."""
    CORRECT = "correct"
    WRONG = "wrong"
    PENDING = "pending"  # no result announced for this position yet


class ConfidenceMode(str, Enum):
    """Where a pick's weight comes from."""
    DECLARED = "declared"  # the predictor's own confidence value
    DERIVED = "derived"  # total_picks - position + 1


@dataclass(frozen=True)
class Pick:
    """A predicted occupant of one draft slot."""
    position: int
    player_id: str
    confidence: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Pick":
        """
        Build a pick from a stored document.

        Accepts both the document store's ``playerId`` and ``player_id``.
        Missing or non-numeric values become 0, which the engine treats
        as malformed.
        """
        player_id = data.get("playerId", data.get("player_id")) or ""
        return cls(
            position=_as_int(data.get("position")),
            player_id=str(player_id),
            confidence=_as_int(data.get("confidence")),
        )

    def to_dict(self) -> dict:
        return {"position": self.position, "playerId": self.player_id, "confidence": self.confidence}


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class PickResult:
    """Per-pick audit line."""
    position: int
    predicted_player_id: str
    actual_player_id: Optional[str]
    status: PickStatus
    confidence: int
    points: int

    @property
    def is_correct(self) -> bool:
        return self.status is PickStatus.CORRECT


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Result of scoring one prediction set.

    Attributes:
        total_points: Confidence earned on correct picks
        possible_points: Sum of the confidence of every scored pick
        potential_points: total_points plus the confidence of pending picks
        correct_count: Number of correct picks
        total_count: Number of scored picks
        pending_count: Picks whose position has no result yet
        skipped_count: Malformed picks excluded from every total
        per_pick: One PickResult per scored pick, ordered by position
    """
    total_points: int = 0
    possible_points: int = 0
    potential_points: int = 0
    correct_count: int = 0
    total_count: int = 0
    pending_count: int = 0
    skipped_count: int = 0
    per_pick: Tuple[PickResult, ...] = ()

    @property
    def percentage(self) -> float:
        return percentage(self.total_points, self.possible_points)


def percentage(points: int, possible_points: int) -> float:
    """Points as a percentage of possible points; 0.0 when nothing was possible."""
    if possible_points <= 0:
        return 0.0
    return (points / possible_points) * 100


@dataclass(frozen=True)
class DraftLifecycle:
    """Lifecycle flags of one (sport, year) draft."""
    is_live: bool = False
    is_completed: bool = False

    @property
    def predictions_locked(self) -> bool:
        return self.is_live or self.is_completed


@dataclass(frozen=True)
class LeagueSnapshot:
    """The parts of a league the standings depend on."""
    league_id: str
    sport_type: str
    draft_year: int
    members: Tuple[str, ...]
    total_picks: int


@dataclass(frozen=True)
class PredictionSnapshot:
    """A member's prediction as read from the store."""
    user_id: str
    league_id: str
    picks: Tuple[Pick, ...]
    is_complete: bool = False


@dataclass(frozen=True)
class UserScore:
    """One leaderboard row."""
    user_id: str
    display_name: str
    rank: int
    total_points: int = 0
    possible_points: int = 0
    potential_points: int = 0
    correct_picks: int = 0
    total_picks: int = 0
    remaining_picks: int = 0
    has_prediction: bool = False
    is_verified: bool = False
    photo_url: Optional[str] = None
    payment_info: Optional[str] = None  # only shown once the draft is completed


@dataclass(frozen=True)
class Standings:
    """
    Ranked leaderboard of a league.

    ``winners`` is empty until the draft is completed; it then holds the
    first three entries in sorted order. Shared places are visible through
    each entry's ``rank``.
    """
    league_id: str
    entries: Tuple[UserScore, ...]
    winners: Tuple[UserScore, ...]
    lifecycle: DraftLifecycle


@dataclass(frozen=True)
class Grade:
    letter: str
    label: str


@dataclass(frozen=True)
class MockDraftAccuracy:
    """Accuracy of a mock draft against the announced results."""
    correct_picks: int
    total_picks: int
    points: int
    possible_points: int
    percentage: float
    has_results: bool
    grade: Optional[Grade] = None
    per_pick: Tuple[PickResult, ...] = ()


@dataclass(frozen=True)
class MockDraftSnapshot:
    """A mock draft as read from the store."""
    id: str
    sportscaster: str
    version: str
    sport_type: str
    draft_year: int
    picks: Tuple[Pick, ...]
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class EvaluatedMockDraft:
    """A mock draft paired with its accuracy."""
    draft: MockDraftSnapshot
    slug: str
    accuracy: MockDraftAccuracy = field(compare=False)
