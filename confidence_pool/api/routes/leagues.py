"""
League routes: league membership, leaderboards and member predictions.

Provides endpoints for:
- Creating a league, joining by invite code, removing members, deleting
  a league (owner only; its predictions go with it)
- League standings with competition ranks and winners
- Per-pick breakdown of one member
- Reading and saving a member's prediction

Base path: /api/v1/leagues
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from confidence_pool.api.errors import to_http_exception
from confidence_pool.core.database import get_db
from confidence_pool.core.exceptions import ConfidencePoolError
from confidence_pool.services.leaderboard_service import get_leaderboard_service
from confidence_pool.services.league_service import get_league_service
from confidence_pool.services.prediction_service import get_prediction_service
from confidence_pool.services.scoring.types import Pick, PickStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/leagues", tags=["leagues"])


# ==================== REQUEST MODELS ====================

class CreateLeagueRequest(BaseModel):
    owner_id: str = Field(..., min_length=1, description="Creator; becomes the first member")
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    sport_type: str = Field(..., description="NFL, NBA, WNBA, NHL or MLB")
    draft_year: int = Field(..., ge=1900, le=2100)
    total_picks: Optional[int] = Field(None, ge=1, le=300, description="Defaults to the first round of the sport")
    public_join: bool = Field(False, description="Allow joining with the invite code")


class JoinLeagueRequest(BaseModel):
    user_id: str = Field(..., min_length=1)
    invite_code: str = Field(..., min_length=1, description="Case-insensitive")


class PickRequest(BaseModel):
    """A submitted pick. Accepts ``playerId`` or ``player_id``."""
    position: int = Field(..., description="Draft slot, 1-based")
    player_id: str = Field(..., validation_alias=AliasChoices("playerId", "player_id"))
    confidence: int = Field(..., description="Confidence points, 1..total_picks, unique")


class SavePredictionRequest(BaseModel):
    picks: List[PickRequest]
    require_complete: bool = Field(True, description="Reject predictions with empty positions")


# ==================== RESPONSE MODELS ====================

class LeagueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: Optional[str] = None
    sport_type: str
    draft_year: int
    created_by: str
    members: List[str]
    total_picks: int
    invite_code: str
    public_join: bool
    created_at: Optional[datetime] = None


class JoinLeagueResponse(BaseModel):
    joined: bool = Field(..., description="False when the user was already a member")
    league: LeagueResponse


class DeleteLeagueResponse(BaseModel):
    league_id: str
    deleted_predictions: int


class UserScoreResponse(BaseModel):
    """One leaderboard row."""
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    display_name: str
    rank: int = Field(..., description="Competition rank; tied members share a rank")
    total_points: int
    possible_points: int
    potential_points: int = Field(..., description="Points earned plus points still pending")
    correct_picks: int
    total_picks: int
    remaining_picks: int
    has_prediction: bool
    is_verified: bool = Field(..., description="Confidence values form exactly 1..total_picks")
    photo_url: Optional[str] = None
    payment_info: Optional[str] = Field(None, description="Payout details, set once the draft is completed")


class StandingsResponse(BaseModel):
    league_id: str
    is_live: bool
    is_completed: bool
    entries: List[UserScoreResponse]
    winners: List[UserScoreResponse] = Field(..., description="Top three once the draft is completed")


class PickResultResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    position: int
    predicted_player_id: str
    actual_player_id: Optional[str] = None
    status: PickStatus
    confidence: int
    points: int


class MemberBreakdownResponse(BaseModel):
    league_id: str
    user_id: str
    display_name: str
    has_prediction: bool
    is_verified: bool
    total_points: int
    possible_points: int
    potential_points: int
    correct_count: int
    total_count: int
    pending_count: int
    skipped_count: int
    percentage: float
    picks: List[PickResultResponse]


class PickResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    position: int
    player_id: str
    confidence: int


class PredictionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    league_id: str
    user_id: str
    is_complete: bool
    picks: List[PickResponse]


class PredictionEnvelope(BaseModel):
    prediction: Optional[PredictionResponse] = None


# ==================== ENDPOINTS ====================

@router.post("", response_model=LeagueResponse, status_code=status.HTTP_201_CREATED)
def create_league(request: CreateLeagueRequest, db: Session = Depends(get_db)) -> LeagueResponse:
    """Create a league. The owner is its first member and receives the invite code."""
    try:
        league = get_league_service(db).create_league(
            owner_id=request.owner_id,
            name=request.name,
            sport_type=request.sport_type,
            draft_year=request.draft_year,
            total_picks=request.total_picks,
            description=request.description,
            public_join=request.public_join,
        )
    except ConfidencePoolError as e:
        raise to_http_exception(e, "create league")

    return LeagueResponse.model_validate(league)


@router.post("/join", response_model=JoinLeagueResponse)
def join_league(request: JoinLeagueRequest, db: Session = Depends(get_db)) -> JoinLeagueResponse:
    """
    Join a league with its invite code.

    Returns 404 for an unknown code and 403 when the league does not allow
    joining by code. Joining a league twice is not an error.
    """
    try:
        result = get_league_service(db).join_league(request.user_id, request.invite_code)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "join league")

    return JoinLeagueResponse(joined=result.joined, league=LeagueResponse.model_validate(result.league))


@router.get("/{league_id}", response_model=LeagueResponse)
def get_league(league_id: str, db: Session = Depends(get_db)) -> LeagueResponse:
    try:
        league = get_league_service(db).get_league(league_id)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "load league")

    return LeagueResponse.model_validate(league)


@router.delete("/{league_id}/members/{member_id}", response_model=LeagueResponse)
def remove_member(
    league_id: str,
    member_id: str,
    user_id: str = Query(..., min_length=1, description="The league owner"),
    db: Session = Depends(get_db)
) -> LeagueResponse:
    """Remove a member from the league and delete their prediction (owner only)."""
    try:
        league = get_league_service(db).remove_member(league_id, user_id, member_id)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "remove member")

    return LeagueResponse.model_validate(league)


@router.delete("/{league_id}", response_model=DeleteLeagueResponse)
def delete_league(
    league_id: str,
    user_id: str = Query(..., min_length=1, description="The league owner"),
    db: Session = Depends(get_db)
) -> DeleteLeagueResponse:
    """Delete a league and every prediction in it (owner only)."""
    try:
        deleted = get_league_service(db).delete_league(league_id, user_id)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "delete league")

    return DeleteLeagueResponse(league_id=league_id, deleted_predictions=deleted)


@router.get("/{league_id}/leaderboard", response_model=StandingsResponse)
def get_leaderboard(league_id: str, db: Session = Depends(get_db)) -> StandingsResponse:
    """
    Get the standings of a league.

    Every member appears, including members without a prediction.
    Returns 503 if any scoring input could not be loaded rather than
    showing a zeroed board.
    """
    try:
        standings = get_leaderboard_service(db).get_standings(league_id)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "load leaderboard")

    return StandingsResponse(
        league_id=standings.league_id,
        is_live=standings.lifecycle.is_live,
        is_completed=standings.lifecycle.is_completed,
        entries=[UserScoreResponse.model_validate(entry) for entry in standings.entries],
        winners=[UserScoreResponse.model_validate(entry) for entry in standings.winners],
    )


@router.get("/{league_id}/leaderboard/{user_id}", response_model=MemberBreakdownResponse)
def get_member_breakdown(league_id: str, user_id: str, db: Session = Depends(get_db)) -> MemberBreakdownResponse:
    """Get the per-pick breakdown of one member's prediction."""
    try:
        breakdown = get_leaderboard_service(db).get_member_breakdown(league_id, user_id)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "load member breakdown")

    score = breakdown.score
    return MemberBreakdownResponse(
        league_id=breakdown.league_id,
        user_id=breakdown.user_id,
        display_name=breakdown.display_name,
        has_prediction=breakdown.has_prediction,
        is_verified=breakdown.is_verified,
        total_points=score.total_points,
        possible_points=score.possible_points,
        potential_points=score.potential_points,
        correct_count=score.correct_count,
        total_count=score.total_count,
        pending_count=score.pending_count,
        skipped_count=score.skipped_count,
        percentage=round(score.percentage, 2),
        picks=[PickResultResponse.model_validate(r) for r in score.per_pick],
    )


@router.get("/{league_id}/predictions/{user_id}", response_model=PredictionEnvelope)
def get_prediction(league_id: str, user_id: str, db: Session = Depends(get_db)) -> PredictionEnvelope:
    """Get a member's stored prediction; ``prediction`` is null if none was submitted."""
    try:
        prediction = get_prediction_service(db).get_prediction(league_id, user_id)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "load prediction")

    if prediction is None:
        return PredictionEnvelope(prediction=None)
    return PredictionEnvelope(prediction=PredictionResponse.model_validate(prediction))


@router.put("/{league_id}/predictions/{user_id}", response_model=PredictionResponse)
def save_prediction(
    league_id: str,
    user_id: str,
    request: SavePredictionRequest,
    db: Session = Depends(get_db)
) -> PredictionResponse:
    """
    Save a member's prediction, replacing any earlier one.

    **Rules**:
    - The user must be a league member
    - The draft must not be live or completed
    - Positions and confidence values are each 1..total_picks, used once
    - No player may be picked twice
    """
    picks = [Pick(position=p.position, player_id=p.player_id, confidence=p.confidence) for p in request.picks]
    try:
        prediction = get_prediction_service(db).save_prediction(
            league_id,
            user_id,
            picks,
            require_complete=request.require_complete,
        )
    except ConfidencePoolError as e:
        raise to_http_exception(e, "save prediction")

    return PredictionResponse.model_validate(prediction)
