"""
Mock draft routes.

Provides endpoints for:
- Ranked mock drafts of a draft with accuracy grades
- One expert's mock draft by name slug

Base path: /api/v1/mock-drafts
"""
import logging
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from confidence_pool.api.errors import to_http_exception
from confidence_pool.api.routes.leagues import PickResultResponse
from confidence_pool.core.database import get_db
from confidence_pool.core.exceptions import ConfidencePoolError
from confidence_pool.services.mock_draft_service import get_mock_draft_service
from confidence_pool.services.scoring.types import EvaluatedMockDraft

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/mock-drafts", tags=["mock-drafts"])


# ==================== RESPONSE MODELS ====================

class GradeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    letter: str
    label: str


class AccuracyResponse(BaseModel):
    """Accuracy of a mock draft; ``has_results`` is false until picks are announced."""
    model_config = ConfigDict(from_attributes=True)

    correct_picks: int
    total_picks: int
    points: int
    possible_points: int
    percentage: float
    has_results: bool
    grade: Optional[GradeResponse] = None


class MockDraftSummary(BaseModel):
    id: str
    sportscaster: str
    slug: str
    version: str
    sport_type: str
    draft_year: int
    updated_at: Optional[datetime] = None
    accuracy: AccuracyResponse


class MockDraftListResponse(BaseModel):
    sport_type: str
    draft_year: int
    sort_by: str
    count: int
    mock_drafts: List[MockDraftSummary]


class MockDraftDetailResponse(MockDraftSummary):
    picks: List[PickResultResponse] = Field(
        ..., description="Per-pick results; empty until any pick is announced"
    )
    predicted: List[dict] = Field(..., description="The expert's picks as published")


def _summary_fields(evaluated: EvaluatedMockDraft) -> dict:
    draft = evaluated.draft
    accuracy = AccuracyResponse.model_validate(evaluated.accuracy)
    accuracy.percentage = round(accuracy.percentage, 2)
    return {
        "id": draft.id,
        "sportscaster": draft.sportscaster,
        "slug": evaluated.slug,
        "version": draft.version,
        "sport_type": draft.sport_type,
        "draft_year": draft.draft_year,
        "updated_at": draft.updated_at,
        "accuracy": accuracy,
    }


def _detail(evaluated: EvaluatedMockDraft) -> MockDraftDetailResponse:
    return MockDraftDetailResponse(
        **_summary_fields(evaluated),
        picks=[PickResultResponse.model_validate(r) for r in evaluated.accuracy.per_pick],
        predicted=[
            {"position": p.position, "player_id": p.player_id}
            for p in sorted(evaluated.draft.picks, key=lambda p: p.position)
        ],
    )


# ==================== ENDPOINTS ====================

@router.get("/{sport}/{year}", response_model=MockDraftListResponse)
def list_mock_drafts(
    sport: str,
    year: int,
    sort_by: str = Query("accuracy", pattern="^(accuracy|date)$", description="accuracy or date"),
    db: Session = Depends(get_db)
) -> MockDraftListResponse:
    """
    Get every mock draft of a draft, graded against the announced picks.

    Sorted by accuracy (then most recent) or by date. Drafts are listed
    with ``has_results=false`` until the first pick is announced.
    """
    try:
        evaluated = get_mock_draft_service(db).list_evaluated(sport, year, sort_by=sort_by)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "load mock drafts")

    return MockDraftListResponse(
        sport_type=sport.upper(),
        draft_year=year,
        sort_by=sort_by,
        count=len(evaluated),
        mock_drafts=[MockDraftSummary(**_summary_fields(e)) for e in evaluated],
    )


@router.get("/{sport}/{year}/{expert_slug}", response_model=MockDraftDetailResponse)
def get_expert_mock_draft(
    sport: str,
    year: int,
    expert_slug: str,
    db: Session = Depends(get_db)
) -> MockDraftDetailResponse:
    """Get one expert's most recent mock draft with per-pick results."""
    try:
        evaluated = get_mock_draft_service(db).get_by_slug(sport, year, expert_slug)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "load mock draft")

    return _detail(evaluated)
