"""
Admin routes for the draft "Oracle".

Provides endpoints for:
- Recording the player actually selected at a position
- Toggling a draft live / completed
- Importing an already-parsed mock draft

Every route requires the X-API-Key header.

Base path: /api/admin
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Path
from pydantic import AliasChoices, BaseModel, Field
from sqlalchemy.orm import Session

from confidence_pool.api.errors import to_http_exception
from confidence_pool.core.auth import require_admin_key
from confidence_pool.core.database import get_db
from confidence_pool.core.exceptions import ConfidencePoolError
from confidence_pool.services.draft_admin_service import get_draft_admin_service
from confidence_pool.services.mock_draft_import import ImportRow, get_mock_draft_import_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"], dependencies=[Depends(require_admin_key)])


# ==================== REQUEST MODELS ====================

class RecordPickRequest(BaseModel):
    player_id: str = Field(..., min_length=1, validation_alias=AliasChoices("playerId", "player_id"))
    team_id: Optional[str] = Field(None, validation_alias=AliasChoices("teamId", "team_id"))


class DraftStatusUpdateRequest(BaseModel):
    """Omitted fields keep their current value."""
    is_live: Optional[bool] = None
    is_completed: Optional[bool] = None
    admin_note: Optional[str] = None
    updated_by: Optional[str] = None


class ImportRowRequest(BaseModel):
    position: int
    player_name: str


class MockDraftImportRequest(BaseModel):
    sportscaster: str = Field(..., min_length=1)
    version: str = Field(..., min_length=1, description="e.g. 'v1' or 'post-combine'")
    sport_type: str
    draft_year: int
    rows: List[ImportRowRequest]


# ==================== RESPONSE MODELS ====================

class ActualPickResponse(BaseModel):
    sport_type: str
    draft_year: int
    position: int
    player_id: str
    team_id: Optional[str] = None
    updated_at: Optional[datetime] = None


class DraftSettingsResponse(BaseModel):
    sport_type: str
    draft_year: int
    is_live: bool
    is_completed: bool
    admin_note: Optional[str] = None
    last_updated_by: Optional[str] = None
    last_updated_at: Optional[datetime] = None


class MockDraftImportResponse(BaseModel):
    created: bool
    mock_draft_id: str
    count: int
    missing_players: List[ImportRowRequest]
    match_methods: Dict[str, int]


# ==================== ENDPOINTS ====================

@router.put("/draft/{sport}/{year}/picks/{position}", response_model=ActualPickResponse)
def record_actual_pick(
    sport: str,
    year: int,
    request: RecordPickRequest,
    position: int = Path(..., ge=1),
    db: Session = Depends(get_db)
) -> ActualPickResponse:
    """Record who was selected at a position. Re-recording a position replaces it."""
    try:
        pick = get_draft_admin_service(db).record_actual_pick(
            sport, year, position, request.player_id, team_id=request.team_id
        )
    except ConfidencePoolError as e:
        raise to_http_exception(e, "record pick")

    return ActualPickResponse(
        sport_type=pick.sport_type,
        draft_year=pick.draft_year,
        position=pick.position,
        player_id=pick.player_id,
        team_id=pick.team_id,
        updated_at=pick.updated_at,
    )


@router.patch("/draft/{sport}/{year}/status", response_model=DraftSettingsResponse)
def update_draft_status(
    sport: str,
    year: int,
    request: DraftStatusUpdateRequest,
    db: Session = Depends(get_db)
) -> DraftSettingsResponse:
    """
    Update the lifecycle flags of a draft.

    Setting ``is_live`` locks predictions in every league of the draft;
    setting ``is_completed`` makes leaderboards name their winners.
    """
    try:
        settings = get_draft_admin_service(db).update_draft_status(
            sport,
            year,
            is_live=request.is_live,
            is_completed=request.is_completed,
            admin_note=request.admin_note,
            updated_by=request.updated_by,
        )
    except ConfidencePoolError as e:
        raise to_http_exception(e, "update draft status")

    return DraftSettingsResponse(
        sport_type=settings.sport_type,
        draft_year=settings.draft_year,
        is_live=settings.is_live,
        is_completed=settings.is_completed,
        admin_note=settings.admin_note,
        last_updated_by=settings.last_updated_by,
        last_updated_at=settings.last_updated_at,
    )


@router.post("/mock-drafts/import", response_model=MockDraftImportResponse)
def import_mock_draft(
    request: MockDraftImportRequest,
    db: Session = Depends(get_db)
) -> MockDraftImportResponse:
    """
    Import a mock draft from parsed ``(position, player_name)`` rows.

    Names are matched to the draft's prospects; unmatched names are
    returned in ``missing_players``.
    """
    rows = [ImportRow(position=r.position, player_name=r.player_name) for r in request.rows]
    try:
        result = get_mock_draft_import_service(db).import_rows(
            request.sportscaster,
            request.version,
            request.sport_type,
            request.draft_year,
            rows,
        )
    except ConfidencePoolError as e:
        raise to_http_exception(e, "import mock draft")

    return MockDraftImportResponse(
        created=result.created,
        mock_draft_id=result.mock_draft_id,
        count=result.count,
        missing_players=[
            ImportRowRequest(position=r.position, player_name=r.player_name)
            for r in result.missing_players
        ],
        match_methods=result.match_methods,
    )
