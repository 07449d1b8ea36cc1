"""
Draft status routes.

Base path: /api/v1/draft
"""
import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from confidence_pool.api.errors import to_http_exception
from confidence_pool.core.database import get_db
from confidence_pool.core.exceptions import ConfidencePoolError
from confidence_pool.services.draft_admin_service import get_draft_admin_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/draft", tags=["draft"])


class DraftStatusResponse(BaseModel):
    sport_type: str
    draft_year: int
    is_live: bool
    is_completed: bool
    predictions_locked: bool


@router.get("/{sport}/{year}/status", response_model=DraftStatusResponse)
def get_draft_status(sport: str, year: int, db: Session = Depends(get_db)) -> DraftStatusResponse:
    """Get the lifecycle flags of a draft. Predictions lock once it is live."""
    try:
        lifecycle = get_draft_admin_service(db).get_lifecycle(sport, year)
    except ConfidencePoolError as e:
        raise to_http_exception(e, "load draft status")

    return DraftStatusResponse(
        sport_type=sport.upper(),
        draft_year=year,
        is_live=lifecycle.is_live,
        is_completed=lifecycle.is_completed,
        predictions_locked=lifecycle.predictions_locked,
    )
