"""
Prediction Service

Saves and reads member predictions. A save is checked in this order:

1. The league exists (LeagueNotFoundError)
2. The user is a member (NotLeagueMemberError)
3. The draft is neither live nor completed (PredictionLockedError)
4. The picks pass validation (MalformedPredictionError)

Only then is the prediction stored, replacing any earlier one.
"""
import logging
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from confidence_pool.core.exceptions import (
    MalformedPredictionError,
    NotLeagueMemberError,
    PredictionLockedError,
)
from confidence_pool.core.logging import log_context
from confidence_pool.core.metrics import predictions_saved_total, record_prediction_rejected
from confidence_pool.repositories import (
    DraftSettingsRepository,
    LeagueRepository,
    PredictionRepository,
)
from confidence_pool.services.scoring.prediction_validator import validate_prediction_picks
from confidence_pool.services.scoring.types import Pick, PredictionSnapshot
from confidence_pool.services.snapshots import prediction_snapshot

logger = logging.getLogger(__name__)


class PredictionService:
    """Service for member predictions."""

    def __init__(self, db: Session):
        self.db = db
        self.leagues = LeagueRepository(db)
        self.predictions = PredictionRepository(db)
        self.settings = DraftSettingsRepository(db)

    def save_prediction(
        self,
        league_id: str,
        user_id: str,
        picks: Sequence[Pick],
        require_complete: bool = True
    ) -> PredictionSnapshot:
        """
        Validate and store a member's prediction.

        Args:
            league_id: League the prediction belongs to
            user_id: Predicting member
            picks: Submitted picks
            require_complete: Whether every position must be filled

        Returns:
            The stored prediction

        Raises:
            LeagueNotFoundError, NotLeagueMemberError, PredictionLockedError,
            MalformedPredictionError, EntityStoreError
        """
        with log_context(league_id=league_id, user_id=user_id):
            return self._save(league_id, user_id, picks, require_complete)

    def _save(self, league_id, user_id, picks, require_complete) -> PredictionSnapshot:
        league = self.leagues.get(league_id)
        if user_id not in (league.members or []):
            record_prediction_rejected("not_member")
            raise NotLeagueMemberError(league_id, user_id)

        lifecycle = self.settings.get_lifecycle(league.sport_type, league.draft_year)
        if lifecycle.predictions_locked:
            record_prediction_rejected("locked")
            raise PredictionLockedError(league.sport_type, league.draft_year)

        validation = validate_prediction_picks(picks, league.total_picks, require_complete=require_complete)
        if not validation.is_valid:
            record_prediction_rejected("malformed")
            logger.info(
                f"Rejected prediction of {user_id} in league {league_id}: "
                f"{len(validation.errors)} errors"
            )
            raise MalformedPredictionError(validation.errors)

        ordered = sorted(picks, key=lambda p: p.position)
        is_complete = len(ordered) == league.total_picks
        stored = self.predictions.upsert(
            league_id,
            user_id,
            [p.to_dict() for p in ordered],
            is_complete,
        )
        self.predictions.commit()

        predictions_saved_total.labels(sport=league.sport_type).inc()
        logger.info(f"Saved prediction of {user_id} in league {league_id} ({len(ordered)} picks)")
        return prediction_snapshot(stored)

    def get_prediction(self, league_id: str, user_id: str) -> Optional[PredictionSnapshot]:
        """
        Read a member's stored prediction.

        Raises:
            LeagueNotFoundError: If the league does not exist
        """
        self.leagues.get(league_id)
        stored = self.predictions.find_for_member(league_id, user_id)
        return prediction_snapshot(stored) if stored is not None else None


def get_prediction_service(db: Session) -> PredictionService:
    """Get a PredictionService instance."""
    return PredictionService(db)
