"""
Draft Admin Service

Admin ("Oracle") actions on a (sport, year) draft: recording who was
actually picked and flipping the live/completed flags. Announced picks
are global; every league of the draft sees them on its next leaderboard
read.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from confidence_pool.models import ActualPick, DraftSettings, parse_sport_type
from confidence_pool.repositories import DraftResultRepository, DraftSettingsRepository
from confidence_pool.services.scoring.types import DraftLifecycle

logger = logging.getLogger(__name__)


class DraftAdminService:
    """Service for draft results and lifecycle flags."""

    def __init__(self, db: Session):
        self.db = db
        self.results = DraftResultRepository(db)
        self.settings = DraftSettingsRepository(db)

    def record_actual_pick(
        self,
        sport_type: str,
        draft_year: int,
        position: int,
        player_id: str,
        team_id: Optional[str] = None
    ) -> ActualPick:
        """
        Record the player selected at a position.

        Raises:
            UnknownSportError: If the sport is not supported
            EntityStoreError: If the write fails
        """
        sport_type = parse_sport_type(sport_type)
        pick = self.results.upsert_pick(sport_type, draft_year, position, player_id, team_id=team_id)
        self.results.commit()
        logger.info(f"Recorded {draft_year} {sport_type} pick {position}: {player_id}")
        return pick

    def get_lifecycle(self, sport_type: str, draft_year: int) -> DraftLifecycle:
        """Lifecycle flags of a draft; both False when never set."""
        return self.settings.get_lifecycle(parse_sport_type(sport_type), draft_year)

    def update_draft_status(
        self,
        sport_type: str,
        draft_year: int,
        is_live: Optional[bool] = None,
        is_completed: Optional[bool] = None,
        admin_note: Optional[str] = None,
        updated_by: Optional[str] = None
    ) -> DraftSettings:
        """Update the given lifecycle flags; omitted flags keep their value."""
        sport_type = parse_sport_type(sport_type)
        settings = self.settings.upsert_status(
            sport_type,
            draft_year,
            is_live=is_live,
            is_completed=is_completed,
            admin_note=admin_note,
            updated_by=updated_by,
        )
        self.settings.commit()
        logger.info(
            f"Draft {draft_year} {sport_type} status: live={settings.is_live} "
            f"completed={settings.is_completed}"
        )
        return settings


def get_draft_admin_service(db: Session) -> DraftAdminService:
    """Get a DraftAdminService instance."""
    return DraftAdminService(db)
