"""
Draft Settings Repository.

A draft with no settings row is neither live nor completed.

Usage:
    repo = DraftSettingsRepository(db)
    lifecycle = repo.get_lifecycle("NFL", 2025)
    if lifecycle.predictions_locked:
        ...
"""
from typing import Optional

from confidence_pool.models import DraftSettings, utcnow
from confidence_pool.repositories.base import BaseRepository
from confidence_pool.services.scoring.types import DraftLifecycle


class DraftSettingsRepository(BaseRepository[DraftSettings]):
    """Repository for per-draft lifecycle flags."""

    def __init__(self, db):
        super().__init__(DraftSettings, db)

    def find_for_draft(self, sport_type: str, draft_year: int) -> Optional[DraftSettings]:
        return self.filter_by_first(sport_type=sport_type, draft_year=draft_year)

    def get_lifecycle(self, sport_type: str, draft_year: int) -> DraftLifecycle:
        """Read the lifecycle flags of a draft as a value object."""
        settings = self.find_for_draft(sport_type, draft_year)
        if settings is None:
            return DraftLifecycle()
        return DraftLifecycle(
            is_live=bool(settings.is_live),
            is_completed=bool(settings.is_completed),
        )

    def upsert_status(
        self,
        sport_type: str,
        draft_year: int,
        is_live: Optional[bool] = None,
        is_completed: Optional[bool] = None,
        admin_note: Optional[str] = None,
        updated_by: Optional[str] = None
    ) -> DraftSettings:
        """
        Update the flags that were given, leaving the others unchanged.

        Returns:
            The stored settings row (not yet committed)
        """
        settings = self.find_for_draft(sport_type, draft_year)
        if settings is None:
            settings = self.create(
                sport_type=sport_type,
                draft_year=draft_year,
                is_live=False,
                is_completed=False,
            )
        with self._store_operation("draft_settings.upsert_status"):
            if is_live is not None:
                settings.is_live = is_live
            if is_completed is not None:
                settings.is_completed = is_completed
            if admin_note is not None:
                settings.admin_note = admin_note
            settings.last_updated_by = updated_by
            settings.last_updated_at = utcnow()
        return settings
