"""
Mock Draft Repository.

Usage:
    repo = MockDraftRepository(db)
    drafts = repo.find_by_draft("NFL", 2025)
"""
from typing import Any, Dict, List, Optional

from confidence_pool.models import MockDraft, utcnow
from confidence_pool.repositories.base import BaseRepository


class MockDraftRepository(BaseRepository[MockDraft]):
    """Repository for third-party mock drafts."""

    def __init__(self, db):
        super().__init__(MockDraft, db)

    def find_by_draft(self, sport_type: str, draft_year: int) -> List[MockDraft]:
        """Find every mock draft published for a draft."""
        with self._store_operation("mock_drafts.find_by_draft"):
            return self.db.query(MockDraft).filter(
                MockDraft.sport_type == sport_type,
                MockDraft.draft_year == draft_year
            ).order_by(MockDraft.sportscaster, MockDraft.version).all()

    def find_by_source(
        self,
        sportscaster: str,
        version: str,
        sport_type: str,
        draft_year: int
    ) -> Optional[MockDraft]:
        """Find the mock draft one sportscaster published under a version label."""
        return self.filter_by_first(
            sportscaster=sportscaster,
            version=version,
            sport_type=sport_type,
            draft_year=draft_year,
        )

    def upsert(
        self,
        sportscaster: str,
        version: str,
        sport_type: str,
        draft_year: int,
        picks: List[Dict[str, Any]]
    ) -> tuple:
        """
        Create a mock draft, or replace the picks of an existing one.

        Returns:
            (mock_draft, created) tuple; the draft is not yet committed
        """
        existing = self.find_by_source(sportscaster, version, sport_type, draft_year)
        if existing is None:
            draft = self.create(
                sportscaster=sportscaster,
                version=version,
                sport_type=sport_type,
                draft_year=draft_year,
                picks=picks,
            )
            return draft, True
        with self._store_operation("mock_drafts.upsert"):
            existing.picks = picks
            existing.updated_at = utcnow()
        return existing, False
