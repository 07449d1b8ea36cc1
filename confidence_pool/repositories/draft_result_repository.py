"""
Draft Result Repository.

Actual picks are global per (sport, year); every league of that draft
reads the same rows.

Usage:
    repo = DraftResultRepository(db)
    actual = repo.get_actual_map("NFL", 2025)   # {1: "player_id", ...}
    repo.upsert_pick("NFL", 2025, 1, "player_id", team_id="TEN")
"""
from typing import Dict, List, Optional

from confidence_pool.models import ActualPick, utcnow
from confidence_pool.repositories.base import BaseRepository
from confidence_pool.services.scoring.confidence_engine import build_actual_map


class DraftResultRepository(BaseRepository[ActualPick]):
    """Repository for announced draft picks."""

    def __init__(self, db):
        super().__init__(ActualPick, db)

    def find_by_draft(self, sport_type: str, draft_year: int) -> List[ActualPick]:
        """Find all announced picks of a draft, ordered by position."""
        with self._store_operation("draft_results.find_by_draft"):
            return self.db.query(ActualPick).filter(
                ActualPick.sport_type == sport_type,
                ActualPick.draft_year == draft_year
            ).order_by(ActualPick.position).all()

    def find_pick(self, sport_type: str, draft_year: int, position: int) -> Optional[ActualPick]:
        return self.filter_by_first(sport_type=sport_type, draft_year=draft_year, position=position)

    def get_actual_map(self, sport_type: str, draft_year: int) -> Dict[int, str]:
        """Announced picks as ``{position: player_id}``."""
        return build_actual_map(self.find_by_draft(sport_type, draft_year))

    def upsert_pick(
        self,
        sport_type: str,
        draft_year: int,
        position: int,
        player_id: str,
        team_id: Optional[str] = None
    ) -> ActualPick:
        """
        Record who was selected at a position, replacing any earlier entry.

        Returns:
            The stored pick (not yet committed)
        """
        pick = self.find_pick(sport_type, draft_year, position)
        if pick is None:
            return self.create(
                sport_type=sport_type,
                draft_year=draft_year,
                position=position,
                player_id=player_id,
                team_id=team_id,
            )
        with self._store_operation("draft_results.upsert_pick"):
            pick.player_id = player_id
            pick.team_id = team_id
            pick.updated_at = utcnow()
        return pick
