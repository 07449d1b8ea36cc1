"""
Player Repository for draft prospects.

Usage:
    repo = PlayerRepository(db)
    prospects = repo.find_by_draft("NFL", 2025)
"""
from typing import List

from confidence_pool.models import Player
from confidence_pool.repositories.base import BaseRepository


class PlayerRepository(BaseRepository[Player]):
    """Repository for draft prospect data access."""

    def __init__(self, db):
        super().__init__(Player, db)

    def find_by_draft(self, sport_type: str, draft_year: int) -> List[Player]:
        """
        Find the prospects of a draft.

        Ranked prospects come first in big-board order, then unranked
        prospects by name.
        """
        with self._store_operation("players.find_by_draft"):
            players = self.db.query(Player).filter(
                Player.sport_type == sport_type,
                Player.draft_year == draft_year
            ).all()
        return sorted(players, key=lambda p: (p.rank is None, p.rank or 0, p.name))
