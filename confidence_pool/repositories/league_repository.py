"""
League Repository.

Usage:
    repo = LeagueRepository(db)
    league = repo.find_by_id(league_id)
    league = repo.find_by_invite_code("K3X9QA")
"""
from typing import Optional

from confidence_pool.core.exceptions import LeagueNotFoundError
from confidence_pool.models import League
from confidence_pool.repositories.base import BaseRepository


class LeagueRepository(BaseRepository[League]):
    """Repository for league data access."""

    def __init__(self, db):
        super().__init__(League, db)

    def get(self, league_id: str) -> League:
        """
        Load a league or fail.

        Raises:
            LeagueNotFoundError: If no league has this id
        """
        league: Optional[League] = self.find_by_id(league_id)
        if league is None:
            raise LeagueNotFoundError(league_id)
        return league

    def find_by_invite_code(self, invite_code: str) -> Optional[League]:
        """Find the league using an invite code (codes are unique)."""
        return self.filter_by_first(invite_code=invite_code)

    def set_members(self, league: League, members) -> League:
        """Replace the member list; the JSON column only sees reassignment."""
        with self._store_operation("leagues.set_members"):
            league.members = list(dict.fromkeys(members))
        return league
