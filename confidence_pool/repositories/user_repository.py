"""
User Profile Repository.

Usage:
    repo = UserRepository(db)
    profiles = repo.find_by_ids(["uid1", "uid2"])   # {"uid1": UserProfile, ...}
"""
from typing import Dict, Iterable

from confidence_pool.models import UserProfile
from confidence_pool.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserProfile]):
    """Repository for member display profiles."""

    def __init__(self, db):
        super().__init__(UserProfile, db)

    def find_by_ids(self, user_ids: Iterable[str]) -> Dict[str, UserProfile]:
        """Fetch several profiles in one query, keyed by user id."""
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}
        with self._store_operation("users.find_by_ids"):
            profiles = self.db.query(UserProfile).filter(UserProfile.id.in_(ids)).all()
        return {profile.id: profile for profile in profiles}
