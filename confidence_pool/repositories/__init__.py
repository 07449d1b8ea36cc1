"""
Repository layer for data access.

Repositories are the only code that queries the entity store. Services
read rows through them and hand plain snapshots to the scoring core.

Usage:
    from confidence_pool.repositories import LeagueRepository, PredictionRepository
    from confidence_pool.core.database import SessionLocal

    db = SessionLocal()
    league = LeagueRepository(db).get(league_id)
    predictions = PredictionRepository(db).find_by_league(league.id)
    db.close()
"""

from confidence_pool.repositories.base import BaseRepository
from confidence_pool.repositories.draft_result_repository import DraftResultRepository
from confidence_pool.repositories.draft_settings_repository import DraftSettingsRepository
from confidence_pool.repositories.league_repository import LeagueRepository
from confidence_pool.repositories.mock_draft_repository import MockDraftRepository
from confidence_pool.repositories.player_repository import PlayerRepository
from confidence_pool.repositories.prediction_repository import PredictionRepository
from confidence_pool.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "DraftResultRepository",
    "DraftSettingsRepository",
    "LeagueRepository",
    "MockDraftRepository",
    "PlayerRepository",
    "PredictionRepository",
    "UserRepository",
]
