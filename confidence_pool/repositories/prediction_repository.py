"""
Prediction Repository.

Predictions are keyed by ``f"{league_id}_{user_id}"``; ``upsert``
replaces a member's prediction wholesale; picks are never merged.

Usage:
    repo = PredictionRepository(db)
    predictions = repo.find_by_league(league_id)
    mine = repo.find_for_member(league_id, user_id)
"""
from typing import Any, Dict, List, Optional

from confidence_pool.models import Prediction, utcnow
from confidence_pool.repositories.base import BaseRepository


class PredictionRepository(BaseRepository[Prediction]):
    """Repository for prediction data access."""

    def __init__(self, db):
        super().__init__(Prediction, db)

    def find_by_league(self, league_id: str) -> List[Prediction]:
        """Find all predictions submitted in a league, oldest first."""
        with self._store_operation("predictions.find_by_league"):
            return self.db.query(Prediction).filter(
                Prediction.league_id == league_id
            ).order_by(Prediction.created_at, Prediction.id).all()

    def find_for_member(self, league_id: str, user_id: str) -> Optional[Prediction]:
        """Find one member's prediction in a league."""
        return self.find_by_id(Prediction.make_id(league_id, user_id))

    def upsert(
        self,
        league_id: str,
        user_id: str,
        picks: List[Dict[str, Any]],
        is_complete: bool
    ) -> Prediction:
        """
        Create or replace a member's prediction.

        Returns:
            The stored prediction (not yet committed)
        """
        prediction = self.find_for_member(league_id, user_id)
        with self._store_operation("predictions.upsert"):
            if prediction is None:
                prediction = Prediction(
                    id=Prediction.make_id(league_id, user_id),
                    league_id=league_id,
                    user_id=user_id,
                    picks=picks,
                    is_complete=is_complete,
                )
                self.db.add(prediction)
            else:
                prediction.picks = picks
                prediction.is_complete = is_complete
                prediction.updated_at = utcnow()
            return prediction
