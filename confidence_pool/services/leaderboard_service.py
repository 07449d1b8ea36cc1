"""
Leaderboard Service

Loads a league and everything its standings depend on, then hands plain
snapshots to the standings aggregator.

Fetch order matters for failure handling:
1. League, predictions, announced picks and lifecycle flags. Any failure
   raises EntityStoreError; the caller must not render a zeroed board.
2. Member profiles, only once every scoring input is in. A failure here is
   logged and every member falls back to "User xxxxx" with no photo or
   payment info.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Tuple

from sqlalchemy.orm import Session

from confidence_pool.core.exceptions import EntityStoreError, NotLeagueMemberError
from confidence_pool.core.logging import log_context
from confidence_pool.core.metrics import leaderboards_computed_total
from confidence_pool.repositories import (
    DraftResultRepository,
    DraftSettingsRepository,
    LeagueRepository,
    PredictionRepository,
    UserRepository,
)
from confidence_pool.services.scoring.confidence_engine import score_with_declared_confidence
from confidence_pool.services.scoring.prediction_validator import is_confidence_permutation
from confidence_pool.services.scoring.standings import fallback_display_name, rank_league
from confidence_pool.services.scoring.types import ScoreBreakdown, Standings
from confidence_pool.services.snapshots import league_snapshot, prediction_snapshot

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemberBreakdown:
    """Per-pick detail of one member's prediction."""
    league_id: str
    user_id: str
    display_name: str
    has_prediction: bool
    is_verified: bool
    score: ScoreBreakdown


class LeaderboardService:
    """Service for computing league standings."""

    def __init__(self, db: Session):
        self.db = db
        self.leagues = LeagueRepository(db)
        self.predictions = PredictionRepository(db)
        self.results = DraftResultRepository(db)
        self.settings = DraftSettingsRepository(db)
        self.users = UserRepository(db)

    def get_standings(self, league_id: str) -> Standings:
        """
        Compute the leaderboard of a league.

        Raises:
            LeagueNotFoundError: If the league does not exist
            EntityStoreError: If any scoring input could not be loaded
        """
        with log_context(league_id=league_id):
            return self._compute_standings(league_id)

    def _compute_standings(self, league_id: str) -> Standings:
        league = league_snapshot(self.leagues.get(league_id))
        predictions = [prediction_snapshot(p) for p in self.predictions.find_by_league(league_id)]
        actual = self.results.get_actual_map(league.sport_type, league.draft_year)
        lifecycle = self.settings.get_lifecycle(league.sport_type, league.draft_year)

        names, photos, payments = self._load_profiles(league.members)
        standings = rank_league(
            league,
            predictions,
            actual,
            lifecycle=lifecycle,
            display_names=names,
            photo_urls=photos,
            payment_infos=payments,
        )

        leaderboards_computed_total.labels(sport=league.sport_type).inc()
        logger.info(
            f"Computed standings for league {league_id}: "
            f"{len(standings.entries)} members, {len(predictions)} predictions, "
            f"{len(actual)} announced picks"
        )
        return standings

    def get_member_breakdown(self, league_id: str, user_id: str) -> MemberBreakdown:
        """
        Per-pick detail for one member.

        Raises:
            LeagueNotFoundError: If the league does not exist
            NotLeagueMemberError: If the user is not in the league
            EntityStoreError: If any scoring input could not be loaded
        """
        league = league_snapshot(self.leagues.get(league_id))
        if user_id not in league.members:
            raise NotLeagueMemberError(league_id, user_id)

        stored = self.predictions.find_for_member(league_id, user_id)
        names, _, _ = self._load_profiles([user_id])
        display_name = names.get(user_id) or fallback_display_name(user_id)

        if stored is None:
            return MemberBreakdown(
                league_id=league_id,
                user_id=user_id,
                display_name=display_name,
                has_prediction=False,
                is_verified=False,
                score=ScoreBreakdown(),
            )

        prediction = prediction_snapshot(stored)
        actual = self.results.get_actual_map(league.sport_type, league.draft_year)
        return MemberBreakdown(
            league_id=league_id,
            user_id=user_id,
            display_name=display_name,
            has_prediction=True,
            is_verified=is_confidence_permutation(prediction.picks, league.total_picks),
            score=score_with_declared_confidence(prediction.picks, actual, total_picks=league.total_picks),
        )

    def _load_profiles(self, user_ids) -> Tuple[Dict[str, str], Dict[str, str], Dict[str, str]]:
        """Display names, photos and payment info by user id; empty on failure."""
        try:
            profiles = self.users.find_by_ids(user_ids)
        except EntityStoreError as e:
            logger.warning(f"Profile lookup failed, using fallback display names: {e}")
            return {}, {}, {}
        names = {uid: p.display_name for uid, p in profiles.items() if p.display_name}
        photos = {uid: p.photo_url for uid, p in profiles.items() if p.photo_url}
        payments = {uid: p.payment_info for uid, p in profiles.items() if p.payment_info}
        return names, photos, payments


def get_leaderboard_service(db: Session) -> LeaderboardService:
    """Get a LeaderboardService instance."""
    return LeaderboardService(db)
