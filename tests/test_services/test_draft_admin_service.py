"""Tests for DraftAdminService: recording results and lifecycle flags."""
import pytest

from confidence_pool.core.exceptions import UnknownSportError
from confidence_pool.models import ActualPick
from confidence_pool.repositories import DraftResultRepository
from confidence_pool.services.draft_admin_service import DraftAdminService
from confidence_pool.services.leaderboard_service import LeaderboardService
from tests.conftest import LEAGUE_ID, SPORT, YEAR


@pytest.fixture
def service(db_session):
    return DraftAdminService(db_session)


class TestRecordActualPick:
    """Test suite for announced picks."""

    def test_records_pick(self, service, db_session):
        pick = service.record_actual_pick("nfl", YEAR, 1, "p1", team_id="TEN")

        assert pick.sport_type == SPORT
        assert DraftResultRepository(db_session).get_actual_map(SPORT, YEAR) == {1: "p1"}

    def test_rerecording_replaces_player(self, service, db_session):
        service.record_actual_pick(SPORT, YEAR, 1, "p2")
        service.record_actual_pick(SPORT, YEAR, 1, "p1")

        assert db_session.query(ActualPick).count() == 1
        assert DraftResultRepository(db_session).get_actual_map(SPORT, YEAR) == {1: "p1"}

    def test_unknown_sport(self, service):
        with pytest.raises(UnknownSportError):
            service.record_actual_pick("XFL", YEAR, 1, "p1")

    def test_every_league_sees_new_results(self, service, db_session, sample_predictions):
        """Results are global per draft; the next leaderboard read picks them up."""
        leaderboard = LeaderboardService(db_session)
        before = {e.user_id: e.total_points for e in leaderboard.get_standings(LEAGUE_ID).entries}

        service.record_actual_pick(SPORT, YEAR, 1, "p1")
        after = {e.user_id: e.total_points for e in leaderboard.get_standings(LEAGUE_ID).entries}

        assert before["alice-uid"] == 0
        assert after["alice-uid"] == 4
        assert after["carol-uid"] == 0


class TestDraftStatus:
    """Test suite for lifecycle flags."""

    def test_defaults_when_never_set(self, service):
        lifecycle = service.get_lifecycle(SPORT, YEAR)

        assert lifecycle.is_live is False
        assert lifecycle.is_completed is False
        assert lifecycle.predictions_locked is False

    def test_partial_updates_keep_other_flags(self, service):
        service.update_draft_status(SPORT, YEAR, is_live=True, updated_by="oracle")
        settings = service.update_draft_status(SPORT, YEAR, is_completed=True, admin_note="Round 1 done")

        assert settings.is_live is True
        assert settings.is_completed is True
        assert settings.admin_note == "Round 1 done"
        assert service.get_lifecycle(SPORT, YEAR).predictions_locked is True

    def test_live_draft_locks_predictions(self, service, live_draft):
        assert service.get_lifecycle("nfl", YEAR).predictions_locked is True
