"""
Tests for PredictionService.

Test Strategy:
1. Valid predictions are stored, and a second save replaces the first
2. Saves are rejected for non-members, locked drafts and invalid picks
3. Rejections leave the stored prediction untouched
"""
import pytest

from confidence_pool.core.exceptions import (
    LeagueNotFoundError,
    MalformedPredictionError,
    NotLeagueMemberError,
    PredictionLockedError,
)
from confidence_pool.models import Prediction
from confidence_pool.services.prediction_service import PredictionService
from confidence_pool.services.scoring.types import Pick
from tests.conftest import LEAGUE_ID


def picks(*triples):
    return [Pick(position=pos, player_id=pid, confidence=conf) for pos, pid, conf in triples]


VALID = picks((4, "p4", 1), (2, "p2", 3), (1, "p1", 4), (3, "p3", 2))


@pytest.fixture
def service(db_session):
    return PredictionService(db_session)


class TestSavePrediction:
    """Test suite for storing predictions."""

    def test_saves_sorted_complete_prediction(self, service, sample_league, db_session):
        saved = service.save_prediction(LEAGUE_ID, "dave-uid", VALID)

        assert saved.is_complete is True
        assert [p.position for p in saved.picks] == [1, 2, 3, 4]
        stored = db_session.get(Prediction, Prediction.make_id(LEAGUE_ID, "dave-uid"))
        assert stored.picks[0] == {"position": 1, "playerId": "p1", "confidence": 4}

    def test_second_save_replaces_first(self, service, sample_league, db_session):
        service.save_prediction(LEAGUE_ID, "dave-uid", VALID)
        service.save_prediction(
            LEAGUE_ID, "dave-uid", picks((1, "p2", 1), (2, "p1", 2), (3, "p4", 3), (4, "p3", 4))
        )

        rows = db_session.query(Prediction).filter_by(league_id=LEAGUE_ID, user_id="dave-uid").all()
        assert len(rows) == 1
        assert [p["playerId"] for p in rows[0].picks] == ["p2", "p1", "p4", "p3"]

    def test_partial_prediction_when_allowed(self, service, sample_league):
        saved = service.save_prediction(
            LEAGUE_ID, "dave-uid", picks((1, "p1", 4), (2, "p2", 3)), require_complete=False
        )

        assert saved.is_complete is False
        assert len(saved.picks) == 2

    def test_partial_prediction_rejected_by_default(self, service, sample_league):
        with pytest.raises(MalformedPredictionError) as exc_info:
            service.save_prediction(LEAGUE_ID, "dave-uid", picks((1, "p1", 4)))

        assert "Missing picks for positions: 2, 3, 4" in exc_info.value.errors


class TestRejectedPredictions:
    """Test suite for save rejections."""

    def test_duplicate_confidence(self, service, sample_league, db_session):
        """Should reject confidence values that are not a permutation of 1..total_picks."""
        with pytest.raises(MalformedPredictionError) as exc_info:
            service.save_prediction(
                LEAGUE_ID, "dave-uid", picks((1, "p1", 4), (2, "p2", 4), (3, "p3", 2), (4, "p4", 1))
            )

        assert any("Confidence 4" in e for e in exc_info.value.errors)
        assert db_session.query(Prediction).count() == 0

    def test_locked_draft(self, service, sample_league, sample_predictions, live_draft, db_session):
        """Should keep the earlier prediction when the draft is live."""
        with pytest.raises(PredictionLockedError):
            service.save_prediction(
                LEAGUE_ID, "alice-uid", picks((1, "p4", 1), (2, "p3", 2), (3, "p2", 3), (4, "p1", 4))
            )

        stored = db_session.get(Prediction, Prediction.make_id(LEAGUE_ID, "alice-uid"))
        assert stored.picks[0]["playerId"] == "p1"

    def test_non_member(self, service, sample_league):
        with pytest.raises(NotLeagueMemberError):
            service.save_prediction(LEAGUE_ID, "mallory-uid", VALID)

    def test_membership_checked_before_lock(self, service, sample_league, live_draft):
        with pytest.raises(NotLeagueMemberError):
            service.save_prediction(LEAGUE_ID, "mallory-uid", VALID)

    def test_unknown_league(self, service):
        with pytest.raises(LeagueNotFoundError):
            service.save_prediction("no-such-league", "dave-uid", VALID)


class TestGetPrediction:
    """Test suite for reading predictions."""

    def test_returns_stored_prediction(self, service, sample_predictions):
        prediction = service.get_prediction(LEAGUE_ID, "carol-uid")

        assert prediction.user_id == "carol-uid"
        assert prediction.picks[0].player_id == "p2"

    def test_none_when_not_submitted(self, service, sample_predictions):
        assert service.get_prediction(LEAGUE_ID, "dave-uid") is None
