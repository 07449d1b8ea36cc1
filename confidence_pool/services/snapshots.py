"""
Conversions from ORM rows to the scoring core's immutable snapshots.

The scoring core never sees a SQLAlchemy object; services call these
after every fetch has completed.
"""
from confidence_pool.models import League, MockDraft, Prediction
from confidence_pool.services.scoring.confidence_engine import picks_from_documents
from confidence_pool.services.scoring.types import (
    LeagueSnapshot,
    MockDraftSnapshot,
    PredictionSnapshot,
)


def league_snapshot(league: League) -> LeagueSnapshot:
    return LeagueSnapshot(
        league_id=league.id,
        sport_type=league.sport_type,
        draft_year=league.draft_year,
        members=tuple(league.members or ()),
        total_picks=league.total_picks,
    )


def prediction_snapshot(prediction: Prediction) -> PredictionSnapshot:
    return PredictionSnapshot(
        user_id=prediction.user_id,
        league_id=prediction.league_id,
        picks=picks_from_documents(prediction.picks),
        is_complete=bool(prediction.is_complete),
    )


def mock_draft_snapshot(mock_draft: MockDraft) -> MockDraftSnapshot:
    return MockDraftSnapshot(
        id=mock_draft.id,
        sportscaster=mock_draft.sportscaster,
        version=mock_draft.version,
        sport_type=mock_draft.sport_type,
        draft_year=mock_draft.draft_year,
        picks=picks_from_documents(mock_draft.picks),
        updated_at=mock_draft.updated_at or mock_draft.created_at,
    )
