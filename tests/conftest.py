"""Shared pytest fixtures for confidence pool tests."""
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import AsyncGenerator, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Add project root to Python path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

SPORT = "NFL"
YEAR = 2025
LEAGUE_ID = "league-1"
MEMBERS = ["alice-uid", "bob-uid", "carol-uid", "dave-uid", "erin-uid"]


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """Create fresh test database session with isolated in-memory database."""
    from confidence_pool.models import Base

    # StaticPool keeps a single connection so TestClient worker threads
    # see the same in-memory database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    TestSessionLocal = sessionmaker(bind=engine, autoflush=False)
    session = TestSessionLocal()

    yield session

    session.close()
    engine.dispose()


@pytest.fixture(scope="function")
def test_client(db_session):
    """
    Create FastAPI TestClient backed by the test database session.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/api/v1/leagues/league-1/leaderboard")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from confidence_pool.main import app
    from confidence_pool.core.database import get_db

    test_db_session = db_session

    def override_get_db():
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    # No context manager: the lifespan would create tables in the configured database
    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
async def async_client(db_session: Session) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for testing FastAPI endpoints."""
    from confidence_pool.main import app
    from confidence_pool.core.database import get_db

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def sample_players(db_session: Session):
    """Create the 2025 NFL prospects p1..p6."""
    from confidence_pool.models import Player

    player_data = [
        ("p1", "Cam Ward", "QB", "Miami", 1),
        ("p2", "Travis Hunter", "WR", "Colorado", 2),
        ("p3", "Abdul Carter", "EDGE", "Penn State", 3),
        ("p4", "Ashton Jeanty", "RB", "Boise State", 4),
        ("p5", "Tetairoa McMillan", "WR", "Arizona", 5),
        ("p6", "Marvin Harrison Jr.", "WR", "Ohio State", None),
    ]

    players = []
    for player_id, name, position, school, rank in player_data:
        player = Player(
            id=player_id,
            name=name,
            position=position,
            school=school,
            sport_type=SPORT,
            draft_year=YEAR,
            rank=rank,
        )
        db_session.add(player)
        players.append(player)

    db_session.commit()
    return players


@pytest.fixture
def sample_league(db_session: Session):
    """Create a four-pick NFL league with five members."""
    from confidence_pool.models import League

    league = League(
        id=LEAGUE_ID,
        name="Office Pool",
        sport_type=SPORT,
        draft_year=YEAR,
        created_by=MEMBERS[0],
        members=list(MEMBERS),
        total_picks=4,
        invite_code="ABC123",
    )
    db_session.add(league)
    db_session.commit()
    return league


@pytest.fixture
def sample_profiles(db_session: Session):
    """Profiles for alice and bob only; the others fall back to 'User xxxxx'."""
    from confidence_pool.models import UserProfile

    profiles = [
        UserProfile(id="alice-uid", email="alice@example.com", display_name="Alice", photo_url="https://img/alice.png"),
        UserProfile(id="bob-uid", email="bob@example.com", display_name="Bob"),
    ]
    db_session.add_all(profiles)
    db_session.commit()
    return profiles


def make_picks(*triples):
    """[(position, player_id, confidence), ...] as stored pick documents."""
    return [{"position": pos, "playerId": pid, "confidence": conf} for pos, pid, conf in triples]


@pytest.fixture
def sample_predictions(db_session: Session, sample_league):
    """
    Predictions for alice, bob and carol. dave and erin never submitted.

    Against ``sample_actual_picks`` alice scores 7, bob 7 and carol 3.
    bob uses confidence 1 twice, so his prediction is unverified.
    """
    from confidence_pool.models import Prediction

    predictions_data = {
        "alice-uid": make_picks((1, "p1", 4), (2, "p2", 3), (3, "p3", 2), (4, "p4", 1)),
        "bob-uid": make_picks((1, "p1", 4), (2, "p2", 1), (3, "p3", 2), (4, "p4", 1)),
        "carol-uid": make_picks((1, "p2", 4), (2, "p1", 3), (3, "p3", 2), (4, "p4", 1)),
    }

    predictions = []
    for user_id, picks in predictions_data.items():
        prediction = Prediction(
            id=Prediction.make_id(LEAGUE_ID, user_id),
            user_id=user_id,
            league_id=LEAGUE_ID,
            picks=picks,
            is_complete=True,
        )
        db_session.add(prediction)
        predictions.append(prediction)

    db_session.commit()
    return predictions


@pytest.fixture
def sample_actual_picks(db_session: Session):
    """Actual results {1: p1, 2: px, 3: p3, 4: p4}."""
    from confidence_pool.models import ActualPick

    picks = []
    for position, player_id in [(1, "p1"), (2, "px"), (3, "p3"), (4, "p4")]:
        pick = ActualPick(
            id=f"result-{position}",
            position=position,
            player_id=player_id,
            sport_type=SPORT,
            draft_year=YEAR,
        )
        db_session.add(pick)
        picks.append(pick)

    db_session.commit()
    return picks


@pytest.fixture
def sample_mock_drafts(db_session: Session):
    """Three mock drafts; Mel Kiper Jr. published two versions."""
    from confidence_pool.models import MockDraft

    now = datetime(2025, 4, 20, 12, 0, 0)
    drafts = [
        MockDraft(
            id="mock-kiper-v1",
            sportscaster="Mel Kiper Jr.",
            version="v1",
            sport_type=SPORT,
            draft_year=YEAR,
            picks=[{"position": 1, "playerId": "p2"}, {"position": 2, "playerId": "p1"},
                   {"position": 3, "playerId": "p3"}, {"position": 4, "playerId": "p5"}],
            created_at=now - timedelta(days=30),
            updated_at=now - timedelta(days=30),
        ),
        MockDraft(
            id="mock-kiper-v2",
            sportscaster="Mel Kiper Jr.",
            version="v2",
            sport_type=SPORT,
            draft_year=YEAR,
            picks=[{"position": 1, "playerId": "p1"}, {"position": 2, "playerId": "p2"},
                   {"position": 3, "playerId": "p3"}, {"position": 4, "playerId": "p4"}],
            created_at=now - timedelta(days=2),
            updated_at=now - timedelta(days=2),
        ),
        MockDraft(
            id="mock-jeremiah",
            sportscaster="Daniel Jeremiah",
            version="final",
            sport_type=SPORT,
            draft_year=YEAR,
            picks=[{"position": 1, "playerId": "p3"}, {"position": 2, "playerId": "p1"},
                   {"position": 3, "playerId": "p2"}, {"position": 4, "playerId": "p5"}],
            created_at=now - timedelta(days=1),
            updated_at=now - timedelta(days=1),
        ),
    ]
    db_session.add_all(drafts)
    db_session.commit()
    return drafts


@pytest.fixture
def live_draft(db_session: Session):
    """Mark the 2025 NFL draft live, which locks predictions."""
    from confidence_pool.models import DraftSettings

    settings = DraftSettings(id="settings-nfl-2025", sport_type=SPORT, draft_year=YEAR, is_live=True)
    db_session.add(settings)
    db_session.commit()
    return settings
