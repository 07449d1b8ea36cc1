"""
Database models for the draft confidence pool.

Pool data is document-shaped, so nested fields
(a prediction's picks, a league's member list) are JSON columns rather
than child tables. Field names inside the JSON documents use the
camelCase keys clients send (``playerId``).
"""
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Boolean, Text, Index, UniqueConstraint, JSON
from sqlalchemy.orm import relationship, declarative_base

from confidence_pool.core.exceptions import UnknownSportError

Base = declarative_base()

SPORT_TYPES = ("NFL", "NBA", "WNBA", "NHL", "MLB")

# First-round size a new league scores unless told otherwise
DEFAULT_TOTAL_PICKS = {"NFL": 32, "NBA": 30, "WNBA": 12, "NHL": 32, "MLB": 30}


def parse_sport_type(value: str) -> str:
    """Canonical sport type for user input such as "nfl"."""
    sport_type = (value or "").strip().upper()
    if sport_type not in SPORT_TYPES:
        raise UnknownSportError(value)
    return sport_type


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how the columns are stored."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserProfile(Base):
    """Display profile for a league member."""
    __tablename__ = "users"

    id = Column(String(128), primary_key=True)  # auth provider uid
    email = Column(String(255), nullable=False, default="")
    display_name = Column(String(255), nullable=True)
    photo_url = Column(String(1024), nullable=True)
    payment_info = Column(String(255), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class Player(Base):
    """Draft prospect. Participates in scoring only through its id."""
    __tablename__ = "players"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    position = Column(String(20), nullable=False)  # QB, WR, PG, C, ...
    school = Column(String(255), nullable=True)
    team = Column(String(255), nullable=True)
    sport_type = Column(String(5), nullable=False)
    draft_year = Column(Integer, nullable=False)
    rank = Column(Integer, nullable=True)  # Big-board rank

    __table_args__ = (
        Index('ix_players_sport_year', 'sport_type', 'draft_year'),
    )


class League(Base):
    """A confidence pool league for one (sport, year) draft."""
    __tablename__ = "leagues"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    sport_type = Column(String(5), nullable=False)
    draft_year = Column(Integer, nullable=False)
    created_by = Column(String(128), nullable=False)
    members = Column(JSON, nullable=False, default=list)  # [user_id, ...]
    total_picks = Column(Integer, nullable=False)  # valid position and confidence range is 1..total_picks
    invite_code = Column(String(32), nullable=False, unique=True)
    public_join = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    predictions = relationship("Prediction", back_populates="league", cascade="all, delete-orphan")

    __table_args__ = (
        Index('ix_leagues_sport_year', 'sport_type', 'draft_year'),
    )


class Prediction(Base):
    """
    One member's prediction set for a league.

    The id is ``f"{league_id}_{user_id}"`` so a member has at most one
    prediction per league. ``picks`` holds
    ``[{"position": int, "playerId": str, "confidence": int}, ...]``.
    """
    __tablename__ = "predictions"

    id = Column(String(200), primary_key=True)
    user_id = Column(String(128), nullable=False, index=True)
    league_id = Column(String(64), ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False, index=True)
    picks = Column(JSON, nullable=False, default=list)
    is_complete = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    league = relationship("League", back_populates="predictions")

    @staticmethod
    def make_id(league_id: str, user_id: str) -> str:
        return f"{league_id}_{user_id}"


class ActualPick(Base):
    """Authoritative draft result for one slot, shared by every league of that sport/year."""
    __tablename__ = "draft_results"

    id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False)
    player_id = Column(String(64), nullable=False)
    team_id = Column(String(64), nullable=True)
    sport_type = Column(String(5), nullable=False)
    draft_year = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint('sport_type', 'draft_year', 'position', name='uq_draft_results_slot'),
        Index('ix_draft_results_sport_year', 'sport_type', 'draft_year'),
    )


class MockDraft(Base):
    """
    Third-party mock draft used for accuracy benchmarking.

    ``picks`` holds ``[{"position": int, "playerId": str}, ...]``; the
    confidence of each pick is derived from its position when scored.
    """
    __tablename__ = "mock_drafts"

    id = Column(String(64), primary_key=True)
    sportscaster = Column(String(255), nullable=False)
    version = Column(String(64), nullable=False)
    sport_type = Column(String(5), nullable=False)
    draft_year = Column(Integer, nullable=False)
    picks = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint('sportscaster', 'version', 'sport_type', 'draft_year', name='uq_mock_drafts_source'),
        Index('ix_mock_drafts_sport_year', 'sport_type', 'draft_year'),
    )


class DraftSettings(Base):
    """Lifecycle flags for one (sport, year) draft."""
    __tablename__ = "draft_settings"

    id = Column(String(64), primary_key=True)
    sport_type = Column(String(5), nullable=False)
    draft_year = Column(Integer, nullable=False)
    is_live = Column(Boolean, nullable=False, default=False)  # predictions locked once set
    is_completed = Column(Boolean, nullable=False, default=False)  # standings show winners
    admin_note = Column(Text, nullable=True)
    last_updated_by = Column(String(128), nullable=True)
    last_updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        UniqueConstraint('sport_type', 'draft_year', name='uq_draft_settings_draft'),
    )
