"""
League Service

Creating leagues and managing who is in them.

- A league is created by its owner, who becomes its first member. It gets
  a six character invite code and scores ``DEFAULT_TOTAL_PICKS`` for its
  sport unless a size is given.
- Anyone with the invite code may join when the league allows public
  joining. Existing members are let through either way.
- Only the owner may remove members or delete the league. Removing a
  member deletes their prediction; deleting the league deletes every
  prediction in it.
"""
import logging
import secrets
import string
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from confidence_pool.core.exceptions import (
    InvalidInviteCodeError,
    LeagueJoinNotAllowedError,
    NotLeagueMemberError,
    NotLeagueOwnerError,
    OwnerRemovalError,
)
from confidence_pool.core.logging import log_context
from confidence_pool.core.metrics import league_changes_total
from confidence_pool.models import DEFAULT_TOTAL_PICKS, League, Prediction, parse_sport_type
from confidence_pool.repositories import LeagueRepository, PredictionRepository

logger = logging.getLogger(__name__)

INVITE_CODE_LENGTH = 6
INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits
MAX_INVITE_CODE_ATTEMPTS = 5


@dataclass(frozen=True)
class LeagueDetails:
    """A league as shown to its members."""
    id: str
    name: str
    description: Optional[str]
    sport_type: str
    draft_year: int
    created_by: str
    members: Tuple[str, ...]
    total_picks: int
    invite_code: str
    public_join: bool
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class JoinResult:
    league: LeagueDetails
    joined: bool  # False when the user was already a member


def league_details(league: League) -> LeagueDetails:
    return LeagueDetails(
        id=league.id,
        name=league.name,
        description=league.description,
        sport_type=league.sport_type,
        draft_year=league.draft_year,
        created_by=league.created_by,
        members=tuple(league.members or ()),
        total_picks=league.total_picks,
        invite_code=league.invite_code,
        public_join=bool(league.public_join),
        created_at=league.created_at,
    )


def generate_invite_code() -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


def normalize_invite_code(invite_code: str) -> str:
    return (invite_code or "").strip().upper()


class LeagueService:
    """Service for league creation and membership."""

    def __init__(self, db: Session):
        self.db = db
        self.leagues = LeagueRepository(db)
        self.predictions = PredictionRepository(db)

    def create_league(
        self,
        owner_id: str,
        name: str,
        sport_type: str,
        draft_year: int,
        total_picks: Optional[int] = None,
        description: Optional[str] = None,
        public_join: bool = False
    ) -> LeagueDetails:
        """
        Create a league owned by ``owner_id``.

        Raises:
            UnknownSportError: If the sport is not supported
            EntityStoreError: If the league could not be stored
        """
        sport_type = parse_sport_type(sport_type)
        with log_context(user_id=owner_id, sport_type=sport_type, draft_year=draft_year):
            league = self.leagues.create(
                name=name.strip(),
                description=description,
                sport_type=sport_type,
                draft_year=draft_year,
                created_by=owner_id,
                members=[owner_id],
                total_picks=total_picks or DEFAULT_TOTAL_PICKS[sport_type],
                invite_code=self._unused_invite_code(),
                public_join=public_join,
            )
            self.leagues.commit()

            league_changes_total.labels(action="created").inc()
            logger.info(f"Created league {league.id} ({league.total_picks} picks, public_join={public_join})")
            return league_details(league)

    def get_league(self, league_id: str) -> LeagueDetails:
        """
        Raises:
            LeagueNotFoundError: If the league does not exist
        """
        return league_details(self.leagues.get(league_id))

    def join_league(self, user_id: str, invite_code: str) -> JoinResult:
        """
        Add a user to the league using ``invite_code``.

        Codes are matched case-insensitively.

        Raises:
            InvalidInviteCodeError: If no league uses the code
            LeagueJoinNotAllowedError: If the league does not allow public joining
            EntityStoreError: If the league could not be read or updated
        """
        code = normalize_invite_code(invite_code)
        league = self.leagues.find_by_invite_code(code) if code else None
        if league is None:
            raise InvalidInviteCodeError(invite_code)

        with log_context(league_id=league.id, user_id=user_id):
            if user_id in (league.members or []):
                logger.debug(f"{user_id} is already a member of league {league.id}")
                return JoinResult(league=league_details(league), joined=False)

            if not league.public_join:
                raise LeagueJoinNotAllowedError(league.id)

            self.leagues.set_members(league, [*(league.members or []), user_id])
            self.leagues.commit()

            league_changes_total.labels(action="joined").inc()
            logger.info(f"{user_id} joined league {league.id}")
            return JoinResult(league=league_details(league), joined=True)

    def remove_member(self, league_id: str, owner_id: str, member_id: str) -> LeagueDetails:
        """
        Remove a member and their prediction.

        Raises:
            LeagueNotFoundError: If the league does not exist
            NotLeagueOwnerError: If ``owner_id`` does not own the league
            OwnerRemovalError: If the owner tries to remove themselves
            NotLeagueMemberError: If ``member_id`` is not in the league
        """
        with log_context(league_id=league_id, user_id=owner_id):
            league = self._owned_league(league_id, owner_id)
            if member_id == league.created_by:
                raise OwnerRemovalError(league_id)
            if member_id not in (league.members or []):
                raise NotLeagueMemberError(league_id, member_id)

            self.leagues.set_members(league, [m for m in league.members if m != member_id])
            had_prediction = self.predictions.delete(Prediction.make_id(league_id, member_id))
            self.leagues.commit()

            league_changes_total.labels(action="member_removed").inc()
            logger.info(
                f"Removed {member_id} from league {league_id}"
                f"{' and deleted their prediction' if had_prediction else ''}"
            )
            return league_details(league)

    def delete_league(self, league_id: str, owner_id: str) -> int:
        """
        Delete a league together with its predictions.

        Returns:
            Number of predictions deleted with the league

        Raises:
            LeagueNotFoundError: If the league does not exist
            NotLeagueOwnerError: If ``owner_id`` does not own the league
        """
        with log_context(league_id=league_id, user_id=owner_id):
            league = self._owned_league(league_id, owner_id)
            prediction_count = len(self.predictions.find_by_league(league_id))

            # Predictions go with it through the relationship cascade
            self.leagues.delete(league.id)
            self.leagues.commit()

            league_changes_total.labels(action="deleted").inc()
            logger.info(f"Deleted league {league_id} and {prediction_count} predictions")
            return prediction_count

    def _owned_league(self, league_id: str, user_id: str) -> League:
        league = self.leagues.get(league_id)
        if league.created_by != user_id:
            raise NotLeagueOwnerError(league_id, user_id)
        return league

    def _unused_invite_code(self) -> str:
        for _ in range(MAX_INVITE_CODE_ATTEMPTS):
            code = generate_invite_code()
            if self.leagues.find_by_invite_code(code) is None:
                return code
            logger.debug(f"Invite code {code} is taken, generating another")
        raise RuntimeError(f"No unused invite code after {MAX_INVITE_CODE_ATTEMPTS} attempts")


def get_league_service(db: Session) -> LeagueService:
    """Get a LeagueService instance."""
    return LeagueService(db)
