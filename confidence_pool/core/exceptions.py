"""
Error taxonomy for the confidence pool.

Data-shape problems found while scoring are never raised; the scoring
core skips the offending pick and keeps going. The errors below are
raised by the I/O layer:

- EntityStoreError: the entity store could not be read or written.
  Propagates to the route, which answers 503 instead of showing a
  zeroed leaderboard.
- MalformedPredictionError / MalformedMockDraftError: a submission
  failed write-time validation.
- PredictionLockedError: the draft is live or completed.
- LeagueNotFoundError / MockDraftNotFoundError / NotLeagueMemberError /
  UnknownSportError / InvalidInviteCodeError: lookups that the caller
  should surface as 404/403.
- NotLeagueOwnerError / LeagueJoinNotAllowedError / OwnerRemovalError:
  league management the user may not perform.
"""
from typing import List, Optional


class ConfidencePoolError(Exception):
    """Base class for all application errors."""


class EntityStoreError(ConfidencePoolError):
    """A collaborator fetch or write against the entity store failed."""

    def __init__(self, operation: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.cause = cause
        message = f"Entity store failure during {operation}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class LeagueNotFoundError(ConfidencePoolError):
    """No league exists with the given id."""

    def __init__(self, league_id: str):
        self.league_id = league_id
        super().__init__(f"League not found: {league_id}")


class NotLeagueMemberError(ConfidencePoolError):
    """The user is not a member of the league."""

    def __init__(self, league_id: str, user_id: str):
        self.league_id = league_id
        self.user_id = user_id
        super().__init__(f"User {user_id} is not a member of league {league_id}")


class PredictionLockedError(ConfidencePoolError):
    """Predictions can no longer change for this draft."""

    def __init__(self, sport_type: str, draft_year: int):
        self.sport_type = sport_type
        self.draft_year = draft_year
        super().__init__(
            f"Predictions are locked: the {draft_year} {sport_type} draft is live or completed"
        )


class MalformedPredictionError(ConfidencePoolError):
    """A submitted prediction failed validation."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid prediction: " + "; ".join(self.errors))


class MalformedMockDraftError(ConfidencePoolError):
    """An imported mock draft contained no usable picks."""

    def __init__(self, message: str):
        super().__init__(message)


class MockDraftNotFoundError(ConfidencePoolError):
    """No mock draft matched the lookup."""

    def __init__(self, description: str):
        super().__init__(f"Mock draft not found: {description}")


class UnknownSportError(ConfidencePoolError):
    """The sport type is not one the pool runs drafts for."""

    def __init__(self, sport_type: str):
        self.sport_type = sport_type
        super().__init__(f"Unknown sport: {sport_type}")


class InvalidInviteCodeError(ConfidencePoolError):
    """No league uses the given invite code."""

    def __init__(self, invite_code: str):
        self.invite_code = invite_code
        super().__init__(f"Invalid invite code: {invite_code}")


class LeagueJoinNotAllowedError(ConfidencePoolError):
    """The league does not accept members joining by invite code."""

    def __init__(self, league_id: str):
        self.league_id = league_id
        super().__init__(f"League {league_id} does not allow joining with an invite code")


class NotLeagueOwnerError(ConfidencePoolError):
    """Only the league's creator may manage it."""

    def __init__(self, league_id: str, user_id: str):
        self.league_id = league_id
        self.user_id = user_id
        super().__init__(f"User {user_id} does not own league {league_id}")


class OwnerRemovalError(ConfidencePoolError):
    """The owner cannot be removed from their own league."""

    def __init__(self, league_id: str):
        self.league_id = league_id
        super().__init__(f"The owner cannot be removed from league {league_id}")
