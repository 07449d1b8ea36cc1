"""
Mapping from application errors to HTTP responses.

Route handlers catch ConfidencePoolError and re-raise the result of
``to_http_exception``; anything else propagates as a 500.

    EntityStoreError                                  503
    LeagueNotFoundError, MockDraftNotFoundError,
    UnknownSportError, InvalidInviteCodeError         404
    NotLeagueMemberError, NotLeagueOwnerError,
    LeagueJoinNotAllowedError                         403
    PredictionLockedError, OwnerRemovalError          409
    MalformedPredictionError, MalformedMockDraftError 422
"""
import logging

from fastapi import HTTPException, status

from confidence_pool.core.exceptions import (
    ConfidencePoolError,
    EntityStoreError,
    InvalidInviteCodeError,
    LeagueJoinNotAllowedError,
    LeagueNotFoundError,
    MalformedMockDraftError,
    MalformedPredictionError,
    MockDraftNotFoundError,
    NotLeagueMemberError,
    NotLeagueOwnerError,
    OwnerRemovalError,
    PredictionLockedError,
    UnknownSportError,
)

logger = logging.getLogger(__name__)


def to_http_exception(error: ConfidencePoolError, action: str) -> HTTPException:
    """
    Build the HTTPException for an application error.

    Args:
        error: The error raised by a service
        action: What the route was doing, e.g. "load leaderboard"
    """
    if isinstance(error, EntityStoreError):
        logger.error(f"Failed to {action}: {error}")
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Failed to {action}. Please try again later."
        )
    if isinstance(error, (LeagueNotFoundError, MockDraftNotFoundError, UnknownSportError, InvalidInviteCodeError)):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, (NotLeagueMemberError, NotLeagueOwnerError, LeagueJoinNotAllowedError)):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(error))
    if isinstance(error, (PredictionLockedError, OwnerRemovalError)):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, MalformedPredictionError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": "Invalid prediction", "errors": error.errors}
        )
    if isinstance(error, MalformedMockDraftError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(error), "errors": [str(error)]}
        )

    logger.error(f"Unhandled application error while trying to {action}: {error}")
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to {action}")
