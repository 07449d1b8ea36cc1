"""
Service information and health routes.

- ``/``: name, version and the main entry points
- ``/health``: liveness, no I/O
- ``/api/health``: readiness, counts rows in the entity store
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from confidence_pool.core.config import settings
from confidence_pool.core.database import get_db
from confidence_pool.core.exceptions import EntityStoreError
from confidence_pool.core.rate_limit import DEFAULT_LIMIT, HEALTH_LIMIT, limiter
from confidence_pool.repositories import (
    DraftResultRepository,
    LeagueRepository,
    MockDraftRepository,
    PredictionRepository,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])

ENTRY_POINTS = {
    "leagues": "/api/v1/leagues",
    "join_league": "/api/v1/leagues/join",
    "leaderboard": "/api/v1/leagues/{league_id}/leaderboard",
    "predictions": "/api/v1/leagues/{league_id}/predictions/{user_id}",
    "mock_drafts": "/api/v1/mock-drafts/{sport}/{year}",
    "draft_status": "/api/v1/draft/{sport}/{year}/status",
    "admin_record_pick": "/api/admin/draft/{sport}/{year}/picks/{position}",
    "admin_draft_status": "/api/admin/draft/{sport}/{year}/status",
    "admin_import_mock_draft": "/api/admin/mock-drafts/import",
    "docs": "/docs",
    "metrics": "/metrics",
}

# Collections reported by the readiness check
COUNTED_REPOSITORIES = {
    "leagues": LeagueRepository,
    "predictions": PredictionRepository,
    "draft_results": DraftResultRepository,
    "mock_drafts": MockDraftRepository,
}


@router.get("/")
@limiter.limit(DEFAULT_LIMIT)
async def root(request: Request) -> Dict[str, Any]:
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "status": "running",
        "endpoints": ENTRY_POINTS,
    }


@router.get("/health")
@limiter.limit(HEALTH_LIMIT)
async def health(request: Request) -> Dict[str, Any]:
    return {"status": "healthy", "version": settings.APP_VERSION}


@router.get("/api/health")
@limiter.limit(DEFAULT_LIMIT)
def readiness(request: Request, db: Session = Depends(get_db)) -> Dict[str, Any]:
    """
    Entity store readiness.

    Reports ``degraded`` with the store error when a collection cannot be
    counted; the endpoint itself still answers 200.
    """
    try:
        counts = {name: repository(db).count() for name, repository in COUNTED_REPOSITORIES.items()}
    except EntityStoreError as e:
        logger.error(f"Entity store health check failed: {e}")
        return {
            "status": "degraded",
            "version": settings.APP_VERSION,
            "components": {"entity_store": {"status": "unavailable", "error": str(e)}},
        }

    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "components": {"entity_store": {"status": "connected", "counts": counts}},
    }
