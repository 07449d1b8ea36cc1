"""
Draft Confidence Pool API.

Run locally with ``python -m confidence_pool.main`` or
``uvicorn confidence_pool.main:app``.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from confidence_pool.api.routes import admin, draft, health, leagues, mock_drafts
from confidence_pool.core.config import settings
from confidence_pool.core.database import init_db
from confidence_pool.core.logging import configure_logging, get_logger
from confidence_pool.core.middleware import CorrelationIdMiddleware
from confidence_pool.core.rate_limit import limiter

configure_logging(level=settings.LOG_LEVEL, json_output=settings.LOG_JSON)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION} ({settings.ENVIRONMENT})")
    init_db()
    yield
    logger.info(f"Stopping {settings.APP_NAME}")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Confidence pool leagues for sports drafts: leaderboards, predictions and mock draft grades",
    lifespan=lifespan,
)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Registered before CORS so the correlation header is set on every response
app.add_middleware(CorrelationIdMiddleware)

# Must wrap the app before the routers are mounted
Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "PUT", "PATCH", "POST", "DELETE"],
    allow_headers=["*"],
    expose_headers=["X-Correlation-ID"],
)

app.include_router(health.router)
for public_router in (leagues.router, mock_drafts.router, draft.router):
    app.include_router(public_router, prefix="/api/v1")
app.include_router(admin.router, prefix="/api/admin")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("confidence_pool.main:app", host=settings.HOST, port=settings.PORT, reload=settings.DEBUG)
