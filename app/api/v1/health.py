"""Readiness probe: the store is reachable and the users/reviews tables are migrated."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.database import check_db_connected, get_db, missing_tables
from app.schemas.health import HealthResponse

router = APIRouter()

REQUIRED_TABLES = ("users", "reviews")


@router.get("/", response_model=HealthResponse)
def get_health(
    response: Response,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> HealthResponse:
    """
    200 with status 'ok' when register/login and the review routes can be served.
    503 with status 'degraded' when the database is down or a migration is missing.
    """
    connected = check_db_connected(db)
    missing = missing_tables(db, REQUIRED_TABLES) if connected else list(REQUIRED_TABLES)
    ready = connected and not missing
    if not ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="ok" if ready else "degraded",
        environment=settings.APP_ENV,
        database="connected" if connected else "disconnected",
        missing_tables=missing,
    )
