"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from folio.config import Settings
from folio.domain.service import AuthService

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    version: str
    git_sha: str
    environment: str
    auth_providers: list[str]


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings],
    auth_service: FromDishka[AuthService],
) -> HealthResponse:
    """Liveness check that also reports which login providers are usable.

    Does not touch the database, so it stays green while PostgreSQL is
    down and sessions fall back to token claims.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version="0.1.0",
        git_sha=settings.git_sha,
        environment=settings.environment,
        auth_providers=auth_service.supported_providers(),
    )
