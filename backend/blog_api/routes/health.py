"""
Blog Backend — Health Check Route
==================================

What:  Liveness probe for Docker health checks and load balancers.
How:   Answers without touching the database; a 200 means the process is up
       and serving requests.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from blog_api.schemas.common import HealthResponse

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
