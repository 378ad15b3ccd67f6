"""
Health check endpoints

- /health (liveness): process is up, no dependency checks
- /health/ready (readiness): database answers a trivial query

Reference: https://kubernetes.io/docs/tasks/configure-pod-container/configure-liveness-readiness-startup-probes/
"""
import logging
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text
from app.core.database import engine

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["health"],
)


class HealthResponse(BaseModel):
    """Response model for the health probes"""
    status: str
    message: str


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check (liveness)",
    status_code=status.HTTP_200_OK,
)
async def health_check() -> HealthResponse:
    """Liveness probe; never touches the database"""
    return HealthResponse(status="healthy", message="Todo API is running")


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check",
    status_code=status.HTTP_200_OK,
    responses={
        503: {"description": "Database unavailable"}
    }
)
async def readiness_check() -> HealthResponse:
    """
    Readiness probe

    Raises:
        HTTPException: 503 if the database cannot be reached
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning(f"Readiness check failed: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable"
        ) from e
    return HealthResponse(status="ready", message="Todo API is ready to serve traffic")
