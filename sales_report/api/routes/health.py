"""Health & Readiness Probes — liveness and storage readiness.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if storage is not initialized or the DB is unreachable
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from sales_report.infrastructure import database, storage_registry

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "sales-report-records",
        "version": "0.1.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — storage registry initialized and DB reachable (SQL backend)."""
    if storage_registry.registry is None:
        return _not_ready("storage_uninitialized")
    if database.db_manager is not None and not await database.db_manager.health_check():
        return _not_ready("database_unavailable")
    return {"status": "ready", "checks": {"storage": "healthy"}}


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )
