"""
Library API: Health Check Route
================================

What:  Liveness/readiness probe for load balancers and container health checks.
How:   Pings the database with ``SELECT 1``. The service is only useful while
       the database answers, so a failed ping is reported as a 500.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from library_api.database import DRIVER_ERRORS, Database
from library_api.routes.deps import get_database
from library_api.schemas import ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/healthz",
    response_model=MessageResponse,
    responses={500: {"description": "Database unreachable", "model": ErrorResponse}},
    summary="Service health check",
)
async def health_check(database: Database = Depends(get_database)):
    try:
        await database.ping()
    except DRIVER_ERRORS as exc:
        logger.error("error pinging database: %s", exc)
        return JSONResponse(status_code=500, content={"error": "error pinging database"})

    return MessageResponse(message="OK")
