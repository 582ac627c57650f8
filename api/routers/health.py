"""
Health check endpoint for monitoring and liveness checks.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import logging

from analytics.time import utc_isoformat
from api.dependencies import get_db_client
from db.client import DatabaseClient
from db.models import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check(db_client: DatabaseClient = Depends(get_db_client)):
    """
    Health check endpoint.

    Returns:
        HealthResponse with status "ok" (200) or "error" (500)
    """
    try:
        result = await db_client.ping()
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        body = HealthResponse(
            status="error",
            timestamp=utc_isoformat(),
            database="disconnected",
            message=str(e)
        )
        return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))

    return HealthResponse(
        status="ok",
        timestamp=utc_isoformat(),
        database="connected",
        # Replica-set replies also carry $clusterTime (BSON types); keep only ok.
        ping={"ok": result.get("ok")}
    )
