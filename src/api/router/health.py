from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter, Depends, Request, status

from src.api.controller.auth.dto.output_dto import HealthCheckResponseDto
from src.core.dependencies import get_record_store
from src.core.exceptions.handler import ServiceError
from src.infra.store.record_store import RecordStore
from src.infra.config.settings import settings
from src.core.logger.logger import logger

router = APIRouter(tags=["Health"])


async def check_store_health(store: RecordStore) -> Dict[str, str]:
    """Check record store connection health."""
    try:
        await store.ping()
        return {"status": "healthy", "message": "Connected"}
    except ServiceError:
        return {"status": "unhealthy", "message": "Connection failed"}


@router.get("/health", response_model=HealthCheckResponseDto, status_code=status.HTTP_200_OK)
async def health_check(request: Request, store: RecordStore = Depends(get_record_store)):
    """
    Health check with record store status.
    """
    correlation_id = request.headers.get("X-Request-ID", "N/A")

    redis_health = await check_store_health(store)
    overall_status = "healthy" if redis_health["status"] == "healthy" else "unhealthy"

    logger.info(
        "Health check",
        extra={"request_id": correlation_id, "health_status": overall_status}
    )

    return HealthCheckResponseDto(
        status=overall_status,
        service=settings.APP_NAME,
        version=settings.APP_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        checks={"redis": redis_health}
    )
