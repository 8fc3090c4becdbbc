"""
FastAPI dependency injection functions.
"""

from fastapi import Depends
from redis.asyncio import Redis

from src.infra.config.redis import get_redis
from src.infra.store.record_store import RecordStore
from src.infra.repository.user_repository import UserRepository
from src.infra.repository.activity_log_repository import ActivityLogRepository
from src.core.service.auth.account_service import AccountService
from src.core.service.admin.reporting_service import AdminReportingService


async def get_redis_client() -> Redis:
    """Get Redis client dependency."""
    return await get_redis()


async def get_record_store(redis_client: Redis = Depends(get_redis_client)) -> RecordStore:
    """Get record store over the Redis client."""
    return RecordStore(redis_client)


async def get_user_repository(store: RecordStore = Depends(get_record_store)) -> UserRepository:
    return UserRepository(store)


async def get_activity_log_repository(store: RecordStore = Depends(get_record_store)) -> ActivityLogRepository:
    return ActivityLogRepository(store)


async def get_account_service(
    user_repository: UserRepository = Depends(get_user_repository),
    activity_repository: ActivityLogRepository = Depends(get_activity_log_repository)
) -> AccountService:
    """Get account service with repository dependencies."""
    return AccountService(user_repository, activity_repository)


async def get_reporting_service(
    user_repository: UserRepository = Depends(get_user_repository),
    activity_repository: ActivityLogRepository = Depends(get_activity_log_repository)
) -> AdminReportingService:
    """Get admin reporting service with repository dependencies."""
    return AdminReportingService(user_repository, activity_repository)
