"""
Activity log repository: append-only signup/login/payment lists
"""

from typing import Any, Dict, List, Optional

from src.core.service.activity.models import ActivityEntry, ActivityList
from src.infra.store.record_store import RecordStore
from src.infra.config.settings import get_settings
from src.core.logger.logger import get_logger

logger = get_logger(__name__)
settings = get_settings()


class ActivityLogRepository:
    """Repository for activity logging"""

    def __init__(self, store: RecordStore, max_entries: Optional[int] = None):
        self.store = store
        self.max_entries = settings.ACTIVITY_LOG_MAX_ENTRIES if max_entries is None else max_entries

    async def log_activity(self, activity_list: ActivityList, entry: ActivityEntry) -> None:
        """
        Push entry to the head of its list

        Args:
            activity_list: Target list
            entry: Entry to record
        """
        length = await self.store.list_prepend(activity_list.value, entry.model_dump())

        if self.max_entries > 0 and length > self.max_entries:
            await self.store.list_trim(activity_list.value, 0, self.max_entries - 1)

        logger.info(
            "Activity logged",
            extra={
                "activity_list": activity_list.value,
                "email": entry.email,
                "ip": entry.ip
            }
        )

    async def recent(self, activity_list: ActivityList, limit: int) -> List[Dict[str, Any]]:
        """Read up to `limit` most recent entries"""
        if limit <= 0:
            return []
        return await self.store.list_range(activity_list.value, 0, limit - 1)
