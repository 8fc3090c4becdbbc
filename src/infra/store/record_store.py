import json
from typing import Any, Dict, List, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from src.core.exceptions.handler import StoreFailureError
from src.core.logger.logger import get_logger

logger = get_logger(__name__)


class RecordStore:
    """JSON document store over Redis: point records, prepend-only lists, prefix scans"""

    def __init__(self, redis_client: Redis):
        self.redis = redis_client

    def _serialize(self, record: Dict[str, Any]) -> str:
        """Convert record to JSON string"""
        return json.dumps(record)

    def _deserialize(self, data: str) -> Dict[str, Any]:
        """Convert JSON string to record"""
        return json.loads(data)

    def _failure(self, operation: str, key: str, error: Exception) -> StoreFailureError:
        logger.error(
            "Record store operation failed",
            extra={
                "operation": operation,
                "key": key,
                "error": str(error)
            }
        )
        return StoreFailureError(operation, error)

    async def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Get record by key, None if absent"""
        try:
            data = await self.redis.get(key)
        except RedisError as e:
            raise self._failure("get", key, e) from e
        if data is None:
            return None
        return self._deserialize(data)

    async def set(self, key: str, record: Dict[str, Any]) -> None:
        """Write record unconditionally"""
        try:
            await self.redis.set(key, self._serialize(record))
        except RedisError as e:
            raise self._failure("set", key, e) from e

    async def set_if_absent(self, key: str, record: Dict[str, Any]) -> bool:
        """
        Write record only when no value exists at key (SET NX)

        Returns:
            True if written, False if the key was already taken
        """
        try:
            created = await self.redis.set(key, self._serialize(record), nx=True)
        except RedisError as e:
            raise self._failure("set_if_absent", key, e) from e
        return bool(created)

    async def list_prepend(self, list_name: str, entry: Dict[str, Any]) -> int:
        """Push entry to the head of a list, returns new length"""
        try:
            return await self.redis.lpush(list_name, self._serialize(entry))
        except RedisError as e:
            raise self._failure("list_prepend", list_name, e) from e

    async def list_range(self, list_name: str, start: int, end: int) -> List[Dict[str, Any]]:
        """Read entries start..end inclusive, most recent first"""
        try:
            items = await self.redis.lrange(list_name, start, end)
        except RedisError as e:
            raise self._failure("list_range", list_name, e) from e
        return [self._deserialize(item) for item in items or []]

    async def list_trim(self, list_name: str, start: int, end: int) -> None:
        """Keep only entries start..end inclusive"""
        try:
            await self.redis.ltrim(list_name, start, end)
        except RedisError as e:
            raise self._failure("list_trim", list_name, e) from e

    async def keys_with_prefix(self, prefix: str) -> List[str]:
        """All keys starting with prefix (SCAN, not KEYS)"""
        try:
            return [key async for key in self.redis.scan_iter(match=f"{prefix}*")]
        except RedisError as e:
            raise self._failure("keys_with_prefix", prefix, e) from e

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except RedisError as e:
            raise self._failure("ping", "", e) from e
