"""
User repository on top of the Redis record store
"""

from typing import List, Optional, Dict, Any

from src.core.service.auth.models.user import User
from src.infra.store.record_store import RecordStore
from src.core.logger.logger import get_logger

logger = get_logger(__name__)

USER_KEY_PREFIX = "user:"


class UserRepository:
    """Repository for user records keyed by email"""

    def __init__(self, store: RecordStore):
        self.store = store

    def _get_key(self, email: str) -> str:
        """Get record key for email (stored case-sensitively)"""
        return f"{USER_KEY_PREFIX}{email}"

    async def get_user(self, email: str) -> Optional[User]:
        """
        Get user by email

        Args:
            email: Email exactly as submitted at signup

        Returns:
            User object or None
        """
        data = await self.store.get(self._get_key(email))
        if data is None:
            return None
        return User.from_record(data)

    async def create_user(self, user: User) -> bool:
        """
        Create user record if no record exists for the email

        Args:
            user: Fully built user record

        Returns:
            True if created, False if the email is already taken
        """
        created = await self.store.set_if_absent(self._get_key(user.email), user.to_record())

        if created:
            logger.info(
                "New user created",
                extra={
                    "email": user.email,
                    "membership": user.membership
                }
            )
        else:
            logger.warning(
                "User already exists (race condition)",
                extra={"email": user.email}
            )
        return created

    async def list_user_records(self) -> List[Dict[str, Any]]:
        """
        Read every stored user record with the credential removed

        Returns:
            Raw records, newest createdAt first
        """
        keys = await self.store.keys_with_prefix(USER_KEY_PREFIX)
        records = []
        for key in keys:
            data = await self.store.get(key)
            if data:
                data.pop("password", None)
                records.append(data)

        records.sort(key=lambda r: r.get("createdAt") or "", reverse=True)

        logger.debug("User records listed", extra={"count": len(records)})
        return records
