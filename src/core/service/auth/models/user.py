"""
User record model as persisted in the record store
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Union

from pydantic import BaseModel, Field, field_validator

from src.core.logger.logger import get_logger

logger = get_logger(__name__)


class MembershipTier(str, Enum):
    """Fan club membership level"""
    NONE = "none"
    REGULAR = "regular"
    VIP = "vip"
    VVIP = "vvip"


class PublicUser(BaseModel):
    """Caller-safe view of a user"""
    name: str
    email: str
    # Older records may carry a tier outside MembershipTier; kept as stored
    membership: Union[MembershipTier, str] = MembershipTier.NONE

    class Config:
        use_enum_values = True


class User(PublicUser):
    """Stored user record, keyed by email"""
    password: str  # encoded credential, see utils/credentials.py
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    verified: bool = False

    @field_validator('membership', mode='before')
    @classmethod
    def keep_unknown_membership(cls, v):
        if v is None or v == "":
            return MembershipTier.NONE
        if isinstance(v, str) and v not in {tier.value for tier in MembershipTier}:
            logger.warning("Unknown membership tier on stored user", extra={"membership": v})
        return v

    def to_record(self) -> Dict[str, Any]:
        """Convert to JSON-serializable record"""
        data = self.model_dump()
        data["createdAt"] = data["createdAt"].isoformat()
        return data

    @classmethod
    def from_record(cls, data: Dict[str, Any]) -> "User":
        return cls(**data)

    def to_public(self) -> PublicUser:
        return PublicUser(name=self.name, email=self.email, membership=self.membership)
