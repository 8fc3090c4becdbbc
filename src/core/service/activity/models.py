from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ActivityList(str, Enum):
    """Names of the append-only activity lists"""
    SIGNUPS = "signups"
    LOGINS = "logins"
    PAYMENTS = "payments"


class ActivityEntry(BaseModel):
    """Base for entries pushed onto an activity list"""
    email: str
    timestamp: str = Field(default_factory=utc_now_iso)
    ip: Optional[str] = None


class SignupEntry(ActivityEntry):
    name: str
    membership: str


class LoginEntry(ActivityEntry):
    pass


class PaymentEntry(ActivityEntry):
    paymentMethod: str
