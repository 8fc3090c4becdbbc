"""
Input DTOs for the auth endpoint.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from enum import Enum

from src.core.service.auth.models.user import MembershipTier


class AuthAction(str, Enum):
    """Actions accepted by POST /auth."""
    SIGNUP = "signup"
    LOGIN = "login"
    LOG_PAYMENT = "log_payment"


class AuthRequestDto(BaseModel):
    """
    DTO for POST /auth.

    Every field is optional here; required-ness depends on the action and is
    reported by the account service as MISSING_FIELD.
    """

    action: Optional[str] = Field(None, description="signup, login or log_payment")
    name: Optional[str] = Field(None, description="Display name (signup)")
    email: Optional[str] = Field(None, description="Account email")
    password: Optional[str] = Field(None, description="Raw password (signup, login)")
    membership: Optional[MembershipTier] = Field(None, description="Membership tier chosen at signup")
    paymentMethod: Optional[str] = Field(None, description="Payment method label (log_payment)")
    timestamp: Optional[str] = Field(None, description="Client timestamp for the payment log")

    @field_validator('membership', mode='before')
    @classmethod
    def empty_membership_is_none(cls, v):
        if v == "":
            return None
        return v
