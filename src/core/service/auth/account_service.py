"""
Account use cases: signup, login and payment-method logging.
"""

from typing import Optional

from fastapi import status

from src.core.exceptions.handler import ServiceError, ServiceErrorCode
from src.core.service.activity.models import (
    ActivityList, SignupEntry, LoginEntry, PaymentEntry, utc_now_iso
)
from src.core.service.auth.models.user import User, PublicUser, MembershipTier
from src.core.service.auth.utils.credentials import encode_credential, verify_credential
from src.core.service.auth.utils.validation import is_valid_email, is_valid_password
from src.infra.repository.user_repository import UserRepository
from src.infra.repository.activity_log_repository import ActivityLogRepository
from src.core.logger.logger import get_logger

logger = get_logger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def _missing_field(message: str) -> ServiceError:
    return ServiceError(
        code=ServiceErrorCode.MISSING_FIELD,
        message=message,
        status_code=status.HTTP_400_BAD_REQUEST
    )


def _invalid_credentials() -> ServiceError:
    # Same error for unknown email and wrong password
    return ServiceError(
        code=ServiceErrorCode.INVALID_CREDENTIALS,
        message=INVALID_CREDENTIALS_MESSAGE,
        status_code=status.HTTP_401_UNAUTHORIZED
    )


class AccountService:
    """Signup/login against user records, with activity logging"""

    def __init__(self, user_repository: UserRepository, activity_repository: ActivityLogRepository):
        self.user_repository = user_repository
        self.activity_repository = activity_repository

    async def signup(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        membership: Optional[MembershipTier] = None,
        ip: Optional[str] = None
    ) -> PublicUser:
        """
        Create a new account

        Args:
            name: Display name
            email: Account key, stored as given
            password: Raw password, stored only in encoded form
            membership: Tier chosen at signup, defaults to none
            ip: Caller's network origin for the signup log

        Returns:
            Public view of the created user

        Raises:
            ServiceError: MISSING_FIELD, INVALID_EMAIL, INVALID_PASSWORD or ALREADY_EXISTS
        """
        if not name or not email or not password:
            raise _missing_field("All fields are required")

        if not is_valid_email(email):
            raise ServiceError(
                code=ServiceErrorCode.INVALID_EMAIL,
                message="Please enter a valid email address",
                status_code=status.HTTP_400_BAD_REQUEST
            )

        if not is_valid_password(password):
            raise ServiceError(
                code=ServiceErrorCode.INVALID_PASSWORD,
                message="Password must be at least 8 characters with letters and numbers",
                status_code=status.HTTP_400_BAD_REQUEST
            )

        user = User(
            name=name,
            email=email,
            password=encode_credential(password),
            membership=membership or MembershipTier.NONE
        )

        if not await self.user_repository.create_user(user):
            raise ServiceError(
                code=ServiceErrorCode.ALREADY_EXISTS,
                message="An account with this email already exists",
                status_code=status.HTTP_409_CONFLICT
            )

        await self.activity_repository.log_activity(
            ActivityList.SIGNUPS,
            SignupEntry(email=email, name=name, membership=user.membership, ip=ip)
        )

        return user.to_public()

    async def login(
        self,
        email: Optional[str],
        password: Optional[str],
        ip: Optional[str] = None
    ) -> PublicUser:
        """
        Check credentials and record the login

        Raises:
            ServiceError: MISSING_FIELD or INVALID_CREDENTIALS
        """
        if not email or not password:
            raise _missing_field("Email and password are required")

        user = await self.user_repository.get_user(email)
        if user is None:
            logger.info("Login failed", extra={"email": email, "reason": "unknown_email"})
            raise _invalid_credentials()

        if not verify_credential(password, user.password):
            logger.info("Login failed", extra={"email": email, "reason": "bad_password"})
            raise _invalid_credentials()

        await self.activity_repository.log_activity(
            ActivityList.LOGINS,
            LoginEntry(email=email, ip=ip)
        )

        return user.to_public()

    async def log_payment(
        self,
        email: Optional[str],
        payment_method: Optional[str],
        timestamp: Optional[str] = None,
        ip: Optional[str] = None
    ) -> None:
        """
        Record a payment-method selection. The email is not checked against user records.

        Raises:
            ServiceError: MISSING_FIELD
        """
        if not email or not payment_method:
            raise _missing_field("Email and payment method are required")

        await self.activity_repository.log_activity(
            ActivityList.PAYMENTS,
            PaymentEntry(
                email=email,
                paymentMethod=payment_method,
                timestamp=timestamp or utc_now_iso(),
                ip=ip
            )
        )
