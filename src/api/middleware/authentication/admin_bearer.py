import hmac
from typing import Optional

from fastapi import Request, status
from fastapi.security import HTTPBearer

from src.core.exceptions.handler import ServiceError, ServiceErrorCode
from src.infra.config.settings import settings
from src.core.logger.logger import logger


def _unauthorized(message: str) -> ServiceError:
    return ServiceError(
        code=ServiceErrorCode.UNAUTHORIZED,
        message=message,
        status_code=status.HTTP_401_UNAUTHORIZED
    )


class AdminBearer(HTTPBearer):
    """Checks `Authorization: Bearer <token>` against the configured admin secret"""

    def __init__(self, admin_password: Optional[str] = None):
        super().__init__(auto_error=False)
        self.admin_password = admin_password

    async def __call__(self, request: Request) -> str:
        # Parent returns None for a missing header, another scheme or an empty token
        credentials = await super().__call__(request)
        if credentials is None:
            logger.warning("Admin access without token", extra={"path": request.url.path})
            raise _unauthorized("Unauthorized - Missing token")

        if not self.verify_token(credentials.credentials):
            logger.warning("Admin access with invalid token", extra={"path": request.url.path})
            raise _unauthorized("Unauthorized - Invalid token")

        return credentials.credentials

    def verify_token(self, token: str) -> bool:
        expected = self.admin_password if self.admin_password is not None else settings.ADMIN_PASSWORD
        return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))
