"""
Centralized error handling.
Provides consistent `{success, message, code}` responses, logging, and HTTP status codes
across the auth and admin endpoints.
"""

import traceback
from typing import Dict, Any, Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.core.logger.logger import get_logger
from src.infra.config.settings import get_settings

logger = get_logger(__name__)
settings = get_settings()


def _request_id(request: Request) -> str:
    """Correlation id set by RequestLoggingMiddleware, else the incoming header"""
    return getattr(request.state, "request_id", None) or request.headers.get("X-Request-ID", "unknown")


class ServiceErrorCode:
    """Standard error codes for services"""

    # Validation
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_FIELD = "MISSING_FIELD"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    INVALID_ACTION = "INVALID_ACTION"

    # Accounts
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Access
    UNAUTHORIZED = "UNAUTHORIZED"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    NOT_FOUND = "NOT_FOUND"

    # System
    STORE_FAILURE = "STORE_FAILURE"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ServiceError(Exception):
    """
    Standardized service error for internal use.
    Gets converted to proper HTTP response by error handler.
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.context = context or {}
        super().__init__(message)


class StoreFailureError(ServiceError):
    """Record store call failed. The caller only ever sees a generic message."""

    def __init__(self, operation: str, error: Exception):
        super().__init__(
            code=ServiceErrorCode.STORE_FAILURE,
            message="Server error occurred",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            context={"operation": operation, "error": str(error)}
        )


class ErrorResponseBuilder:
    """Builds standardized error responses"""

    @staticmethod
    def build_error_response(
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Build standardized error response"""

        response = {
            "success": False,
            "message": message,
            "code": error_code
        }

        if details:
            response["details"] = details

        return response


class GlobalErrorHandler:
    """Global error handler for all application errors"""

    @staticmethod
    async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
        """Handle ServiceError exceptions"""

        request_id = _request_id(request)
        log = logger.error if exc.status_code >= 500 else logger.warning

        log(
            f"Service error: {exc.code}",
            extra={
                "error_code": exc.code,
                "error_message": exc.message,
                "status_code": exc.status_code,
                "context": exc.context,
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method
            }
        )

        response = ErrorResponseBuilder.build_error_response(
            error_code=exc.code,
            message=exc.message,
            details=exc.details
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=response
        )

    @staticmethod
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle routing errors (405, 404) with standardized format"""

        request_id = _request_id(request)

        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            error_code = ServiceErrorCode.METHOD_NOT_ALLOWED
            message = "Method not allowed"
        elif exc.status_code == status.HTTP_404_NOT_FOUND:
            error_code = ServiceErrorCode.NOT_FOUND
            message = "Not found"
        elif exc.status_code == status.HTTP_401_UNAUTHORIZED:
            error_code = ServiceErrorCode.UNAUTHORIZED
            message = str(exc.detail)
        else:
            error_code = ServiceErrorCode.INTERNAL_ERROR
            message = str(exc.detail)

        logger.warning(
            f"HTTP exception: {exc.status_code}",
            extra={
                "status_code": exc.status_code,
                "detail": exc.detail,
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method
            }
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponseBuilder.build_error_response(error_code, message),
            headers=getattr(exc, "headers", None)
        )

    @staticmethod
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Handle Pydantic validation errors as plain 400s"""

        request_id = _request_id(request)

        validation_errors = []
        for error in exc.errors():
            field = '.'.join(str(loc) for loc in error['loc'])
            validation_errors.append({
                'field': field,
                'message': error['msg']
            })

        logger.warning(
            f"Validation error: {len(validation_errors)} errors",
            extra={
                "validation_errors": validation_errors,
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method
            }
        )

        response = ErrorResponseBuilder.build_error_response(
            error_code=ServiceErrorCode.INVALID_INPUT,
            message="Invalid request",
            details={"validation_errors": validation_errors}
        )

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=response
        )

    @staticmethod
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions"""

        request_id = _request_id(request)

        # Log full traceback for debugging
        logger.error(
            f"Unexpected error: {type(exc).__name__}",
            extra={
                "error_type": type(exc).__name__,
                "error_message": str(exc),
                "request_id": request_id,
                "path": request.url.path,
                "method": request.method
            },
            exc_info=True
        )

        # Never expose internal errors in production
        if settings.DEBUG:
            message = f"Internal error: {str(exc)}"
            details = {"traceback": traceback.format_exc()}
        else:
            message = "Server error occurred"
            details = {}

        response = ErrorResponseBuilder.build_error_response(
            error_code=ServiceErrorCode.INTERNAL_ERROR,
            message=message,
            details=details
        )

        return JSONResponse(
            status_code=500,
            content=response
        )
