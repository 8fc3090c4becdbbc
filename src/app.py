import json
from datetime import datetime, timezone
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.infra.config.settings import settings
from src.core.logger.logger import logger
from src.api.router import health, auth, admin
from src.api.middleware.logging.request_logging import RequestLoggingMiddleware
from src.core.exceptions.handler import ServiceError, GlobalErrorHandler

def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description="""
Fan club membership API.

## Endpoints
- **POST /auth**: `signup`, `login` and `log_payment` actions
- **GET /admin**: user and activity report, requires `Authorization: Bearer <admin password>`
- **GET /health**: service and record store status
        """,
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_methods=settings.ALLOWED_METHODS,
        allow_headers=settings.ALLOWED_HEADERS,
        max_age=600,  # 10 minutes
    )

    # Request logging middleware (outermost, sees every request)
    app.add_middleware(RequestLoggingMiddleware)

    # Add centralized error handlers
    app.add_exception_handler(ServiceError, GlobalErrorHandler.service_error_handler)
    app.add_exception_handler(StarletteHTTPException, GlobalErrorHandler.http_exception_handler)
    app.add_exception_handler(RequestValidationError, GlobalErrorHandler.validation_error_handler)
    app.add_exception_handler(Exception, GlobalErrorHandler.general_exception_handler)

    # Include routers
    app.include_router(auth.router)
    app.include_router(admin.router)
    app.include_router(health.router)

    @app.on_event("startup")
    async def startup_event():
        logger.info(json.dumps({
            "message": "Starting fan club API",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION
        }))

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info(json.dumps({
            "message": "Shutting down fan club API",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": settings.APP_NAME,
            "version": settings.APP_VERSION
        }))

    return app
