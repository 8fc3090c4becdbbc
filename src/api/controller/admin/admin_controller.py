"""
Admin controller: aggregate report over users and recent activity.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from src.api.controller.admin.dto.output_dto import AdminReportResponseDto
from src.api.middleware.authentication.admin_bearer import AdminBearer
from src.core.dependencies import get_reporting_service
from src.core.exceptions.handler import ServiceError, ServiceErrorCode
from src.core.service.admin.reporting_service import AdminReportingService
from src.infra.config.settings import get_settings

settings = get_settings()
router = APIRouter(tags=["Admin"])


@router.options("/admin")
async def admin_preflight():
    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/admin",
    response_model=AdminReportResponseDto,
    dependencies=[Depends(AdminBearer())]
)
async def admin_report(
    max_users: int = Query(settings.ADMIN_MAX_USERS, ge=0),
    max_signups: int = Query(settings.ADMIN_MAX_SIGNUPS, ge=0),
    max_logins: int = Query(settings.ADMIN_MAX_LOGINS, ge=0),
    reporting_service: AdminReportingService = Depends(get_reporting_service)
):
    """
    Users (credentials removed), membership breakdown and the most recent
    signups and logins. Requires `Authorization: Bearer <ADMIN_PASSWORD>`.
    """
    report = await reporting_service.get_report(
        max_users=max_users,
        max_signups=max_signups,
        max_logins=max_logins
    )
    return AdminReportResponseDto(data=report)


@router.api_route(
    "/admin",
    methods=["POST", "PUT", "PATCH", "DELETE"],
    dependencies=[Depends(AdminBearer())],
    include_in_schema=False
)
async def admin_method_not_allowed():
    """Token is checked before the method, so unauthenticated callers get 401 first."""
    raise ServiceError(
        code=ServiceErrorCode.METHOD_NOT_ALLOWED,
        message="Method not allowed",
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED
    )
