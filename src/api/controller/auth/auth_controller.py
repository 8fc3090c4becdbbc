"""
Authentication controller: signup, login and payment logging behind a single POST /auth.
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from src.api.controller.auth.dto.input_dto import AuthRequestDto, AuthAction
from src.api.controller.auth.dto.output_dto import AuthResponseDto
from src.api.utils.client_ip import get_client_ip
from src.core.dependencies import get_account_service
from src.core.exceptions.handler import ServiceError, ServiceErrorCode
from src.core.service.auth.account_service import AccountService
from src.core.logger.logger import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["Authentication"])


def _respond(status_code: int, body: AuthResponseDto) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True)
    )


@router.options("/auth")
async def auth_preflight():
    """CORS preflight without Origin headers still gets an empty 200."""
    return Response(status_code=status.HTTP_200_OK)


@router.post("/auth", response_model=AuthResponseDto, response_model_exclude_none=True)
async def auth(
    request: Request,
    body: AuthRequestDto,
    account_service: AccountService = Depends(get_account_service)
):
    """
    Dispatch on `action`.

    - **signup**: name, email, password, optional membership -> 201
    - **login**: email, password -> 200
    - **log_payment**: email, paymentMethod, optional timestamp -> 200
    """
    ip = get_client_ip(request)

    if body.action == AuthAction.SIGNUP.value:
        user = await account_service.signup(
            name=body.name,
            email=body.email,
            password=body.password,
            membership=body.membership,
            ip=ip
        )
        return _respond(
            status.HTTP_201_CREATED,
            AuthResponseDto(message="Account created successfully", user=user)
        )

    if body.action == AuthAction.LOGIN.value:
        user = await account_service.login(
            email=body.email,
            password=body.password,
            ip=ip
        )
        return _respond(
            status.HTTP_200_OK,
            AuthResponseDto(message="Login successful", user=user)
        )

    if body.action == AuthAction.LOG_PAYMENT.value:
        await account_service.log_payment(
            email=body.email,
            payment_method=body.paymentMethod,
            timestamp=body.timestamp,
            ip=ip
        )
        return _respond(
            status.HTTP_200_OK,
            AuthResponseDto(message="Payment method logged")
        )

    raise ServiceError(
        code=ServiceErrorCode.INVALID_ACTION,
        message="Invalid action",
        status_code=status.HTTP_400_BAD_REQUEST,
        context={"action": body.action}
    )
