"""도메인 예외 → HTTP 응답 변환"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.core.exceptions import (
    AdminAccessRequiredException,
    AuthenticationRequiredException,
    AuthorizationException,
    DatabaseException,
    OrderNotFoundException,
    StorefrontException,
    ValidationException,
)
from src.core.logging import logger
from src.schemas.common_schema import ErrorResponse


INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_code_for(exc: StorefrontException) -> int:
    if isinstance(exc, OrderNotFoundException):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, AuthenticationRequiredException):
        return status.HTTP_401_UNAUTHORIZED
    if isinstance(exc, (AdminAccessRequiredException, AuthorizationException)):
        return status.HTTP_403_FORBIDDEN
    if isinstance(exc, DatabaseException):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    if isinstance(exc, ValidationException):
        return status.HTTP_400_BAD_REQUEST
    # 전이/bulk 상태 오류 등 나머지 도메인 오류는 요청 오류로 취급
    return status.HTTP_400_BAD_REQUEST


def error_response(exc: StorefrontException) -> JSONResponse:
    """구조화된 에러 바디 생성

    DB 오류는 원본 메시지를 로그에만 남기고 일반 메시지로 응답합니다.
    """
    code = status_code_for(exc)
    if code >= 500:
        logger.error(f"[API] Internal error: {exc}")
        body = ErrorResponse(error=INTERNAL_ERROR_MESSAGE, error_code="INTERNAL_ERROR")
    else:
        body = ErrorResponse(error=exc.message, error_code=exc.error_code, details=exc.details or None)
    return JSONResponse(status_code=code, content=body.model_dump(mode="json"))


def internal_error_response() -> JSONResponse:
    body = ErrorResponse(error=INTERNAL_ERROR_MESSAGE, error_code="INTERNAL_ERROR")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump(mode="json"))


async def storefront_exception_handler(request: Request, exc: StorefrontException) -> JSONResponse:
    if status_code_for(exc) < 500:
        logger.warning(f"[API] {request.method} {request.url.path} rejected: {exc}")
    return error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """FastAPI 입력 검증 오류 → 400"""
    errors = [
        {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    logger.warning(f"[API] Request validation failed: {request.method} {request.url.path} ({len(errors)} errors)")
    body = ErrorResponse(error="Invalid request", error_code="VALIDATION_ERROR", details={"errors": errors})
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump(mode="json"))
