"""커스텀 HTTP 예외 클래스 및 공용 예외 핸들러 모듈.

Custom HTTP exception classes and shared exception handlers.
Services raise the pre-configured HTTPException subclasses below; both server
variants (FastAPI and the classic Starlette app) register the same handlers,
so every error body has the shape ``{"error": message}``.

Usage:
    from academy.utils.exceptions import NotFoundError, DuplicateError
    raise NotFoundError("Course not found")
    raise DuplicateError("A user with this email already exists")
"""

from typing import Any

from fastapi import HTTPException, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request
from starlette.responses import JSONResponse

from academy.utils.logger import get_logger

logger = get_logger(__name__)


class NotFoundError(HTTPException):
    """404 Not Found 예외 — 요청한 리소스를 찾을 수 없을 때 사용.

    404 Not Found exception.
    Raised when a requested resource (user, course, enrollment, etc.) does not exist.

    Args:
        detail: 오류 메시지 (Error message, default: "Resource not found")
    """

    def __init__(self, detail: str = "Resource not found") -> None:
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class DuplicateError(HTTPException):
    """409 Conflict 예외 — 중복 리소스 생성 시도 시 사용.

    409 Conflict exception.
    Raised when attempting to create a resource that violates a uniqueness constraint
    (e.g. duplicate user email, duplicate course slug).

    Args:
        detail: 오류 메시지 (Error message, default: "Resource already exists")
    """

    def __init__(self, detail: str = "Resource already exists") -> None:
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class UnauthorizedError(HTTPException):
    """401 Unauthorized 예외 — 인증 실패 시 사용.

    401 Unauthorized exception.
    Raised when a bearer token is present but invalid or expired.

    Args:
        detail: 오류 메시지 (Error message, default: "Authentication required")
    """

    def __init__(self, detail: str = "Authentication required") -> None:
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class BadRequestError(HTTPException):
    """400 Bad Request 예외 — 잘못된 요청 데이터 시 사용.

    400 Bad Request exception.
    Raised when the request data is invalid beyond what Pydantic validation catches
    (e.g. malformed JSON in the classic variant, missing login credentials).

    Args:
        detail: 오류 메시지 (Error message, default: "Bad request")
    """

    def __init__(self, detail: str = "Bad request") -> None:
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# ---------------------------------------------------------------------------
# 예외 핸들러 — Exception handlers shared by both server variants
# ---------------------------------------------------------------------------


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """HTTP 예외를 {"error": message} 형태로 변환합니다.

    Render any Starlette/FastAPI HTTPException (including unmatched routes,
    which Starlette raises as 404) as ``{"error": detail}``.
    """
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message: str = f"Route not found: {request.method} {request.url.path}"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError | ValidationError
) -> JSONResponse:
    """요청 검증 실패를 422 응답으로 변환합니다.

    Render request validation failures (FastAPI's RequestValidationError or a
    pydantic ValidationError raised by the classic handlers) as 422.
    """
    details: list[Any] = jsonable_encoder(
        exc.errors(include_url=False) if isinstance(exc, ValidationError) else exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content={"error": "Request validation failed", "details": details},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외를 500 응답으로 변환합니다.

    Log the exception and return ``{"error": <raw message>}`` with status 500.
    """
    logger.exception("Unhandled error for %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc) or "Internal server error"},
    )


# 앱 생성 시 등록할 예외 핸들러 — Handlers registered on both applications
EXCEPTION_HANDLERS: dict[Any, Any] = {
    StarletteHTTPException: http_error_handler,
    RequestValidationError: validation_error_handler,
    ValidationError: validation_error_handler,
    Exception: unhandled_error_handler,
}
