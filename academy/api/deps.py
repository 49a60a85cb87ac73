"""FastAPI 의존성 주입 모듈 — 현재 사용자 식별.

FastAPI dependency injection module — Current user resolution.

Authentication Flow:
    1. 클라이언트가 Authorization: Bearer <token> 헤더를 전송 (선택)
       (Client optionally sends an Authorization: Bearer <token> header)
    2. HTTPBearer가 토큰을 추출, 헤더가 없으면 None
       (HTTPBearer extracts the token; None when the header is absent)
    3. 토큰이 있으면 검증 후 "sub"를, 없으면 데모 사용자 ID를 사용
       (A valid token yields its "sub"; no token yields the demo user id)
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from academy.services.auth_service import auth_service

# HTTP Bearer 토큰 추출기 — 헤더가 없어도 오류를 내지 않음
# (Extracts the bearer token without rejecting anonymous requests)
security: HTTPBearer = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str:
    """현재 사용자 ID를 반환합니다.

    Return the current user's id from the bearer token, or the demo user id
    for anonymous requests.

    Raises:
        UnauthorizedError: 토큰이 유효하지 않거나 만료됨 (Invalid or expired token)
    """
    return auth_service.user_id_from_token(credentials.credentials if credentials else None)


CurrentUserId = Annotated[str, Depends(get_current_user_id)]
