"""데모 로그인 토큰 유틸리티 모듈.

Demo-login token helpers. ``POST /auth/login`` hands out a signed JWT that
names the logged-in user; ``/users/me`` routes read the user back from it.
There is no refresh flow: when the token expires the client logs in again.

Payload:
    {
        "sub": "user_id",     # 로그인한 사용자 ID (Logged-in user id)
        "email": "a@b.com",   # 로그인 이메일 (Login email, informational)
        "exp": 1234567890,    # 만료 시각 (Expiry, UNIX timestamp)
        "type": "access"      # 다른 용도의 토큰과 구분 (Distinguishes login tokens)
    }
"""

from datetime import datetime, timedelta, timezone
from typing import Any
import jwt

from academy.config import settings

# 로그인 토큰 유형 표식 — "type" claim of login tokens
TOKEN_TYPE: str = "access"


def token_lifetime_seconds() -> int:
    """로그인 토큰 유효 시간(초) — ``expiresIn`` reported by the login response."""
    return settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60


def create_access_token(user_id: str, email: str) -> str:
    """로그인한 사용자의 토큰을 발급합니다.

    Sign a login token for ``user_id`` that expires after
    ``token_lifetime_seconds()``.
    """
    expire: datetime = datetime.now(timezone.utc) + timedelta(seconds=token_lifetime_seconds())
    payload: dict[str, Any] = {"sub": user_id, "email": email, "exp": expire, "type": TOKEN_TYPE}
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict[str, Any]:
    """토큰 서명과 만료를 검증하고 페이로드를 반환합니다.

    Raises:
        jwt.InvalidTokenError: 서명 불일치, 만료 또는 형식 오류
                               (Bad signature, expired or malformed; includes ExpiredSignatureError)
    """
    return jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
