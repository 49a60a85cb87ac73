"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication Pydantic request/response schema definitions for the demo
login flow.
"""

from academy.schemas.common import CamelModel
from academy.schemas.user import UserResponse


class LoginRequest(CamelModel):
    """로그인 요청 스키마 — Email/password login (password is not verified)."""

    email: str | None = None
    password: str | None = None


class LoginResponse(CamelModel):
    """로그인 응답 스키마.

    Attributes:
        user: 로그인한 사용자 (Logged-in user)
        token: JWT 액세스 토큰 (Bearer token)
        expires_in: 토큰 유효 시간(초) (Token lifetime in seconds)
    """

    user: UserResponse
    token: str
    expires_in: int
