"""인증 서비스 — 데모 로그인과 현재 사용자 식별 비즈니스 로직.

Auth Service — Business logic for the demo login flow and for resolving the
current user from a bearer token. Passwords are not verified; any non-empty
password logs the email in, creating a student account on first login.
"""

import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from academy.config import settings
from academy.models.user import User
from academy.repositories.user_repository import user_repository
from academy.schemas.auth import LoginRequest, LoginResponse
from academy.schemas.common import MessageResponse
from academy.schemas.user import UserResponse
from academy.utils.exceptions import BadRequestError, UnauthorizedError
from academy.utils.jwt import TOKEN_TYPE, create_access_token, decode_token, token_lifetime_seconds
from academy.utils.logger import get_logger

logger = get_logger(__name__)


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    """

    async def login(self, db: AsyncSession, data: LoginRequest) -> LoginResponse:
        """이메일로 로그인합니다. 처음 보는 이메일이면 학생 계정을 만듭니다.

        Log in by email. Unknown emails get a new student account named
        after the email's local part.

        Raises:
            BadRequestError: 이메일 또는 비밀번호가 비어 있을 때 (Missing email or password)
        """
        if not data.email or not data.password:
            raise BadRequestError("Email and password are required")

        email: str = data.email.strip()
        user: User | None = await user_repository.get_by_email(db, email)
        if user is None:
            user = await user_repository.create(
                db,
                {"email": email, "name": email.split("@")[0] or email, "role": "student"},
            )
            logger.info("Created user %s on first login", user.id)

        token: str = create_access_token(user.id, user.email)
        return LoginResponse(
            user=UserResponse.model_validate(user),
            token=token,
            expires_in=token_lifetime_seconds(),
        )

    async def logout(self) -> MessageResponse:
        """로그아웃 — 토큰은 클라이언트가 폐기합니다 (Tokens are discarded client-side)."""
        return MessageResponse(message="Logged out")

    def user_id_from_token(self, token: str | None) -> str:
        """베어러 토큰에서 현재 사용자 ID를 추출합니다.

        Resolve the current user id from a bearer token. Without a token the
        configured demo user is the current user.

        Raises:
            UnauthorizedError: 토큰이 유효하지 않거나 만료되었을 때 (Invalid or expired token)
        """
        if not token:
            return settings.DEMO_USER_ID
        try:
            payload: dict = decode_token(token)
        except jwt.InvalidTokenError:
            raise UnauthorizedError("Invalid or expired token") from None

        user_id: str | None = payload.get("sub")
        if payload.get("type") != TOKEN_TYPE or not user_id:
            raise UnauthorizedError("Invalid token")
        return user_id

    def user_id_from_header(self, authorization: str | None) -> str:
        """Authorization 헤더 값에서 현재 사용자 ID를 추출합니다.

        Same as ``user_id_from_token`` but takes the raw ``Authorization``
        header value (``"Bearer <token>"``).
        """
        if not authorization:
            return self.user_id_from_token(None)
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            raise UnauthorizedError("Invalid authorization header")
        return self.user_id_from_token(token.strip())


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
