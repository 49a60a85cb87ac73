"""인증 라우터 — 데모 로그인/로그아웃 엔드포인트.

Auth Router — Demo login and logout endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from academy.database import get_db
from academy.schemas.auth import LoginRequest, LoginResponse
from academy.schemas.common import MessageResponse
from academy.services.auth_service import auth_service

router: APIRouter = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LoginResponse:
    """이메일로 로그인하고 액세스 토큰을 발급합니다.

    Log in by email and issue an access token. Unknown emails get a new
    student account.
    """
    result: LoginResponse = await auth_service.login(db, data)
    await db.commit()
    return result


@router.post("/logout", response_model=MessageResponse)
async def logout() -> MessageResponse:
    """로그아웃합니다 — Log out (tokens are discarded client-side)."""
    return await auth_service.logout()
