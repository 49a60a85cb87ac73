"""사용자 라우터 — 내 프로필, 내 학습 현황, 공개 프로필, 사용자 생성 엔드포인트.

User Router — Endpoints for the current user's profile, enrollments,
certificates and statistics, public profiles, and user creation.
The "current user" comes from ``get_current_user_id``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from academy.api.deps import CurrentUserId
from academy.database import get_db
from academy.schemas.enrollment import CertificateResponse, MyEnrollmentResponse
from academy.schemas.user import (
    LearningStatsResponse,
    UserCreate,
    UserProfileResponse,
    UserResponse,
    UserUpdate,
)
from academy.services.user_service import user_service

router: APIRouter = APIRouter()


@router.get("/me", response_model=UserResponse)
async def get_me(
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    """현재 사용자를 조회합니다. 데모 사용자는 자동 생성됩니다.

    Retrieve the current user; the demo user is created on first access.
    """
    result: UserResponse = await user_service.get_me(db, user_id)
    await db.commit()
    return result


@router.put("/me", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    """내 프로필을 수정합니다 — Update the current user's profile."""
    result: UserResponse = await user_service.update_me(db, user_id, data)
    await db.commit()
    return result


@router.get("/me/enrollments", response_model=list[MyEnrollmentResponse])
async def list_my_enrollments(
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[MyEnrollmentResponse]:
    """내 수강 목록을 최신순으로 조회합니다 — My enrollments, newest first."""
    return await user_service.list_my_enrollments(db, user_id)


@router.get("/me/certificates", response_model=list[CertificateResponse])
async def list_my_certificates(
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[CertificateResponse]:
    """내 수료증을 조회합니다 — My certificates, newest first."""
    return await user_service.list_my_certificates(db, user_id)


@router.get("/me/stats", response_model=LearningStatsResponse)
async def get_my_stats(
    user_id: CurrentUserId,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LearningStatsResponse:
    """내 학습 통계를 조회합니다 — My learning statistics and streak."""
    return await user_service.get_learning_stats(db, user_id)


# /me 경로들보다 뒤에 선언 — Declared after the /me routes
@router.get("/{user_id}", response_model=UserProfileResponse)
async def get_user(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserProfileResponse:
    """공개 프로필을 조회합니다 — Public profile with aggregate stats."""
    return await user_service.get_profile(db, user_id)


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserResponse:
    """새 사용자를 생성합니다 — Create a user."""
    result: UserResponse = await user_service.create_user(db, data)
    await db.commit()
    return result
