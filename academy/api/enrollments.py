"""수강 등록 라우터 — 수강 등록/해제 및 진도 조회 엔드포인트.

Enrollment Router — Endpoints for enrolling, unenrolling, and reading
enrollment progress.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from academy.database import get_db
from academy.schemas.common import DeleteResponse
from academy.schemas.enrollment import (
    EnrollmentCreate,
    EnrollmentDetailResponse,
    EnrollmentProgressResponse,
    EnrollmentResponse,
    EnrollmentUpdate,
    EnrollmentWithCourse,
)
from academy.services.enrollment_service import enrollment_service

router: APIRouter = APIRouter()


@router.post(
    "",
    response_model=EnrollmentResponse,
    status_code=status.HTTP_201_CREATED,
    responses={200: {"model": EnrollmentResponse, "description": "Already enrolled"}},
)
async def enroll(
    data: EnrollmentCreate,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EnrollmentResponse:
    """코스에 등록합니다. 이미 등록된 경우 기존 등록을 200으로 반환합니다.

    Enroll a user in a course (201). An existing enrollment is returned
    with 200 and nothing is changed.
    """
    result, created = await enrollment_service.enroll(db, data)
    if created:
        await db.commit()
    else:
        response.status_code = status.HTTP_200_OK
    return result


@router.get("/user/{user_id}", response_model=list[EnrollmentWithCourse])
async def list_user_enrollments(
    user_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[EnrollmentWithCourse]:
    """사용자의 수강 목록을 조회합니다 — A user's enrollments, oldest first."""
    return await enrollment_service.list_user_enrollments(db, user_id)


@router.get("/{enrollment_id}", response_model=EnrollmentDetailResponse)
async def get_enrollment(
    enrollment_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EnrollmentDetailResponse:
    """수강 등록 상세 정보를 조회합니다. 진도율을 다시 계산해 저장합니다.

    Retrieve an enrollment with lessons and completed lesson ids; the
    recomputed progress is persisted.
    """
    result: EnrollmentDetailResponse = await enrollment_service.get_enrollment(db, enrollment_id)
    await db.commit()
    return result


@router.put("/{enrollment_id}", response_model=EnrollmentResponse)
async def update_enrollment(
    enrollment_id: str,
    data: EnrollmentUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EnrollmentResponse:
    """수강 등록을 수정합니다 — Update progress and/or completion time."""
    result: EnrollmentResponse = await enrollment_service.update_enrollment(db, enrollment_id, data)
    await db.commit()
    return result


@router.get("/{enrollment_id}/progress", response_model=EnrollmentProgressResponse)
async def get_enrollment_progress(
    enrollment_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> EnrollmentProgressResponse:
    """레슨별 진도를 조회합니다 — Per-lesson progress of an enrollment."""
    return await enrollment_service.get_progress(db, enrollment_id)


@router.delete("/{enrollment_id}", response_model=DeleteResponse)
async def delete_enrollment(
    enrollment_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DeleteResponse:
    """수강 등록을 해제합니다. 코스 수강생 수가 1 줄어듭니다.

    Unenroll; the course's enrollment count drops by one.
    """
    result: DeleteResponse = await enrollment_service.delete_enrollment(db, enrollment_id)
    await db.commit()
    return result
