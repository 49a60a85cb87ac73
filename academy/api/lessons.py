"""레슨 라우터 — 레슨 CRUD 및 레슨 완료 엔드포인트.

Lesson Router — Endpoints for lesson CRUD and lesson completion.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from academy.database import get_db
from academy.schemas.common import DeleteResponse
from academy.schemas.lesson import (
    LessonCompleteRequest,
    LessonCreate,
    LessonProgressResponse,
    LessonResponse,
    LessonUpdate,
)
from academy.services.lesson_service import lesson_service

router: APIRouter = APIRouter()


@router.get("/course/{course_id}", response_model=list[LessonResponse])
async def list_course_lessons(
    course_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[LessonResponse]:
    """코스의 레슨을 순서대로 조회합니다 — Lessons of a course in order."""
    return await lesson_service.list_course_lessons(db, course_id)


@router.get("/{lesson_id}", response_model=LessonResponse)
async def get_lesson(
    lesson_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LessonResponse:
    """레슨을 조회합니다 — Retrieve a lesson."""
    return await lesson_service.get_lesson(db, lesson_id)


@router.post("", response_model=LessonResponse, status_code=201)
async def create_lesson(
    data: LessonCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LessonResponse:
    """코스 끝에 레슨을 추가합니다 — Append a lesson to a course."""
    result: LessonResponse = await lesson_service.create_lesson(db, data)
    await db.commit()
    return result


@router.put("/{lesson_id}", response_model=LessonResponse)
async def update_lesson(
    lesson_id: str,
    data: LessonUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LessonResponse:
    """레슨을 수정합니다 — Partially update a lesson."""
    result: LessonResponse = await lesson_service.update_lesson(db, lesson_id, data)
    await db.commit()
    return result


@router.delete("/{lesson_id}", response_model=DeleteResponse)
async def delete_lesson(
    lesson_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> DeleteResponse:
    """레슨과 진도 기록을 삭제합니다 — Delete a lesson and its progress records."""
    result: DeleteResponse = await lesson_service.delete_lesson(db, lesson_id)
    await db.commit()
    return result


@router.post("/{lesson_id}/complete", response_model=LessonProgressResponse)
async def complete_lesson(
    lesson_id: str,
    data: LessonCompleteRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> LessonProgressResponse:
    """레슨을 완료 처리합니다. 이미 완료된 경우 기존 기록을 반환합니다.

    Mark a lesson complete; an already-completed lesson returns the existing
    record unchanged.
    """
    result: LessonProgressResponse = await lesson_service.complete_lesson(
        db, lesson_id, data.user_id, data.enrollment_id
    )
    await db.commit()
    return result
