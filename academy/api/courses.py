"""코스 라우터 — 코스 목록/상세/생성/수정 및 분류 목록 엔드포인트.

Course Router — Endpoints for course listing, detail, creation and update,
and for the category list.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from academy.database import get_db
from academy.schemas.course import (
    CategoryResponse,
    CourseCreate,
    CourseDetailResponse,
    CourseLevel,
    CourseResponse,
    CourseSummary,
    CourseUpdate,
)
from academy.services.course_service import course_service

router: APIRouter = APIRouter()


@router.get("", response_model=list[CourseSummary])
async def list_courses(
    db: Annotated[AsyncSession, Depends(get_db)],
    category: str | None = None,
    level: CourseLevel | None = None,
    featured: bool = False,
) -> list[CourseSummary]:
    """코스 목록을 조회합니다 — List courses, newest first."""
    return await course_service.list_courses(db, category=category, level=level, featured=featured)


# /{course_id} 보다 먼저 선언 — Declared before /{course_id}
@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[CategoryResponse]:
    """분류 목록을 조회합니다 — List browsing categories."""
    return await course_service.list_categories(db)


@router.get("/{course_id}", response_model=CourseDetailResponse)
async def get_course(
    course_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CourseDetailResponse:
    """코스 상세 정보를 조회합니다 (강사, 레슨 포함).

    Retrieve a course with its instructor profile and ordered lessons.
    """
    return await course_service.get_course(db, course_id)


@router.post("", response_model=CourseResponse, status_code=201)
async def create_course(
    data: CourseCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CourseResponse:
    """새 코스를 생성합니다 — Create a course."""
    result: CourseResponse = await course_service.create_course(db, data)
    await db.commit()
    return result


@router.put("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: str,
    data: CourseUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> CourseResponse:
    """코스를 수정합니다 — Partially update a course."""
    result: CourseResponse = await course_service.update_course(db, course_id, data)
    await db.commit()
    return result
