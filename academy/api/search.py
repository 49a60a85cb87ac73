"""검색 라우터 — 코스/레슨 검색, 통합 검색, 자동완성 엔드포인트.

Search Router — Endpoints for course search, lesson search, global search
and autocomplete suggestions.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from academy.database import get_db
from academy.schemas.course import CourseLevel
from academy.schemas.lesson import LessonType
from academy.schemas.search import (
    CourseSearchFilters,
    CourseSearchResponse,
    GlobalSearchResponse,
    LessonSearchFilters,
    LessonSearchResponse,
    Suggestion,
)
from academy.services.search_service import search_service

router: APIRouter = APIRouter()


@router.get("", response_model=GlobalSearchResponse)
async def search_all(
    db: Annotated[AsyncSession, Depends(get_db)],
    q: str | None = None,
) -> GlobalSearchResponse:
    """코스, 레슨, 강사를 통합 검색합니다 — Global search."""
    return await search_service.search_all(db, q)


@router.get("/courses", response_model=CourseSearchResponse)
async def search_courses(
    db: Annotated[AsyncSession, Depends(get_db)],
    q: str | None = None,
    category: str | None = None,
    level: CourseLevel | None = None,
    min_rating: Annotated[float | None, Query(alias="minRating")] = None,
    max_price: Annotated[float | None, Query(alias="maxPrice")] = None,
    instructor: str | None = None,
    tags: str | None = None,
) -> CourseSearchResponse:
    """코스를 검색합니다 — Search courses by text and filters.

    ``tags`` is a comma-separated list; every tag must be present.
    """
    filters = CourseSearchFilters(
        category=category,
        level=level,
        min_rating=min_rating,
        max_price=max_price,
        instructor=instructor,
        tags=tags,
    )
    return await search_service.search_courses(db, q, filters)


@router.get("/lessons", response_model=LessonSearchResponse)
async def search_lessons(
    db: Annotated[AsyncSession, Depends(get_db)],
    q: str | None = None,
    course_id: Annotated[str | None, Query(alias="courseId")] = None,
    type: LessonType | None = None,
) -> LessonSearchResponse:
    """레슨을 검색합니다 — Search lessons by text, course and type."""
    filters = LessonSearchFilters(course_id=course_id, type=type)
    return await search_service.search_lessons(db, q, filters)


@router.get("/suggestions", response_model=list[Suggestion])
async def suggestions(
    db: Annotated[AsyncSession, Depends(get_db)],
    q: str | None = None,
) -> list[Suggestion]:
    """자동완성 제안을 조회합니다 — Autocomplete suggestions."""
    return await search_service.suggestions(db, q)
