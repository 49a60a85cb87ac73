"""검색 서비스 — 코스/레슨 검색, 통합 검색, 자동완성 비즈니스 로직.

Search Service — Business logic for course and lesson search, global search
and autocomplete suggestions.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.types import column_values
from academy.repositories.search_repository import search_repository
from academy.schemas.lesson import LessonResponse
from academy.schemas.search import (
    CourseHit,
    CourseSearchFilters,
    CourseSearchResponse,
    GlobalSearchResponse,
    InstructorHit,
    LessonHit,
    LessonSearchFilters,
    LessonSearchResponse,
    LessonSearchResult,
    Suggestion,
)
from academy.services.course_service import course_summary

# 결과 개수 제한 — Result limits
GLOBAL_COURSE_LIMIT: int = 10
GLOBAL_LESSON_LIMIT: int = 10
GLOBAL_INSTRUCTOR_LIMIT: int = 5
SUGGESTION_COURSE_LIMIT: int = 5
SUGGESTION_CATEGORY_LIMIT: int = 3
SUGGESTION_TAG_LIMIT: int = 3
SUGGESTION_MIN_LENGTH: int = 2


def split_tags(tags: str | None) -> list[str]:
    """쉼표로 구분된 태그 문자열을 목록으로 변환합니다 — ``"a, b"`` → ``["a", "b"]``."""
    if not tags:
        return []
    return [tag.strip() for tag in tags.split(",") if tag.strip()]


class SearchService:
    """검색 관련 비즈니스 로직을 처리하는 서비스.

    Service handling search business logic.
    """

    async def search_courses(
        self,
        db: AsyncSession,
        q: str | None = None,
        filters: CourseSearchFilters | None = None,
    ) -> CourseSearchResponse:
        """코스를 검색합니다.

        Search courses by text and filters; see
        ``SearchRepository.search_courses`` for matching and ordering.
        """
        filters = filters or CourseSearchFilters()
        rows = await search_repository.search_courses(
            db,
            q=q,
            category=filters.category,
            level=filters.level,
            min_rating=filters.min_rating,
            max_price=filters.max_price,
            instructor=filters.instructor,
            tags=split_tags(filters.tags),
        )
        results = [course_summary(course, name) for course, name in rows]
        return CourseSearchResponse(results=results, total=len(results), query=q or "", filters=filters)

    async def search_lessons(
        self,
        db: AsyncSession,
        q: str | None = None,
        filters: LessonSearchFilters | None = None,
    ) -> LessonSearchResponse:
        """레슨을 검색합니다 — Search lessons, each with its course title and slug."""
        filters = filters or LessonSearchFilters()
        rows = await search_repository.search_lessons(
            db, q=q, course_id=filters.course_id, lesson_type=filters.type
        )
        results: list[LessonSearchResult] = [
            LessonSearchResult.model_validate(
                {
                    **LessonResponse.model_validate(lesson).model_dump(),
                    "course_name": course_title,
                    "course_slug": course_slug,
                }
            )
            for lesson, course_title, course_slug in rows
        ]
        return LessonSearchResponse(results=results, total=len(results), query=q or "", filters=filters)

    async def search_all(self, db: AsyncSession, q: str | None) -> GlobalSearchResponse:
        """코스, 레슨, 강사를 한 번에 검색합니다.

        Global search: up to 10 courses, 10 lessons and 5 instructors
        matching ``q``. An empty query returns empty buckets.
        """
        if not q:
            return GlobalSearchResponse()

        courses = await search_repository.find_courses(db, q, GLOBAL_COURSE_LIMIT)
        lessons = await search_repository.find_lessons(db, q, GLOBAL_LESSON_LIMIT)
        instructors = await search_repository.find_instructors(db, q, GLOBAL_INSTRUCTOR_LIMIT)

        course_hits = [CourseHit.model_validate(column_values(c)) for c in courses]
        lesson_hits = [
            LessonHit(id=lesson.id, title=lesson.title, description=lesson.description, course_id=lesson.course_id)
            for lesson in lessons
        ]
        instructor_hits = [InstructorHit.model_validate(u) for u in instructors]
        return GlobalSearchResponse(
            courses=course_hits,
            lessons=lesson_hits,
            instructors=instructor_hits,
            total=len(course_hits) + len(lesson_hits) + len(instructor_hits),
            query=q,
        )

    async def suggestions(self, db: AsyncSession, q: str | None) -> list[Suggestion]:
        """자동완성 제안을 반환합니다.

        Autocomplete suggestions for ``q``: course titles, categories and
        tags starting with it (case-insensitive). Queries shorter than two
        characters yield nothing.
        """
        if not q or len(q) < SUGGESTION_MIN_LENGTH:
            return []

        titles = await search_repository.course_titles_with_prefix(db, q, SUGGESTION_COURSE_LIMIT)
        categories = await search_repository.categories_with_prefix(db, q, SUGGESTION_CATEGORY_LIMIT)

        # 태그는 JSON 목록이므로 후보 코스를 가져와 여기서 접두어를 비교
        # Tags live in a JSON list, so prefix matching happens here
        prefix: str = q.lower()
        tags: list[str] = []
        for tag_list in await search_repository.tag_lists_matching(db, q):
            for tag in tag_list or []:
                if tag.lower().startswith(prefix) and tag not in tags:
                    tags.append(tag)
        tags = sorted(tags)[:SUGGESTION_TAG_LIMIT]

        return (
            [Suggestion(value=title, type="course") for title in titles]
            + [Suggestion(value=category, type="category") for category in categories]
            + [Suggestion(value=tag, type="tag") for tag in tags]
        )


# 싱글턴 인스턴스 — Singleton instance
search_service: SearchService = SearchService()
