"""검색 관련 Pydantic 응답 스키마 정의.

Search Pydantic response schema definitions for course search, lesson search,
global search and autocomplete suggestions.
"""

from decimal import Decimal

from academy.schemas.common import CamelModel
from academy.schemas.course import CourseSummary
from academy.schemas.lesson import LessonResponse


class CourseSearchFilters(CamelModel):
    """코스 검색에 적용된 필터 — Echo of the filters applied to a course search."""

    category: str | None = None
    level: str | None = None
    min_rating: float | None = None
    max_price: float | None = None
    instructor: str | None = None
    tags: str | None = None


class CourseSearchResponse(CamelModel):
    """코스 검색 응답 스키마."""

    results: list[CourseSummary]
    total: int
    query: str
    filters: CourseSearchFilters


class LessonSearchResult(LessonResponse):
    """레슨 검색 결과 — Lesson row with its course title and slug."""

    course_name: str
    course_slug: str


class LessonSearchFilters(CamelModel):
    """레슨 검색에 적용된 필터."""

    course_id: str | None = None
    type: str | None = None


class LessonSearchResponse(CamelModel):
    """레슨 검색 응답 스키마."""

    results: list[LessonSearchResult]
    total: int
    query: str
    filters: LessonSearchFilters


class CourseHit(CamelModel):
    """통합 검색 코스 결과 — Course hit in the global search."""

    id: str
    title: str
    slug: str
    description: str
    thumbnail: str | None = None
    category: str
    rating: Decimal | None = None
    type: str = "course"


class LessonHit(CamelModel):
    """통합 검색 레슨 결과 — Lesson hit in the global search."""

    id: str
    title: str
    description: str | None = None
    course_id: str
    type: str = "lesson"


class InstructorHit(CamelModel):
    """통합 검색 강사 결과 — Instructor hit in the global search."""

    id: str
    name: str
    bio: str | None = None
    avatar_url: str | None = None
    type: str = "instructor"


class GlobalSearchResponse(CamelModel):
    """통합 검색 응답 스키마 — Courses, lessons and instructors matching ``q``."""

    courses: list[CourseHit] = []
    lessons: list[LessonHit] = []
    instructors: list[InstructorHit] = []
    total: int = 0
    query: str = ""


class Suggestion(CamelModel):
    """자동완성 제안 — Autocomplete suggestion (course / category / tag)."""

    value: str
    type: str
