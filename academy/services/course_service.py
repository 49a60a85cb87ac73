"""코스 서비스 — 코스/분류 조회 및 생성/수정 비즈니스 로직.

Course Service — Business logic for listing, reading, creating and
updating courses, and for listing browsing categories.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.course import Category, Course
from academy.models.lesson import Lesson
from academy.models.types import column_values
from academy.models.user import User
from academy.repositories.course_repository import category_repository, course_repository
from academy.repositories.lesson_repository import lesson_repository
from academy.repositories.user_repository import user_repository
from academy.schemas.course import (
    CategoryResponse,
    CourseCreate,
    CourseDetailResponse,
    CourseResponse,
    CourseSummary,
    CourseUpdate,
)
from academy.schemas.lesson import LessonResponse
from academy.utils.exceptions import DuplicateError, NotFoundError
from academy.utils.logger import get_logger
from academy.utils.slug import slugify

logger = get_logger(__name__)


def course_summary(course: Course, instructor_name: str | None) -> CourseSummary:
    """코스와 강사 이름으로 목록 항목을 만듭니다.

    Build a course card from a course row and its joined instructor name.
    Shared with the search service.
    """
    return CourseSummary.model_validate({**column_values(course), "instructor": instructor_name})


class CourseService:
    """코스 관련 비즈니스 로직을 처리하는 서비스.

    Service handling course business logic.
    """

    async def list_courses(
        self,
        db: AsyncSession,
        category: str | None = None,
        level: str | None = None,
        featured: bool = False,
    ) -> list[CourseSummary]:
        """코스 목록을 강사 이름과 함께 최신순으로 조회합니다.

        List courses with their instructor name, newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            category: 분류 필터 (Category filter)
            level: 난이도 필터 (Level filter)
            featured: 추천 코스만 조회 (Only featured courses)

        Returns:
            list[CourseSummary]: 코스 목록 (Course cards)
        """
        rows = await course_repository.list_with_instructor(
            db, category=category, level=level, featured_only=featured
        )
        return [course_summary(course, name) for course, name in rows]

    async def list_categories(self, db: AsyncSession) -> list[CategoryResponse]:
        """분류 목록을 정렬 순서대로 조회합니다 — Categories by display order, then name."""
        categories: list[Category] = await category_repository.list_ordered(db)
        return [CategoryResponse.model_validate(c) for c in categories]

    async def get_course(self, db: AsyncSession, course_id: str) -> CourseDetailResponse:
        """코스 상세 정보를 강사 프로필, 레슨과 함께 조회합니다.

        Retrieve a course with its instructor's name, bio and avatar and its
        lessons in order.

        Raises:
            NotFoundError: 코스를 찾을 수 없을 때 (Course not found)
        """
        row = await course_repository.get_with_instructor(db, course_id)
        if row is None:
            raise NotFoundError("Course not found")
        course, instructor = row

        lessons: list[Lesson] = await lesson_repository.list_by_course(db, course_id)
        data: dict[str, Any] = column_values(course)
        data.update(
            instructor=instructor.name if instructor else None,
            instructor_bio=instructor.bio if instructor else None,
            instructor_avatar=instructor.avatar_url if instructor else None,
            lessons=[LessonResponse.model_validate(lesson) for lesson in lessons],
        )
        return CourseDetailResponse.model_validate(data)

    async def create_course(self, db: AsyncSession, data: CourseCreate) -> CourseResponse:
        """새 코스를 생성합니다. 슬러그는 제목에서 만듭니다.

        Create a new course; the slug is derived from the title.

        Raises:
            NotFoundError: 강사를 찾을 수 없을 때 (Instructor not found)
            DuplicateError: 같은 슬러그의 코스가 있을 때 (Slug already taken)
        """
        instructor: User | None = await user_repository.get_by_id(db, data.instructor_id)
        if instructor is None:
            raise NotFoundError("Instructor not found")

        slug: str = slugify(data.title)
        if await course_repository.get_by_slug(db, slug) is not None:
            raise DuplicateError("A course with this title already exists")

        course: Course = await course_repository.create(
            db,
            {**data.model_dump(), "slug": slug},
        )
        logger.info("Created course %s (%s)", course.id, slug)
        return CourseResponse.model_validate(course)

    async def update_course(
        self,
        db: AsyncSession,
        course_id: str,
        data: CourseUpdate,
    ) -> CourseResponse:
        """코스를 부분 업데이트합니다 — Partially update a course.

        Raises:
            NotFoundError: 코스를 찾을 수 없을 때 (Course not found)
        """
        course: Course | None = await course_repository.update(
            db, course_id, data.model_dump(exclude_unset=True)
        )
        if course is None:
            raise NotFoundError("Course not found")
        return CourseResponse.model_validate(course)


# 싱글턴 인스턴스 — Singleton instance
course_service: CourseService = CourseService()
