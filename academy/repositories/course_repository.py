"""코스 레포지토리 — 코스/분류 CRUD 및 강사 조인 쿼리.

Course Repository — CRUD for courses and categories, instructor joins, and
the atomic enrollment counter update.
"""

from sqlalchemy import Select, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.course import Category, Course
from academy.models.user import User
from academy.repositories.base import BaseRepository


class CourseRepository(BaseRepository[Course]):
    """코스 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the courses table.
    """

    def __init__(self) -> None:
        super().__init__(Course)

    async def list_with_instructor(
        self,
        db: AsyncSession,
        category: str | None = None,
        level: str | None = None,
        featured_only: bool = False,
    ) -> list[tuple[Course, str | None]]:
        """필터에 맞는 코스를 강사 이름과 함께 최신순으로 조회합니다.

        Retrieve courses matching the filters with the instructor name
        (LEFT JOIN users), newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            category: 분류 이름 필터 (Exact category filter)
            level: 난이도 필터 (Exact level filter)
            featured_only: 추천 코스만 (Only featured courses)

        Returns:
            list[tuple[Course, str | None]]: (코스, 강사 이름) 목록
        """
        query: Select = select(Course, User.name).outerjoin(User, Course.instructor_id == User.id)
        if category:
            query = query.where(Course.category == category)
        if level:
            query = query.where(Course.level == level)
        if featured_only:
            query = query.where(Course.is_featured.is_(True))
        query = query.order_by(Course.created_at.desc())

        result = await db.execute(query)
        return [(course, name) for course, name in result.all()]

    async def get_with_instructor(
        self,
        db: AsyncSession,
        course_id: str,
    ) -> tuple[Course, User | None] | None:
        """코스와 강사를 함께 조회합니다 — Course with its instructor row, or None."""
        query: Select = (
            select(Course, User)
            .outerjoin(User, Course.instructor_id == User.id)
            .where(Course.id == course_id)
        )
        row = (await db.execute(query)).first()
        if row is None:
            return None
        return row[0], row[1]

    async def get_by_slug(self, db: AsyncSession, slug: str) -> Course | None:
        """슬러그로 코스를 조회합니다 — Retrieve a course by slug."""
        result = await db.execute(select(Course).where(Course.slug == slug))
        return result.scalar_one_or_none()

    async def change_enrollment_count(
        self,
        db: AsyncSession,
        course_id: str,
        delta: int,
    ) -> None:
        """수강생 수를 원자적으로 증감합니다.

        Atomically add ``delta`` to ``enrollment_count`` with a single UPDATE
        (``enrollment_count = enrollment_count + delta``). Runs inside the
        caller's transaction.
        """
        await db.execute(
            update(Course)
            .where(Course.id == course_id)
            .values(enrollment_count=Course.enrollment_count + delta)
        )
        await db.flush()


class CategoryRepository(BaseRepository[Category]):
    """분류 테이블 레포지토리 — Repository for the categories table."""

    def __init__(self) -> None:
        super().__init__(Category)

    async def list_ordered(self, db: AsyncSession) -> list[Category]:
        """정렬 순서, 이름 순으로 분류를 조회합니다 — Categories by order, then name."""
        result = await self.get_all(db, order_by=(Category.order, Category.name))
        return list(result)


# 싱글턴 인스턴스 — Singleton instances
course_repository: CourseRepository = CourseRepository()
category_repository: CategoryRepository = CategoryRepository()
