"""레슨 레포지토리 — 레슨 CRUD 및 코스 내 정렬 쿼리.

Lesson Repository — CRUD and ordering queries for lessons within a course.
"""

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.lesson import Lesson
from academy.repositories.base import BaseRepository


class LessonRepository(BaseRepository[Lesson]):
    """레슨 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the lessons table.
    """

    def __init__(self) -> None:
        super().__init__(Lesson)

    async def list_by_course(self, db: AsyncSession, course_id: str) -> list[Lesson]:
        """코스의 레슨을 순서대로 조회합니다 — Lessons of a course ordered by ``order``."""
        query: Select = select(Lesson).where(Lesson.course_id == course_id).order_by(Lesson.order)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_max_order(self, db: AsyncSession, course_id: str) -> int:
        """코스 내 최대 순서 값을 조회합니다. 레슨이 없으면 0.

        Return the highest ``order`` in the course, or 0 when it has no lessons.
        """
        query: Select = select(func.max(Lesson.order)).where(Lesson.course_id == course_id)
        return (await db.execute(query)).scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
lesson_repository: LessonRepository = LessonRepository()
