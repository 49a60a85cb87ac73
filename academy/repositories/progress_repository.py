"""레슨 진도 레포지토리 — 레슨 완료 기록 쿼리.

Lesson Progress Repository — Queries over per-lesson completion records.
"""

from sqlalchemy import Select, and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.lesson import Lesson, LessonProgress
from academy.repositories.base import BaseRepository


class ProgressRepository(BaseRepository[LessonProgress]):
    """lesson_progress 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the lesson_progress table.
    """

    def __init__(self) -> None:
        super().__init__(LessonProgress)

    async def get_by_user_lesson(
        self,
        db: AsyncSession,
        user_id: str,
        lesson_id: str,
    ) -> LessonProgress | None:
        """사용자+레슨 진도 기록을 조회합니다 — Progress record of a user on a lesson."""
        query: Select = (
            select(LessonProgress)
            .where(LessonProgress.user_id == user_id, LessonProgress.lesson_id == lesson_id)
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def count_completed(self, db: AsyncSession, enrollment_id: str) -> int:
        """수강 등록의 완료 레슨 수 — Completed lessons of an enrollment."""
        query: Select = select(func.count(LessonProgress.id)).where(
            LessonProgress.enrollment_id == enrollment_id,
            LessonProgress.completed_at.is_not(None),
        )
        return (await db.execute(query)).scalar() or 0

    async def list_course_lessons_with_progress(
        self,
        db: AsyncSession,
        enrollment_id: str,
        course_id: str,
    ) -> list[tuple[Lesson, LessonProgress | None]]:
        """코스의 모든 레슨을 해당 수강 등록의 진도와 함께 조회합니다.

        Every lesson of the course (ordered) LEFT JOINed with this
        enrollment's progress record, if any.
        """
        query: Select = (
            select(Lesson, LessonProgress)
            .outerjoin(
                LessonProgress,
                and_(
                    LessonProgress.lesson_id == Lesson.id,
                    LessonProgress.enrollment_id == enrollment_id,
                ),
            )
            .where(Lesson.course_id == course_id)
            .order_by(Lesson.order)
        )
        result = await db.execute(query)
        return [(lesson, progress) for lesson, progress in result.all()]

    async def delete_by_lesson(self, db: AsyncSession, lesson_id: str) -> None:
        """레슨의 진도 기록을 모두 삭제합니다 — Delete all progress rows of a lesson."""
        await db.execute(delete(LessonProgress).where(LessonProgress.lesson_id == lesson_id))

    async def delete_by_enrollment(self, db: AsyncSession, enrollment_id: str) -> None:
        """수강 등록의 진도 기록을 모두 삭제합니다 — Delete all progress rows of an enrollment."""
        await db.execute(delete(LessonProgress).where(LessonProgress.enrollment_id == enrollment_id))


# 싱글턴 인스턴스 — Singleton instance
progress_repository: ProgressRepository = ProgressRepository()
