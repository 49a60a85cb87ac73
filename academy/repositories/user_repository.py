"""사용자 레포지토리 — 사용자 CRUD 및 학습 통계 쿼리.

User Repository — CRUD and aggregate statistics queries for users.
"""

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.enrollment import Certificate, Enrollment
from academy.models.lesson import LessonProgress
from academy.models.user import User
from academy.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table, plus the
    counting queries behind profile and learning statistics.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_email(self, db: AsyncSession, email: str) -> User | None:
        """이메일로 사용자를 조회합니다 — Retrieve a user by email."""
        result = await db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def count_enrollments(
        self,
        db: AsyncSession,
        user_id: str,
        completed_only: bool = False,
    ) -> int:
        """사용자의 수강 등록 수를 셉니다.

        Count a user's enrollments; with ``completed_only`` only those that
        have ``completed_at`` set.
        """
        query: Select = select(func.count(Enrollment.id)).where(Enrollment.user_id == user_id)
        if completed_only:
            query = query.where(Enrollment.completed_at.is_not(None))
        return (await db.execute(query)).scalar() or 0

    async def count_certificates(self, db: AsyncSession, user_id: str) -> int:
        """사용자의 수료증 수를 셉니다 — Count a user's certificates."""
        query: Select = select(func.count(Certificate.id)).where(Certificate.user_id == user_id)
        return (await db.execute(query)).scalar() or 0

    async def get_progress_totals(self, db: AsyncSession, user_id: str) -> tuple[int, int]:
        """사용자의 총 학습 시간과 완료 레슨 수를 조회합니다.

        Sum time spent and count completed lesson progress records belonging
        to the user's own enrollments.

        Returns:
            tuple[int, int]: (총 학습 시간(초), 완료 레슨 수)
                             (Total seconds spent, completed lesson count)
        """
        query: Select = (
            select(
                func.coalesce(func.sum(LessonProgress.time_spent), 0),
                func.count(LessonProgress.completed_at),
            )
            .join(Enrollment, LessonProgress.enrollment_id == Enrollment.id)
            .where(Enrollment.user_id == user_id, LessonProgress.user_id == user_id)
        )
        total_time, completed = (await db.execute(query)).one()
        return int(total_time or 0), int(completed or 0)

    async def get_activity_timestamps(self, db: AsyncSession, user_id: str) -> Sequence[datetime]:
        """사용자의 레슨 진도 갱신 시각 목록을 최신순으로 조회합니다.

        Retrieve ``lesson_progress.updated_at`` of the user, newest first.
        """
        query: Select = (
            select(LessonProgress.updated_at)
            .where(LessonProgress.user_id == user_id)
            .order_by(LessonProgress.updated_at.desc())
        )
        return (await db.execute(query)).scalars().all()


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
