"""사용자 서비스 — 프로필, 내 학습 현황, 통계 비즈니스 로직.

User Service — Business logic for profiles, the current user's enrollments
and certificates, and learning statistics.
"""

from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from academy.config import settings
from academy.models.types import column_values
from academy.models.user import User
from academy.repositories.enrollment_repository import certificate_repository, enrollment_repository
from academy.repositories.progress_repository import progress_repository
from academy.repositories.user_repository import user_repository
from academy.schemas.course import CourseResponse
from academy.schemas.enrollment import CertificateResponse, MyEnrollmentResponse
from academy.schemas.user import (
    LearningStatsResponse,
    UserCreate,
    UserProfileResponse,
    UserResponse,
    UserStats,
    UserUpdate,
)
from academy.services.enrollment_service import enrollment_with_course
from academy.utils.exceptions import DuplicateError, NotFoundError
from academy.utils.logger import get_logger
from academy.utils.progress import STREAK_WINDOW_DAYS, activity_days, current_streak

logger = get_logger(__name__)

# 데모 사용자 기본 정보 — Profile of the auto-created demo user
DEMO_USER_EMAIL: str = "demo@example.com"
DEMO_USER_NAME: str = "Demo User"


class UserService:
    """사용자 관련 비즈니스 로직을 처리하는 서비스.

    Service handling user business logic.
    """

    async def get_me(self, db: AsyncSession, user_id: str) -> UserResponse:
        """현재 사용자를 조회합니다. 데모 사용자는 처음 접근 시 생성됩니다.

        Retrieve the current user. The demo user (``DEMO_USER_ID``) is
        created on first access; any other missing user is a 404.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            if user_id != settings.DEMO_USER_ID:
                raise NotFoundError("User not found")
            user = await user_repository.create(
                db,
                {
                    "id": user_id,
                    "email": DEMO_USER_EMAIL,
                    "name": DEMO_USER_NAME,
                    "role": "student",
                },
            )
            logger.info("Created demo user %s", user_id)
        return UserResponse.model_validate(user)

    async def update_me(self, db: AsyncSession, user_id: str, data: UserUpdate) -> UserResponse:
        """현재 사용자의 프로필을 수정합니다.

        Update the current user's name, bio and avatar.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        user: User | None = await user_repository.update(db, user_id, data.model_dump(exclude_unset=True))
        if user is None:
            raise NotFoundError("User not found")
        return UserResponse.model_validate(user)

    async def list_my_enrollments(self, db: AsyncSession, user_id: str) -> list[MyEnrollmentResponse]:
        """현재 사용자의 수강 목록을 최신순으로 조회합니다.

        The current user's enrollments (newest first) with their course,
        instructor name and number of completed lessons.
        """
        rows = await enrollment_repository.list_with_course(db, user_id, newest_first=True)
        results: list[MyEnrollmentResponse] = []
        for enrollment, course, name in rows:
            completed: int = await progress_repository.count_completed(db, enrollment.id)
            results.append(
                MyEnrollmentResponse.model_validate(
                    {**enrollment_with_course(enrollment, course, name), "completed_lessons": completed}
                )
            )
        return results

    async def list_my_certificates(self, db: AsyncSession, user_id: str) -> list[CertificateResponse]:
        """현재 사용자의 수료증을 코스와 함께 최신순으로 조회합니다.

        The current user's certificates with their course, newest first.
        """
        rows = await certificate_repository.list_with_course(db, user_id)
        return [
            CertificateResponse.model_validate(
                {**column_values(certificate), "course": CourseResponse.model_validate(course)}
            )
            for certificate, course in rows
        ]

    async def get_learning_stats(
        self,
        db: AsyncSession,
        user_id: str,
        today: datetime | None = None,
    ) -> LearningStatsResponse:
        """현재 사용자의 학습 통계를 계산합니다.

        Compute learning statistics: enrollment totals, time spent, completed
        lessons, and the current streak of consecutive active days (UTC)
        ending today.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID (User id)
            today: 기준 시각, 기본값 현재 UTC (Reference time, defaults to now in UTC)
        """
        total_enrollments: int = await user_repository.count_enrollments(db, user_id)
        completed_courses: int = await user_repository.count_enrollments(db, user_id, completed_only=True)
        total_time, lessons_completed = await user_repository.get_progress_totals(db, user_id)

        timestamps = await user_repository.get_activity_timestamps(db, user_id)
        days = activity_days(timestamps, limit=STREAK_WINDOW_DAYS)
        reference: datetime = today or datetime.now(timezone.utc)

        return LearningStatsResponse(
            total_enrollments=total_enrollments,
            completed_courses=completed_courses,
            total_time_spent=total_time,
            lessons_completed=lessons_completed,
            current_streak=current_streak(days, reference.date()),
            recent_activity=len(days),
        )

    async def get_profile(self, db: AsyncSession, user_id: str) -> UserProfileResponse:
        """공개 프로필을 집계 통계와 함께 조회합니다.

        Public profile with enrollment, completed course and certificate
        counts.

        Raises:
            NotFoundError: 사용자를 찾을 수 없을 때 (User not found)
        """
        user: User | None = await user_repository.get_by_id(db, user_id)
        if user is None:
            raise NotFoundError("User not found")

        stats = UserStats(
            enrollment_count=await user_repository.count_enrollments(db, user_id),
            completed_courses=await user_repository.count_enrollments(db, user_id, completed_only=True),
            certificate_count=await user_repository.count_certificates(db, user_id),
        )
        return UserProfileResponse.model_validate({**column_values(user), "stats": stats})

    async def create_user(self, db: AsyncSession, data: UserCreate) -> UserResponse:
        """새 사용자를 생성합니다.

        Create a user.

        Raises:
            DuplicateError: 같은 이메일의 사용자가 있을 때 (Email already registered)
        """
        if await user_repository.get_by_email(db, data.email) is not None:
            raise DuplicateError("A user with this email already exists")

        user: User = await user_repository.create(db, data.model_dump())
        logger.info("Created user %s (%s)", user.id, user.role)
        return UserResponse.model_validate(user)


# 싱글턴 인스턴스 — Singleton instance
user_service: UserService = UserService()
