"""수강 등록 서비스 — 수강 등록/해제, 진도 계산, 수료증 발급 비즈니스 로직.

Enrollment Service — Business logic for enrolling and unenrolling, progress
recomputation and certificate issuance.

Enrollment rows and the denormalized ``courses.enrollment_count`` counter are
always changed in the same session, so the caller's single commit (or the
rollback on error) keeps them in step.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.course import Course
from academy.models.enrollment import Certificate, Enrollment
from academy.models.lesson import Lesson, LessonProgress
from academy.models.types import column_values, utcnow
from academy.models.user import User
from academy.repositories.course_repository import course_repository
from academy.repositories.enrollment_repository import certificate_repository, enrollment_repository
from academy.repositories.progress_repository import progress_repository
from academy.repositories.user_repository import user_repository
from academy.schemas.common import DeleteResponse
from academy.schemas.course import CourseResponse
from academy.schemas.enrollment import (
    EnrollmentCreate,
    EnrollmentDetailResponse,
    EnrollmentProgressResponse,
    EnrollmentResponse,
    EnrollmentUpdate,
    EnrollmentWithCourse,
    LessonProgressItem,
)
from academy.schemas.lesson import LessonResponse
from academy.utils.exceptions import NotFoundError
from academy.utils.logger import get_logger
from academy.utils.progress import progress_percentage

logger = get_logger(__name__)


def enrollment_with_course(
    enrollment: Enrollment,
    course: Course,
    instructor_name: str | None,
) -> dict[str, Any]:
    """수강 등록과 코스(강사 이름 포함)를 응답용 딕셔너리로 합칩니다.

    Merge an enrollment row with its course (plus instructor name) into a
    dict ready for ``EnrollmentWithCourse``-shaped schemas.
    """
    return {
        **column_values(enrollment),
        "course": {**column_values(course), "instructor": instructor_name},
    }


class EnrollmentService:
    """수강 등록 관련 비즈니스 로직을 처리하는 서비스.

    Service handling enrollment business logic.
    """

    async def enroll(
        self,
        db: AsyncSession,
        data: EnrollmentCreate,
    ) -> tuple[EnrollmentResponse, bool]:
        """사용자를 코스에 등록합니다.

        Enroll a user in a course. An existing enrollment for the pair is
        returned as is. Otherwise the user and course must exist, and the
        enrollment insert and the course counter increment happen in the
        caller's transaction.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            data: 수강 등록 요청 (User and course ids)

        Returns:
            tuple[EnrollmentResponse, bool]: (수강 등록, 새로 생성 여부)
                                             (Enrollment, whether it was created)

        Raises:
            NotFoundError: 사용자 또는 코스를 찾을 수 없을 때 (User or course not found)
            IntegrityError: 고유 제약 위반 후에도 기존 등록이 없을 때 (Unique violation with no existing row)
        """
        existing: Enrollment | None = await enrollment_repository.get_by_user_course(
            db, data.user_id, data.course_id
        )
        if existing is not None:
            return EnrollmentResponse.model_validate(existing), False

        user: User | None = await user_repository.get_by_id(db, data.user_id)
        if user is None:
            raise NotFoundError("User not found")
        course: Course | None = await course_repository.get_by_id(db, data.course_id)
        if course is None:
            raise NotFoundError("Course not found")

        # 동시 요청이 먼저 등록한 경우 SAVEPOINT만 롤백하고 기존 등록을 반환
        # A concurrent request won the unique (user, course) race
        try:
            async with db.begin_nested():
                enrollment: Enrollment = await enrollment_repository.create(
                    db,
                    {"user_id": data.user_id, "course_id": data.course_id, "progress": 0},
                )
        except IntegrityError:
            existing = await enrollment_repository.get_by_user_course(db, data.user_id, data.course_id)
            if existing is None:
                raise
            logger.info("User %s was already enrolled in course %s", data.user_id, data.course_id)
            return EnrollmentResponse.model_validate(existing), False

        await course_repository.change_enrollment_count(db, data.course_id, 1)
        logger.info("User %s enrolled in course %s", data.user_id, data.course_id)
        return EnrollmentResponse.model_validate(enrollment), True

    async def list_user_enrollments(self, db: AsyncSession, user_id: str) -> list[EnrollmentWithCourse]:
        """사용자의 수강 등록을 코스와 함께 오래된 순으로 조회합니다.

        List a user's enrollments with their course and instructor name,
        oldest first.
        """
        rows = await enrollment_repository.list_with_course(db, user_id)
        return [
            EnrollmentWithCourse.model_validate(enrollment_with_course(enrollment, course, name))
            for enrollment, course, name in rows
        ]

    async def _get_or_404(self, db: AsyncSession, enrollment_id: str) -> Enrollment:
        enrollment: Enrollment | None = await enrollment_repository.get_by_id(db, enrollment_id)
        if enrollment is None:
            raise NotFoundError("Enrollment not found")
        return enrollment

    async def get_enrollment(self, db: AsyncSession, enrollment_id: str) -> EnrollmentDetailResponse:
        """수강 등록 상세 정보를 조회하고 진도율을 다시 계산합니다.

        Retrieve an enrollment with its course, ordered lessons and the ids
        of completed lessons. The progress percentage is recomputed and
        stored when it differs from the saved value.

        Raises:
            NotFoundError: 수강 등록을 찾을 수 없을 때 (Enrollment not found)
        """
        enrollment: Enrollment = await self._get_or_404(db, enrollment_id)
        course: Course | None = await course_repository.get_by_id(db, enrollment.course_id)
        if course is None:
            raise NotFoundError("Course not found")

        rows = await progress_repository.list_course_lessons_with_progress(db, enrollment.id, course.id)
        completed_ids: list[str] = [
            lesson.id
            for lesson, progress in rows
            if progress is not None and progress.completed_at is not None
        ]
        percentage: int = progress_percentage(len(completed_ids), len(rows))
        if percentage != enrollment.progress:
            enrollment.progress = percentage
            await db.flush()
            await db.refresh(enrollment)

        return EnrollmentDetailResponse.model_validate(
            {
                **column_values(enrollment),
                "course": CourseResponse.model_validate(course),
                "lessons": [LessonResponse.model_validate(lesson) for lesson, _ in rows],
                "completed_lessons": completed_ids,
            }
        )

    async def update_enrollment(
        self,
        db: AsyncSession,
        enrollment_id: str,
        data: EnrollmentUpdate,
    ) -> EnrollmentResponse:
        """수강 등록의 진도율/수료 일시를 수정하고 마지막 접근 시각을 갱신합니다.

        Update progress and/or completion time and stamp ``last_accessed_at``.

        Raises:
            NotFoundError: 수강 등록을 찾을 수 없을 때 (Enrollment not found)
        """
        update_data: dict[str, Any] = data.model_dump(exclude_unset=True)
        update_data["last_accessed_at"] = utcnow()

        enrollment: Enrollment | None = await enrollment_repository.update(db, enrollment_id, update_data)
        if enrollment is None:
            raise NotFoundError("Enrollment not found")
        return EnrollmentResponse.model_validate(enrollment)

    async def get_progress(self, db: AsyncSession, enrollment_id: str) -> EnrollmentProgressResponse:
        """레슨별 진도 상세를 조회합니다.

        Per-lesson progress of an enrollment: every lesson of the course in
        order with its completion state, time spent and last position.

        Raises:
            NotFoundError: 수강 등록을 찾을 수 없을 때 (Enrollment not found)
        """
        enrollment: Enrollment = await self._get_or_404(db, enrollment_id)
        rows = await progress_repository.list_course_lessons_with_progress(
            db, enrollment.id, enrollment.course_id
        )

        items: list[LessonProgressItem] = []
        for lesson, progress in rows:
            items.append(
                LessonProgressItem.model_validate(
                    {
                        **column_values(lesson),
                        "completed": progress is not None and progress.completed_at is not None,
                        "completed_at": progress.completed_at if progress else None,
                        "time_spent": (progress.time_spent or 0) if progress else 0,
                        "last_position": (progress.last_position or 0) if progress else 0,
                    }
                )
            )

        completed: int = sum(1 for item in items if item.completed)
        return EnrollmentProgressResponse(
            enrollment_id=enrollment.id,
            course_id=enrollment.course_id,
            total_lessons=len(items),
            completed_lessons=completed,
            progress_percentage=progress_percentage(completed, len(items)),
            total_time_spent=sum(item.time_spent for item in items),
            lessons=items,
        )

    async def delete_enrollment(self, db: AsyncSession, enrollment_id: str) -> DeleteResponse:
        """수강 등록을 해제합니다.

        Delete an enrollment with its progress records and certificates, and
        decrement the course's enrollment counter by one, all in the caller's
        transaction.

        Raises:
            NotFoundError: 수강 등록을 찾을 수 없을 때 (Enrollment not found)
        """
        enrollment: Enrollment = await self._get_or_404(db, enrollment_id)
        course_id: str = enrollment.course_id

        await progress_repository.delete_by_enrollment(db, enrollment_id)
        await certificate_repository.delete_by_enrollment(db, enrollment_id)
        await enrollment_repository.delete(db, enrollment_id)
        await course_repository.change_enrollment_count(db, course_id, -1)
        logger.info("Deleted enrollment %s (course %s)", enrollment_id, course_id)
        return DeleteResponse(deleted_id=enrollment_id)

    async def refresh_progress(self, db: AsyncSession, enrollment: Enrollment) -> int:
        """레슨 완료 후 수강 등록의 진도율을 갱신합니다.

        Recompute the enrollment's progress from its completed lessons and
        stamp ``last_accessed_at``. The first time progress reaches 100 the
        enrollment is marked completed and a certificate is issued and linked.

        Returns:
            int: 갱신된 진도율 (Updated progress percentage)
        """
        rows: list[tuple[Lesson, LessonProgress | None]] = (
            await progress_repository.list_course_lessons_with_progress(
                db, enrollment.id, enrollment.course_id
            )
        )
        completed: int = sum(
            1 for _, progress in rows if progress is not None and progress.completed_at is not None
        )
        percentage: int = progress_percentage(completed, len(rows))

        now = utcnow()
        enrollment.progress = percentage
        enrollment.last_accessed_at = now
        if percentage == 100 and enrollment.completed_at is None:
            enrollment.completed_at = now
            certificate: Certificate = await certificate_repository.create(
                db,
                {
                    "user_id": enrollment.user_id,
                    "course_id": enrollment.course_id,
                    "enrollment_id": enrollment.id,
                    "issued_at": now,
                },
            )
            enrollment.certificate_id = certificate.id
            logger.info("Issued certificate %s for enrollment %s", certificate.id, enrollment.id)

        await db.flush()
        return percentage


# 싱글턴 인스턴스 — Singleton instance
enrollment_service: EnrollmentService = EnrollmentService()
