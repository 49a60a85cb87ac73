"""레슨 서비스 — 레슨 CRUD 및 레슨 완료 처리 비즈니스 로직.

Lesson Service — Business logic for lesson CRUD and for marking a lesson
complete, which also refreshes the owning enrollment's progress.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.course import Course
from academy.models.enrollment import Enrollment
from academy.models.lesson import Lesson, LessonProgress
from academy.models.types import utcnow
from academy.repositories.course_repository import course_repository
from academy.repositories.enrollment_repository import enrollment_repository
from academy.repositories.lesson_repository import lesson_repository
from academy.repositories.progress_repository import progress_repository
from academy.schemas.common import DeleteResponse
from academy.schemas.lesson import (
    LessonCreate,
    LessonProgressResponse,
    LessonResponse,
    LessonUpdate,
)
from academy.services.enrollment_service import enrollment_service
from academy.utils.exceptions import BadRequestError, NotFoundError
from academy.utils.logger import get_logger
from academy.utils.slug import slugify

logger = get_logger(__name__)


class LessonService:
    """레슨 관련 비즈니스 로직을 처리하는 서비스.

    Service handling lesson business logic.
    """

    async def list_course_lessons(self, db: AsyncSession, course_id: str) -> list[LessonResponse]:
        """코스의 레슨을 순서대로 조회합니다 — Lessons of a course in order."""
        lessons: list[Lesson] = await lesson_repository.list_by_course(db, course_id)
        return [LessonResponse.model_validate(lesson) for lesson in lessons]

    async def get_lesson(self, db: AsyncSession, lesson_id: str) -> LessonResponse:
        """레슨을 조회합니다.

        Raises:
            NotFoundError: 레슨을 찾을 수 없을 때 (Lesson not found)
        """
        lesson: Lesson | None = await lesson_repository.get_by_id(db, lesson_id)
        if lesson is None:
            raise NotFoundError("Lesson not found")
        return LessonResponse.model_validate(lesson)

    async def create_lesson(self, db: AsyncSession, data: LessonCreate) -> LessonResponse:
        """코스 끝에 새 레슨을 추가합니다.

        Append a new lesson to a course: its ``order`` is the current highest
        order in the course plus one, and its slug comes from the title.

        Raises:
            NotFoundError: 코스를 찾을 수 없을 때 (Course not found)
        """
        course: Course | None = await course_repository.get_by_id(db, data.course_id)
        if course is None:
            raise NotFoundError("Course not found")

        next_order: int = await lesson_repository.get_max_order(db, data.course_id) + 1
        lesson: Lesson = await lesson_repository.create(
            db,
            {**data.model_dump(), "slug": slugify(data.title), "order": next_order},
        )
        return LessonResponse.model_validate(lesson)

    async def update_lesson(
        self,
        db: AsyncSession,
        lesson_id: str,
        data: LessonUpdate,
    ) -> LessonResponse:
        """레슨을 부분 업데이트합니다. 제목이 바뀌면 슬러그도 갱신합니다.

        Partially update a lesson; a new title also regenerates the slug.

        Raises:
            NotFoundError: 레슨을 찾을 수 없을 때 (Lesson not found)
        """
        update_data: dict = data.model_dump(exclude_unset=True)
        if update_data.get("title"):
            update_data["slug"] = slugify(update_data["title"])

        lesson: Lesson | None = await lesson_repository.update(db, lesson_id, update_data)
        if lesson is None:
            raise NotFoundError("Lesson not found")
        return LessonResponse.model_validate(lesson)

    async def delete_lesson(self, db: AsyncSession, lesson_id: str) -> DeleteResponse:
        """레슨과 그 진도 기록을 삭제합니다.

        Delete a lesson together with every progress record pointing at it.

        Raises:
            NotFoundError: 레슨을 찾을 수 없을 때 (Lesson not found)
        """
        lesson: Lesson | None = await lesson_repository.get_by_id(db, lesson_id)
        if lesson is None:
            raise NotFoundError("Lesson not found")

        await progress_repository.delete_by_lesson(db, lesson_id)
        await lesson_repository.delete(db, lesson_id)
        logger.info("Deleted lesson %s", lesson_id)
        return DeleteResponse(deleted_id=lesson_id)

    async def complete_lesson(
        self,
        db: AsyncSession,
        lesson_id: str,
        user_id: str,
        enrollment_id: str,
    ) -> LessonProgressResponse:
        """레슨을 완료 처리합니다.

        Mark a lesson complete for a user:

        1. 이미 완료된 기록이 있으면 그대로 반환 (An already-completed record is returned unchanged)
        2. 미완료 기록이 있으면 완료 시각만 설정 (An open record gets ``completed_at``)
        3. 기록이 없으면 완료 상태로 새로 생성 (Otherwise a completed record is inserted)

        In cases 2 and 3 the enrollment's progress is recomputed in the same
        transaction (see ``EnrollmentService.refresh_progress``).

        Raises:
            NotFoundError: 레슨 또는 수강 등록을 찾을 수 없을 때
                           (Lesson or enrollment not found)
            BadRequestError: 수강 등록이 다른 사용자 또는 다른 코스의 것일 때
                             (Enrollment belongs to another user or course)
        """
        existing: LessonProgress | None = await progress_repository.get_by_user_lesson(
            db, user_id, lesson_id
        )
        if existing is not None and existing.completed_at is not None:
            return LessonProgressResponse.model_validate(existing)

        lesson: Lesson | None = await lesson_repository.get_by_id(db, lesson_id)
        if lesson is None:
            raise NotFoundError("Lesson not found")
        enrollment: Enrollment | None = await enrollment_repository.get_by_id(db, enrollment_id)
        if enrollment is None:
            raise NotFoundError("Enrollment not found")
        # 진도 기록은 (사용자, 레슨) 단위이므로 다른 수강 등록에 묶이면 안 됨
        if enrollment.user_id != user_id:
            raise BadRequestError("Enrollment does not belong to this user")
        if lesson.course_id != enrollment.course_id:
            raise BadRequestError("Lesson does not belong to the enrolled course")

        if existing is not None:
            existing.completed_at = utcnow()
            await db.flush()
            await db.refresh(existing)
            progress: LessonProgress = existing
        else:
            progress = await progress_repository.create(
                db,
                {
                    "user_id": user_id,
                    "lesson_id": lesson_id,
                    "enrollment_id": enrollment_id,
                    "completed_at": utcnow(),
                },
            )

        await enrollment_service.refresh_progress(db, enrollment)
        return LessonProgressResponse.model_validate(progress)


# 싱글턴 인스턴스 — Singleton instance
lesson_service: LessonService = LessonService()
