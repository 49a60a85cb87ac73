"""수강 등록 레포지토리 — 수강 등록/수료증 CRUD 및 코스 조인 쿼리.

Enrollment Repository — CRUD for enrollments and certificates, plus the
enrollment/course/instructor join used by enrollment listings.
"""

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.course import Course
from academy.models.enrollment import Certificate, Enrollment
from academy.models.user import User
from academy.repositories.base import BaseRepository


class EnrollmentRepository(BaseRepository[Enrollment]):
    """수강 등록 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the enrollments table.
    """

    def __init__(self) -> None:
        super().__init__(Enrollment)

    async def get_by_user_course(
        self,
        db: AsyncSession,
        user_id: str,
        course_id: str,
    ) -> Enrollment | None:
        """사용자+코스 수강 등록을 조회합니다 — Enrollment of a user in a course."""
        query: Select = (
            select(Enrollment)
            .where(Enrollment.user_id == user_id, Enrollment.course_id == course_id)
            .limit(1)
        )
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def list_with_course(
        self,
        db: AsyncSession,
        user_id: str,
        newest_first: bool = False,
    ) -> list[tuple[Enrollment, Course, str]]:
        """사용자의 수강 등록을 코스, 강사 이름과 함께 조회합니다.

        Retrieve a user's enrollments joined with their course and the course
        instructor's name, ordered by ``enrolled_at``.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            user_id: 사용자 ID (User id)
            newest_first: 최신순 정렬 여부 (Order newest first instead of oldest first)

        Returns:
            list[tuple[Enrollment, Course, str]]: (수강 등록, 코스, 강사 이름) 목록
        """
        order = Enrollment.enrolled_at.desc() if newest_first else Enrollment.enrolled_at
        query: Select = (
            select(Enrollment, Course, User.name)
            .join(Course, Enrollment.course_id == Course.id)
            .join(User, Course.instructor_id == User.id)
            .where(Enrollment.user_id == user_id)
            .order_by(order)
        )
        result = await db.execute(query)
        return [(enrollment, course, name) for enrollment, course, name in result.all()]


class CertificateRepository(BaseRepository[Certificate]):
    """수료증 테이블 레포지토리 — Repository for the certificates table."""

    def __init__(self) -> None:
        super().__init__(Certificate)

    async def list_with_course(
        self,
        db: AsyncSession,
        user_id: str,
    ) -> list[tuple[Certificate, Course]]:
        """사용자의 수료증을 코스와 함께 최신순으로 조회합니다.

        Certificates of a user joined with their course, newest first.
        """
        query: Select = (
            select(Certificate, Course)
            .join(Course, Certificate.course_id == Course.id)
            .where(Certificate.user_id == user_id)
            .order_by(Certificate.issued_at.desc())
        )
        result = await db.execute(query)
        return [(certificate, course) for certificate, course in result.all()]

    async def delete_by_enrollment(self, db: AsyncSession, enrollment_id: str) -> None:
        """수강 등록의 수료증을 삭제합니다 — Delete certificates of an enrollment."""
        await db.execute(delete(Certificate).where(Certificate.enrollment_id == enrollment_id))


# 싱글턴 인스턴스 — Singleton instances
enrollment_repository: EnrollmentRepository = EnrollmentRepository()
certificate_repository: CertificateRepository = CertificateRepository()
