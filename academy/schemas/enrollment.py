"""수강 등록 관련 Pydantic 요청/응답 스키마 정의.

Enrollment Pydantic request/response schema definitions: enrollment rows,
enrollments joined with their course, detailed progress breakdowns, and
certificates.
"""

from datetime import datetime

from pydantic import Field

from academy.schemas.common import CamelModel
from academy.schemas.course import CourseResponse, CourseWithInstructor
from academy.schemas.lesson import LessonResponse


class EnrollmentCreate(CamelModel):
    """수강 등록 요청 스키마 — Enroll ``user_id`` in ``course_id``."""

    user_id: str
    course_id: str


class EnrollmentUpdate(CamelModel):
    """수강 등록 수정 요청 스키마 (부분 업데이트).

    Attributes:
        progress: 진도율 0-100 (Progress percentage)
        completed_at: 수료 일시 (Completion time)
    """

    progress: int | None = Field(None, ge=0, le=100)
    completed_at: datetime | None = None


class EnrollmentResponse(CamelModel):
    """수강 등록 응답 스키마 — Full enrollment row."""

    id: str
    user_id: str
    course_id: str
    enrolled_at: datetime
    completed_at: datetime | None = None
    last_accessed_at: datetime | None = None
    progress: int = 0
    certificate_id: str | None = None


class EnrollmentWithCourse(EnrollmentResponse):
    """코스 정보를 포함한 수강 등록 — Enrollment with its course and instructor name."""

    course: CourseWithInstructor


class MyEnrollmentResponse(EnrollmentWithCourse):
    """내 수강 목록 항목 — Adds the number of completed lessons."""

    completed_lessons: int = 0


class EnrollmentDetailResponse(EnrollmentResponse):
    """수강 등록 상세 응답 스키마.

    Enrollment with its course, ordered lessons, the ids of completed lessons
    and a freshly recomputed progress percentage.
    """

    course: CourseResponse
    lessons: list[LessonResponse] = []
    completed_lessons: list[str] = []


class LessonProgressItem(LessonResponse):
    """레슨별 진도 항목 — Lesson row with this enrollment's progress on it."""

    completed: bool = False
    completed_at: datetime | None = None
    time_spent: int = 0
    last_position: int = 0


class EnrollmentProgressResponse(CamelModel):
    """수강 진도 상세 응답 스키마.

    Attributes:
        total_lessons: 전체 레슨 수 (Lessons in the course)
        completed_lessons: 완료 레슨 수 (Completed lessons)
        progress_percentage: 진도율 (round(100 * completed / total), 0 if no lessons)
        total_time_spent: 총 학습 시간(초) (Seconds spent across lessons)
        lessons: 레슨별 진도 (Per-lesson progress, ordered)
    """

    enrollment_id: str
    course_id: str
    total_lessons: int
    completed_lessons: int
    progress_percentage: int
    total_time_spent: int
    lessons: list[LessonProgressItem] = []


class CertificateResponse(CamelModel):
    """수료증 응답 스키마 — Certificate row with its course."""

    id: str
    user_id: str
    course_id: str
    enrollment_id: str
    certificate_url: str | None = None
    issued_at: datetime
    expires_at: datetime | None = None
    course: CourseResponse
