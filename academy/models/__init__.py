"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    user: 사용자 (Users: students, instructors, admins)
    course: 코스, 분류, 리뷰 (Courses, categories, reviews)
    lesson: 레슨, 레슨 진도 (Lessons and per-lesson progress)
    enrollment: 수강 등록, 수료증 (Enrollments and certificates)
"""

from academy.models.user import User
from academy.models.course import Course, Category, Review
from academy.models.lesson import Lesson, LessonProgress
from academy.models.enrollment import Enrollment, Certificate

__all__ = [
    "User",
    "Course", "Category", "Review",
    "Lesson", "LessonProgress",
    "Enrollment", "Certificate",
]
