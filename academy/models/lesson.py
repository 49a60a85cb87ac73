"""레슨 및 학습 진도 SQLAlchemy ORM 모델 정의.

Lesson and lesson-progress SQLAlchemy ORM model definitions.

Tables:
    - lessons: 코스 하위 레슨 (Lessons within a course, ordered)
    - lesson_progress: 레슨별 완료/학습 시간 기록 (Per-lesson completion and time spent)
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academy.database import Base
from academy.models.types import JsonColumn, utcnow
from academy.utils.ids import new_id

# 레슨 유형 — Allowed lesson types
LESSON_TYPES: tuple[str, ...] = ("video", "text", "quiz", "assignment")


class Lesson(Base):
    """레슨 모델 — 코스를 구성하는 개별 학습 단위.

    Lesson model — A single ordered learning unit within a course.

    Attributes:
        id: 고유 식별자 (Opaque string identifier)
        course_id: 소속 코스 FK (Parent course, CASCADE on delete)
        title: 제목 (Lesson title)
        slug: 슬러그 (Slug derived from the title, unique per course by convention)
        type: 유형 (video / text / quiz / assignment)
        content: 텍스트 본문 (Body for text lessons)
        video_url: 영상 URL (Video lessons)
        order: 코스 내 순서 (1-based position in the course)
        is_free: 무료 미리보기 여부 (Free preview flag)
        resources: 참고 자료 (JSON list of {title, url, type})
    """

    __tablename__ = "lessons"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    course_id: Mapped[str] = mapped_column(String(64), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    duration: Mapped[str | None] = mapped_column(String(50), nullable=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False)
    is_free: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    resources: Mapped[list[dict] | None] = mapped_column(JsonColumn, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    course = relationship("Course", back_populates="lessons")

    __table_args__ = (
        Index("ix_lessons_course_order", "course_id", "order"),
    )


class LessonProgress(Base):
    """레슨 진도 모델 — 수강 등록 하나에 묶인 레슨별 완료 기록.

    Per-lesson completion / time-spent record tied to one enrollment.
    ``updated_at`` doubles as the activity timestamp for learning streaks.

    Attributes:
        user_id: 학습자 FK (Learner)
        lesson_id: 레슨 FK (Lesson)
        enrollment_id: 수강 등록 FK (Owning enrollment)
        completed_at: 완료 일시, 미완료면 None (Completion time, None if not completed)
        time_spent: 학습 시간(초) (Seconds spent)
        last_position: 영상 재생 위치(초) (Video resume position)
        notes: 메모 (Learner notes)
    """

    __tablename__ = "lesson_progress"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    lesson_id: Mapped[str] = mapped_column(String(64), ForeignKey("lessons.id"), nullable=False)
    enrollment_id: Mapped[str] = mapped_column(String(64), ForeignKey("enrollments.id"), nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    time_spent: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_position: Mapped[int | None] = mapped_column(Integer, default=0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_lesson_progress_user_lesson", "user_id", "lesson_id"),
        Index("ix_lesson_progress_enrollment", "enrollment_id"),
    )
