"""수강 등록 및 수료증 SQLAlchemy ORM 모델 정의.

Enrollment and certificate SQLAlchemy ORM model definitions.

Tables:
    - enrollments: 사용자-코스 수강 등록 (User/course registration, unique pair)
    - certificates: 수료증 (Certificates issued on course completion)
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academy.database import Base
from academy.models.types import utcnow
from academy.utils.ids import new_id


class Enrollment(Base):
    """수강 등록 모델 — 사용자의 코스 등록과 전체 진도.

    Enrollment model — A user's registration in a course, tracking aggregate
    progress as a 0-100 percentage of completed lessons.

    Attributes:
        user_id: 수강생 FK (Learner)
        course_id: 코스 FK (Course)
        enrolled_at: 등록 일시 (Enrollment time)
        completed_at: 수료 일시 (Completion time, optional)
        last_accessed_at: 마지막 학습 일시 (Last access time, optional)
        progress: 진도율 0-100 (Progress percentage)
        certificate_id: 발급된 수료증 ID (Issued certificate id, optional)

    Constraints:
        uq_enrollment_user_course: 사용자당 코스 1회 등록 (One enrollment per user/course pair)
    """

    __tablename__ = "enrollments"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    course_id: Mapped[str] = mapped_column(String(64), ForeignKey("courses.id"), nullable=False)
    enrolled_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    last_accessed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    certificate_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    user = relationship("User", back_populates="enrollments")
    course = relationship("Course")

    __table_args__ = (
        UniqueConstraint("user_id", "course_id", name="uq_enrollment_user_course"),
        CheckConstraint("progress BETWEEN 0 AND 100", name="ck_enrollment_progress_range"),
    )


class Certificate(Base):
    """수료증 모델 — Certificate issued when an enrollment reaches 100%."""

    __tablename__ = "certificates"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    course_id: Mapped[str] = mapped_column(String(64), ForeignKey("courses.id"), nullable=False)
    enrollment_id: Mapped[str] = mapped_column(String(64), ForeignKey("enrollments.id"), nullable=False)
    certificate_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
