"""사용자 SQLAlchemy ORM 모델 정의.

User SQLAlchemy ORM model definition.
Users are students, instructors or admins; authentication is a demo login,
so no credentials are stored.

Tables:
    - users: 사용자 계정 (User accounts)
"""

from datetime import datetime
from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academy.database import Base
from academy.models.types import utcnow
from academy.utils.ids import new_id

# 역할 값 — Allowed role values
USER_ROLES: tuple[str, ...] = ("student", "instructor", "admin")


class User(Base):
    """사용자 모델 — 수강생, 강사, 관리자.

    User model — Student, instructor or admin account.

    Attributes:
        id: 고유 식별자 (Opaque string identifier)
        email: 이메일, 고유 (Unique email address)
        name: 표시 이름 (Display name)
        role: 역할 (student / instructor / admin)
        avatar_url: 아바타 이미지 URL (Avatar image URL, optional)
        bio: 자기소개 (Short biography, optional)
        created_at: 생성 일시 UTC (Creation timestamp)
        updated_at: 수정 일시 UTC (Last update timestamp)

    Relationships:
        courses: 강의하는 코스 목록 (Courses taught by this user)
        enrollments: 수강 등록 목록 (Course enrollments of this user)
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    # 이메일 — Login email (unique)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    # 역할 — "student" | "instructor" | "admin"
    role: Mapped[str] = mapped_column(String(20), nullable=False, default="student")
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    courses = relationship("Course", back_populates="instructor")
    enrollments = relationship("Enrollment", back_populates="user")
