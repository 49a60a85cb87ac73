"""코스 관련 SQLAlchemy ORM 모델 정의.

Course-related SQLAlchemy ORM model definitions.
Includes the Course catalogue entity together with browsing categories and
learner reviews.

Tables:
    - courses: 코스 카탈로그 (Course catalogue)
    - categories: 코스 분류 (Browsing categories)
    - reviews: 코스 리뷰 (Learner reviews, rating 1-5)
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from academy.database import Base
from academy.models.types import JsonColumn, utcnow
from academy.utils.ids import new_id

# 난이도/상태 값 — Allowed level / status values
COURSE_LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced")
COURSE_STATUSES: tuple[str, ...] = ("draft", "published", "archived")


class Course(Base):
    """코스 모델 — 강사가 제공하는 강의 단위.

    Course model — A unit of teaching owned by an instructor.
    ``enrollment_count`` is a denormalized counter maintained by the
    enrollment service inside the same transaction as the enrollment row.

    Attributes:
        id: 고유 식별자 (Opaque string identifier)
        title: 제목 (Course title)
        slug: URL 슬러그, 고유 (Unique URL slug derived from the title)
        description: 설명 (Course description)
        instructor_id: 강사 FK (Instructor user foreign key)
        category: 분류 이름 (Category name)
        tags: 태그 목록 (JSON list of tags)
        level: 난이도 (beginner / intermediate / advanced)
        status: 게시 상태 (draft / published / archived)
        price: 가격 (Price, numeric 10,2)
        rating: 평균 평점 (Average rating, numeric 3,2)
        review_count: 리뷰 수 (Number of reviews)
        enrollment_count: 수강생 수 (Number of enrollments)
        is_featured: 추천 여부 (Featured flag)
    """

    __tablename__ = "courses"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # 강사 FK — Instructor (users.id)
    instructor_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    thumbnail: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    tags: Mapped[list[str]] = mapped_column(JsonColumn, nullable=False, default=list)
    level: Mapped[str] = mapped_column(String(20), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    # 예상 소요 시간 — Free-form duration text, e.g. "8 hours"
    duration: Mapped[str | None] = mapped_column(String(50), nullable=True)
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), default=Decimal("0"))
    rating: Mapped[Decimal | None] = mapped_column(Numeric(3, 2), default=Decimal("0"))
    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # 수강생 수 — Denormalized enrollment counter
    enrollment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    prerequisites: Mapped[list[str] | None] = mapped_column(JsonColumn, default=list)
    learning_objectives: Mapped[list[str] | None] = mapped_column(JsonColumn, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    published_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    instructor = relationship("User", back_populates="courses")
    lessons = relationship("Lesson", back_populates="course", cascade="all, delete-orphan", order_by="Lesson.order")

    __table_args__ = (
        Index("ix_courses_instructor", "instructor_id"),
        Index("ix_courses_category", "category"),
    )


class Category(Base):
    """코스 분류 모델 — 카탈로그 탐색용 분류.

    Category model used for organized course browsing.
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # 아이콘 — Icon name or emoji
    icon: Mapped[str | None] = mapped_column(String(50), nullable=True)
    order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)


class Review(Base):
    """코스 리뷰 모델 — Learner review of a course (rating 1-5)."""

    __tablename__ = "reviews"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(String(64), ForeignKey("users.id"), nullable=False)
    course_id: Mapped[str] = mapped_column(String(64), ForeignKey("courses.id"), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_review_rating_range"),
    )
