"""코스 관련 Pydantic 요청/응답 스키마 정의.

Course Pydantic request/response schema definitions.
List and detail views carry the instructor's name (joined from users);
create/update return the raw course row.
"""

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import Field

from academy.schemas.common import CamelModel
from academy.schemas.lesson import LessonResponse

CourseLevel = Literal["beginner", "intermediate", "advanced"]


class CourseCreate(CamelModel):
    """코스 생성 요청 스키마.

    Course creation request schema. The slug is derived from the title.

    Attributes:
        title: 제목 (Course title)
        description: 설명 (Description)
        instructor_id: 강사 사용자 ID (Instructor user id, must exist)
        category: 분류 이름 (Category name)
        level: 난이도 (beginner / intermediate / advanced)
        price: 가격, 문자열/숫자 허용 (Price; string or number, default 0)
    """

    title: str = Field(..., min_length=1, max_length=255)
    description: str
    instructor_id: str
    thumbnail: str | None = None
    category: str = Field(..., min_length=1, max_length=100)
    tags: list[str] = []
    level: CourseLevel
    duration: str | None = None
    price: Decimal = Field(Decimal("0"), ge=0)
    prerequisites: list[str] = []
    learning_objectives: list[str] = []


class CourseUpdate(CamelModel):
    """코스 수정 요청 스키마 (부분 업데이트)."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    thumbnail: str | None = None
    category: str | None = Field(None, min_length=1, max_length=100)
    tags: list[str] | None = None
    level: CourseLevel | None = None
    duration: str | None = None
    price: Decimal | None = Field(None, ge=0)
    is_featured: bool | None = None
    prerequisites: list[str] | None = None
    learning_objectives: list[str] | None = None


class CourseResponse(CamelModel):
    """코스 응답 스키마 — Full course row (create/update/embedded views)."""

    id: str
    title: str
    slug: str
    description: str
    instructor_id: str
    thumbnail: str | None = None
    category: str
    tags: list[str] = []
    level: str
    status: str
    duration: str | None = None
    price: Decimal | None = None
    rating: Decimal | None = None
    review_count: int = 0
    enrollment_count: int = 0
    is_featured: bool = False
    prerequisites: list[str] | None = None
    learning_objectives: list[str] | None = None
    created_at: datetime
    updated_at: datetime
    published_at: datetime | None = None


class CourseWithInstructor(CourseResponse):
    """강사 이름을 포함한 코스 — Course row plus the instructor's name."""

    instructor: str | None = None


class CourseSummary(CamelModel):
    """코스 목록 항목 스키마 — Course card used by list and search views."""

    id: str
    title: str
    slug: str
    description: str
    instructor: str | None = None  # 강사 이름 (Joined instructor name)
    instructor_id: str
    thumbnail: str | None = None
    category: str
    tags: list[str] = []
    level: str
    duration: str | None = None
    price: Decimal | None = None
    rating: Decimal | None = None
    review_count: int = 0
    enrollment_count: int = 0
    is_featured: bool = False
    created_at: datetime
    published_at: datetime | None = None


class CourseDetailResponse(CourseSummary):
    """코스 상세 응답 스키마 — Course with instructor profile and ordered lessons."""

    instructor_bio: str | None = None
    instructor_avatar: str | None = None
    prerequisites: list[str] | None = None
    learning_objectives: list[str] | None = None
    lessons: list[LessonResponse] = []


class CategoryResponse(CamelModel):
    """분류 응답 스키마 — Category row."""

    id: str
    name: str
    slug: str
    description: str | None = None
    icon: str | None = None
    order: int
    created_at: datetime
