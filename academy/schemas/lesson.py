"""레슨 관련 Pydantic 요청/응답 스키마 정의.

Lesson Pydantic request/response schema definitions, including lesson
completion requests and per-lesson progress records.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from academy.schemas.common import CamelModel

LessonType = Literal["video", "text", "quiz", "assignment"]


class LessonResource(CamelModel):
    """레슨 참고 자료 — Resource link attached to a lesson."""

    title: str
    url: str
    type: str


class LessonCreate(CamelModel):
    """레슨 생성 요청 스키마.

    Lesson creation request schema. ``order`` is not accepted: the lesson is
    appended after the current last lesson of the course.
    """

    course_id: str
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: LessonType
    content: str | None = None
    video_url: str | None = None
    duration: str | None = None
    is_free: bool = False
    resources: list[LessonResource] = []


class LessonUpdate(CamelModel):
    """레슨 수정 요청 스키마 (부분 업데이트)."""

    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    content: str | None = None
    video_url: str | None = None
    duration: str | None = None
    order: int | None = Field(None, ge=1)
    is_free: bool | None = None
    resources: list[LessonResource] | None = None


class LessonResponse(CamelModel):
    """레슨 응답 스키마 — Full lesson row."""

    id: str
    course_id: str
    title: str
    slug: str
    description: str | None = None
    type: str
    content: str | None = None
    video_url: str | None = None
    duration: str | None = None
    order: int
    is_free: bool
    resources: list[LessonResource] | None = None
    created_at: datetime
    updated_at: datetime


class LessonCompleteRequest(CamelModel):
    """레슨 완료 요청 스키마 — Who completes the lesson, under which enrollment."""

    user_id: str
    enrollment_id: str


class LessonProgressResponse(CamelModel):
    """레슨 진도 응답 스키마 — Full lesson_progress row."""

    id: str
    user_id: str
    lesson_id: str
    enrollment_id: str
    completed_at: datetime | None = None
    time_spent: int = 0
    last_position: int | None = 0
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
