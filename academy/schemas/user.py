"""사용자 관련 Pydantic 요청/응답 스키마 정의.

User Pydantic request/response schema definitions.
Covers profile CRUD, public profile with aggregate stats, and the learning
statistics shown on the learner dashboard.
"""

from datetime import datetime
from typing import Literal

from pydantic import Field

from academy.schemas.common import CamelModel

UserRole = Literal["student", "instructor", "admin"]


class UserCreate(CamelModel):
    """사용자 생성 요청 스키마.

    Attributes:
        email: 이메일, 고유 (Unique email)
        name: 표시 이름 (Display name)
        role: 역할, 기본 student (Role, defaults to student)
    """

    email: str = Field(..., min_length=3, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    role: UserRole = "student"


class UserUpdate(CamelModel):
    """내 프로필 수정 요청 스키마 (부분 업데이트).

    Profile update request schema (partial update).
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    bio: str | None = None
    avatar_url: str | None = None


class UserResponse(CamelModel):
    """사용자 응답 스키마 — Full user row."""

    id: str
    email: str
    name: str
    role: str
    avatar_url: str | None = None
    bio: str | None = None
    created_at: datetime
    updated_at: datetime


class UserStats(CamelModel):
    """사용자 집계 통계 — Aggregate counters shown on a public profile."""

    enrollment_count: int = 0
    completed_courses: int = 0
    certificate_count: int = 0


class UserProfileResponse(CamelModel):
    """공개 프로필 응답 스키마 — Public profile with aggregate stats."""

    id: str
    name: str
    email: str
    role: str
    bio: str | None = None
    avatar_url: str | None = None
    created_at: datetime
    stats: UserStats


class LearningStatsResponse(CamelModel):
    """학습 통계 응답 스키마.

    Learning statistics of the current user.

    Attributes:
        total_enrollments: 전체 수강 등록 수 (Number of enrollments)
        completed_courses: 수료한 코스 수 (Enrollments with completed_at set)
        total_time_spent: 총 학습 시간(초) (Sum of lesson time spent, seconds)
        lessons_completed: 완료한 레슨 수 (Completed lesson progress records)
        current_streak: 연속 학습 일수 (Consecutive active days ending today)
        recent_activity: 최근 활동 일수 (Distinct active days in the streak window)
    """

    total_enrollments: int = 0
    completed_courses: int = 0
    total_time_spent: int = 0
    lessons_completed: int = 0
    current_streak: int = 0
    recent_activity: int = 0
