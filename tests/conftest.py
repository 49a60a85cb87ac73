"""테스트 공용 픽스처.

Shared pytest fixtures. Every test gets a fresh in-memory SQLite database
(aiosqlite + StaticPool) with the schema created from the ORM metadata.
The typed app's ``get_db`` dependency and the classic app's session factory
are both pointed at it, and small factory fixtures create users, a course
with lessons and an enrollment.
"""

import os

# 앱 임포트 전에 설정 — Configure before the app modules read settings
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["AXIOM_API_TOKEN"] = ""
os.environ["AXIOM_DATASET"] = ""

from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from academy.classic.app import app as classic_app
from academy.database import Base, enable_sqlite_savepoints, get_db
from academy.main import app
from academy.models import Course, Enrollment, Lesson, User
from academy.utils.jwt import create_access_token

TEST_DATABASE_URL: str = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트마다 새 인메모리 DB 엔진 — Fresh in-memory database per test."""
    eng = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — 요청마다 테스트 DB 세션을 주입합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def classic_client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncClient, None]:
    """클래식 Starlette 앱 테스트 클라이언트 — Classic app wired to the test database."""
    original = classic_app.state.session_factory
    classic_app.state.session_factory = session_factory
    transport = ASGITransport(app=classic_app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    classic_app.state.session_factory = original


# ---------------------------------------------------------------------------
# 헬퍼 — Helpers
# ---------------------------------------------------------------------------
async def persist(session_factory: async_sessionmaker[AsyncSession], *objs: Any) -> None:
    """객체들을 새 세션에서 저장합니다 — Add and commit objects in a short-lived session."""
    async with session_factory() as session:
        session.add_all(objs)
        await session.commit()


async def fetch(session_factory: async_sessionmaker[AsyncSession], model: type, record_id: str) -> Any:
    """새 세션으로 레코드를 다시 읽습니다 — Re-read a row in a fresh session."""
    async with session_factory() as session:
        return await session.get(model, record_id)


def auth_header(user_id: str, email: str = "user@test.com") -> dict[str, str]:
    """테스트용 베어러 토큰 헤더 — Bearer header for the given user."""
    token: str = create_access_token(user_id, email)
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def student(session_factory) -> User:
    """테스트 학생을 생성합니다."""
    user = User(email="student@test.com", name="Test Student", role="student")
    await persist(session_factory, user)
    return user


@pytest_asyncio.fixture
async def instructor(session_factory) -> User:
    """테스트 강사를 생성합니다."""
    user = User(
        email="ada@test.com",
        name="Ada Lovelace",
        role="instructor",
        bio="Teaches Python and data engineering",
        avatar_url="https://example.com/ada.png",
    )
    await persist(session_factory, user)
    return user


@pytest_asyncio.fixture
async def course(session_factory, instructor) -> Course:
    """추천 코스를 생성합니다 — A featured, published beginner course."""
    c = Course(
        title="Python Fundamentals",
        slug="python-fundamentals",
        description="Learn Python from scratch",
        instructor_id=instructor.id,
        category="Programming",
        tags=["python", "programming"],
        level="beginner",
        status="published",
        duration="8 hours",
        price=Decimal("49.99"),
        rating=Decimal("4.50"),
        is_featured=True,
        prerequisites=["Basic computer skills"],
        learning_objectives=["Write Python scripts"],
        created_at=datetime.now(timezone.utc) - timedelta(days=1),
    )
    await persist(session_factory, c)
    return c


@pytest_asyncio.fixture
async def lessons(session_factory, course) -> list[Lesson]:
    """코스에 레슨 3개를 생성합니다 (order 1..3)."""
    items = [
        Lesson(
            course_id=course.id,
            title=title,
            slug=title.lower().replace(" ", "-"),
            description=f"{title} lesson",
            type=lesson_type,
            content=content,
            order=order,
            is_free=order == 1,
            resources=[],
        )
        for order, (title, lesson_type, content) in enumerate(
            [
                ("Getting Started", "video", None),
                ("Variables and Types", "text", "Integers, strings and lists"),
                ("Control Flow Quiz", "quiz", None),
            ],
            start=1,
        )
    ]
    await persist(session_factory, *items)
    return items


@pytest_asyncio.fixture
async def enrollment(session_factory, student, course) -> Enrollment:
    """학생을 코스에 등록합니다 (enrollment_count도 1로 맞춤)."""
    e = Enrollment(user_id=student.id, course_id=course.id, progress=0)
    async with session_factory() as session:
        session.add(e)
        db_course = await session.get(Course, course.id)
        db_course.enrollment_count += 1
        await session.commit()
    return e
