"""데이터베이스 엔진 및 세션 설정 모듈.

Database engine and session configuration module.
Sets up the async SQLAlchemy engine, session factory, and ORM base class.
Each request gets exactly one session, which is also its transaction:
services only flush, the route layer commits, and any exception rolls back.
"""

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, create_async_engine, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase

from academy.config import settings


def _engine_options(url: str) -> dict[str, Any]:
    """드라이버별 엔진 옵션 — Driver-specific engine options.

    SQLite does not accept pool sizing arguments, so they are only passed
    for server databases.
    """
    if url.startswith("sqlite"):
        return {}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


def enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    """SQLite에서 SAVEPOINT가 바깥 트랜잭션 안에서 동작하도록 합니다.

    The sqlite3 driver only emits BEGIN before DML, so a SAVEPOINT opened
    after plain SELECTs becomes the outermost transaction and its RELEASE
    commits. Turning off the driver's own transaction handling and emitting
    BEGIN from SQLAlchemy keeps ``begin_nested`` inside the request
    transaction (SQLAlchemy's aiosqlite recipe).
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _emit_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


# 비동기 데이터베이스 엔진 — Async database engine (asyncpg driver)
engine: AsyncEngine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_options(settings.DATABASE_URL),
)
if settings.DATABASE_URL.startswith("sqlite"):
    enable_sqlite_savepoints(engine)

# 비동기 세션 팩토리 — Async session factory
# expire_on_commit=False: 커밋 후에도 객체 속성 접근 가능 (Allows attribute access after commit without refresh)
async_session: async_sessionmaker[AsyncSession] = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """SQLAlchemy 선언적 베이스 클래스.

    Declarative base class for all ORM models.
    """

    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """요청 단위 비동기 데이터베이스 세션을 생성합니다.

    FastAPI dependency that yields an async database session.
    Uncommitted work is rolled back when the handler raises, so multi-step
    mutations (insert + counter update) are all-or-nothing.

    Yields:
        AsyncSession: SQLAlchemy 비동기 세션 인스턴스 (Async session instance)
    """
    async with async_session() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
