"""읽기 전용 데이터베이스 사용자 생성 스크립트.

Provision a PostgreSQL login role that can only read: CONNECT on the
database, USAGE and SELECT on the given schemas (current and future
tables), and ``default_transaction_read_only`` so it cannot write even by
accident. Re-running the script resets the role's password.

Usage:
    python -m academy.scripts.create_readonly_user [--username NAME] [--password PW] [--schema public]
"""

import argparse
import asyncio
import secrets

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import create_async_engine

from academy.config import settings
from academy.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


def generate_password(length: int = 24) -> str:
    """안전한 임의 비밀번호 — Random URL-safe password."""
    return secrets.token_urlsafe(length)[:length]


def _quote_ident(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _quote_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def build_statements(username: str, password: str, database: str, schemas: list[str]) -> list[str]:
    """읽기 전용 역할을 만드는 SQL 문 목록을 생성합니다.

    Build the SQL statements that create (or re-password) the role and
    grant it read-only access.

    Args:
        username: 역할 이름 (Role name)
        password: 로그인 비밀번호 (Login password)
        database: 데이터베이스 이름 (Database to grant CONNECT on)
        schemas: 읽기 권한을 줄 스키마 (Schemas to grant SELECT on)
    """
    role: str = _quote_ident(username)
    statements: list[str] = [
        (
            "DO $$ BEGIN "
            f"IF NOT EXISTS (SELECT FROM pg_catalog.pg_roles WHERE rolname = {_quote_literal(username)}) THEN "
            f"CREATE ROLE {role} WITH LOGIN PASSWORD {_quote_literal(password)}; "
            f"ELSE ALTER ROLE {role} WITH PASSWORD {_quote_literal(password)}; "
            "END IF; END $$"
        ),
        f"GRANT CONNECT ON DATABASE {_quote_ident(database)} TO {role}",
    ]
    for schema in schemas:
        quoted: str = _quote_ident(schema)
        statements += [
            f"GRANT USAGE ON SCHEMA {quoted} TO {role}",
            f"GRANT SELECT ON ALL TABLES IN SCHEMA {quoted} TO {role}",
            f"ALTER DEFAULT PRIVILEGES IN SCHEMA {quoted} GRANT SELECT ON TABLES TO {role}",
            f"GRANT USAGE ON ALL SEQUENCES IN SCHEMA {quoted} TO {role}",
            f"ALTER DEFAULT PRIVILEGES IN SCHEMA {quoted} GRANT USAGE ON SEQUENCES TO {role}",
        ]
    statements.append(f"ALTER ROLE {role} SET default_transaction_read_only = true")
    return statements


async def create_readonly_user(username: str, password: str, schemas: list[str]) -> URL:
    """관리자 연결(DATABASE_URL)로 읽기 전용 역할을 생성합니다.

    Run the statements over the admin connection from ``DATABASE_URL`` in a
    single transaction.

    Returns:
        URL: 읽기 전용 사용자의 연결 URL (Connection URL for the new role)
    """
    admin_url: URL = make_url(settings.DATABASE_URL)
    if admin_url.get_backend_name() != "postgresql":
        raise SystemExit("DATABASE_URL must point at a PostgreSQL database")

    engine = create_async_engine(admin_url)
    try:
        async with engine.begin() as conn:
            for statement in build_statements(username, password, admin_url.database or "", schemas):
                await conn.execute(text(statement))
    finally:
        await engine.dispose()

    logger.info("Read-only role %s is ready on database %s", username, admin_url.database)
    return admin_url.set(username=username, password=password)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a read-only PostgreSQL user.")
    parser.add_argument("--username", default="readonly_user")
    parser.add_argument("--password", default=None, help="defaults to a random password")
    parser.add_argument("--schema", action="append", dest="schemas", help="repeatable; defaults to public")
    args = parser.parse_args()

    configure_logging(settings.LOG_LEVEL)
    password: str = args.password or generate_password()
    url: URL = asyncio.run(create_readonly_user(args.username, password, args.schemas or ["public"]))
    # 비밀번호가 포함된 URL은 로그가 아닌 표준 출력으로만 — Credentials go to stdout only
    print(url.render_as_string(hide_password=False))


if __name__ == "__main__":
    main()
