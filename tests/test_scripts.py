"""관리 스크립트 테스트.

Administrative script tests — read-only role SQL generation and the
PostgreSQL-only guard.
"""

import pytest

from academy.scripts import create_readonly_user as script
from academy.scripts.create_readonly_user import build_statements, generate_password


class TestBuildStatements:
    """읽기 전용 역할 SQL 생성 테스트."""

    def test_statements_for_one_schema(self):
        statements = build_statements("reporter", "s3cret", "academy", ["public"])
        assert "CREATE ROLE \"reporter\" WITH LOGIN PASSWORD 's3cret'" in statements[0]
        assert statements[1] == 'GRANT CONNECT ON DATABASE "academy" TO "reporter"'
        assert 'GRANT SELECT ON ALL TABLES IN SCHEMA "public" TO "reporter"' in statements
        assert statements[-1] == 'ALTER ROLE "reporter" SET default_transaction_read_only = true'

    def test_one_grant_block_per_schema(self):
        statements = build_statements("reporter", "pw", "academy", ["public", "analytics"])
        usage = [s for s in statements if s.startswith("GRANT USAGE ON SCHEMA")]
        assert usage == [
            'GRANT USAGE ON SCHEMA "public" TO "reporter"',
            'GRANT USAGE ON SCHEMA "analytics" TO "reporter"',
        ]

    def test_quoting(self):
        statements = build_statements('we"ird', "it's", "academy", [])
        assert '"we""ird"' in statements[0]
        assert "'it''s'" in statements[0]
        assert "rolname = 'we\"ird'" in statements[0]


def test_generate_password():
    password = generate_password(16)
    assert len(password) == 16
    assert password != generate_password(16)


async def test_requires_postgres(monkeypatch):
    monkeypatch.setattr(script.settings, "DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    with pytest.raises(SystemExit):
        await script.create_readonly_user("reporter", "pw", ["public"])
