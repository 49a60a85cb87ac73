"""공용 컬럼 타입 — Shared column types.

JSON columns use JSONB on PostgreSQL and plain JSON elsewhere (SQLite in tests).
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, inspect
from sqlalchemy.dialects.postgresql import JSONB

JsonColumn = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    """현재 UTC 시각 — Current time in UTC (column default/onupdate)."""
    return datetime.now(timezone.utc)


def column_values(obj: Any) -> dict[str, Any]:
    """ORM 인스턴스의 컬럼 값만 딕셔너리로 반환합니다.

    Return the mapped column attributes of an ORM instance as a dict.
    Relationships are left out, so response schemas that reuse a
    relationship name (``course``, ``instructor``) can be filled explicitly
    without triggering a lazy load.
    """
    return {attr.key: getattr(obj, attr.key) for attr in inspect(obj).mapper.column_attrs}
