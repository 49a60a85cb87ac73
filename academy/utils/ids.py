"""레코드 식별자 생성 유틸리티.

Record identifier helpers. Primary keys are opaque strings so that fixed
identifiers (such as the demo user id) are valid keys as well.
"""

import uuid


def new_id() -> str:
    """새 문자열 ID를 생성합니다 — Generate a new random string id (UUID4)."""
    return str(uuid.uuid4())
