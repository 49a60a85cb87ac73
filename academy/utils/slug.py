"""슬러그 생성 유틸리티 — URL slug helper."""

import re

_WHITESPACE = re.compile(r"\s+")
_INVALID = re.compile(r"[^a-z0-9-]")


def slugify(title: str) -> str:
    """제목을 URL 슬러그로 변환합니다.

    Lower-case the title, turn whitespace runs into ``-`` and drop every
    character outside ``[a-z0-9-]``.

    Example:
        slugify("Intro to Tracing!")  # "intro-to-tracing"
    """
    return _INVALID.sub("", _WHITESPACE.sub("-", title.lower()))
