"""학습 진도 계산 유틸리티 — Progress percentage and learning streak helpers.

Both helpers work on rows that were already fetched; they never touch the
database.
"""

import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone

# 스트릭 계산 시 살펴볼 최대 활동 일수 — Activity days inspected for a streak
STREAK_WINDOW_DAYS: int = 30


def progress_percentage(completed: int, total: int) -> int:
    """완료 레슨 비율을 0-100 정수 백분율로 계산합니다.

    ``round(100 * completed / total)`` with halves rounded up, and 0 when the
    course has no lessons.

    Example:
        progress_percentage(1, 8)  # 13
        progress_percentage(0, 0)  # 0
    """
    if total <= 0:
        return 0
    return int(math.floor(100 * completed / total + 0.5))


def activity_days(timestamps: Iterable[datetime], limit: int = STREAK_WINDOW_DAYS) -> list[date]:
    """타임스탬프를 서로 다른 날짜로 묶어 최신순으로 반환합니다.

    Collapse activity timestamps into distinct calendar days, newest first,
    keeping at most ``limit`` days. Aware timestamps are converted to UTC
    first; naive ones are taken to be UTC already.
    """
    days: set[date] = {
        (ts.astimezone(timezone.utc) if ts.tzinfo is not None else ts).date()
        for ts in timestamps
    }
    return sorted(days, reverse=True)[:limit]


def current_streak(days: list[date], today: date) -> int:
    """오늘부터 연속으로 활동한 일수를 계산합니다.

    Count consecutive calendar days with activity, starting at ``today`` and
    walking backwards; the first gap ends the streak. ``days`` must be
    distinct and sorted newest first (see ``activity_days``).
    """
    streak: int = 0
    for offset, day in enumerate(days):
        if day != today - timedelta(days=offset):
            break
        streak += 1
    return streak
