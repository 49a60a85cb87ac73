"""진도/스트릭 계산 유틸리티 단위 테스트.

Unit tests for the pure progress percentage and learning-streak helpers,
plus the slug helper.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from academy.utils.progress import activity_days, current_streak, progress_percentage
from academy.utils.slug import slugify


class TestProgressPercentage:
    """진도율 계산 테스트."""

    @pytest.mark.parametrize(
        ("completed", "total", "expected"),
        [
            (0, 0, 0),
            (0, 5, 0),
            (1, 3, 33),
            (2, 3, 67),
            (1, 8, 13),   # 12.5 → 13 (반올림 — half up)
            (5, 8, 63),   # 62.5 → 63
            (3, 3, 100),
        ],
    )
    def test_rounding(self, completed, total, expected):
        assert progress_percentage(completed, total) == expected


class TestActivityDays:
    """활동 일자 집계 테스트."""

    def test_distinct_newest_first(self):
        stamps = [
            datetime(2024, 3, 1, 9, 0),
            datetime(2024, 3, 3, 8, 0),
            datetime(2024, 3, 1, 23, 0),
            datetime(2024, 3, 2, 12, 0),
        ]
        assert activity_days(stamps) == [date(2024, 3, 3), date(2024, 3, 2), date(2024, 3, 1)]

    def test_aware_timestamps_use_utc_day(self):
        kst = timezone(timedelta(hours=9))
        # 3월 2일 08:00 KST = 3월 1일 23:00 UTC
        assert activity_days([datetime(2024, 3, 2, 8, 0, tzinfo=kst)]) == [date(2024, 3, 1)]

    def test_limit(self):
        start = datetime(2024, 1, 1)
        stamps = [start + timedelta(days=i) for i in range(40)]
        days = activity_days(stamps)
        assert len(days) == 30
        assert days[0] == date(2024, 2, 9)


class TestCurrentStreak:
    """연속 학습 일수 테스트."""

    today = date(2024, 3, 10)

    def test_consecutive_days(self):
        days = [self.today, self.today - timedelta(days=1), self.today - timedelta(days=2)]
        assert current_streak(days, self.today) == 3

    def test_gap_stops_streak(self):
        days = [self.today, self.today - timedelta(days=1), self.today - timedelta(days=3)]
        assert current_streak(days, self.today) == 2

    def test_no_activity_today(self):
        days = [self.today - timedelta(days=1), self.today - timedelta(days=2)]
        assert current_streak(days, self.today) == 0

    def test_empty(self):
        assert current_streak([], self.today) == 0


class TestSlugify:
    """슬러그 생성 테스트."""

    @pytest.mark.parametrize(
        ("title", "slug"),
        [
            ("Intro to Tracing!", "intro-to-tracing"),
            ("  Python   3 Basics ", "-python-3-basics-"),
            ("C++ & Rust", "c--rust"),
        ],
    )
    def test_slugify(self, title, slug):
        assert slugify(title) == slug
