"""검색 API 테스트.

Search API tests — course search (text, filters, relevance and default
ordering), lesson search, global search and autocomplete suggestions.
"""

from decimal import Decimal

import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.dialects import postgresql, sqlite

from academy.models import Course, User
from academy.repositories.search_repository import has_tag
from tests.conftest import persist

URL = "/api/search"


@pytest_asyncio.fixture
async def catalogue(session_factory, instructor, course, lessons) -> dict[str, Course]:
    """검색용 코스 카탈로그 — Python Fundamentals plus three more courses."""
    grace = User(email="grace@test.com", name="Grace Hopper", role="instructor", bio="Compilers and COBOL")
    await persist(session_factory, grace)

    advanced = Course(
        title="Advanced Python Patterns",
        slug="advanced-python-patterns",
        description="Decorators, descriptors and metaclasses",
        instructor_id=instructor.id,
        category="Programming",
        tags=["python", "design-patterns"],
        level="advanced",
        price=Decimal("99.00"),
        rating=Decimal("4.90"),
    )
    data_science = Course(
        title="Data Science with Pandas",
        slug="data-science-with-pandas",
        description="Analyse data frames using Python",
        instructor_id=grace.id,
        category="Data Science",
        tags=["pandas", "data"],
        level="intermediate",
        price=Decimal("39.00"),
        rating=Decimal("4.20"),
    )
    web = Course(
        title="Web Design Basics",
        slug="web-design-basics",
        description="HTML and CSS layouts",
        instructor_id=grace.id,
        category="Design",
        tags=["css", "html"],
        level="beginner",
        price=Decimal("0"),
        rating=Decimal("4.00"),
    )
    await persist(session_factory, advanced, data_science, web)
    return {"fundamentals": course, "advanced": advanced, "data": data_science, "web": web}


def _titles(res) -> list[str]:
    return [c["title"] for c in res.json()["results"]]


class TestCourseSearch:
    """코스 검색 테스트."""

    async def test_text_query_ordered_by_relevance(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/courses", params={"q": "python"})
        assert res.status_code == 200
        data = res.json()
        assert _titles(res) == [
            "Python Fundamentals",
            "Advanced Python Patterns",
            "Data Science with Pandas",
        ]
        assert data["total"] == 3
        assert data["query"] == "python"
        assert data["results"][0]["instructor"] == "Ada Lovelace"

    async def test_no_query_featured_then_rating(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/courses")
        assert _titles(res) == [
            "Python Fundamentals",
            "Advanced Python Patterns",
            "Data Science with Pandas",
            "Web Design Basics",
        ]
        assert res.json()["query"] == ""

    async def test_all_tags_must_match(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/courses", params={"tags": "python, design-patterns"})
        assert _titles(res) == ["Advanced Python Patterns"]
        assert res.json()["filters"]["tags"] == "python, design-patterns"

    async def test_tag_is_whole_word(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/courses", params={"tags": "pyth"})
        assert res.json()["results"] == []

    async def test_tag_match_is_exact(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/courses", params={"tags": "Python"})
        assert res.json()["results"] == []

    async def test_non_ascii_tag(self, client: AsyncClient, session_factory, instructor, catalogue):
        korean = Course(
            title="파이썬 입문",
            slug="python-intro-ko",
            description="한국어 파이썬 강의",
            instructor_id=instructor.id,
            category="Programming",
            tags=["파이썬", "python"],
            level="beginner",
        )
        await persist(session_factory, korean)

        res = await client.get(f"{URL}/courses", params={"tags": "파이썬"})
        assert _titles(res) == ["파이썬 입문"]

    async def test_rating_and_price_filters(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/courses", params={"minRating": 4.5})
        assert set(_titles(res)) == {"Python Fundamentals", "Advanced Python Patterns"}

        res = await client.get(f"{URL}/courses", params={"maxPrice": 40})
        assert set(_titles(res)) == {"Data Science with Pandas", "Web Design Basics"}
        assert res.json()["filters"]["maxPrice"] == 40

    async def test_instructor_and_category_filters(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/courses", params={"instructor": "grace"})
        assert set(_titles(res)) == {"Data Science with Pandas", "Web Design Basics"}

        res = await client.get(f"{URL}/courses", params={"instructor": "grace", "category": "Design"})
        assert _titles(res) == ["Web Design Basics"]

    async def test_level_filter(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/courses", params={"q": "python", "level": "advanced"})
        assert _titles(res) == ["Advanced Python Patterns"]

    async def test_invalid_level(self, client: AsyncClient):
        res = await client.get(f"{URL}/courses", params={"level": "guru"})
        assert res.status_code == 422


class TestLessonSearch:
    """레슨 검색 테스트."""

    async def test_matches_content_with_course_info(self, client: AsyncClient, catalogue, lessons):
        res = await client.get(f"{URL}/lessons", params={"q": "strings"})
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 1
        hit = data["results"][0]
        assert hit["title"] == "Variables and Types"
        assert hit["courseName"] == "Python Fundamentals"
        assert hit["courseSlug"] == "python-fundamentals"

    async def test_type_and_course_filters(self, client: AsyncClient, catalogue, course, lessons):
        res = await client.get(f"{URL}/lessons", params={"type": "quiz", "courseId": course.id})
        data = res.json()
        assert [lesson["title"] for lesson in data["results"]] == ["Control Flow Quiz"]
        assert data["filters"] == {"courseId": course.id, "type": "quiz"}

    async def test_ordered_by_lesson_order(self, client: AsyncClient, lessons):
        res = await client.get(f"{URL}/lessons", params={"q": "lesson"})
        assert [lesson["order"] for lesson in res.json()["results"]] == [1, 2, 3]


class TestGlobalSearch:
    """통합 검색 테스트."""

    async def test_empty_query_returns_empty_buckets(self, client: AsyncClient, catalogue):
        res = await client.get(URL)
        assert res.status_code == 200
        assert res.json() == {"courses": [], "lessons": [], "instructors": [], "total": 0, "query": ""}

    async def test_buckets(self, client: AsyncClient, catalogue):
        res = await client.get(URL, params={"q": "python"})
        data = res.json()
        assert {c["title"] for c in data["courses"]} == {
            "Python Fundamentals", "Advanced Python Patterns", "Data Science with Pandas",
        }
        assert all(c["type"] == "course" for c in data["courses"])
        assert [i["name"] for i in data["instructors"]] == ["Ada Lovelace"]
        assert data["instructors"][0]["type"] == "instructor"
        assert data["total"] == len(data["courses"]) + len(data["lessons"]) + len(data["instructors"])
        assert data["query"] == "python"

    async def test_lesson_bucket(self, client: AsyncClient, catalogue, lessons):
        res = await client.get(URL, params={"q": "Variables"})
        data = res.json()
        assert [lesson["title"] for lesson in data["lessons"]] == ["Variables and Types"]
        assert data["lessons"][0]["type"] == "lesson"


class TestSuggestions:
    """자동완성 테스트."""

    async def test_short_query(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/suggestions", params={"q": "p"})
        assert res.status_code == 200
        assert res.json() == []

    async def test_missing_query(self, client: AsyncClient):
        res = await client.get(f"{URL}/suggestions")
        assert res.json() == []

    async def test_titles_categories_and_tags(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/suggestions", params={"q": "py"})
        assert res.json() == [
            {"value": "Python Fundamentals", "type": "course"},
            {"value": "python", "type": "tag"},
        ]

        res = await client.get(f"{URL}/suggestions", params={"q": "pro"})
        assert res.json() == [
            {"value": "Programming", "type": "category"},
            {"value": "programming", "type": "tag"},
        ]

    async def test_distinct_categories(self, client: AsyncClient, catalogue):
        res = await client.get(f"{URL}/suggestions", params={"q": "da"})
        data = res.json()
        assert {"value": "Data Science", "type": "category"} in data
        assert {"value": "Data Science with Pandas", "type": "course"} in data
        assert {"value": "data", "type": "tag"} in data
        assert sum(1 for s in data if s["type"] == "category") == 1


class TestTagCondition:
    """태그 조건의 방언별 SQL."""

    def test_postgres_uses_jsonb_containment(self):
        sql = str(has_tag("postgresql", "python").compile(dialect=postgresql.dialect()))
        assert "courses.tags @>" in sql

    def test_sqlite_uses_json_each(self):
        sql = str(has_tag("sqlite", "python").compile(dialect=sqlite.dialect()))
        assert "json_each(courses.tags)" in sql
