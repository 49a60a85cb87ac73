"""코스 API 테스트.

Course API tests — listing with filters, categories, detail with lessons,
creation (slug, 404 instructor, 409 slug) and partial update.
"""

from datetime import datetime, timezone
from decimal import Decimal

from httpx import AsyncClient

from academy.models import Category, Course
from tests.conftest import fetch, persist

URL = "/api/courses"


async def _add_course(session_factory, instructor, title: str, **overrides) -> Course:
    values = dict(
        title=title,
        slug=title.lower().replace(" ", "-"),
        description=f"About {title}",
        instructor_id=instructor.id,
        category="Design",
        tags=[],
        level="intermediate",
        status="published",
        price=Decimal("0"),
        rating=Decimal("0"),
    )
    values.update(overrides)
    c = Course(**values)
    await persist(session_factory, c)
    return c


class TestCourseList:
    """코스 목록 조회 테스트."""

    async def test_list_courses_with_instructor_name(self, client: AsyncClient, course):
        res = await client.get(URL)
        assert res.status_code == 200
        data = res.json()
        assert len(data) == 1
        item = data[0]
        assert item["title"] == "Python Fundamentals"
        assert item["instructor"] == "Ada Lovelace"
        assert item["instructorId"] == course.instructor_id
        assert item["isFeatured"] is True
        assert item["tags"] == ["python", "programming"]

    async def test_list_newest_first(self, client: AsyncClient, session_factory, instructor, course):
        """최신 코스가 먼저 나옵니다."""
        await _add_course(session_factory, instructor, "UX Basics", created_at=datetime.now(timezone.utc))
        res = await client.get(URL)
        assert [c["title"] for c in res.json()] == ["UX Basics", "Python Fundamentals"]

    async def test_filter_by_category_and_level(self, client: AsyncClient, session_factory, instructor, course):
        await _add_course(session_factory, instructor, "UX Basics")
        res = await client.get(URL, params={"category": "Design"})
        assert [c["title"] for c in res.json()] == ["UX Basics"]

        res = await client.get(URL, params={"level": "beginner"})
        assert [c["title"] for c in res.json()] == ["Python Fundamentals"]

    async def test_featured_only(self, client: AsyncClient, session_factory, instructor, course):
        await _add_course(session_factory, instructor, "UX Basics", is_featured=False)
        res = await client.get(URL, params={"featured": "true"})
        assert [c["title"] for c in res.json()] == ["Python Fundamentals"]

    async def test_invalid_level_is_422(self, client: AsyncClient):
        res = await client.get(URL, params={"level": "expert"})
        assert res.status_code == 422
        assert res.json()["error"] == "Request validation failed"


class TestCategories:
    """분류 목록 테스트."""

    async def test_categories_ordered(self, client: AsyncClient, session_factory):
        await persist(
            session_factory,
            Category(name="Web", slug="web", order=2),
            Category(name="Data", slug="data", order=1),
            Category(name="AI", slug="ai", order=2),
        )
        res = await client.get(f"{URL}/categories")
        assert res.status_code == 200
        assert [c["name"] for c in res.json()] == ["Data", "AI", "Web"]


class TestCourseDetail:
    """코스 상세 조회 테스트."""

    async def test_detail_with_lessons_and_instructor(self, client: AsyncClient, course, lessons):
        res = await client.get(f"{URL}/{course.id}")
        assert res.status_code == 200
        data = res.json()
        assert data["instructor"] == "Ada Lovelace"
        assert data["instructorBio"] == "Teaches Python and data engineering"
        assert data["instructorAvatar"] == "https://example.com/ada.png"
        assert data["prerequisites"] == ["Basic computer skills"]
        assert data["learningObjectives"] == ["Write Python scripts"]
        assert [lesson["order"] for lesson in data["lessons"]] == [1, 2, 3]
        assert data["lessons"][0]["title"] == "Getting Started"

    async def test_detail_not_found(self, client: AsyncClient):
        res = await client.get(f"{URL}/missing-id")
        assert res.status_code == 404
        assert res.json() == {"error": "Course not found"}


class TestCourseCreate:
    """코스 생성 테스트."""

    async def test_create_course(self, client: AsyncClient, instructor):
        res = await client.post(URL, json={
            "title": "Advanced SQL: Window Functions!",
            "description": "Ranking, framing and more",
            "instructorId": instructor.id,
            "category": "Data",
            "level": "advanced",
            "price": "19.50",
            "tags": ["sql"],
        })
        assert res.status_code == 201
        data = res.json()
        assert data["slug"] == "advanced-sql-window-functions"
        assert data["status"] == "draft"
        assert data["enrollmentCount"] == 0
        assert Decimal(str(data["price"])) == Decimal("19.50")
        assert data["learningObjectives"] == []

    async def test_create_accepts_snake_case(self, client: AsyncClient, instructor):
        res = await client.post(URL, json={
            "title": "Go Basics",
            "description": "Goroutines",
            "instructor_id": instructor.id,
            "category": "Programming",
            "level": "beginner",
        })
        assert res.status_code == 201
        assert res.json()["instructorId"] == instructor.id

    async def test_create_unknown_instructor(self, client: AsyncClient):
        res = await client.post(URL, json={
            "title": "Orphan",
            "description": "Nobody teaches this",
            "instructorId": "nobody",
            "category": "Misc",
            "level": "beginner",
        })
        assert res.status_code == 404
        assert res.json()["error"] == "Instructor not found"

    async def test_create_duplicate_slug(self, client: AsyncClient, course, instructor):
        res = await client.post(URL, json={
            "title": "Python  Fundamentals",
            "description": "Again",
            "instructorId": instructor.id,
            "category": "Programming",
            "level": "beginner",
        })
        assert res.status_code == 409

    async def test_create_missing_fields(self, client: AsyncClient):
        res = await client.post(URL, json={"title": "Incomplete"})
        assert res.status_code == 422
        fields = {tuple(d["loc"])[-1] for d in res.json()["details"]}
        assert {"description", "instructorId", "category", "level"} <= fields


class TestCourseUpdate:
    """코스 수정 테스트."""

    async def test_partial_update(self, client: AsyncClient, session_factory, course):
        res = await client.put(f"{URL}/{course.id}", json={"isFeatured": False, "price": 10})
        assert res.status_code == 200
        data = res.json()
        assert data["isFeatured"] is False
        assert data["title"] == "Python Fundamentals"

        stored = await fetch(session_factory, Course, course.id)
        assert stored.price == Decimal("10")
        assert stored.is_featured is False

    async def test_update_not_found(self, client: AsyncClient):
        res = await client.put(f"{URL}/missing-id", json={"title": "X"})
        assert res.status_code == 404
