"""레슨 API 테스트.

Lesson API tests — ordered listing, CRUD, deletion with progress rows, and
lesson completion (idempotency, progress refresh, certificate issuance).
"""

from datetime import datetime, timezone

from httpx import AsyncClient
from sqlalchemy import func, select

from academy.models import Certificate, Course, Enrollment, Lesson, LessonProgress, User
from tests.conftest import fetch, persist

URL = "/api/lessons"


class TestLessonRead:
    """레슨 조회 테스트."""

    async def test_list_course_lessons_in_order(self, client: AsyncClient, course, lessons):
        res = await client.get(f"{URL}/course/{course.id}")
        assert res.status_code == 200
        assert [lesson["title"] for lesson in res.json()] == [
            "Getting Started", "Variables and Types", "Control Flow Quiz",
        ]

    async def test_list_unknown_course_is_empty(self, client: AsyncClient):
        res = await client.get(f"{URL}/course/missing")
        assert res.status_code == 200
        assert res.json() == []

    async def test_get_lesson(self, client: AsyncClient, lessons):
        res = await client.get(f"{URL}/{lessons[1].id}")
        assert res.status_code == 200
        data = res.json()
        assert data["courseId"] == lessons[1].course_id
        assert data["type"] == "text"
        assert data["isFree"] is False

    async def test_get_lesson_not_found(self, client: AsyncClient):
        res = await client.get(f"{URL}/missing")
        assert res.status_code == 404
        assert res.json() == {"error": "Lesson not found"}


class TestLessonCreate:
    """레슨 생성 테스트."""

    async def test_first_lesson_gets_order_one(self, client: AsyncClient, course):
        res = await client.post(URL, json={
            "courseId": course.id,
            "title": "Hello World",
            "type": "video",
            "videoUrl": "https://example.com/v.mp4",
        })
        assert res.status_code == 201
        data = res.json()
        assert data["order"] == 1
        assert data["slug"] == "hello-world"
        assert data["resources"] == []

    async def test_appends_after_last_lesson(self, client: AsyncClient, course, lessons):
        res = await client.post(URL, json={
            "courseId": course.id,
            "title": "Functions",
            "type": "text",
            "resources": [{"title": "Docs", "url": "https://docs.python.org", "type": "link"}],
        })
        assert res.status_code == 201
        data = res.json()
        assert data["order"] == 4
        assert data["resources"][0]["url"] == "https://docs.python.org"

    async def test_unknown_course(self, client: AsyncClient):
        res = await client.post(URL, json={"courseId": "missing", "title": "X", "type": "text"})
        assert res.status_code == 404
        assert res.json()["error"] == "Course not found"

    async def test_invalid_type(self, client: AsyncClient, course):
        res = await client.post(URL, json={"courseId": course.id, "title": "X", "type": "podcast"})
        assert res.status_code == 422


class TestLessonUpdate:
    """레슨 수정 테스트."""

    async def test_update_title_regenerates_slug(self, client: AsyncClient, lessons):
        res = await client.put(f"{URL}/{lessons[0].id}", json={"title": "Setup & Install"})
        assert res.status_code == 200
        data = res.json()
        assert data["slug"] == "setup--install"
        assert data["type"] == "video"

    async def test_update_not_found(self, client: AsyncClient):
        res = await client.put(f"{URL}/missing", json={"isFree": True})
        assert res.status_code == 404


class TestLessonDelete:
    """레슨 삭제 테스트."""

    async def test_delete_removes_progress_rows(self, client: AsyncClient, session_factory, lessons, enrollment):
        await persist(
            session_factory,
            LessonProgress(
                user_id=enrollment.user_id,
                lesson_id=lessons[0].id,
                enrollment_id=enrollment.id,
                completed_at=datetime.now(timezone.utc),
            ),
        )
        res = await client.delete(f"{URL}/{lessons[0].id}")
        assert res.status_code == 200
        assert res.json() == {"success": True, "deletedId": lessons[0].id}

        assert await fetch(session_factory, Lesson, lessons[0].id) is None
        async with session_factory() as session:
            remaining = await session.scalar(
                select(func.count()).select_from(LessonProgress).where(LessonProgress.lesson_id == lessons[0].id)
            )
        assert remaining == 0

    async def test_delete_not_found(self, client: AsyncClient):
        res = await client.delete(f"{URL}/missing")
        assert res.status_code == 404


class TestLessonComplete:
    """레슨 완료 처리 테스트."""

    async def test_complete_creates_progress_and_updates_enrollment(
        self, client: AsyncClient, session_factory, lessons, enrollment
    ):
        res = await client.post(f"{URL}/{lessons[0].id}/complete", json={
            "userId": enrollment.user_id,
            "enrollmentId": enrollment.id,
        })
        assert res.status_code == 200
        data = res.json()
        assert data["lessonId"] == lessons[0].id
        assert data["completedAt"] is not None

        stored = await fetch(session_factory, Enrollment, enrollment.id)
        assert stored.progress == 33
        assert stored.last_accessed_at is not None
        assert stored.completed_at is None

    async def test_complete_twice_returns_same_record(self, client: AsyncClient, session_factory, lessons, enrollment):
        body = {"userId": enrollment.user_id, "enrollmentId": enrollment.id}
        first = (await client.post(f"{URL}/{lessons[0].id}/complete", json=body)).json()
        second = await client.post(f"{URL}/{lessons[0].id}/complete", json=body)
        assert second.status_code == 200
        assert second.json()["id"] == first["id"]
        assert second.json()["completedAt"] == first["completedAt"]

        async with session_factory() as session:
            count = await session.scalar(select(func.count()).select_from(LessonProgress))
        assert count == 1

    async def test_complete_open_record(self, client: AsyncClient, session_factory, lessons, enrollment):
        """미완료 기록이 있으면 완료 시각만 설정합니다."""
        open_row = LessonProgress(
            user_id=enrollment.user_id,
            lesson_id=lessons[1].id,
            enrollment_id=enrollment.id,
            time_spent=120,
        )
        await persist(session_factory, open_row)

        res = await client.post(f"{URL}/{lessons[1].id}/complete", json={
            "userId": enrollment.user_id,
            "enrollmentId": enrollment.id,
        })
        data = res.json()
        assert data["id"] == open_row.id
        assert data["timeSpent"] == 120
        assert data["completedAt"] is not None

    async def test_completing_all_lessons_issues_certificate(
        self, client: AsyncClient, session_factory, lessons, enrollment
    ):
        body = {"userId": enrollment.user_id, "enrollmentId": enrollment.id}
        for lesson in lessons:
            res = await client.post(f"{URL}/{lesson.id}/complete", json=body)
            assert res.status_code == 200

        stored = await fetch(session_factory, Enrollment, enrollment.id)
        assert stored.progress == 100
        assert stored.completed_at is not None
        assert stored.certificate_id is not None

        certificate = await fetch(session_factory, Certificate, stored.certificate_id)
        assert certificate.enrollment_id == enrollment.id
        assert certificate.course_id == enrollment.course_id

    async def test_complete_unknown_lesson(self, client: AsyncClient, enrollment):
        res = await client.post(f"{URL}/missing/complete", json={
            "userId": enrollment.user_id,
            "enrollmentId": enrollment.id,
        })
        assert res.status_code == 404
        assert res.json()["error"] == "Lesson not found"

    async def test_complete_unknown_enrollment(self, client: AsyncClient, session_factory, student, lessons):
        res = await client.post(f"{URL}/{lessons[0].id}/complete", json={
            "userId": student.id,
            "enrollmentId": "missing",
        })
        assert res.status_code == 404
        assert res.json()["error"] == "Enrollment not found"
        async with session_factory() as session:
            assert await session.scalar(select(func.count()).select_from(LessonProgress)) == 0

    async def test_complete_lesson_of_another_course(
        self, client: AsyncClient, session_factory, instructor, student, lessons, enrollment
    ):
        """다른 코스의 레슨은 거부되고, 이후 해당 코스 수강 진도에 영향이 없습니다."""
        other_course = Course(
            title="Data Viz",
            slug="data-viz",
            description="Charts",
            instructor_id=instructor.id,
            category="Data",
            tags=[],
            level="beginner",
        )
        await persist(session_factory, other_course)
        other_lesson = Lesson(
            course_id=other_course.id, title="Bar Charts", slug="bar-charts", type="video", order=1
        )
        await persist(session_factory, other_lesson)

        res = await client.post(f"{URL}/{other_lesson.id}/complete", json={
            "userId": student.id,
            "enrollmentId": enrollment.id,
        })
        assert res.status_code == 400
        assert res.json() == {"error": "Lesson does not belong to the enrolled course"}
        async with session_factory() as session:
            assert await session.scalar(select(func.count()).select_from(LessonProgress)) == 0

        other = await client.post("/api/enrollments", json={"userId": student.id, "courseId": other_course.id})
        other_id = other.json()["id"]
        done = await client.post(f"{URL}/{other_lesson.id}/complete", json={
            "userId": student.id,
            "enrollmentId": other_id,
        })
        assert done.status_code == 200
        progress = await client.get(f"/api/enrollments/{other_id}/progress")
        assert progress.json()["progressPercentage"] == 100

    async def test_complete_with_someone_elses_enrollment(
        self, client: AsyncClient, session_factory, lessons, enrollment
    ):
        intruder = User(email="mallory@test.com", name="Mallory")
        await persist(session_factory, intruder)

        res = await client.post(f"{URL}/{lessons[0].id}/complete", json={
            "userId": intruder.id,
            "enrollmentId": enrollment.id,
        })
        assert res.status_code == 400
        assert res.json() == {"error": "Enrollment does not belong to this user"}
        stored = await fetch(session_factory, Enrollment, enrollment.id)
        assert stored.progress == 0

    async def test_complete_requires_body(self, client: AsyncClient, lessons):
        res = await client.post(f"{URL}/{lessons[0].id}/complete", json={})
        assert res.status_code == 422
