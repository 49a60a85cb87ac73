"""Academy API 비동기 클라이언트.

Async client for the Academy API, one method per route. Responses are
returned as decoded JSON (camelCase keys); error responses raise
``ApiError`` carrying the status code and the ``error`` message.

Usage:
    async with AcademyClient("http://localhost:3001") as client:
        await client.login("ada@example.com", "secret")
        courses = await client.list_courses(featured=True)
"""

from types import TracebackType
from typing import Any

import httpx


class ApiError(Exception):
    """API 오류 응답 — Error response from the API.

    Attributes:
        status_code: HTTP 상태 코드 (HTTP status code)
        message: 오류 메시지 (The ``error`` field of the body)
        details: 검증 오류 상세 (Validation details of a 422, if any)
    """

    def __init__(self, status_code: int, message: str, details: Any = None) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code: int = status_code
        self.message: str = message
        self.details: Any = details


def _params(**values: Any) -> dict[str, Any]:
    """None 값을 제외한 쿼리 매개변수 — Query params without the unset ones."""
    return {key: value for key, value in values.items() if value is not None}


class AcademyClient:
    """Academy API 클라이언트.

    Args:
        base_url: 서버 주소 (Server origin, e.g. "http://localhost:3001")
        token: 베어러 토큰, ``login`` 호출 시 자동 설정 (Bearer token; set by ``login``)
        transport: httpx 전송 계층, 테스트에서 ASGI 앱 연결용
                   (Optional httpx transport, e.g. ``httpx.ASGITransport`` in tests)
        timeout: 요청 제한 시간(초) (Request timeout in seconds)
    """

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 20.0,
    ) -> None:
        self.token: str | None = token
        self._http: httpx.AsyncClient = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/api",
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "AcademyClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """연결을 닫습니다 — Close the underlying HTTP client."""
        await self._http.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        headers: dict[str, str] = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        response: httpx.Response = await self._http.request(
            method, path, json=json, params=params, headers=headers
        )
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = {"error": response.text}
            raise ApiError(response.status_code, body.get("error", response.reason_phrase), body.get("details"))
        return response.json()

    # ---------------------------------------------------------------------------
    # 코스 — Courses
    # ---------------------------------------------------------------------------

    async def list_courses(
        self,
        category: str | None = None,
        level: str | None = None,
        featured: bool | None = None,
    ) -> list[dict[str, Any]]:
        params = _params(category=category, level=level, featured="true" if featured else None)
        return await self._request("GET", "/courses", params=params)

    async def list_categories(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/courses/categories")

    async def get_course(self, course_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/courses/{course_id}")

    async def create_course(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/courses", json=data)

    async def update_course(self, course_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/courses/{course_id}", json=data)

    # ---------------------------------------------------------------------------
    # 레슨 — Lessons
    # ---------------------------------------------------------------------------

    async def list_course_lessons(self, course_id: str) -> list[dict[str, Any]]:
        return await self._request("GET", f"/lessons/course/{course_id}")

    async def get_lesson(self, lesson_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/lessons/{lesson_id}")

    async def create_lesson(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/lessons", json=data)

    async def update_lesson(self, lesson_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/lessons/{lesson_id}", json=data)

    async def delete_lesson(self, lesson_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/lessons/{lesson_id}")

    async def complete_lesson(self, lesson_id: str, user_id: str, enrollment_id: str) -> dict[str, Any]:
        return await self._request(
            "POST",
            f"/lessons/{lesson_id}/complete",
            json={"userId": user_id, "enrollmentId": enrollment_id},
        )

    # ---------------------------------------------------------------------------
    # 사용자 — Users
    # ---------------------------------------------------------------------------

    async def get_me(self) -> dict[str, Any]:
        return await self._request("GET", "/users/me")

    async def update_me(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", "/users/me", json=data)

    async def list_my_enrollments(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/users/me/enrollments")

    async def list_my_certificates(self) -> list[dict[str, Any]]:
        return await self._request("GET", "/users/me/certificates")

    async def get_my_stats(self) -> dict[str, Any]:
        return await self._request("GET", "/users/me/stats")

    async def get_user(self, user_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/users/{user_id}")

    async def create_user(self, email: str, name: str, role: str | None = None) -> dict[str, Any]:
        return await self._request("POST", "/users", json=_params(email=email, name=name, role=role))

    # ---------------------------------------------------------------------------
    # 수강 등록 — Enrollments
    # ---------------------------------------------------------------------------

    async def enroll(self, user_id: str, course_id: str) -> dict[str, Any]:
        return await self._request("POST", "/enrollments", json={"userId": user_id, "courseId": course_id})

    async def list_user_enrollments(self, user_id: str) -> list[dict[str, Any]]:
        return await self._request("GET", f"/enrollments/user/{user_id}")

    async def get_enrollment(self, enrollment_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/enrollments/{enrollment_id}")

    async def update_enrollment(self, enrollment_id: str, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PUT", f"/enrollments/{enrollment_id}", json=data)

    async def get_enrollment_progress(self, enrollment_id: str) -> dict[str, Any]:
        return await self._request("GET", f"/enrollments/{enrollment_id}/progress")

    async def delete_enrollment(self, enrollment_id: str) -> dict[str, Any]:
        return await self._request("DELETE", f"/enrollments/{enrollment_id}")

    # ---------------------------------------------------------------------------
    # 검색 — Search
    # ---------------------------------------------------------------------------

    async def search(self, q: str) -> dict[str, Any]:
        return await self._request("GET", "/search", params={"q": q})

    async def search_courses(
        self,
        q: str | None = None,
        category: str | None = None,
        level: str | None = None,
        min_rating: float | None = None,
        max_price: float | None = None,
        instructor: str | None = None,
        tags: list[str] | None = None,
    ) -> dict[str, Any]:
        params = _params(
            q=q,
            category=category,
            level=level,
            minRating=min_rating,
            maxPrice=max_price,
            instructor=instructor,
            tags=",".join(tags) if tags else None,
        )
        return await self._request("GET", "/search/courses", params=params)

    async def search_lessons(
        self,
        q: str | None = None,
        course_id: str | None = None,
        lesson_type: str | None = None,
    ) -> dict[str, Any]:
        params = _params(q=q, courseId=course_id, type=lesson_type)
        return await self._request("GET", "/search/lessons", params=params)

    async def suggestions(self, q: str) -> list[dict[str, Any]]:
        return await self._request("GET", "/search/suggestions", params={"q": q})

    # ---------------------------------------------------------------------------
    # 인증 — Auth
    # ---------------------------------------------------------------------------

    async def login(self, email: str, password: str) -> dict[str, Any]:
        """로그인하고 이후 요청에 토큰을 사용합니다 — Log in and keep the token for later calls."""
        result: dict[str, Any] = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        self.token = result["token"]
        return result

    async def logout(self) -> dict[str, Any]:
        """로그아웃하고 토큰을 버립니다 — Log out and drop the token."""
        result: dict[str, Any] = await self._request("POST", "/auth/logout")
        self.token = None
        return result
