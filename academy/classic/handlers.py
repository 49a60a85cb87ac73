"""클래식 요청 핸들러 — 요청 파싱, 서비스 호출, JSON 응답.

Classic request handlers. Each handler parses path params, query strings
and JSON bodies itself, runs the shared service inside a per-request
session scope, and renders the pydantic result as camelCase JSON.
"""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from academy.schemas.auth import LoginRequest
from academy.schemas.common import CamelModel
from academy.schemas.course import CourseCreate, CourseLevel, CourseUpdate
from academy.schemas.enrollment import EnrollmentCreate, EnrollmentUpdate
from academy.schemas.lesson import LessonCompleteRequest, LessonCreate, LessonType, LessonUpdate
from academy.schemas.search import CourseSearchFilters, LessonSearchFilters
from academy.schemas.user import UserCreate, UserUpdate
from academy.services.auth_service import auth_service
from academy.services.course_service import course_service
from academy.services.enrollment_service import enrollment_service
from academy.services.lesson_service import lesson_service
from academy.services.search_service import search_service
from academy.services.user_service import user_service
from academy.utils.exceptions import BadRequestError


class CourseListQuery(CamelModel):
    """코스 목록 쿼리 문자열 — Query string of ``GET /courses``."""

    category: str | None = None
    level: CourseLevel | None = None
    featured: bool = False


class CourseSearchQuery(CourseSearchFilters):
    """코스 검색 쿼리 문자열 — Query string of ``GET /search/courses``."""

    q: str | None = None
    level: CourseLevel | None = None


class LessonSearchQuery(LessonSearchFilters):
    """레슨 검색 쿼리 문자열 — Query string of ``GET /search/lessons``."""

    q: str | None = None
    type: LessonType | None = None


# ---------------------------------------------------------------------------
# 공용 헬퍼 — Shared helpers
# ---------------------------------------------------------------------------


@asynccontextmanager
async def session_scope(request: Request) -> AsyncIterator[AsyncSession]:
    """요청 단위 세션 = 트랜잭션.

    Open a session from ``app.state.session_factory``; commit when the block
    succeeds and roll back when it raises.
    """
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def read_body(request: Request) -> dict[str, Any]:
    """JSON 요청 본문을 읽습니다. 비어 있으면 빈 딕셔너리.

    Read the JSON object body; an empty body reads as ``{}``.

    Raises:
        BadRequestError: 본문이 JSON 객체가 아닐 때 (Body is not a JSON object)
    """
    raw: bytes = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BadRequestError("Request body must be valid JSON") from None
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    return body


def render(payload: BaseModel | list[BaseModel], status_code: int = 200) -> JSONResponse:
    """pydantic 결과를 camelCase JSON 응답으로 변환합니다 — Render models as camelCase JSON."""
    if isinstance(payload, list):
        content: Any = [item.model_dump(mode="json", by_alias=True) for item in payload]
    else:
        content = payload.model_dump(mode="json", by_alias=True)
    return JSONResponse(content, status_code=status_code)


def current_user_id(request: Request) -> str:
    """Authorization 헤더의 사용자, 없으면 데모 사용자 — Current user id from the request."""
    return auth_service.user_id_from_header(request.headers.get("authorization"))


# ---------------------------------------------------------------------------
# 서비스 경로 — Service routes
# ---------------------------------------------------------------------------


async def root(request: Request) -> JSONResponse:
    settings = request.app.state.settings
    return JSONResponse({"message": settings.APP_NAME, "version": settings.APP_VERSION})


async def favicon(request: Request) -> Response:
    return Response(status_code=204)


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


# ---------------------------------------------------------------------------
# 코스 — Courses
# ---------------------------------------------------------------------------


async def list_courses(request: Request) -> JSONResponse:
    query = CourseListQuery.model_validate(dict(request.query_params))
    async with session_scope(request) as db:
        result = await course_service.list_courses(
            db, category=query.category, level=query.level, featured=query.featured
        )
    return render(result)


async def list_categories(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await course_service.list_categories(db)
    return render(result)


async def get_course(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await course_service.get_course(db, request.path_params["course_id"])
    return render(result)


async def create_course(request: Request) -> JSONResponse:
    data = CourseCreate.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result = await course_service.create_course(db, data)
    return render(result, status_code=201)


async def update_course(request: Request) -> JSONResponse:
    data = CourseUpdate.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result = await course_service.update_course(db, request.path_params["course_id"], data)
    return render(result)


# ---------------------------------------------------------------------------
# 레슨 — Lessons
# ---------------------------------------------------------------------------


async def list_course_lessons(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await lesson_service.list_course_lessons(db, request.path_params["course_id"])
    return render(result)


async def get_lesson(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await lesson_service.get_lesson(db, request.path_params["lesson_id"])
    return render(result)


async def create_lesson(request: Request) -> JSONResponse:
    data = LessonCreate.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result = await lesson_service.create_lesson(db, data)
    return render(result, status_code=201)


async def update_lesson(request: Request) -> JSONResponse:
    data = LessonUpdate.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result = await lesson_service.update_lesson(db, request.path_params["lesson_id"], data)
    return render(result)


async def delete_lesson(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await lesson_service.delete_lesson(db, request.path_params["lesson_id"])
    return render(result)


async def complete_lesson(request: Request) -> JSONResponse:
    data = LessonCompleteRequest.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result = await lesson_service.complete_lesson(
            db, request.path_params["lesson_id"], data.user_id, data.enrollment_id
        )
    return render(result)


# ---------------------------------------------------------------------------
# 사용자 — Users
# ---------------------------------------------------------------------------


async def get_me(request: Request) -> JSONResponse:
    user_id: str = current_user_id(request)
    async with session_scope(request) as db:
        result = await user_service.get_me(db, user_id)
    return render(result)


async def update_me(request: Request) -> JSONResponse:
    user_id: str = current_user_id(request)
    data = UserUpdate.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result = await user_service.update_me(db, user_id, data)
    return render(result)


async def list_my_enrollments(request: Request) -> JSONResponse:
    user_id: str = current_user_id(request)
    async with session_scope(request) as db:
        result = await user_service.list_my_enrollments(db, user_id)
    return render(result)


async def list_my_certificates(request: Request) -> JSONResponse:
    user_id: str = current_user_id(request)
    async with session_scope(request) as db:
        result = await user_service.list_my_certificates(db, user_id)
    return render(result)


async def get_my_stats(request: Request) -> JSONResponse:
    user_id: str = current_user_id(request)
    async with session_scope(request) as db:
        result = await user_service.get_learning_stats(db, user_id)
    return render(result)


async def get_user(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await user_service.get_profile(db, request.path_params["user_id"])
    return render(result)


async def create_user(request: Request) -> JSONResponse:
    data = UserCreate.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result = await user_service.create_user(db, data)
    return render(result, status_code=201)


# ---------------------------------------------------------------------------
# 수강 등록 — Enrollments
# ---------------------------------------------------------------------------


async def enroll(request: Request) -> JSONResponse:
    data = EnrollmentCreate.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result, created = await enrollment_service.enroll(db, data)
    return render(result, status_code=201 if created else 200)


async def list_user_enrollments(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await enrollment_service.list_user_enrollments(db, request.path_params["user_id"])
    return render(result)


async def get_enrollment(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await enrollment_service.get_enrollment(db, request.path_params["enrollment_id"])
    return render(result)


async def update_enrollment(request: Request) -> JSONResponse:
    data = EnrollmentUpdate.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result = await enrollment_service.update_enrollment(
            db, request.path_params["enrollment_id"], data
        )
    return render(result)


async def get_enrollment_progress(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await enrollment_service.get_progress(db, request.path_params["enrollment_id"])
    return render(result)


async def delete_enrollment(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await enrollment_service.delete_enrollment(db, request.path_params["enrollment_id"])
    return render(result)


# ---------------------------------------------------------------------------
# 검색 — Search
# ---------------------------------------------------------------------------


async def search_all(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await search_service.search_all(db, request.query_params.get("q"))
    return render(result)


async def search_courses(request: Request) -> JSONResponse:
    query = CourseSearchQuery.model_validate(dict(request.query_params))
    filters = CourseSearchFilters.model_validate(query.model_dump(exclude={"q"}))
    async with session_scope(request) as db:
        result = await search_service.search_courses(db, query.q, filters)
    return render(result)


async def search_lessons(request: Request) -> JSONResponse:
    query = LessonSearchQuery.model_validate(dict(request.query_params))
    filters = LessonSearchFilters.model_validate(query.model_dump(exclude={"q"}))
    async with session_scope(request) as db:
        result = await search_service.search_lessons(db, query.q, filters)
    return render(result)


async def suggestions(request: Request) -> JSONResponse:
    async with session_scope(request) as db:
        result = await search_service.suggestions(db, request.query_params.get("q"))
    return render(result)


# ---------------------------------------------------------------------------
# 인증 — Auth
# ---------------------------------------------------------------------------


async def login(request: Request) -> JSONResponse:
    data = LoginRequest.model_validate(await read_body(request))
    async with session_scope(request) as db:
        result = await auth_service.login(db, data)
    return render(result)


async def logout(request: Request) -> JSONResponse:
    return render(await auth_service.logout())
