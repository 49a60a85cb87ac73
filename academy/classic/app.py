"""클래식 Starlette 애플리케이션 — 라우트 테이블과 미들웨어 등록.

Classic Starlette application — Route table, middleware and exception
handler registration. Serves the same ``/api`` routes as ``academy.main``
and shares its services, exception handlers and request logging.

Run with ``python -m academy.main --classic`` or
``uvicorn academy.classic.app:app``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.routing import Route

from academy.classic import handlers
from academy.config import settings
from academy.database import async_session
from academy.middleware.request_logging import RequestLoggingMiddleware
from academy.utils.exceptions import EXCEPTION_HANDLERS
from academy.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    """애플리케이션 시작 훅 — Configure logging on startup."""
    configure_logging(settings.LOG_LEVEL)
    logger.info("%s %s starting (classic)", settings.APP_NAME, settings.APP_VERSION)
    yield


# 라우트 테이블 — /categories, /me 경로는 경로 매개변수 경로보다 먼저 선언
# Route table; literal segments come before the matching path-parameter routes
routes: list[Route] = [
    Route("/", handlers.root, methods=["GET"]),
    Route("/favicon.ico", handlers.favicon, methods=["GET"]),
    Route("/health", handlers.health, methods=["GET"]),
    # 코스 — Courses
    Route("/api/courses", handlers.list_courses, methods=["GET"]),
    Route("/api/courses", handlers.create_course, methods=["POST"]),
    Route("/api/courses/categories", handlers.list_categories, methods=["GET"]),
    Route("/api/courses/{course_id}", handlers.get_course, methods=["GET"]),
    Route("/api/courses/{course_id}", handlers.update_course, methods=["PUT"]),
    # 레슨 — Lessons
    Route("/api/lessons", handlers.create_lesson, methods=["POST"]),
    Route("/api/lessons/course/{course_id}", handlers.list_course_lessons, methods=["GET"]),
    Route("/api/lessons/{lesson_id}", handlers.get_lesson, methods=["GET"]),
    Route("/api/lessons/{lesson_id}", handlers.update_lesson, methods=["PUT"]),
    Route("/api/lessons/{lesson_id}", handlers.delete_lesson, methods=["DELETE"]),
    Route("/api/lessons/{lesson_id}/complete", handlers.complete_lesson, methods=["POST"]),
    # 사용자 — Users
    Route("/api/users", handlers.create_user, methods=["POST"]),
    Route("/api/users/me", handlers.get_me, methods=["GET"]),
    Route("/api/users/me", handlers.update_me, methods=["PUT"]),
    Route("/api/users/me/enrollments", handlers.list_my_enrollments, methods=["GET"]),
    Route("/api/users/me/certificates", handlers.list_my_certificates, methods=["GET"]),
    Route("/api/users/me/stats", handlers.get_my_stats, methods=["GET"]),
    Route("/api/users/{user_id}", handlers.get_user, methods=["GET"]),
    # 수강 등록 — Enrollments
    Route("/api/enrollments", handlers.enroll, methods=["POST"]),
    Route("/api/enrollments/user/{user_id}", handlers.list_user_enrollments, methods=["GET"]),
    Route("/api/enrollments/{enrollment_id}", handlers.get_enrollment, methods=["GET"]),
    Route("/api/enrollments/{enrollment_id}", handlers.update_enrollment, methods=["PUT"]),
    Route("/api/enrollments/{enrollment_id}", handlers.delete_enrollment, methods=["DELETE"]),
    Route("/api/enrollments/{enrollment_id}/progress", handlers.get_enrollment_progress, methods=["GET"]),
    # 검색 — Search
    Route("/api/search", handlers.search_all, methods=["GET"]),
    Route("/api/search/courses", handlers.search_courses, methods=["GET"]),
    Route("/api/search/lessons", handlers.search_lessons, methods=["GET"]),
    Route("/api/search/suggestions", handlers.suggestions, methods=["GET"]),
    # 인증 — Auth
    Route("/api/auth/login", handlers.login, methods=["POST"]),
    Route("/api/auth/logout", handlers.logout, methods=["POST"]),
]

middleware: list[Middleware] = [
    Middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    ),
    Middleware(RequestLoggingMiddleware),
]

app: Starlette = Starlette(
    routes=routes,
    middleware=middleware,
    exception_handlers=EXCEPTION_HANDLERS,
    lifespan=lifespan,
)

# 핸들러가 사용하는 공유 상태 — Shared state read by the handlers
app.state.session_factory = async_session
app.state.settings = settings
