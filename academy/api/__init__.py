"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates every resource router into a single router
mounted under ``/api``.

Included routers:
    - courses: 코스 및 분류 (Courses and categories)
    - lessons: 레슨 및 레슨 완료 (Lessons and lesson completion)
    - users: 사용자 및 내 학습 현황 (Users and the current user's learning)
    - enrollments: 수강 등록 및 진도 (Enrollments and progress)
    - search: 검색 및 자동완성 (Search and suggestions)
    - auth: 데모 로그인 (Demo login)
"""

from fastapi import APIRouter

from academy.api.auth import router as auth_router
from academy.api.courses import router as courses_router
from academy.api.enrollments import router as enrollments_router
from academy.api.lessons import router as lessons_router
from academy.api.search import router as search_router
from academy.api.users import router as users_router

api_router: APIRouter = APIRouter()

api_router.include_router(courses_router, prefix="/courses", tags=["Courses"])
api_router.include_router(lessons_router, prefix="/lessons", tags=["Lessons"])
api_router.include_router(users_router, prefix="/users", tags=["Users"])
api_router.include_router(enrollments_router, prefix="/enrollments", tags=["Enrollments"])
api_router.include_router(search_router, prefix="/search", tags=["Search"])
api_router.include_router(auth_router, prefix="/auth", tags=["Auth"])
