"""FastAPI 애플리케이션 엔트리포인트 — 미들웨어, 예외 핸들러, 라우터 등록.

FastAPI application entry point — Middleware, exception handler and router
registration. ``run`` starts uvicorn for this app or, with ``--classic``,
for the Starlette route-table variant in ``academy.classic.app``.
"""

import argparse
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from academy.api import api_router
from academy.config import settings
from academy.middleware.request_logging import RequestLoggingMiddleware
from academy.utils.exceptions import EXCEPTION_HANDLERS
from academy.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """애플리케이션 시작/종료 훅 — Configure logging on startup."""
    configure_logging(settings.LOG_LEVEL)
    logger.info("%s %s starting", settings.APP_NAME, settings.APP_VERSION)
    yield
    logger.info("%s shutting down", settings.APP_NAME)


app: FastAPI = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    exception_handlers=EXCEPTION_HANDLERS,
)

# 요청 로깅 미들웨어 — CORS보다 먼저 등록하여 모든 요청을 캡처
# Request logging middleware, registered before CORS to capture all requests
app.add_middleware(RequestLoggingMiddleware)

# CORS 미들웨어 — Cross-Origin Resource Sharing middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, str]:
    """API 정보 — API name and version."""
    return {"message": settings.APP_NAME, "version": settings.APP_VERSION}


@app.get("/favicon.ico", status_code=204, include_in_schema=False)
async def favicon() -> Response:
    """파비콘 없음 — No favicon; answers 204 so browsers stop asking."""
    return Response(status_code=204)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """서버 상태 확인 엔드포인트.

    Health check endpoint for load balancers and monitoring.
    """
    return {"status": "ok"}


app.include_router(api_router, prefix="/api")


def run() -> None:
    """개발 서버를 실행합니다 — Run the server with uvicorn on HOST:PORT."""
    parser = argparse.ArgumentParser(description=f"Run the {settings.APP_NAME} server.")
    parser.add_argument(
        "--classic",
        action="store_true",
        help="serve the Starlette route-table variant instead of the FastAPI app",
    )
    parser.add_argument("--reload", action="store_true", help="reload on code changes")
    args = parser.parse_args()

    target: str = "academy.classic.app:app" if args.classic else "academy.main:app"
    uvicorn.run(
        target,
        host=settings.HOST,
        port=settings.PORT,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
