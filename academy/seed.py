"""초기 데이터 시드 스크립트 — 분류, 강사, 코스, 레슨, 데모 사용자 생성.

Seed script — Creates browsing categories, instructors, a course catalogue
with lessons, learner reviews and the demo user.

Usage:
    python -m academy.seed

Creates:
    - 5개 분류 (5 categories)
    - 4명 강사 (4 instructors)
    - 5개 코스, 코스당 3-4개 레슨 (5 courses with 3-4 lessons each)
    - 데모 사용자 + 리뷰 (The demo user and a few reviews)
"""

import asyncio
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from sqlalchemy import select

from academy.config import settings
from academy.database import Base, async_session, engine
from academy.models import Category, Course, Lesson, Review, User
from academy.utils.logger import configure_logging, get_logger
from academy.utils.slug import slugify

logger = get_logger(__name__)

CATEGORIES: list[dict[str, Any]] = [
    {"name": "Observability", "icon": "🔍", "order": 1},
    {"name": "Error Handling", "icon": "🐛", "order": 2},
    {"name": "Performance", "icon": "⚡", "order": 3},
    {"name": "Security", "icon": "🔒", "order": 4},
    {"name": "AI/ML", "icon": "🤖", "order": 5},
]

INSTRUCTORS: list[dict[str, Any]] = [
    {
        "email": "cody.dearkland@academy.dev",
        "name": "Cody De Arkland",
        "bio": "Senior Developer Advocate specializing in observability and monitoring",
    },
    {
        "email": "kyle.tryon@academy.dev",
        "name": "Kyle Tryon",
        "bio": "Error tracking expert with 10+ years of experience",
    },
    {
        "email": "lazar.nikolov@academy.dev",
        "name": "Lazar Nikolov",
        "bio": "Performance optimization specialist",
    },
    {
        "email": "paul.jaffre@academy.dev",
        "name": "Paul Jaffre",
        "bio": "Distributed systems engineer and trainer",
    },
]

# (제목, 강사 인덱스, 분류, 태그, 난이도, 기간, 가격, 평점, 추천, 설명)
# (title, instructor index, category, tags, level, duration, price, rating, featured, description)
COURSES: list[tuple[Any, ...]] = [
    (
        "Fundamentals of Observability", 0, "Observability",
        ["monitoring", "logs", "metrics", "tracing"], "beginner", "8 hours", "49.99", "4.9", True,
        "Learn the core concepts of observability and how to implement them in your applications.",
    ),
    (
        "Advanced Error Tracking", 1, "Error Handling",
        ["errors", "debugging", "exceptions", "troubleshooting"], "intermediate", "10 hours", "79.99", "4.8", True,
        "Master the art of error tracking and debugging in complex applications.",
    ),
    (
        "Performance Optimization Techniques", 2, "Performance",
        ["optimization", "profiling", "metrics", "bottlenecks"], "advanced", "12 hours", "99.99", "4.7", True,
        "Learn how to identify and resolve performance bottlenecks in your applications.",
    ),
    (
        "Distributed Tracing Systems", 3, "Observability",
        ["tracing", "microservices", "distributed-systems"], "advanced", "15 hours", "99.99", "4.9", False,
        "Understand and implement distributed tracing in microservice architectures.",
    ),
    (
        "Securing Web Applications", 1, "Security",
        ["security", "owasp", "authentication"], "intermediate", "6 hours", "0", "4.5", False,
        "Find and fix the most common vulnerabilities in web applications.",
    ),
]

# 코스 제목별 레슨 (제목, 유형, 기간) — Lessons per course title (title, type, duration)
LESSONS: dict[str, list[tuple[str, str, str]]] = {
    "Fundamentals of Observability": [
        ("What Is Observability?", "video", "15 min"),
        ("Logs, Metrics and Traces", "video", "25 min"),
        ("Instrumenting Your First Service", "text", "20 min"),
        ("Observability Quiz", "quiz", "10 min"),
    ],
    "Advanced Error Tracking": [
        ("Anatomy of an Error Event", "video", "20 min"),
        ("Grouping and Fingerprinting", "text", "25 min"),
        ("Triaging Production Issues", "assignment", "45 min"),
    ],
    "Performance Optimization Techniques": [
        ("Measuring Before Optimizing", "video", "18 min"),
        ("Profiling CPU and Memory", "video", "30 min"),
        ("Database Query Tuning", "text", "25 min"),
        ("Performance Quiz", "quiz", "10 min"),
    ],
    "Distributed Tracing Systems": [
        ("Spans and Traces", "video", "20 min"),
        ("Context Propagation", "text", "25 min"),
        ("Tracing a Microservice Call Chain", "assignment", "60 min"),
    ],
    "Securing Web Applications": [
        ("The OWASP Top Ten", "video", "30 min"),
        ("Authentication Pitfalls", "text", "20 min"),
        ("Security Review Exercise", "assignment", "45 min"),
    ],
}


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts categories,
    instructors, courses with their lessons, the demo user and reviews.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    # 테이블 생성 — DDL 실행 (Create all tables from ORM metadata)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as db:
        # 이미 시드되었는지 확인 — 분류가 하나라도 있으면 건너뜀
        # (Check if already seeded by looking for any existing category)
        result = await db.execute(select(Category).limit(1))
        if result.scalar_one_or_none():
            logger.info("Already seeded. Skipping.")
            return

        for data in CATEGORIES:
            db.add(
                Category(
                    slug=slugify(data["name"].replace("/", " ")),
                    description=f"Learn about {data['name']} best practices",
                    **data,
                )
            )

        instructors: list[User] = []
        for data in INSTRUCTORS:
            initials: str = "".join(part[0] for part in data["name"].split()[:2])
            instructor: User = User(
                role="instructor",
                avatar_url=f"https://ui-avatars.com/api/?name={initials}&size=128",
                **data,
            )
            db.add(instructor)
            instructors.append(instructor)
        await db.flush()  # flush로 강사 ID 생성 (Flush to generate instructor ids)

        now: datetime = datetime.now(timezone.utc)
        courses: list[Course] = []
        for title, idx, category, tags, level, duration, price, rating, featured, description in COURSES:
            course: Course = Course(
                title=title,
                slug=slugify(title),
                description=description,
                instructor_id=instructors[idx].id,
                category=category,
                tags=tags,
                level=level,
                status="published",
                duration=duration,
                price=Decimal(price),
                rating=Decimal(rating),
                is_featured=featured,
                review_count=0,
                prerequisites=[],
                learning_objectives=[],
                published_at=now,
            )
            db.add(course)
            courses.append(course)
        await db.flush()  # flush로 코스 ID 생성 (Flush to generate course ids)

        for course in courses:
            for order, (lesson_title, lesson_type, lesson_duration) in enumerate(LESSONS[course.title], start=1):
                db.add(
                    Lesson(
                        course_id=course.id,
                        title=lesson_title,
                        slug=slugify(lesson_title),
                        description=f"{lesson_title} ({course.title})",
                        type=lesson_type,
                        content=f"# {lesson_title}\n\nLesson {order} of {course.title}.",
                        duration=lesson_duration,
                        order=order,
                        is_free=order == 1,
                        resources=[],
                    )
                )

        # 데모 사용자와 리뷰 — Demo user and a few reviews
        demo: User | None = await db.get(User, settings.DEMO_USER_ID)
        if demo is None:
            demo = User(
                id=settings.DEMO_USER_ID,
                email="demo@example.com",
                name="Demo User",
                role="student",
            )
            db.add(demo)
            await db.flush()
        for course, rating, comment in (
            (courses[0], 5, "Clear and practical introduction."),
            (courses[1], 4, "Great real-world debugging examples."),
        ):
            db.add(Review(user_id=demo.id, course_id=course.id, rating=rating, comment=comment))
            course.review_count += 1

        await db.commit()
        logger.info(
            "Seeded: %d categories, %d instructors, %d courses, demo user=%s",
            len(CATEGORIES), len(instructors), len(courses), demo.id,
        )


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    asyncio.run(seed())
