"""검색 레포지토리 — 코스/레슨/강사 부분 문자열 검색 쿼리.

Search Repository — Case-insensitive substring (ILIKE) queries over courses,
lessons and instructors, plus the prefix lookups behind autocomplete.
The JSON ``tags`` column is matched through its text rendering for free-text
queries; the ``tags`` filter checks exact array membership per dialect.
"""

from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy import ColumnElement, Select, String, and_, case, cast, func, literal, or_, select, type_coerce
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from academy.models.course import Course
from academy.models.lesson import Lesson
from academy.models.user import User


def has_tag(dialect_name: str, tag: str) -> ColumnElement[bool]:
    """코스 태그 배열에 태그가 정확히 포함되어 있는지 확인하는 조건.

    Exact, case-sensitive membership of ``tag`` in ``courses.tags``:
    JSONB containment (``tags @> '["tag"]'``) on PostgreSQL, a ``json_each``
    lookup elsewhere.
    """
    if dialect_name == "postgresql":
        return type_coerce(Course.tags, JSONB).contains([tag])
    elements = func.json_each(Course.tags).table_valued("value")
    return select(literal(1)).select_from(elements).where(elements.c.value == tag).exists()


class SearchRepository:
    """검색 쿼리를 담당하는 레포지토리.

    Repository handling the search queries. It is not tied to a single
    model, so it does not extend ``BaseRepository``.
    """

    async def search_courses(
        self,
        db: AsyncSession,
        q: str | None = None,
        category: str | None = None,
        level: str | None = None,
        min_rating: float | None = None,
        max_price: float | None = None,
        instructor: str | None = None,
        tags: list[str] | None = None,
    ) -> list[tuple[Course, str | None]]:
        """필터에 맞는 코스를 강사 이름과 함께 검색합니다.

        Search courses (LEFT JOIN instructor name). Every given filter must
        hold. With ``q`` the results are ordered by title relevance (prefix
        match, then substring match, then the rest) and rating; without it
        featured courses come first, then higher rated, then newest.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            q: 제목/설명/태그 검색어 (Matched against title, description and tags)
            category: 분류 이름 (Exact category)
            level: 난이도 (Exact level)
            min_rating: 최소 평점 (Minimum rating, inclusive)
            max_price: 최대 가격 (Maximum price, inclusive)
            instructor: 강사 이름 검색어 (Substring of the instructor name)
            tags: 모두 포함해야 하는 태그 (Tags that must all be present)

        Returns:
            list[tuple[Course, str | None]]: (코스, 강사 이름) 목록
        """
        conditions: list = []
        if q:
            pattern: str = f"%{q}%"
            conditions.append(
                or_(
                    Course.title.ilike(pattern),
                    Course.description.ilike(pattern),
                    cast(Course.tags, String).ilike(pattern),
                )
            )
        if category:
            conditions.append(Course.category == category)
        if level:
            conditions.append(Course.level == level)
        if min_rating is not None:
            conditions.append(Course.rating >= Decimal(str(min_rating)))
        if max_price is not None:
            conditions.append(Course.price <= Decimal(str(max_price)))
        if instructor:
            conditions.append(User.name.ilike(f"%{instructor}%"))
        dialect_name: str = db.get_bind().dialect.name
        for tag in tags or []:
            conditions.append(has_tag(dialect_name, tag))

        query: Select = select(Course, User.name).outerjoin(User, Course.instructor_id == User.id)
        if conditions:
            query = query.where(and_(*conditions))

        if q:
            relevance = case(
                (Course.title.ilike(f"{q}%"), 1),
                (Course.title.ilike(f"%{q}%"), 2),
                else_=3,
            )
            query = query.order_by(relevance, Course.rating.desc())
        else:
            query = query.order_by(
                Course.is_featured.desc(),
                Course.rating.desc(),
                Course.created_at.desc(),
            )

        result = await db.execute(query)
        return [(course, name) for course, name in result.all()]

    async def search_lessons(
        self,
        db: AsyncSession,
        q: str | None = None,
        course_id: str | None = None,
        lesson_type: str | None = None,
    ) -> list[tuple[Lesson, str, str]]:
        """레슨을 코스 제목/슬러그와 함께 검색합니다.

        Search lessons by title, description or content; returns each lesson
        with its course's title and slug, ordered by lesson order.
        """
        query: Select = select(Lesson, Course.title, Course.slug).join(Course, Lesson.course_id == Course.id)
        if q:
            pattern: str = f"%{q}%"
            query = query.where(
                or_(
                    Lesson.title.ilike(pattern),
                    Lesson.description.ilike(pattern),
                    Lesson.content.ilike(pattern),
                )
            )
        if course_id:
            query = query.where(Lesson.course_id == course_id)
        if lesson_type:
            query = query.where(Lesson.type == lesson_type)
        query = query.order_by(Lesson.order)

        result = await db.execute(query)
        return [(lesson, title, slug) for lesson, title, slug in result.all()]

    async def find_courses(self, db: AsyncSession, q: str, limit: int) -> Sequence[Course]:
        """제목/설명에 검색어가 포함된 코스 — Courses whose title or description contains ``q``."""
        pattern: str = f"%{q}%"
        query: Select = (
            select(Course)
            .where(or_(Course.title.ilike(pattern), Course.description.ilike(pattern)))
            .limit(limit)
        )
        return (await db.execute(query)).scalars().all()

    async def find_lessons(self, db: AsyncSession, q: str, limit: int) -> Sequence[Lesson]:
        """제목/설명에 검색어가 포함된 레슨 — Lessons whose title or description contains ``q``."""
        pattern: str = f"%{q}%"
        query: Select = (
            select(Lesson)
            .where(or_(Lesson.title.ilike(pattern), Lesson.description.ilike(pattern)))
            .limit(limit)
        )
        return (await db.execute(query)).scalars().all()

    async def find_instructors(self, db: AsyncSession, q: str, limit: int) -> Sequence[User]:
        """이름/소개에 검색어가 포함된 강사 — Instructors whose name or bio contains ``q``."""
        pattern: str = f"%{q}%"
        query: Select = (
            select(User)
            .where(
                User.role == "instructor",
                or_(User.name.ilike(pattern), User.bio.ilike(pattern)),
            )
            .limit(limit)
        )
        return (await db.execute(query)).scalars().all()

    async def course_titles_with_prefix(self, db: AsyncSession, prefix: str, limit: int) -> list[str]:
        """접두어로 시작하는 코스 제목 — Course titles starting with ``prefix``."""
        query: Select = select(Course.title).where(Course.title.ilike(f"{prefix}%")).limit(limit)
        return list((await db.execute(query)).scalars().all())

    async def categories_with_prefix(self, db: AsyncSession, prefix: str, limit: int) -> list[str]:
        """접두어로 시작하는 코스 분류 (중복 제거) — Distinct course categories starting with ``prefix``."""
        query: Select = (
            select(Course.category)
            .where(Course.category.ilike(f"{prefix}%"))
            .distinct()
            .order_by(Course.category)
            .limit(limit)
        )
        return list((await db.execute(query)).scalars().all())

    async def tag_lists_matching(self, db: AsyncSession, fragment: str) -> Sequence[list[str]]:
        """검색어를 포함한 코스의 태그 목록 — Tag lists of courses whose tags mention ``fragment``."""
        query: Select = select(Course.tags).where(cast(Course.tags, String).ilike(f"%{fragment}%"))
        return (await db.execute(query)).scalars().all()


# 싱글턴 인스턴스 — Singleton instance
search_repository: SearchRepository = SearchRepository()
