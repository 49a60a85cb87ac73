"""initial_schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

강의 플랫폼 테이블 생성: users, categories, courses, lessons, enrollments,
lesson_progress, certificates, reviews.
Create the course platform tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# JSON 컬럼 — JSONB on PostgreSQL, JSON elsewhere
JSON_TYPE = sa.JSON().with_variant(JSONB(), 'postgresql')


def upgrade() -> None:
    # users — 학생, 강사, 관리자 (Students, instructors, admins)
    op.create_table(
        'users',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), server_default='student', nullable=False),
        sa.Column('avatar_url', sa.Text(), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # categories — 코스 분류 (Browsing categories)
    op.create_table(
        'categories',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('name', sa.String(100), nullable=False, unique=True),
        sa.Column('slug', sa.String(100), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(50), nullable=True),
        sa.Column('order', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    # courses — 코스 카탈로그 (Course catalogue)
    op.create_table(
        'courses',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False, unique=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('instructor_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('thumbnail', sa.Text(), nullable=True),
        sa.Column('category', sa.String(100), nullable=False),
        sa.Column('tags', JSON_TYPE, nullable=False),
        sa.Column('level', sa.String(20), nullable=False),
        sa.Column('status', sa.String(20), server_default='draft', nullable=False),
        sa.Column('duration', sa.String(50), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), server_default='0'),
        sa.Column('rating', sa.Numeric(3, 2), server_default='0'),
        sa.Column('review_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('enrollment_count', sa.Integer(), server_default='0', nullable=False),
        sa.Column('is_featured', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('prerequisites', JSON_TYPE, nullable=True),
        sa.Column('learning_objectives', JSON_TYPE, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_courses_instructor', 'courses', ['instructor_id'])
    op.create_index('ix_courses_category', 'courses', ['category'])

    # lessons — 코스 내 레슨 (Lessons, removed with their course)
    op.create_table(
        'lessons',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('course_id', sa.String(64), sa.ForeignKey('courses.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(20), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('video_url', sa.Text(), nullable=True),
        sa.Column('duration', sa.String(50), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('is_free', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('resources', JSON_TYPE, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_lessons_course_order', 'lessons', ['course_id', 'order'])

    # enrollments — 수강 등록 (One per user/course pair)
    op.create_table(
        'enrollments',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('course_id', sa.String(64), sa.ForeignKey('courses.id'), nullable=False),
        sa.Column('enrolled_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('last_accessed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('progress', sa.Integer(), server_default='0', nullable=False),
        sa.Column('certificate_id', sa.String(64), nullable=True),
        sa.UniqueConstraint('user_id', 'course_id', name='uq_enrollment_user_course'),
        sa.CheckConstraint('progress BETWEEN 0 AND 100', name='ck_enrollment_progress_range'),
    )

    # lesson_progress — 레슨별 진도 (Per-lesson completion records)
    op.create_table(
        'lesson_progress',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('lesson_id', sa.String(64), sa.ForeignKey('lessons.id'), nullable=False),
        sa.Column('enrollment_id', sa.String(64), sa.ForeignKey('enrollments.id'), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('time_spent', sa.Integer(), server_default='0', nullable=False),
        sa.Column('last_position', sa.Integer(), server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_lesson_progress_user_lesson', 'lesson_progress', ['user_id', 'lesson_id'])
    op.create_index('ix_lesson_progress_enrollment', 'lesson_progress', ['enrollment_id'])

    # certificates — 수료증 (Issued on course completion)
    op.create_table(
        'certificates',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('course_id', sa.String(64), sa.ForeignKey('courses.id'), nullable=False),
        sa.Column('enrollment_id', sa.String(64), sa.ForeignKey('enrollments.id'), nullable=False),
        sa.Column('certificate_url', sa.Text(), nullable=True),
        sa.Column('issued_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
    )

    # reviews — 코스 리뷰 (Learner reviews, rating 1-5)
    op.create_table(
        'reviews',
        sa.Column('id', sa.String(64), primary_key=True),
        sa.Column('user_id', sa.String(64), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('course_id', sa.String(64), sa.ForeignKey('courses.id'), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint('rating BETWEEN 1 AND 5', name='ck_review_rating_range'),
    )


def downgrade() -> None:
    op.drop_table('reviews')
    op.drop_table('certificates')
    op.drop_index('ix_lesson_progress_enrollment', table_name='lesson_progress')
    op.drop_index('ix_lesson_progress_user_lesson', table_name='lesson_progress')
    op.drop_table('lesson_progress')
    op.drop_table('enrollments')
    op.drop_index('ix_lessons_course_order', table_name='lessons')
    op.drop_table('lessons')
    op.drop_index('ix_courses_category', table_name='courses')
    op.drop_index('ix_courses_instructor', table_name='courses')
    op.drop_table('courses')
    op.drop_table('categories')
    op.drop_table('users')
