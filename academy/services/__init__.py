"""서비스 패키지 — 비즈니스 로직 계층.

Service package — Business logic layer.
Services sit between routers and repositories: they validate existence,
enforce uniqueness and derive values, raising the HTTP exceptions from
``academy.utils.exceptions``. They only flush; the caller commits.
"""
