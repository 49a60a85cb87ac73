"""클래식 서버 패키지 — Starlette 라우트 테이블 기반 API.

Classic server package — The same ``/api`` surface served from a plain
Starlette route table with hand-written handlers. Handlers parse JSON bodies
and query strings themselves and call the shared service layer.
"""
