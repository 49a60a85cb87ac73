"""공통 Pydantic 스키마 정의.

Common Pydantic schema definitions.
``CamelModel`` is the base for every request/response schema: JSON field names
are camelCase (``enrollmentCount``), snake_case input is accepted as well,
and ORM objects can be validated directly.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase JSON 기본 스키마.

    Base schema with camelCase aliases, population by field name, and
    ``from_attributes`` for ORM instances.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DeleteResponse(CamelModel):
    """삭제 결과 응답 스키마.

    Attributes:
        success: 삭제 성공 여부 (Always True on success)
        deleted_id: 삭제된 레코드 ID (Id of the deleted record)
    """

    success: bool = True
    deleted_id: str


class MessageResponse(CamelModel):
    """단순 메시지 응답 — Generic success/message response."""

    success: bool = True
    message: str
