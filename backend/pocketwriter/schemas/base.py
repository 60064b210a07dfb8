"""
Shared Pydantic base for API contracts.

The mobile client speaks camelCase JSON (contentData, templateId, createdAt),
so every schema serializes by alias while still accepting snake_case input.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def require_not_blank(value: str, label: str) -> str:
    """Rejects whitespace-only strings; used by field validators."""
    if not value or not value.strip():
        raise ValueError(f"{label} cannot be blank")
    return value
