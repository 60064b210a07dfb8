"""
Pocket Writer Backend — Template Request/Response Schemas
==========================================================

What:  Pydantic models defining the /api/templates contract.
How:   FastAPI validates request bodies against TemplateCreateRequest and
       serializes TemplateResponse (camelCase) on the way out.
"""

from datetime import datetime

from pydantic import Field, field_validator

from pocketwriter.schemas.base import CamelModel, require_not_blank


class TemplateCreateRequest(CamelModel):
    """
    Body of POST /api/templates.

    structure_description must also be well-formed JSON; that rule is a
    business validation enforced by TemplateService (→ 400).
    """
    name: str = Field(max_length=255, description="Template display name")
    structure_description: str = Field(description="JSON layout description")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return require_not_blank(v, "Template name")

    @field_validator("structure_description")
    @classmethod
    def validate_structure(cls, v: str) -> str:
        return require_not_blank(v, "Template structure description")


class TemplateResponse(CamelModel):
    """Full representation of a template, returned by every /api/templates route."""
    id: int = Field(description="Template identifier")
    name: str
    structure_description: str = Field(description="JSON layout description")
    created_at: datetime
    updated_at: datetime
