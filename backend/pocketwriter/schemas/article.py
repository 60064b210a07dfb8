"""
Pocket Writer Backend — Article Request/Response Schemas
=========================================================

What:  Pydantic models defining the /api/articles contract.
Who:   Used by the article routes and by PocketWriterClient to parse responses.

Pagination:
    The feed mirrors the Spring Data page document the mobile client was
    built against: content + totalElements/totalPages/number/size/first/last/empty.
    Page numbers are zero-based.
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import Field, field_validator

from pocketwriter.schemas.base import CamelModel, require_not_blank


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class ArticleCreateRequest(CamelModel):
    """
    Body of POST /api/articles.

    content_data must be well-formed JSON (checked by ArticleService → 400).
    template_id is optional; when present it must reference an existing
    template (→ 404 otherwise).
    """
    title: str = Field(max_length=255)
    content_data: str = Field(description="JSON document with the article's elements")
    preview_text: Optional[str] = Field(default=None, max_length=500)
    thumbnail_url: Optional[str] = Field(default=None, max_length=2048)
    template_id: Optional[int] = Field(default=None, ge=1)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return require_not_blank(v, "Article title")

    @field_validator("content_data")
    @classmethod
    def validate_content(cls, v: str) -> str:
        return require_not_blank(v, "Article content data")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class ArticleResponse(CamelModel):
    """Full article, returned by POST /api/articles and GET /api/articles/{id}."""
    id: int
    title: str
    content_data: str
    preview_text: Optional[str] = None
    thumbnail_url: Optional[str] = None
    template_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class ArticleFeedItem(CamelModel):
    """
    Lightweight feed entry: no content_data, so a feed page stays small.
    """
    id: int
    title: str
    preview_text: Optional[str] = None
    thumbnail_url: Optional[str] = None
    created_at: datetime


class ArticleFeedPage(CamelModel):
    """One page of the article feed (GET /api/articles)."""
    content: List[ArticleFeedItem]
    total_elements: int = Field(description="Total number of articles")
    total_pages: int
    number: int = Field(description="Zero-based page index")
    size: int = Field(description="Requested page size")
    number_of_elements: int = Field(description="Items on this page")
    first: bool
    last: bool
    empty: bool


SortDirection = Literal["asc", "desc"]
