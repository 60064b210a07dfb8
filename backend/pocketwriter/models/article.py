"""
Pocket Writer Backend — Article SQLAlchemy Model
=================================================

What:  ORM model representing the `articles` table.
Who:   Used by ArticleService for CRUD operations and by Alembic for schema management.

Table Design:
    - content_data: JSON document of the article's elements, stored as TEXT
    - preview_text / thumbnail_url: optional feed metadata
    - template_id: nullable foreign key to templates.id (an article may be free-form)

Index on created_at DESC:
    The feed is listed newest first by default.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from pocketwriter.database import Base
from pocketwriter.models.template import utcnow


class Article(Base):
    """
    A piece of content, optionally created from a Template.

    Lifecycle:
        1. Created via POST /api/articles (content_data validated as JSON)
        2. Listed in the feed via GET /api/articles (paged, sorted)
        3. Read in full via GET /api/articles/{id}
    """

    __tablename__ = "articles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    title: Mapped[str] = mapped_column(String(255), nullable=False)

    content_data: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="JSON document with the article's elements",
    )

    preview_text: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    thumbnail_url: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    template_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("templates.id", ondelete="SET NULL"),
        nullable=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_articles_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Article(id={self.id}, title='{self.title}', "
            f"template_id={self.template_id})>"
        )
