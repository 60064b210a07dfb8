"""
Pocket Writer Backend — Template SQLAlchemy Model
==================================================

What:  ORM model representing the `templates` table.
Who:   Used by TemplateService for CRUD operations and by Alembic for schema management.

Table Design:
    - Integer identity primary key (auto-increment)
    - name: short display name, VARCHAR(255)
    - structure_description: JSON layout of the template's elements, stored as TEXT
    - created_at / updated_at: server-assigned UTC timestamps
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from pocketwriter.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Template(Base):
    """
    A reusable content layout that articles can be created from.

    structure_description holds a JSON array of layout elements, e.g.
        [{"element_id": "title1", "type": "text_block", "position": {...}, "size": {...}}]
    Well-formedness is checked by TemplateService before insert.
    """

    __tablename__ = "templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    structure_description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="JSON description of the template's layout elements",
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

    def __repr__(self) -> str:
        return f"<Template(id={self.id}, name='{self.name}')>"
