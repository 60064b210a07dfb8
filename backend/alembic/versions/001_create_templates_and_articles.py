"""Create templates and articles tables

Revision ID: 001
Revises: None
Create Date: 2024-05-01 00:00:00.000000+00:00

What:  Creates `templates` and `articles`, the two tables behind /api.
How:   Integer identity keys, TEXT columns for the JSON payloads,
       TIMESTAMP WITH TIME ZONE for created_at / updated_at.

Rollback: downgrade() drops both tables (destructive, all data lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "templates",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column(
            "structure_description",
            sa.Text(),
            nullable=False,
            comment="JSON array describing the template's layout elements",
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "articles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column(
            "content_data",
            sa.Text(),
            nullable=False,
            comment="JSON document with the article's elements",
        ),
        sa.Column("preview_text", sa.String(500), nullable=True),
        sa.Column("thumbnail_url", sa.String(2048), nullable=True),
        sa.Column("template_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["template_id"], ["templates.id"], ondelete="SET NULL"),
    )

    # The feed is always read newest first
    op.create_index(
        "idx_articles_created_at",
        "articles",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_articles_created_at", table_name="articles")
    op.drop_table("articles")
    op.drop_table("templates")
