"""Create knowledge_articles, pets and reports tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Local copy of the hosted schema the backend reads from.
How:   PostgreSQL features: UUID primary keys, TEXT[] arrays,
       TIMESTAMP WITH TIME ZONE.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        postgresql.UUID(as_uuid=True),
        server_default=sa.text("gen_random_uuid()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        server_default=sa.text("CURRENT_TIMESTAMP"),
        nullable=False,
    )


def upgrade() -> None:
    op.create_table(
        "knowledge_articles",
        _id_column(),
        sa.Column("slug", sa.String(255), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("content", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("meta_title", sa.String(255), nullable=True),
        sa.Column("meta_description", sa.Text(), nullable=True),
        sa.Column("og_title", sa.String(255), nullable=True),
        sa.Column("og_description", sa.Text(), nullable=True),
        sa.Column("og_image", sa.Text(), nullable=True),
        sa.Column("image_url", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("image_alt", sa.String(255), nullable=True),
        sa.Column("keywords", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("views", sa.Integer(), nullable=False, server_default=sa.text("0")),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("slug"),
    )
    # Related-articles query: same category, newest first
    op.create_index(
        "idx_articles_category_created_at",
        "knowledge_articles",
        ["category", sa.text("created_at DESC")],
    )

    op.create_table(
        "pets",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=True),
        sa.Column("age", sa.String(50), nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        sa.Column("province", sa.String(100), nullable=True),
        sa.Column("district", sa.String(100), nullable=True),
        sa.Column("story", sa.Text(), nullable=True),
        sa.Column("health_status", sa.String(255), nullable=True),
        sa.Column("is_adopted", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("image_url", postgresql.ARRAY(sa.Text()), nullable=True),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "reports",
        _id_column(),
        sa.Column("province", sa.String(100), nullable=True),
        sa.Column("district", sa.String(100), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("photo_urls", postgresql.ARRAY(sa.Text()), nullable=True),
        sa.Column("latitude", sa.Float(), nullable=True),
        sa.Column("longitude", sa.Float(), nullable=True),
        sa.Column("animal_count", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'pending'"),
            comment="pending, in_progress, resolved",
        ),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=True),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.PrimaryKeyConstraint("id"),
    )
    # Map feed: newest reports first
    op.create_index(
        "idx_reports_created_at",
        "reports",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    op.drop_index("idx_reports_created_at", table_name="reports")
    op.drop_table("reports")
    op.drop_table("pets")
    op.drop_index("idx_articles_category_created_at", table_name="knowledge_articles")
    op.drop_table("knowledge_articles")
