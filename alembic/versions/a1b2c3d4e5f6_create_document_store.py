"""create_document_store

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-16

Creates the document store: content documents, translation groups with
their per-locale entries, and path redirects.
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "documents",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("doc_type", sa.String(32), nullable=False),
        sa.Column("locale", sa.String(10), nullable=True),
        sa.Column("slug", sa.String(255), nullable=True),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("payload", sa.JSON, nullable=False),
        sa.Column("order_rank", sa.String(64), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_documents_doc_type", "documents", ["doc_type"])
    op.create_index("idx_documents_slug_locale", "documents", ["slug", "locale"])
    op.create_index("idx_documents_type_locale", "documents", ["doc_type", "locale"])

    op.create_table(
        "translation_groups",
        sa.Column("id", sa.String(160), primary_key=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )

    # document_id has no foreign key: deleted documents leave dangling entries
    op.create_table(
        "translation_group_entries",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "group_id",
            sa.String(160),
            sa.ForeignKey("translation_groups.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("locale", sa.String(10), nullable=False),
        sa.Column("document_id", sa.String(128), nullable=False),
        sa.UniqueConstraint("group_id", "locale", name="uq_translation_group_locale"),
        sa.UniqueConstraint("document_id", name="uq_translation_group_document"),
    )
    op.create_index("ix_translation_group_entries_group_id", "translation_group_entries", ["group_id"])

    op.create_table(
        "redirects",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("source", sa.String(512), nullable=False),
        sa.Column("destination", sa.String(512), nullable=False),
        sa.Column("permanent", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("document_id", sa.String(128), nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_redirects_source", "redirects", ["source"])


def downgrade() -> None:
    op.drop_index("ix_redirects_source", table_name="redirects")
    op.drop_table("redirects")
    op.drop_index("ix_translation_group_entries_group_id", table_name="translation_group_entries")
    op.drop_table("translation_group_entries")
    op.drop_table("translation_groups")
    op.drop_index("idx_documents_type_locale", table_name="documents")
    op.drop_index("idx_documents_slug_locale", table_name="documents")
    op.drop_index("ix_documents_doc_type", table_name="documents")
    op.drop_table("documents")
