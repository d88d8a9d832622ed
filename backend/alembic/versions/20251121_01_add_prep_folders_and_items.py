"""add prep folders and items

Revision ID: 20251121_01
Revises: 20251019_01
Create Date: 2025-11-21 14:48:33.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "20251121_01"
down_revision: Union[str, Sequence[str], None] = "20251019_01"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "prep_folders",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("parent_id", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["prep_folders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_prep_folders_id"), "prep_folders", ["id"], unique=False)
    op.create_index(op.f("ix_prep_folders_user_id"), "prep_folders", ["user_id"], unique=False)
    op.create_index(op.f("ix_prep_folders_parent_id"), "prep_folders", ["parent_id"], unique=False)

    op.create_table(
        "prep_items",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("folder_id", sa.Integer(), nullable=False),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("situation", sa.Text(), server_default="", nullable=False),
        sa.Column("task", sa.Text(), server_default="", nullable=False),
        sa.Column("action", sa.Text(), server_default="", nullable=False),
        sa.Column("result", sa.Text(), server_default="", nullable=False),
        sa.Column("content", sa.Text(), server_default="", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["folder_id"], ["prep_folders.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("type IN ('story', 'note')", name="ck_prep_items_type"),
    )
    op.create_index(op.f("ix_prep_items_id"), "prep_items", ["id"], unique=False)
    op.create_index(op.f("ix_prep_items_user_id"), "prep_items", ["user_id"], unique=False)
    op.create_index(op.f("ix_prep_items_folder_id"), "prep_items", ["folder_id"], unique=False)
    op.create_index(op.f("ix_prep_items_type"), "prep_items", ["type"], unique=False)

    op.create_table(
        "prep_item_tags",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("tag", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(["item_id"], ["prep_items.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("item_id", "tag", name="uq_prep_item_tags_item_id_tag"),
    )
    op.create_index(op.f("ix_prep_item_tags_id"), "prep_item_tags", ["id"], unique=False)
    op.create_index(op.f("ix_prep_item_tags_item_id"), "prep_item_tags", ["item_id"], unique=False)
    op.create_index(op.f("ix_prep_item_tags_tag"), "prep_item_tags", ["tag"], unique=False)
    op.create_index("ix_prep_item_tags_item_id_tag", "prep_item_tags", ["item_id", "tag"], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_prep_item_tags_item_id_tag", table_name="prep_item_tags")
    op.drop_index(op.f("ix_prep_item_tags_tag"), table_name="prep_item_tags")
    op.drop_index(op.f("ix_prep_item_tags_item_id"), table_name="prep_item_tags")
    op.drop_index(op.f("ix_prep_item_tags_id"), table_name="prep_item_tags")
    op.drop_table("prep_item_tags")

    op.drop_index(op.f("ix_prep_items_type"), table_name="prep_items")
    op.drop_index(op.f("ix_prep_items_folder_id"), table_name="prep_items")
    op.drop_index(op.f("ix_prep_items_user_id"), table_name="prep_items")
    op.drop_index(op.f("ix_prep_items_id"), table_name="prep_items")
    op.drop_table("prep_items")

    op.drop_index(op.f("ix_prep_folders_parent_id"), table_name="prep_folders")
    op.drop_index(op.f("ix_prep_folders_user_id"), table_name="prep_folders")
    op.drop_index(op.f("ix_prep_folders_id"), table_name="prep_folders")
    op.drop_table("prep_folders")
