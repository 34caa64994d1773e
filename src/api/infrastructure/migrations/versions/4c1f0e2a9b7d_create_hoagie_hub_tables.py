"""create hoagie hub tables

Create users, hoagies, hoagie_collaborators and comments. Email uniqueness
and the collaborator set's set semantics are enforced here, by a unique
constraint and a composite primary key.

Revision ID: 4c1f0e2a9b7d
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "4c1f0e2a9b7d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )
    op.create_index(op.f("ix_users_name"), "users", ["name"], unique=False)

    op.create_table(
        "hoagies",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("ingredients", sa.JSON(), nullable=False),
        sa.Column("picture", sa.String(length=2048), nullable=True),
        sa.Column("creator_id", sa.String(length=26), nullable=False),
        sa.Column(
            "comment_count", sa.Integer(), server_default="0", nullable=False
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "comment_count >= 0",
            name=op.f("ck_hoagies_comment_count_non_negative"),
        ),
        sa.ForeignKeyConstraint(
            ["creator_id"],
            ["users.id"],
            name=op.f("fk_hoagies_creator_id_users"),
            ondelete="RESTRICT",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_hoagies")),
    )
    op.create_index(
        op.f("ix_hoagies_creator_id"), "hoagies", ["creator_id"], unique=False
    )

    op.create_table(
        "hoagie_collaborators",
        sa.Column("hoagie_id", sa.String(length=26), nullable=False),
        sa.Column("user_id", sa.String(length=26), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["hoagie_id"],
            ["hoagies.id"],
            name=op.f("fk_hoagie_collaborators_hoagie_id_hoagies"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name=op.f("fk_hoagie_collaborators_user_id_users"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint(
            "hoagie_id", "user_id", name=op.f("pk_hoagie_collaborators")
        ),
    )
    op.create_index(
        op.f("ix_hoagie_collaborators_user_id"),
        "hoagie_collaborators",
        ["user_id"],
        unique=False,
    )

    op.create_table(
        "comments",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("author_id", sa.String(length=26), nullable=False),
        sa.Column("hoagie_id", sa.String(length=26), nullable=False),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["author_id"],
            ["users.id"],
            name=op.f("fk_comments_author_id_users"),
            ondelete="RESTRICT",
        ),
        sa.ForeignKeyConstraint(
            ["hoagie_id"],
            ["hoagies.id"],
            name=op.f("fk_comments_hoagie_id_hoagies"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_comments")),
    )
    op.create_index(
        op.f("ix_comments_author_id"), "comments", ["author_id"], unique=False
    )
    # Per-hoagie listings are ordered newest first
    op.create_index(
        "ix_comments_hoagie_id_created_at",
        "comments",
        ["hoagie_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_comments_hoagie_id_created_at", table_name="comments")
    op.drop_index(op.f("ix_comments_author_id"), table_name="comments")
    op.drop_table("comments")
    op.drop_index(
        op.f("ix_hoagie_collaborators_user_id"), table_name="hoagie_collaborators"
    )
    op.drop_table("hoagie_collaborators")
    op.drop_index(op.f("ix_hoagies_creator_id"), table_name="hoagies")
    op.drop_table("hoagies")
    op.drop_index(op.f("ix_users_name"), table_name="users")
    op.drop_table("users")
