"""Create library tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Creates ``authors``, ``books``, ``members`` and ``borrowed_books``.
How:   Ids are 36-character UUID strings generated by the API. Foreign keys
       have no ON DELETE action, so deleting a referenced row fails.

Rollback: downgrade() drops all four tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "authors",
        sa.Column("id", sa.String(36), nullable=False),
        # Only nullable text column: serialized as null when unset
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("nick_name", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("specialization", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "books",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("authors_id", sa.String(36), nullable=True),
        sa.Column("title", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("genre", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.Column("isbn", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["authors_id"], ["authors.id"], name="books_authors_id_fkey"),
    )
    # GET /author/{id}/books filters on authors_id
    op.create_index("ix_books_authors_id", "books", ["authors_id"])

    op.create_table(
        "members",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=False, server_default=sa.text("''")),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "borrowed_books",
        sa.Column("member_id", sa.String(36), nullable=False),
        sa.Column("book_id", sa.String(36), nullable=False),
        sa.PrimaryKeyConstraint("member_id", "book_id"),
        sa.ForeignKeyConstraint(
            ["member_id"], ["members.id"], name="borrowed_books_member_id_fkey"
        ),
        sa.ForeignKeyConstraint(["book_id"], ["books.id"], name="borrowed_books_book_id_fkey"),
    )
    # The primary key covers member_id lookups; book deletes check book_id
    op.create_index("ix_borrowed_books_book_id", "borrowed_books", ["book_id"])


def downgrade() -> None:
    """Drop every table, children first. All data is lost."""
    op.drop_index("ix_borrowed_books_book_id", table_name="borrowed_books")
    op.drop_table("borrowed_books")
    op.drop_table("members")
    op.drop_index("ix_books_authors_id", table_name="books")
    op.drop_table("books")
    op.drop_table("authors")
