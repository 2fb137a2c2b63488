"""Initial schema (users, pages, questions, replies) and default page seed.

Revision ID: 001
Revises:
Create Date: Initial

"""
import uuid
from datetime import datetime, timezone
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_DEFAULT_PAGES = [
    ("CSE", "Computer Science and Engineering - Programming, Data Structures, Algorithms, DBMS, OS, Networks"),
    ("ECE", "Electronics and Communication Engineering - Circuits, Signals, Communication Systems, VLSI"),
    ("Mathematics", "Mathematics - Calculus, Linear Algebra, Probability, Statistics, Discrete Math"),
    ("Physics", "Physics - Mechanics, Thermodynamics, Electromagnetism, Quantum Physics"),
    ("AI/ML", "Artificial Intelligence and Machine Learning - Neural Networks, Deep Learning, NLP, Computer Vision"),
    ("General", "General Doubts - Any other academic or non-academic questions"),
]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="USER"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.CheckConstraint("role IN ('USER', 'ADMIN')", name="users_role_check"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    pages = op.create_table(
        "pages",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_pages_name", "pages", ["name"], unique=True)

    op.create_table(
        "questions",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("page_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["page_id"], ["pages.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_questions_user_id", "questions", ["user_id"], unique=False)
    op.create_index("ix_questions_page_id", "questions", ["page_id"], unique=False)
    op.create_index("ix_questions_created_at", "questions", ["created_at"], unique=False)

    op.create_table(
        "replies",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("question_id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["question_id"], ["questions.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_replies_question_id", "replies", ["question_id"], unique=False)
    op.create_index("ix_replies_user_id", "replies", ["user_id"], unique=False)

    now = datetime.now(timezone.utc)
    op.bulk_insert(
        pages,
        [
            {"id": str(uuid.uuid4()), "name": name, "description": description, "created_at": now}
            for name, description in _DEFAULT_PAGES
        ],
    )


def downgrade() -> None:
    op.drop_index("ix_replies_user_id", table_name="replies")
    op.drop_index("ix_replies_question_id", table_name="replies")
    op.drop_table("replies")
    op.drop_index("ix_questions_created_at", table_name="questions")
    op.drop_index("ix_questions_page_id", table_name="questions")
    op.drop_index("ix_questions_user_id", table_name="questions")
    op.drop_table("questions")
    op.drop_index("ix_pages_name", table_name="pages")
    op.drop_table("pages")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
