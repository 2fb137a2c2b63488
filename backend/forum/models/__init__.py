"""
SQLAlchemy models. Import here so Alembic and app can use them.
"""
from forum.models.user import User
from forum.models.page import Page
from forum.models.question import Question
from forum.models.reply import Reply

__all__ = ["User", "Page", "Question", "Reply"]
