"""
Page: a topic category (CSE, ECE, Mathematics, ...). Name is unique.
Deleting a page removes its questions and, through them, their replies.
"""
import uuid
from datetime import datetime
from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum.database import Base
from forum.models.types import UuidType, utcnow


class Page(Base):
    __tablename__ = "pages"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    questions = relationship("Question", back_populates="page", cascade="all, delete-orphan", passive_deletes=True)
