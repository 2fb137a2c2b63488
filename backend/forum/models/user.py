"""
User model: auth (email + password), role (USER | ADMIN).
Questions and replies are owned by their author and go away with the user.
"""
import uuid
from datetime import datetime
from sqlalchemy import String, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from forum.database import Base
from forum.models.types import UuidType, utcnow

ROLE_USER = "USER"
ROLE_ADMIN = "ADMIN"


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UuidType(), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=ROLE_USER)  # USER | ADMIN
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (CheckConstraint("role IN ('USER', 'ADMIN')", name="users_role_check"),)

    questions = relationship("Question", back_populates="user", cascade="all, delete")
    replies = relationship("Reply", back_populates="user", cascade="all, delete")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
