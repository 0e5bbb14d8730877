import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship
from server.database import Base
from server.enums import BookStatus


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =========================================================
# DATABASE MODELS
# =========================================================
class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=_new_id)
    display_name = Column(Text, nullable=False, default="LINE User")
    line_user_id = Column(Text, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    books = relationship("Book", back_populates="owner", cascade="all, delete-orphan", passive_deletes=True)


class Book(Base):
    __tablename__ = "books"
    book_id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    author = Column(Text, nullable=False)
    deadline = Column(DateTime(timezone=True), nullable=False, index=True)
    status = Column(
        SQLEnum(BookStatus, native_enum=False, length=16),
        nullable=False,
        default=BookStatus.unread,
        index=True,
    )
    insult_level = Column(
        Integer,
        CheckConstraint("insult_level >= 1 AND insult_level <= 5"),
        nullable=False,
        default=3,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    owner = relationship("User", back_populates="books")
