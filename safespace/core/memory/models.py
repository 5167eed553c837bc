"""
SQLAlchemy models for the SafeSpace SQL record store.

Defines the schema for therapists, blog posts, comments, chat rooms and messages.
Foreign keys are kept as plain strings; no relational integrity is enforced.
"""
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class TherapistRecord(Base):
    """Therapist directory entry."""
    __tablename__ = "therapists"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, index=True)
    name = Column(Text, nullable=False)
    specialty = Column(Text, nullable=False)
    education = Column(Text, nullable=False)
    experience = Column(Text, nullable=False)
    rating = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    phone = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)


class BlogPostRecord(Base):
    """Anonymous community post."""
    __tablename__ = "blog_posts"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, index=True)
    title = Column(Text, nullable=False)
    content = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    author_id = Column(String(36), nullable=False)  # anonymous session id
    likes = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)


class BlogCommentRecord(Base):
    """Comment on a blog post."""
    __tablename__ = "blog_comments"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, index=True)
    post_id = Column(String(36), nullable=False, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)


class ChatRoomRecord(Base):
    """Chat room. active_users is display-only."""
    __tablename__ = "chat_rooms"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, index=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    active_users = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)


class ChatMessageRecord(Base):
    """Chat message persisted by the relay."""
    __tablename__ = "chat_messages"

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String(36), unique=True, nullable=False, index=True)
    room_id = Column(String(36), nullable=False, index=True)
    content = Column(Text, nullable=False)
    author_id = Column(String(36), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
