"""
Repository layer for the SQL record store.

Provides per-entity query helpers and `SqlStorage`, the SQLAlchemy-backed
implementation of the `Storage` interface.
"""
from datetime import datetime, timezone
from typing import List, Optional
import logging

from sqlalchemy.orm import Session, sessionmaker

from safespace.core.memory.db import db_session
from safespace.core.memory.models import (
    BlogCommentRecord,
    BlogPostRecord,
    ChatMessageRecord,
    ChatRoomRecord,
    TherapistRecord,
)
from safespace.core.memory.schemas import (
    BlogComment,
    BlogPost,
    ChatMessage,
    ChatRoom,
    InsertBlogComment,
    InsertBlogPost,
    InsertChatMessage,
    InsertChatRoom,
    InsertTherapist,
    Therapist,
)
from safespace.core.memory.storage import Storage, display_active_users, new_id, utcnow


logger = logging.getLogger(__name__)


def require_active_session(db: Session) -> None:
    """Raise if session is closed; prevents use-after-close."""
    if not db.is_active:
        raise RuntimeError("Session already closed; open a new one with db_session().")


def _aware(value: datetime) -> datetime:
    """SQLite drops tzinfo; stored values are always UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class TherapistRepository:
    """Repository for therapist directory operations."""

    @staticmethod
    def create(db: Session, data: InsertTherapist) -> TherapistRecord:
        require_active_session(db)
        row = TherapistRecord(
            id=new_id(),
            name=data.name,
            specialty=data.specialty,
            education=data.education,
            experience=data.experience,
            rating=data.rating,
            email=data.email,
            phone=data.phone,
            bio=data.bio,
            image_url=data.imageUrl,
        )
        db.add(row)
        db.flush()
        return row

    @staticmethod
    def get_by_id(db: Session, therapist_id: str) -> Optional[TherapistRecord]:
        return db.query(TherapistRecord).filter(TherapistRecord.id == therapist_id).first()

    @staticmethod
    def get_all(db: Session) -> List[TherapistRecord]:
        return db.query(TherapistRecord).order_by(TherapistRecord.seq).all()


class BlogPostRepository:
    """Repository for blog post operations."""

    @staticmethod
    def create(db: Session, data: InsertBlogPost) -> BlogPostRecord:
        require_active_session(db)
        row = BlogPostRecord(
            id=new_id(),
            title=data.title,
            content=data.content,
            category=data.category,
            author_id=data.authorId,
            likes=0,
            created_at=utcnow(),
        )
        db.add(row)
        db.flush()
        return row

    @staticmethod
    def get_by_id(db: Session, post_id: str) -> Optional[BlogPostRecord]:
        return db.query(BlogPostRecord).filter(BlogPostRecord.id == post_id).first()

    @staticmethod
    def get_newest_first(db: Session) -> List[BlogPostRecord]:
        return (
            db.query(BlogPostRecord)
            .order_by(BlogPostRecord.created_at.desc(), BlogPostRecord.seq.desc())
            .all()
        )

    @staticmethod
    def increment_likes(db: Session, post_id: str) -> Optional[BlogPostRecord]:
        """Add one like. Returns None if the post does not exist."""
        require_active_session(db)
        row = BlogPostRepository.get_by_id(db, post_id)
        if row is None:
            return None
        row.likes = (row.likes or 0) + 1
        db.flush()
        return row


class BlogCommentRepository:
    """Repository for blog comment operations."""

    @staticmethod
    def create(db: Session, data: InsertBlogComment) -> BlogCommentRecord:
        require_active_session(db)
        row = BlogCommentRecord(
            id=new_id(),
            post_id=data.postId,
            content=data.content,
            author_id=data.authorId,
            created_at=utcnow(),
        )
        db.add(row)
        db.flush()
        return row

    @staticmethod
    def get_for_post(db: Session, post_id: str) -> List[BlogCommentRecord]:
        return (
            db.query(BlogCommentRecord)
            .filter(BlogCommentRecord.post_id == post_id)
            .order_by(BlogCommentRecord.created_at, BlogCommentRecord.seq)
            .all()
        )


class ChatRoomRepository:
    """Repository for chat room operations."""

    @staticmethod
    def create(db: Session, data: InsertChatRoom) -> ChatRoomRecord:
        require_active_session(db)
        row = ChatRoomRecord(
            id=new_id(),
            name=data.name,
            description=data.description,
            active_users=display_active_users(),
            is_active=True,
        )
        db.add(row)
        db.flush()
        return row

    @staticmethod
    def get_by_id(db: Session, room_id: str) -> Optional[ChatRoomRecord]:
        return db.query(ChatRoomRecord).filter(ChatRoomRecord.id == room_id).first()

    @staticmethod
    def get_active(db: Session) -> List[ChatRoomRecord]:
        return (
            db.query(ChatRoomRecord)
            .filter(ChatRoomRecord.is_active.is_(True))
            .order_by(ChatRoomRecord.seq)
            .all()
        )

    @staticmethod
    def set_active_users(db: Session, room_id: str, active_users: int) -> Optional[ChatRoomRecord]:
        require_active_session(db)
        row = ChatRoomRepository.get_by_id(db, room_id)
        if row is None:
            return None
        row.active_users = active_users
        db.flush()
        return row


class ChatMessageRepository:
    """Repository for chat message operations."""

    @staticmethod
    def create(db: Session, data: InsertChatMessage) -> ChatMessageRecord:
        require_active_session(db)
        row = ChatMessageRecord(
            id=new_id(),
            room_id=data.roomId,
            content=data.content,
            author_id=data.authorId,
            created_at=utcnow(),
        )
        db.add(row)
        db.flush()
        return row

    @staticmethod
    def get_for_room(db: Session, room_id: str) -> List[ChatMessageRecord]:
        """All messages in a room, in arrival order."""
        return (
            db.query(ChatMessageRecord)
            .filter(ChatMessageRecord.room_id == room_id)
            .order_by(ChatMessageRecord.seq)
            .all()
        )

    @staticmethod
    def get_recent(db: Session, room_id: str, limit: int) -> List[ChatMessageRecord]:
        """Last `limit` messages in a room, returned oldest first."""
        rows = (
            db.query(ChatMessageRecord)
            .filter(ChatMessageRecord.room_id == room_id)
            .order_by(ChatMessageRecord.seq.desc())
            .limit(limit)
            .all()
        )
        rows.reverse()
        return rows


# Row -> record conversion

def _therapist(row: TherapistRecord) -> Therapist:
    return Therapist(
        id=row.id,
        name=row.name,
        specialty=row.specialty,
        education=row.education,
        experience=row.experience,
        rating=row.rating,
        email=row.email,
        phone=row.phone,
        bio=row.bio,
        imageUrl=row.image_url,
    )


def _blog_post(row: BlogPostRecord) -> BlogPost:
    return BlogPost(
        id=row.id,
        title=row.title,
        content=row.content,
        category=row.category,
        authorId=row.author_id,
        likes=row.likes or 0,
        createdAt=_aware(row.created_at),
    )


def _blog_comment(row: BlogCommentRecord) -> BlogComment:
    return BlogComment(
        id=row.id,
        postId=row.post_id,
        content=row.content,
        authorId=row.author_id,
        createdAt=_aware(row.created_at),
    )


def _chat_room(row: ChatRoomRecord) -> ChatRoom:
    return ChatRoom(
        id=row.id,
        name=row.name,
        description=row.description,
        activeUsers=row.active_users,
        isActive=row.is_active,
    )


def _chat_message(row: ChatMessageRecord) -> ChatMessage:
    return ChatMessage(
        id=row.id,
        roomId=row.room_id,
        content=row.content,
        authorId=row.author_id,
        createdAt=_aware(row.created_at),
    )


class SqlStorage(Storage):
    """Storage backed by SQLAlchemy; one session per operation."""

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def _session(self):
        return db_session(self._session_factory)

    def get_therapists(self) -> List[Therapist]:
        with self._session() as db:
            return [_therapist(r) for r in TherapistRepository.get_all(db)]

    def get_therapist(self, therapist_id: str) -> Optional[Therapist]:
        with self._session() as db:
            row = TherapistRepository.get_by_id(db, therapist_id)
            return _therapist(row) if row else None

    def create_therapist(self, data: InsertTherapist) -> Therapist:
        with self._session() as db:
            return _therapist(TherapistRepository.create(db, data))

    def get_blog_posts(self) -> List[BlogPost]:
        with self._session() as db:
            return [_blog_post(r) for r in BlogPostRepository.get_newest_first(db)]

    def get_blog_post(self, post_id: str) -> Optional[BlogPost]:
        with self._session() as db:
            row = BlogPostRepository.get_by_id(db, post_id)
            return _blog_post(row) if row else None

    def create_blog_post(self, data: InsertBlogPost) -> BlogPost:
        with self._session() as db:
            return _blog_post(BlogPostRepository.create(db, data))

    def like_blog_post(self, post_id: str) -> Optional[BlogPost]:
        with self._session() as db:
            row = BlogPostRepository.increment_likes(db, post_id)
            return _blog_post(row) if row else None

    def get_blog_comments(self, post_id: str) -> List[BlogComment]:
        with self._session() as db:
            return [_blog_comment(r) for r in BlogCommentRepository.get_for_post(db, post_id)]

    def create_blog_comment(self, data: InsertBlogComment) -> BlogComment:
        with self._session() as db:
            return _blog_comment(BlogCommentRepository.create(db, data))

    def get_chat_rooms(self) -> List[ChatRoom]:
        with self._session() as db:
            return [_chat_room(r) for r in ChatRoomRepository.get_active(db)]

    def get_chat_room(self, room_id: str) -> Optional[ChatRoom]:
        with self._session() as db:
            row = ChatRoomRepository.get_by_id(db, room_id)
            return _chat_room(row) if row else None

    def create_chat_room(self, data: InsertChatRoom) -> ChatRoom:
        with self._session() as db:
            return _chat_room(ChatRoomRepository.create(db, data))

    def update_chat_room_users(self, room_id: str, active_users: int) -> Optional[ChatRoom]:
        with self._session() as db:
            row = ChatRoomRepository.set_active_users(db, room_id, active_users)
            return _chat_room(row) if row else None

    def get_chat_messages(self, room_id: str) -> List[ChatMessage]:
        with self._session() as db:
            return [_chat_message(r) for r in ChatMessageRepository.get_for_room(db, room_id)]

    def get_recent_chat_messages(self, room_id: str, limit: int) -> List[ChatMessage]:
        if limit <= 0:
            return []
        with self._session() as db:
            return [_chat_message(r) for r in ChatMessageRepository.get_recent(db, room_id, limit)]

    def create_chat_message(self, data: InsertChatMessage) -> ChatMessage:
        with self._session() as db:
            return _chat_message(ChatMessageRepository.create(db, data))
