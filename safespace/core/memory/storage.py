"""
Record store interface and the default in-memory implementation.

Handlers depend only on `Storage`; the backing store is chosen at startup by
`create_storage()`. Nothing is deleted and nothing survives a restart of the
in-memory store.
"""
import logging
import random
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Optional

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

logger = logging.getLogger(__name__)

# Display-only "active users" range assigned to new rooms
ACTIVE_USERS_MIN = 5
ACTIVE_USERS_MAX = 24


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def display_active_users() -> int:
    """Cosmetic room population; never reconciled with real connections."""
    return random.randint(ACTIVE_USERS_MIN, ACTIVE_USERS_MAX)


def newest_first(posts: List[BlogPost]) -> List[BlogPost]:
    """Sort posts by createdAt descending; later inserts win ties."""
    return sorted(reversed(posts), key=lambda p: p.createdAt, reverse=True)


class Storage(ABC):
    """Storage interface for therapists, blog posts, comments, rooms and messages."""

    # Therapists

    @abstractmethod
    def get_therapists(self) -> List[Therapist]: ...

    @abstractmethod
    def get_therapist(self, therapist_id: str) -> Optional[Therapist]: ...

    @abstractmethod
    def create_therapist(self, data: InsertTherapist) -> Therapist: ...

    # Blog posts

    @abstractmethod
    def get_blog_posts(self) -> List[BlogPost]:
        """All posts, newest first."""

    @abstractmethod
    def get_blog_post(self, post_id: str) -> Optional[BlogPost]: ...

    @abstractmethod
    def create_blog_post(self, data: InsertBlogPost) -> BlogPost: ...

    @abstractmethod
    def like_blog_post(self, post_id: str) -> Optional[BlogPost]:
        """Increment likes by one. Returns None for an unknown post."""

    # Blog comments

    @abstractmethod
    def get_blog_comments(self, post_id: str) -> List[BlogComment]:
        """Comments on a post, oldest first."""

    @abstractmethod
    def create_blog_comment(self, data: InsertBlogComment) -> BlogComment: ...

    # Chat rooms

    @abstractmethod
    def get_chat_rooms(self) -> List[ChatRoom]:
        """Active rooms only."""

    @abstractmethod
    def get_chat_room(self, room_id: str) -> Optional[ChatRoom]: ...

    @abstractmethod
    def create_chat_room(self, data: InsertChatRoom) -> ChatRoom: ...

    @abstractmethod
    def update_chat_room_users(self, room_id: str, active_users: int) -> Optional[ChatRoom]: ...

    # Chat messages

    @abstractmethod
    def get_chat_messages(self, room_id: str) -> List[ChatMessage]:
        """Messages in a room, in arrival order."""

    @abstractmethod
    def create_chat_message(self, data: InsertChatMessage) -> ChatMessage: ...

    @abstractmethod
    def get_recent_chat_messages(self, room_id: str, limit: int) -> List[ChatMessage]:
        """Last `limit` messages in a room, oldest first. Empty for limit <= 0."""


class MemoryStorage(Storage):
    """One owned dict per entity, keyed by id. Dicts keep insertion order."""

    def __init__(self) -> None:
        self._therapists: Dict[str, Therapist] = {}
        self._blog_posts: Dict[str, BlogPost] = {}
        self._blog_comments: Dict[str, BlogComment] = {}
        self._chat_rooms: Dict[str, ChatRoom] = {}
        self._chat_messages: Dict[str, ChatMessage] = {}
        # room_id -> message ids in arrival order
        self._room_messages: Dict[str, List[str]] = {}

    def get_therapists(self) -> List[Therapist]:
        return list(self._therapists.values())

    def get_therapist(self, therapist_id: str) -> Optional[Therapist]:
        return self._therapists.get(therapist_id)

    def create_therapist(self, data: InsertTherapist) -> Therapist:
        therapist = Therapist(id=new_id(), **data.model_dump())
        self._therapists[therapist.id] = therapist
        return therapist

    def get_blog_posts(self) -> List[BlogPost]:
        return newest_first(list(self._blog_posts.values()))

    def get_blog_post(self, post_id: str) -> Optional[BlogPost]:
        return self._blog_posts.get(post_id)

    def create_blog_post(self, data: InsertBlogPost) -> BlogPost:
        post = BlogPost(id=new_id(), likes=0, createdAt=utcnow(), **data.model_dump())
        self._blog_posts[post.id] = post
        return post

    def like_blog_post(self, post_id: str) -> Optional[BlogPost]:
        post = self._blog_posts.get(post_id)
        if post is None:
            return None
        updated = post.model_copy(update={"likes": post.likes + 1})
        self._blog_posts[post_id] = updated
        return updated

    def get_blog_comments(self, post_id: str) -> List[BlogComment]:
        comments = [c for c in self._blog_comments.values() if c.postId == post_id]
        return sorted(comments, key=lambda c: c.createdAt)

    def create_blog_comment(self, data: InsertBlogComment) -> BlogComment:
        comment = BlogComment(id=new_id(), createdAt=utcnow(), **data.model_dump())
        self._blog_comments[comment.id] = comment
        return comment

    def get_chat_rooms(self) -> List[ChatRoom]:
        return [room for room in self._chat_rooms.values() if room.isActive]

    def get_chat_room(self, room_id: str) -> Optional[ChatRoom]:
        return self._chat_rooms.get(room_id)

    def create_chat_room(self, data: InsertChatRoom) -> ChatRoom:
        room = ChatRoom(
            id=new_id(),
            activeUsers=display_active_users(),
            isActive=True,
            **data.model_dump(),
        )
        self._chat_rooms[room.id] = room
        return room

    def update_chat_room_users(self, room_id: str, active_users: int) -> Optional[ChatRoom]:
        room = self._chat_rooms.get(room_id)
        if room is None:
            return None
        updated = room.model_copy(update={"activeUsers": active_users})
        self._chat_rooms[room_id] = updated
        return updated

    def get_chat_messages(self, room_id: str) -> List[ChatMessage]:
        ids = self._room_messages.get(room_id, [])
        return [self._chat_messages[i] for i in ids]

    def get_recent_chat_messages(self, room_id: str, limit: int) -> List[ChatMessage]:
        if limit <= 0:
            return []
        ids = self._room_messages.get(room_id, [])[-limit:]
        return [self._chat_messages[i] for i in ids]

    def create_chat_message(self, data: InsertChatMessage) -> ChatMessage:
        message = ChatMessage(id=new_id(), createdAt=utcnow(), **data.model_dump())
        self._chat_messages[message.id] = message
        self._room_messages.setdefault(message.roomId, []).append(message.id)
        return message


def create_storage(backend: Optional[str] = None, seed: Optional[bool] = None) -> Storage:
    """
    Build the configured record store.

    Args:
        backend: "memory" or "sql"; defaults to settings.storage_backend
        seed: load sample therapists and rooms; defaults to settings.seed_sample_data
    """
    from safespace.core.config import settings

    backend = backend or settings.storage_backend
    if backend == "sql":
        from safespace.core.memory.db import create_session_factory
        from safespace.core.memory.repository import SqlStorage

        storage: Storage = SqlStorage(create_session_factory(settings.database_url))
    elif backend == "memory":
        storage = MemoryStorage()
    else:
        raise ValueError(f"Unknown storage backend: {backend!r}")

    if seed is None:
        seed = settings.seed_sample_data
    if seed:
        from safespace.core.memory.seed import seed_sample_data

        seed_sample_data(storage)
    logger.info("Record store ready (backend=%s)", backend)
    return storage
