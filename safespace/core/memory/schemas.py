"""
Record and insert models for the SafeSpace store.

Field names follow the JSON wire format (camelCase). Insert models carry only
client-settable fields; id, likes, createdAt, activeUsers and isActive are
assigned by the store.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be blank")
    return v


# --- Therapists ---

class InsertTherapist(BaseModel):
    """Directory entry as submitted."""
    name: str = Field(..., min_length=1)
    specialty: str = Field(..., min_length=1)
    education: str = Field(..., min_length=1)
    experience: str = Field(..., min_length=1)
    rating: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: Optional[str] = None
    bio: Optional[str] = None
    imageUrl: Optional[str] = None


class Therapist(InsertTherapist):
    id: str


# --- Blog ---

class InsertBlogPost(BaseModel):
    """Anonymous community post."""
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    authorId: str  # anonymous session id, generated server-side

    @field_validator("title", "content", "category")
    @classmethod
    def check_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class BlogPost(InsertBlogPost):
    id: str
    likes: int = 0
    createdAt: datetime


class InsertBlogComment(BaseModel):
    postId: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    authorId: str

    @field_validator("content")
    @classmethod
    def check_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class BlogComment(InsertBlogComment):
    id: str
    createdAt: datetime


# --- Chat ---

class InsertChatRoom(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class ChatRoom(InsertChatRoom):
    """Chat room. activeUsers is a display-only figure, not a live count."""
    id: str
    activeUsers: int = 0
    isActive: bool = True


class InsertChatMessage(BaseModel):
    roomId: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    authorId: str = Field(..., min_length=1)

    @field_validator("content")
    @classmethod
    def check_not_blank(cls, v: str) -> str:
        return _not_blank(v)


class ChatMessage(InsertChatMessage):
    id: str
    createdAt: datetime
