"""
Community board endpoints: anonymous blog posts, likes and comments.

Authors are anonymous: every post and comment gets a freshly generated author id,
whatever the client sends.
"""
import logging
import uuid
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from safespace.core.api.deps import get_storage
from safespace.core.memory.schemas import (
    BlogComment,
    BlogPost,
    InsertBlogComment,
    InsertBlogPost,
)
from safespace.core.memory.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/blog-posts", tags=["blog"])


def _anonymous_author() -> str:
    return str(uuid.uuid4())


@router.get("", response_model=List[BlogPost])
async def list_blog_posts(storage: Storage = Depends(get_storage)) -> List[BlogPost]:
    """All posts, newest first."""
    try:
        return storage.get_blog_posts()
    except Exception as e:
        logger.error("Error fetching blog posts: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch blog posts",
        )


@router.post("", response_model=BlogPost, status_code=status.HTTP_201_CREATED)
async def create_blog_post(
    payload: Dict[str, Any] = Body(...),
    storage: Storage = Depends(get_storage),
) -> BlogPost:
    try:
        data = InsertBlogPost.model_validate({**payload, "authorId": _anonymous_author()})
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid blog post data",
        )
    post = storage.create_blog_post(data)
    logger.info("Blog post created id=%s category=%s", post.id, post.category)
    return post


@router.post("/{post_id}/like", response_model=BlogPost)
async def like_blog_post(post_id: str, storage: Storage = Depends(get_storage)) -> BlogPost:
    """
    Add one like to a post.

    Not idempotent: every call increments the counter.
    """
    try:
        post = storage.like_blog_post(post_id)
    except Exception as e:
        logger.error("Error liking blog post %s: %s", post_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to like post",
        )
    if post is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Blog post not found",
        )
    return post


@router.get("/{post_id}/comments", response_model=List[BlogComment])
async def list_blog_comments(post_id: str, storage: Storage = Depends(get_storage)) -> List[BlogComment]:
    """Comments on a post, oldest first. Unknown posts have no comments."""
    try:
        return storage.get_blog_comments(post_id)
    except Exception as e:
        logger.error("Error fetching comments for %s: %s", post_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch comments",
        )


@router.post("/{post_id}/comments", response_model=BlogComment, status_code=status.HTTP_201_CREATED)
async def create_blog_comment(
    post_id: str,
    payload: Dict[str, Any] = Body(...),
    storage: Storage = Depends(get_storage),
) -> BlogComment:
    try:
        data = InsertBlogComment.model_validate(
            {**payload, "postId": post_id, "authorId": _anonymous_author()}
        )
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid comment data",
        )
    return storage.create_blog_comment(data)
