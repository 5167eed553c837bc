"""
Chat room endpoints. Live messaging goes over the /ws socket.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from safespace.core.api.deps import get_storage
from safespace.core.memory.schemas import ChatMessage, ChatRoom
from safespace.core.memory.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat-rooms", tags=["chat"])


@router.get("", response_model=List[ChatRoom])
async def list_chat_rooms(storage: Storage = Depends(get_storage)) -> List[ChatRoom]:
    """Active rooms. activeUsers is a display figure, not a live connection count."""
    try:
        return storage.get_chat_rooms()
    except Exception as e:
        logger.error("Error fetching chat rooms: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch chat rooms",
        )


@router.get("/{room_id}/messages", response_model=List[ChatMessage])
async def list_chat_messages(room_id: str, storage: Storage = Depends(get_storage)) -> List[ChatMessage]:
    """Full room history in arrival order."""
    try:
        return storage.get_chat_messages(room_id)
    except Exception as e:
        logger.error("Error fetching messages for room %s: %s", room_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch messages",
        )
