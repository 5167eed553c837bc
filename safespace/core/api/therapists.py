"""
Therapist directory endpoints.
"""
import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError

from safespace.core.api.deps import get_storage
from safespace.core.memory.schemas import InsertTherapist, Therapist
from safespace.core.memory.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/therapists", tags=["therapists"])


@router.get("", response_model=List[Therapist])
async def list_therapists(storage: Storage = Depends(get_storage)) -> List[Therapist]:
    try:
        return storage.get_therapists()
    except Exception as e:
        logger.error("Error fetching therapists: %s", e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch therapists",
        )


@router.post("", response_model=Therapist, status_code=status.HTTP_201_CREATED)
async def create_therapist(
    payload: Dict[str, Any] = Body(...),
    storage: Storage = Depends(get_storage),
) -> Therapist:
    """Add a therapist to the directory."""
    try:
        data = InsertTherapist.model_validate(payload)
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid therapist data",
        )
    therapist = storage.create_therapist(data)
    logger.info("Therapist created id=%s", therapist.id)
    return therapist


@router.get("/{therapist_id}", response_model=Therapist)
async def get_therapist(therapist_id: str, storage: Storage = Depends(get_storage)) -> Therapist:
    try:
        therapist = storage.get_therapist(therapist_id)
    except Exception as e:
        logger.error("Error fetching therapist %s: %s", therapist_id, e, exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch therapist",
        )
    if therapist is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Therapist not found",
        )
    return therapist
