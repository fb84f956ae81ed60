"""
Corrections Router

Review and control the caller's learned corrections.

Endpoints:
    GET /corrections - List learned corrections
    GET /corrections/stats - Learning statistics
    POST /corrections/personalize - Apply learned corrections to text
    POST /corrections/{id}/disable - Stop applying a correction
    POST /corrections/{id}/enable - Resume applying a correction
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from auth import get_current_user_id
from core import database, schemas
from core.dependencies import get_correction_store, get_personalization_service
from services.personalization import CorrectionStore, PersonalizationService

router = APIRouter(prefix="/corrections", tags=["Corrections"])


@router.get("", response_model=List[schemas.CorrectionResponse])
async def list_corrections(
    min_count: int = Query(1, ge=1),
    include_disabled: bool = Query(True),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    store: CorrectionStore = Depends(get_correction_store),
):
    """List learned corrections, most frequent first."""
    return await store.list_corrections(
        db, user_id, min_count=min_count, include_disabled=include_disabled
    )


@router.get("/stats", response_model=schemas.CorrectionStats)
async def get_statistics(
    min_count: Optional[int] = Query(None, ge=1),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    store: CorrectionStore = Depends(get_correction_store),
    personalization: PersonalizationService = Depends(get_personalization_service),
):
    return await store.get_statistics(db, user_id, min_count or personalization.min_count)


@router.post("/personalize", response_model=schemas.PersonalizeResponse)
async def personalize_text(
    payload: schemas.PersonalizeRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    personalization: PersonalizationService = Depends(get_personalization_service),
):
    """Apply learned corrections to arbitrary text without saving anything."""
    result = await personalization.personalize(db, user_id, payload.text, payload.min_count)
    return {
        "original": payload.text,
        "personalized": result.text,
        "corrections_applied": result.corrections_applied,
        "degraded": result.degraded,
    }


@router.post("/{correction_id}/disable", response_model=schemas.CorrectionResponse)
async def disable_correction(
    correction_id: int,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    store: CorrectionStore = Depends(get_correction_store),
):
    return await store.disable(db, user_id, correction_id)


@router.post("/{correction_id}/enable", response_model=schemas.CorrectionResponse)
async def enable_correction(
    correction_id: int,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    store: CorrectionStore = Depends(get_correction_store),
):
    return await store.enable(db, user_id, correction_id)
