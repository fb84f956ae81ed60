"""
Transcripts Router

Endpoints:
    POST /transcripts - Save a new transcription (personalized on the way in)
    GET /transcripts - List the caller's transcripts, newest first
    GET /transcripts/{id} - Get one transcript
    PUT /transcripts/{id} - Save an edit and learn corrections from it
    DELETE /transcripts/{id} - Delete a transcript
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from auth import get_current_user_id
from config.settings import settings
from core import database, schemas
from core.dependencies import get_transcript_service
from services.transcripts import TranscriptService

router = APIRouter(prefix="/transcripts", tags=["Transcripts"])


@router.post(
    "",
    response_model=schemas.TranscriptResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save transcription",
)
async def create_transcript(
    payload: schemas.TranscriptCreate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    service: TranscriptService = Depends(get_transcript_service),
):
    """Save raw speech-to-text output; personalized_text holds the learned rewrite."""
    return await service.create_transcript(
        db,
        user_id,
        payload.raw_text,
        title=payload.title,
        audio_url=payload.audio_url,
        duration_seconds=payload.duration_seconds,
    )


@router.get("", response_model=List[schemas.TranscriptResponse])
async def list_transcripts(
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    service: TranscriptService = Depends(get_transcript_service),
):
    """List the caller's transcripts, newest first."""
    return await service.list_transcripts(
        db,
        user_id,
        limit=limit or settings.TRANSCRIPT_HISTORY_LIMIT,
        offset=offset,
    )


@router.get("/{transcript_id}", response_model=schemas.TranscriptResponse)
async def get_transcript(
    transcript_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    service: TranscriptService = Depends(get_transcript_service),
):
    return await service.get_transcript(db, user_id, transcript_id)


@router.put("/{transcript_id}", response_model=schemas.TranscriptEditResponse)
async def update_transcript(
    transcript_id: str,
    payload: schemas.TranscriptUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    service: TranscriptService = Depends(get_transcript_service),
):
    """
    Save the user's edited text.
    
    Corrections are learned from the difference between the raw transcript
    and the edit. Learning failures are reported in "learning" and never
    prevent the edit from being saved.
    """
    transcript, learning = await service.update_final_text(
        db, user_id, transcript_id, payload.final_text
    )
    response = schemas.TranscriptResponse.model_validate(transcript)
    return schemas.TranscriptEditResponse(
        **response.model_dump(),
        learning=schemas.LearningSummary(**learning.to_dict()),
    )


@router.delete("/{transcript_id}")
async def delete_transcript(
    transcript_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(database.get_db),
    service: TranscriptService = Depends(get_transcript_service),
):
    await service.delete_transcript(db, user_id, transcript_id)
    return {"success": True, "message": "Transcript deleted"}
