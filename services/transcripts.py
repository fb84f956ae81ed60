"""
Transcript Service

Stores dictated transcripts and runs the personalization hooks at the two
points of a transcript's life where they belong:

- creation: the raw speech-to-text output is personalized before it is saved
- edit: the user's edit is diffed against the raw text and learned from,
  then saved whatever the learning outcome

All access is scoped by user_id; another user's transcript behaves exactly
like a missing one.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models import Transcript
from services.personalization.models import EditLearningResult
from services.personalization.service import PersonalizationService
from utils.exceptions import TranscriptNotFoundError
from utils.logging import get_logger

logger = get_logger(__name__)


class TranscriptStore:
    """Persistence for transcripts."""
    
    async def get_transcript(
        self,
        db: AsyncSession,
        user_id: str,
        transcript_id: str
    ) -> Transcript:
        """
        Raises:
            TranscriptNotFoundError: No such transcript for this user
        """
        result = await db.execute(
            select(Transcript).filter(
                Transcript.id == transcript_id,
                Transcript.user_id == user_id,
            )
        )
        transcript = result.scalars().first()
        if transcript is None:
            raise TranscriptNotFoundError(transcript_id)
        return transcript
    
    async def get_raw_text(
        self,
        db: AsyncSession,
        user_id: str,
        transcript_id: str
    ) -> Optional[str]:
        """Raw speech-to-text output of a transcript, or None if not found."""
        result = await db.execute(
            select(Transcript.raw_text).filter(
                Transcript.id == transcript_id,
                Transcript.user_id == user_id,
            )
        )
        return result.scalars().first()
    
    async def list_transcripts(
        self,
        db: AsyncSession,
        user_id: str,
        limit: int = 50,
        offset: int = 0
    ) -> List[Transcript]:
        """A user's transcripts, newest first."""
        result = await db.execute(
            select(Transcript)
            .filter(Transcript.user_id == user_id)
            .order_by(Transcript.created_at.desc(), Transcript.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())
    
    async def add(self, db: AsyncSession, transcript: Transcript) -> Transcript:
        db.add(transcript)
        await db.commit()
        await db.refresh(transcript)
        return transcript
    
    async def set_final_text(
        self,
        db: AsyncSession,
        transcript: Transcript,
        final_text: str
    ) -> Transcript:
        transcript.final_text = final_text
        transcript.updated_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(transcript)
        return transcript
    
    async def delete(self, db: AsyncSession, transcript: Transcript) -> None:
        await db.delete(transcript)
        await db.commit()


class TranscriptService:
    """Transcript lifecycle with personalization hooks."""
    
    def __init__(self, store: TranscriptStore, personalization: PersonalizationService):
        self.store = store
        self.personalization = personalization
    
    async def create_transcript(
        self,
        db: AsyncSession,
        user_id: str,
        raw_text: str,
        title: Optional[str] = None,
        audio_url: Optional[str] = None,
        duration_seconds: Optional[float] = None
    ) -> Transcript:
        """Save a new transcription, personalized with the user's learned corrections."""
        personalized = await self.personalization.personalize(db, user_id, raw_text)
        
        transcript = await self.store.add(db, Transcript(
            user_id=user_id,
            title=title,
            raw_text=raw_text,
            personalized_text=personalized.text,
            final_text=None,
            audio_url=audio_url,
            duration_seconds=duration_seconds,
        ))
        
        logger.info(
            f"Transcript saved: {transcript.id} "
            f"({personalized.corrections_applied} correction(s) applied)"
        )
        return transcript
    
    async def get_transcript(self, db: AsyncSession, user_id: str, transcript_id: str) -> Transcript:
        return await self.store.get_transcript(db, user_id, transcript_id)
    
    async def list_transcripts(
        self,
        db: AsyncSession,
        user_id: str,
        limit: int = 50,
        offset: int = 0
    ) -> List[Transcript]:
        return await self.store.list_transcripts(db, user_id, limit, offset)
    
    async def update_final_text(
        self,
        db: AsyncSession,
        user_id: str,
        transcript_id: str,
        final_text: str
    ) -> Tuple[Transcript, EditLearningResult]:
        """
        Save a user's edit and learn from it.
        
        The edit is saved even when learning fails; the learning tallies are
        returned alongside the updated transcript.
        
        Raises:
            TranscriptNotFoundError: No such transcript for this user
        """
        transcript = await self.store.get_transcript(db, user_id, transcript_id)
        
        learning = await self.personalization.on_edit(db, user_id, transcript_id, final_text)
        if learning.failures:
            # A failed learning step rolls the session back and expires the row
            transcript = await self.store.get_transcript(db, user_id, transcript_id)

        transcript = await self.store.set_final_text(db, transcript, final_text)
        return transcript, learning
    
    async def delete_transcript(self, db: AsyncSession, user_id: str, transcript_id: str) -> None:
        transcript = await self.store.get_transcript(db, user_id, transcript_id)
        await self.store.delete(db, transcript)
        logger.info(f"Transcript deleted: {transcript_id}")
