"""
Personalization Service

Glue between the transcript lifecycle and the personalization engine.

Two hooks:
- on_edit: a user saved an edited transcript; learn the corrections they made
- personalize: a new transcription arrived; apply what was learned so far

Learning is synchronous and best-effort: on_edit never raises for store
failures, it counts them. personalize fails open and returns the raw text
when the store cannot be read.
"""

from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from services.personalization.applier import apply_corrections_with_report
from services.personalization.extractor import extract_corrections
from services.personalization.models import EditLearningResult, PersonalizationResult
from services.personalization.store import CorrectionStore
from utils.exceptions import CorrectionStoreError
from utils.logging import get_logger, log_learning_outcome

logger = get_logger(__name__)


class RawTextSource(Protocol):
    """Anything that can look up the immutable raw text of a transcript."""
    
    async def get_raw_text(
        self,
        db: AsyncSession,
        user_id: str,
        transcript_id: str
    ) -> Optional[str]:
        ...


class PersonalizationService:
    """
    Learn from transcript edits and personalize new transcriptions.
    
    Features:
    - Correction extraction on every saved edit
    - Thresholded application of learned corrections
    - Fail-open reads, per-correction isolated writes
    """
    
    def __init__(
        self,
        store: CorrectionStore,
        transcripts: RawTextSource,
        enabled: Optional[bool] = None,
        min_count: Optional[int] = None
    ):
        self.store = store
        self.transcripts = transcripts
        self.enabled = settings.PERSONALIZATION_ENABLED if enabled is None else enabled
        self.min_count = settings.PERSONALIZATION_MIN_COUNT if min_count is None else min_count
    
    async def on_edit(
        self,
        db: AsyncSession,
        user_id: str,
        transcript_id: str,
        edited_text: str
    ) -> EditLearningResult:
        """
        Learn corrections from a user's edit of a transcript.
        
        Corrections are stored in the order they appear in the transcript.
        Each one is stored independently, so one failure does not stop the rest.
        
        Args:
            db: Database session
            user_id: Owner of the transcript
            transcript_id: Transcript being edited
            edited_text: Text the user saved
            
        Returns:
            EditLearningResult with emitted / stored / failed tallies
        """
        result = EditLearningResult()
        if not self.enabled:
            return result
        
        try:
            raw_text = await self.transcripts.get_raw_text(db, user_id, transcript_id)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Could not load raw text for transcript {transcript_id}: {e}")
            result.failures += 1
            return result
        
        if raw_text is None:
            logger.warning(f"No raw text for transcript {transcript_id}, nothing to learn")
            return result
        
        corrections = extract_corrections(raw_text, edited_text)
        result.corrections_emitted = len(corrections)
        
        for correction in corrections:
            try:
                await self.store.upsert(db, user_id, correction.original, correction.corrected)
                result.corrections_stored += 1
            except CorrectionStoreError as e:
                result.failures += 1
                logger.error(
                    f"Error saving correction '{correction.original}' -> "
                    f"'{correction.corrected}': {e.message}"
                )
        
        if corrections:
            log_learning_outcome(
                user_id,
                transcript_id,
                emitted=result.corrections_emitted,
                stored=result.corrections_stored,
                failures=result.failures,
            )
        
        return result
    
    async def personalize(
        self,
        db: AsyncSession,
        user_id: str,
        raw_text: str,
        min_count: Optional[int] = None
    ) -> PersonalizationResult:
        """
        Apply a user's learned corrections to a new raw transcript.
        
        Reads one snapshot of eligible corrections; if the store is
        unavailable the raw text comes back unchanged with degraded=True.
        
        Args:
            db: Database session
            user_id: Owner of the corrections
            raw_text: Speech-to-text output
            min_count: Threshold override (defaults to the configured threshold)
        """
        if not raw_text or not self.enabled:
            return PersonalizationResult(text=raw_text)
        
        threshold = self.min_count if min_count is None else min_count
        
        try:
            corrections = await self.store.list_eligible(db, user_id, threshold)
        except CorrectionStoreError as e:
            logger.warning(f"Personalization skipped, correction store unavailable: {e.message}")
            return PersonalizationResult(text=raw_text, degraded=True)
        
        if not corrections:
            return PersonalizationResult(text=raw_text)
        
        text, applied = apply_corrections_with_report(raw_text, corrections, threshold)
        if applied:
            logger.info(f"Applied {len(applied)} correction(s) to transcription")
        
        return PersonalizationResult(text=text, applied=applied)
