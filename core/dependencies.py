"""
FastAPI Dependencies Module

Provides dependency injection for services.
All service instances are singletons; they hold no per-request state and
receive the database session on every call.

Usage:
    from core.dependencies import get_transcript_service
    
    @router.put("/transcripts/{transcript_id}")
    async def edit(
        service: TranscriptService = Depends(get_transcript_service)
    ):
        ...
"""

from typing import Dict

from utils.logging import get_logger

# Lazy imports to avoid circular dependencies
_correction_store = None
_transcript_store = None
_personalization_service = None
_transcript_service = None

logger = get_logger(__name__)


# =============================================================================
# Service Initialization
# =============================================================================

def _initialize_services() -> None:
    """
    Initialize all service singletons.
    
    Called lazily on first access to any service.
    """
    global _correction_store, _transcript_store, _personalization_service, _transcript_service
    
    from services.personalization import CorrectionStore, PersonalizationService
    from services.transcripts import TranscriptStore, TranscriptService
    
    _correction_store = CorrectionStore()
    _transcript_store = TranscriptStore()
    _personalization_service = PersonalizationService(_correction_store, _transcript_store)
    _transcript_service = TranscriptService(_transcript_store, _personalization_service)
    
    if not _personalization_service.enabled:
        logger.warning("PERSONALIZATION_ENABLED is false - transcripts will not be personalized")
    logger.info(f"Services initialized (min_count={_personalization_service.min_count})")


def _ensure_initialized() -> None:
    if _transcript_service is None:
        _initialize_services()


# =============================================================================
# Service Getters (for FastAPI Depends)
# =============================================================================

def get_correction_store():
    """Get the correction store singleton."""
    _ensure_initialized()
    return _correction_store


def get_personalization_service():
    """Get the personalization service singleton."""
    _ensure_initialized()
    return _personalization_service


def get_transcript_service():
    """Get the transcript service singleton."""
    _ensure_initialized()
    return _transcript_service


def get_initialized_services() -> Dict[str, bool]:
    """Report which services have been created (for health checks)."""
    return {
        "correction_store": _correction_store is not None,
        "personalization": _personalization_service is not None,
        "transcripts": _transcript_service is not None,
    }
