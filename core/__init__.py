"""
Core Module

Provides database, models and schemas for the application.
Service singletons live in core.dependencies and are imported from there.
"""

from .database import Base, engine, get_db, check_database_health
from .models import Transcript, Correction
from .schemas import (
    TranscriptCreate,
    TranscriptUpdate,
    TranscriptResponse,
    TranscriptEditResponse,
    LearningSummary,
    CorrectionResponse,
    CorrectionStats,
    PersonalizeRequest,
    PersonalizeResponse,
    HealthResponse,
)

__all__ = [
    # Database
    "Base",
    "engine",
    "get_db",
    "check_database_health",
    # Models
    "Transcript",
    "Correction",
    # Schemas
    "TranscriptCreate",
    "TranscriptUpdate",
    "TranscriptResponse",
    "TranscriptEditResponse",
    "LearningSummary",
    "CorrectionResponse",
    "CorrectionStats",
    "PersonalizeRequest",
    "PersonalizeResponse",
    "HealthResponse",
]
