from pydantic import BaseModel, ConfigDict, Field
from typing import Dict, List, Optional
from datetime import datetime


class TranscriptCreate(BaseModel):
    raw_text: str = Field(..., description="Speech-to-text output")
    title: Optional[str] = Field(None, max_length=255)
    audio_url: Optional[str] = None
    duration_seconds: Optional[float] = Field(None, ge=0)


class TranscriptUpdate(BaseModel):
    final_text: str = Field(..., description="User-edited transcript text")


class TranscriptResponse(BaseModel):
    id: str
    user_id: str
    title: Optional[str]
    raw_text: str
    personalized_text: str
    final_text: Optional[str]
    display_text: str
    audio_url: Optional[str]
    duration_seconds: Optional[float]
    created_at: datetime
    updated_at: Optional[datetime]

    model_config = ConfigDict(from_attributes=True)


class LearningSummary(BaseModel):
    corrections_emitted: int
    corrections_stored: int
    failures: int


class TranscriptEditResponse(TranscriptResponse):
    learning: LearningSummary


class CorrectionResponse(BaseModel):
    id: int
    original_token: str
    corrected_token: str
    count: int
    disabled: bool
    first_seen_at: datetime
    last_seen_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TopCorrection(BaseModel):
    original_token: str
    corrected_token: str
    count: int


class CorrectionStats(BaseModel):
    total_corrections: int
    total_observations: int
    eligible_corrections: int
    disabled_corrections: int
    min_count: int
    most_common: List[TopCorrection] = []


class PersonalizeRequest(BaseModel):
    text: str
    min_count: Optional[int] = Field(None, ge=1)


class PersonalizeResponse(BaseModel):
    original: str
    personalized: str
    corrections_applied: int
    degraded: bool


class HealthResponse(BaseModel):
    status: str
    database: bool
    personalization_enabled: bool
    min_count: int
    services_loaded: Dict[str, bool]
