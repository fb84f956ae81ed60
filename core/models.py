"""
Database Models Module

Defines SQLAlchemy ORM models for the application.
All models inherit from Base defined in database.py.

Models:
    - Transcript: A dictated recording's text in its raw, personalized
      and user-edited forms
    - Correction: A learned (original -> corrected) substitution for one user
"""

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import func

from config.constants import MAX_TITLE_LENGTH
from .database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Transcript(Base):
    """
    Transcript of one dictation.
    
    raw_text is written once when the transcript is created and never
    changes afterwards; it is the reference the personalization engine
    diffs user edits against.
    
    Attributes:
        id: UUID primary key
        user_id: Owner of the transcript
        title: Short display title
        raw_text: Speech-to-text output, immutable
        personalized_text: raw_text after learned corrections were applied
        final_text: User-edited text (None until the first edit)
        audio_url: Location of the recording in object storage
        duration_seconds: Recording length
        created_at: Creation timestamp
        updated_at: Last edit timestamp
    """
    
    __tablename__ = "transcripts"
    
    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(String(255), nullable=False, index=True)
    
    title = Column(String(MAX_TITLE_LENGTH), nullable=True)
    raw_text = Column(Text, nullable=False)
    personalized_text = Column(Text, nullable=False)
    final_text = Column(Text, nullable=True)
    
    audio_url = Column(String(2048), nullable=True)
    duration_seconds = Column(Float, nullable=True)
    
    # Timestamps (indexed for history queries)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )
    
    @property
    def display_text(self) -> str:
        """Text the user should see: their edit if any, else the personalized text."""
        return self.final_text if self.final_text is not None else self.personalized_text
    
    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Transcript(id={self.id}, user_id='{self.user_id}')>"


class Correction(Base):
    """
    A learned substitution, scoped to one user.
    
    Unique per (user_id, original_token, corrected_token) by exact surface
    string. count only ever grows; disabled suppresses application but not
    counting.
    """
    
    __tablename__ = "corrections"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "original_token", "corrected_token",
            name="uq_corrections_user_pair"
        ),
        Index("ix_corrections_user_eligible", "user_id", "disabled", "count"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), nullable=False, index=True)
    
    original_token = Column(Text, nullable=False)
    corrected_token = Column(Text, nullable=False)
    
    count = Column(Integer, nullable=False, default=1)
    disabled = Column(Boolean, nullable=False, default=False)
    
    first_seen_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    last_seen_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    
    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"<Correction(id={self.id}, '{self.original_token}' -> "
            f"'{self.corrected_token}', count={self.count})>"
        )
