"""
Custom Exceptions Module

Domain errors raised by the services. Each carries the HTTP status the
API answers with; main.py turns them into JSON error bodies.

Usage:
    from utils.exceptions import TranscriptNotFoundError
    
    try:
        raw = await transcripts.get_raw_text(db, user_id, transcript_id)
    except TranscriptNotFoundError as e:
        logger.warning(f"Lookup failed: {e}")
"""

from typing import Optional, Dict, Any


class DictationError(Exception):
    """
    Base exception for all dictation application errors.
    
    Attributes:
        message: Human-readable error message
        details: Additional error details (optional)
        status_code: HTTP status code to return (optional)
    """
    
    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


# =============================================================================
# Transcript Exceptions
# =============================================================================

class TranscriptNotFoundError(DictationError):
    """
    Raised when a transcript does not exist for the requesting user.
    
    Another user's transcript is reported the same way as a missing one.
    """
    
    def __init__(
        self,
        transcript_id: Optional[str] = None,
        message: str = "Transcript not found",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"transcript_id": transcript_id, **(details or {})},
            status_code=404
        )


# =============================================================================
# Correction Store Exceptions
# =============================================================================

class CorrectionNotFoundError(DictationError):
    """Raised when a correction id does not exist for the requesting user."""
    
    def __init__(
        self,
        correction_id: Optional[int] = None,
        message: str = "Correction not found",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"correction_id": correction_id, **(details or {})},
            status_code=404
        )


class CorrectionStoreError(DictationError):
    """
    Raised when the correction store cannot be read or written.
    
    Common causes:
        - Database unavailable
        - Lost connection mid-transaction
        - Repeated unique-key conflict on upsert
    """
    
    def __init__(
        self,
        message: str = "Correction store unavailable",
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details={"operation": operation, **(details or {})},
            status_code=503
        )


# =============================================================================
# Authentication Exceptions
# =============================================================================

class AuthenticationError(DictationError):
    """
    Raised when a request carries no usable bearer token.
    
    Missing header, bad signature, expired token, or no "sub" claim.
    """
    
    def __init__(
        self,
        message: str = "Authentication failed",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            details=details,
            status_code=401
        )
