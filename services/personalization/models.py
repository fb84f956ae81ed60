"""
Personalization Models

Value types passed between the engine's components.

- EmittedCorrection: produced by the extractor from one edit
- StoredCorrection: a persisted correction with its counters, as read from
  the correction store; the applier only accepts these
- EditLearningResult / PersonalizationResult: outcomes reported by the
  lifecycle coordinator to its callers
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class EmittedCorrection:
    """A surface-string substitution observed in one edit."""
    original: str
    corrected: str


@dataclass(frozen=True)
class StoredCorrection:
    """Snapshot of one row of the correction store."""
    id: int
    user_id: str
    original_token: str
    corrected_token: str
    count: int
    disabled: bool = False
    first_seen_at: Optional[datetime] = None
    last_seen_at: Optional[datetime] = None
    
    @classmethod
    def from_row(cls, row: Any) -> "StoredCorrection":
        """Build from a core.models.Correction ORM row."""
        return cls(
            id=row.id,
            user_id=row.user_id,
            original_token=row.original_token,
            corrected_token=row.corrected_token,
            count=row.count,
            disabled=bool(row.disabled),
            first_seen_at=row.first_seen_at,
            last_seen_at=row.last_seen_at,
        )
    
    def is_eligible(self, min_count: int) -> bool:
        return not self.disabled and self.count >= min_count


@dataclass(frozen=True)
class AppliedCorrection:
    """A correction that matched during one personalization pass."""
    original: str
    corrected: str
    occurrences: int


@dataclass
class EditLearningResult:
    """
    Outcome of learning from one transcript edit.
    
    Learning is best-effort: failures are counted here instead of raised.
    """
    corrections_emitted: int = 0
    corrections_stored: int = 0
    failures: int = 0
    
    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for JSON serialization."""
        return {
            'corrections_emitted': self.corrections_emitted,
            'corrections_stored': self.corrections_stored,
            'failures': self.failures,
        }


@dataclass
class PersonalizationResult:
    """
    Outcome of personalizing one raw transcript.
    
    degraded is True when the correction store could not be read and the
    raw text was returned unchanged.
    """
    text: str
    applied: List[AppliedCorrection] = field(default_factory=list)
    degraded: bool = False
    
    @property
    def corrections_applied(self) -> int:
        return len(self.applied)
