"""
Personalization Package

Learns per-user phrase substitutions from transcript edits and applies
them to future transcriptions.
"""

from services.personalization.text import (
    tokenize,
    normalize,
    strip_edge_punctuation,
    are_similar_phrases,
)
from services.personalization.alignment import find_lcs
from services.personalization.extractor import extract_corrections
from services.personalization.applier import (
    apply_corrections,
    apply_corrections_with_report,
)
from services.personalization.models import (
    EmittedCorrection,
    StoredCorrection,
    AppliedCorrection,
    EditLearningResult,
    PersonalizationResult,
)
from services.personalization.store import CorrectionStore
from services.personalization.service import PersonalizationService

__all__ = [
    'tokenize',
    'normalize',
    'strip_edge_punctuation',
    'are_similar_phrases',
    'find_lcs',
    'extract_corrections',
    'apply_corrections',
    'apply_corrections_with_report',
    'EmittedCorrection',
    'StoredCorrection',
    'AppliedCorrection',
    'EditLearningResult',
    'PersonalizationResult',
    'CorrectionStore',
    'PersonalizationService',
]
