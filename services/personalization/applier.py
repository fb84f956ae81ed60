"""
Correction Applier

Rewrites a raw transcript with a user's learned corrections.

Matching rules:
- case-insensitive
- anchored at word boundaries: each edge of a match is a transition between
  a word character (ASCII letters, digits, "_") and a non-word character
- longest original first, so "New York" is replaced before "York" can be

Usage:
    from services.personalization.applier import apply_corrections
    
    text = apply_corrections("see you at the pub", corrections, min_count=2)
"""

import re
from typing import Iterable, List, Pattern, Sequence, Tuple

from config.constants import DEFAULT_MIN_COUNT, WORD_CHARS
from services.personalization.models import AppliedCorrection, StoredCorrection
from utils.logging import get_logger

logger = get_logger(__name__)

_NOT_AFTER_WORD = r"(?<![A-Za-z0-9_])"
_NOT_BEFORE_WORD = r"(?![A-Za-z0-9_])"
_AFTER_WORD = r"(?<=[A-Za-z0-9_])"
_BEFORE_WORD = r"(?=[A-Za-z0-9_])"


def compile_correction_pattern(original: str) -> Pattern[str]:
    """
    Compile a case-insensitive, word-anchored pattern for an original token.

    Both edges must sit on a word/non-word transition: "pub" never matches
    inside "public", and "let us," only matches when a word character
    follows the comma.
    """
    if original[0] in WORD_CHARS:
        prefix = _NOT_AFTER_WORD
    else:
        prefix = _AFTER_WORD
    if original[-1] in WORD_CHARS:
        suffix = _NOT_BEFORE_WORD
    else:
        suffix = _BEFORE_WORD
    return re.compile(prefix + re.escape(original) + suffix, re.IGNORECASE)


def select_corrections(
    corrections: Iterable[StoredCorrection],
    min_count: int = DEFAULT_MIN_COUNT
) -> List[StoredCorrection]:
    """
    Keep eligible, well-formed corrections, longest original first.
    
    Records with an empty side can only come from outside the extractor;
    they are skipped and reported once per call.
    """
    eligible = []
    corrupt = 0
    for correction in corrections:
        if not correction.is_eligible(min_count):
            continue
        if not correction.original_token.strip() or not correction.corrected_token.strip():
            corrupt += 1
            continue
        eligible.append(correction)
    
    if corrupt:
        logger.warning(f"Ignoring {corrupt} correction(s) with an empty side")
    
    # sorted() is stable, so equal lengths keep the store's count ordering
    return sorted(eligible, key=lambda c: len(c.original_token), reverse=True)


def apply_corrections_with_report(
    text: str,
    corrections: Sequence[StoredCorrection],
    min_count: int = DEFAULT_MIN_COUNT
) -> Tuple[str, List[AppliedCorrection]]:
    """
    Apply corrections and report which of them matched.
    
    Args:
        text: Raw transcript text
        corrections: The user's stored corrections
        min_count: Minimum observation count for a correction to apply
        
    Returns:
        Tuple of (rewritten text, corrections that matched at least once)
    """
    if not text or not corrections:
        return text, []
    
    result = text
    applied: List[AppliedCorrection] = []
    
    for correction in select_corrections(corrections, min_count):
        pattern = compile_correction_pattern(correction.original_token)
        replacement = correction.corrected_token
        # A callable replacement keeps backslashes in the corrected text literal
        result, occurrences = pattern.subn(lambda _match: replacement, result)
        
        if occurrences:
            applied.append(AppliedCorrection(
                original=correction.original_token,
                corrected=replacement,
                occurrences=occurrences
            ))
    
    if applied:
        logger.debug(
            "Applied corrections: "
            + ", ".join(f'"{a.original}" -> "{a.corrected}" x{a.occurrences}' for a in applied)
        )
    
    return result, applied


def apply_corrections(
    text: str,
    corrections: Sequence[StoredCorrection],
    min_count: int = DEFAULT_MIN_COUNT
) -> str:
    """Apply eligible corrections to text and return the rewritten text."""
    result, _ = apply_corrections_with_report(text, corrections, min_count)
    return result
