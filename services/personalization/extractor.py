"""
Correction Extractor

Compares a raw transcript with the user's edited version and reports the
substitutions the user made.

Strategy:
1. Align both token streams with an LCS over normalized tokens
2. Walk the gaps between consecutive aligned tokens
3. Equal-sized gaps become word-for-word corrections; unequal gaps become a
   single phrase correction
4. Gaps that are empty on either side (pure insertions or deletions) are
   ignored, since they cannot be located again when applying

Usage:
    from services.personalization.extractor import extract_corrections
    
    extract_corrections("meet me at the pub", "meet me at the office")
    # [EmittedCorrection(original='pub', corrected='office')]
"""

from typing import List, Optional, Sequence

from services.personalization.alignment import find_lcs
from services.personalization.models import EmittedCorrection
from services.personalization.text import (
    normalize,
    strip_edge_punctuation,
    tokenize,
)


def decompose_to_words(
    original_words: Sequence[str],
    corrected_words: Sequence[str]
) -> List[EmittedCorrection]:
    """
    Pair up two equally long word runs position by position.
    
    Edge punctuation is stripped from both sides before comparing and
    storing, so "pub." -> "office." is learned as "pub" -> "office".
    Pairs that only differ by case, or that are pure punctuation on
    either side, produce nothing.
    """
    corrections = []
    for original, corrected in zip(original_words, corrected_words):
        original_clean = strip_edge_punctuation(original)
        corrected_clean = strip_edge_punctuation(corrected)
        
        if not original_clean or not corrected_clean:
            continue
        
        if original_clean.lower() != corrected_clean.lower():
            corrections.append(EmittedCorrection(original_clean, corrected_clean))
    
    return corrections


def extract_corrections(
    raw_text: Optional[str],
    edited_text: Optional[str]
) -> List[EmittedCorrection]:
    """
    Extract corrections by comparing raw text with edited text.
    
    Args:
        raw_text: Original speech-to-text output
        edited_text: The same transcript after the user edited it
        
    Returns:
        Corrections in the order they occur in the transcript
    """
    if not raw_text or not edited_text:
        return []
    
    if raw_text.strip() == edited_text.strip():
        return []
    
    raw_words = tokenize(raw_text)
    edited_words = tokenize(edited_text)
    
    # Sentinels bracket the real matches so every gap sits between two pairs
    matches = [(-1, -1), *find_lcs(raw_words, edited_words), (len(raw_words), len(edited_words))]
    
    corrections: List[EmittedCorrection] = []
    for (curr_i, curr_j), (next_i, next_j) in zip(matches, matches[1:]):
        original_run = raw_words[curr_i + 1:next_i]
        corrected_run = edited_words[curr_j + 1:next_j]
        
        if not original_run or not corrected_run:
            continue
        
        if len(original_run) == len(corrected_run):
            corrections.extend(decompose_to_words(original_run, corrected_run))
            continue
        
        original_phrase = " ".join(original_run)
        corrected_phrase = " ".join(corrected_run)
        if normalize(original_phrase) != normalize(corrected_phrase):
            corrections.append(EmittedCorrection(original_phrase, corrected_phrase))
    
    return corrections
