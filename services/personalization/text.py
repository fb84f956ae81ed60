"""
Transcript Tokenization

Splits transcript text into word tokens and derives the comparison form
used by the aligner and extractor.

Two views of a token exist:
- surface: the token exactly as it appears, used for output and storage
- normalized: lower-cased with PUNCTUATION_CHARS removed, used for comparison

Usage:
    from services.personalization.text import tokenize, normalize
    
    tokenize("  Meet me at the pub. ")  # ['Meet', 'me', 'at', 'the', 'pub.']
    normalize("Pub.")                   # 'pub'
"""

from typing import List, Optional

from config.constants import PUNCTUATION_CHARS

_PUNCTUATION_TABLE = str.maketrans("", "", PUNCTUATION_CHARS)


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split text on runs of whitespace, keeping punctuation on its word.
    
    Returns an empty list for empty or whitespace-only input.
    """
    if not text:
        return []
    return text.split()


def normalize(token: str) -> str:
    """Lower-case a token and drop every punctuation character."""
    return token.lower().translate(_PUNCTUATION_TABLE)


def strip_edge_punctuation(token: str) -> str:
    """Strip punctuation runs from both ends, leaving inner punctuation ("don't") alone."""
    return token.strip(PUNCTUATION_CHARS)


def are_similar_phrases(first: str, second: str) -> bool:
    """True when two phrases only differ by case and punctuation."""
    return normalize(first) == normalize(second)
