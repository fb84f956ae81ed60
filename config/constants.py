"""
Application Constants

Centralizes the fixed values used by the personalization engine.

Usage:
    from config.constants import PUNCTUATION_CHARS, DEFAULT_MIN_COUNT
"""

# =============================================================================
# Text Normalization
# =============================================================================

# Punctuation removed for comparison and stripped from word edges
PUNCTUATION_CHARS = ".,!?;:'\""

# Characters that count as "word" characters for boundary matching
WORD_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "0123456789_"
)


# =============================================================================
# Learning Thresholds
# =============================================================================

# A correction must be observed this many times before it is applied
DEFAULT_MIN_COUNT = 2

# Number of corrections reported in learning statistics
STATS_TOP_CORRECTIONS = 10


# =============================================================================
# Storage Limits
# =============================================================================

# Column size for transcript titles
MAX_TITLE_LENGTH = 255
