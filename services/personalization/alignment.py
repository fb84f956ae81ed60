"""
Token Alignment

Longest-common-subsequence alignment of two token streams, compared by
normalized form so case and punctuation drift never count as an edit.
"""

from typing import List, Sequence, Tuple

from services.personalization.text import normalize

# (index into raw tokens, index into edited tokens)
Match = Tuple[int, int]


def find_lcs(raw_tokens: Sequence[str], edited_tokens: Sequence[str]) -> List[Match]:
    """
    Find a longest common subsequence between two token sequences.
    
    Builds the usual (m+1) x (n+1) length table, then backtracks from the
    bottom-right corner. When the table does not decide between dropping a
    raw token and dropping an edited token, the edited token is dropped
    first; this keeps the alignment (and so the extracted corrections)
    deterministic.
    
    Args:
        raw_tokens: Tokens of the original transcript
        edited_tokens: Tokens of the user-edited transcript
        
    Returns:
        Matched (i, j) index pairs, strictly increasing in both coordinates
    """
    raw_norm = [normalize(token) for token in raw_tokens]
    edited_norm = [normalize(token) for token in edited_tokens]
    m, n = len(raw_norm), len(edited_norm)
    
    # dp[i][j] = LCS length of raw_norm[:i] and edited_norm[:j]
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(1, m + 1):
        row, prev_row = dp[i], dp[i - 1]
        raw_word = raw_norm[i - 1]
        for j in range(1, n + 1):
            if raw_word == edited_norm[j - 1]:
                row[j] = prev_row[j - 1] + 1
            else:
                row[j] = max(prev_row[j], row[j - 1])
    
    matches: List[Match] = []
    i, j = m, n
    while i > 0 and j > 0:
        if raw_norm[i - 1] == edited_norm[j - 1]:
            matches.append((i - 1, j - 1))
            i -= 1
            j -= 1
        elif dp[i - 1][j] > dp[i][j - 1]:
            i -= 1
        else:
            j -= 1
    
    matches.reverse()
    return matches
