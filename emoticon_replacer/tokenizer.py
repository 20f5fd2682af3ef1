"""
Query tokenization module.

Splits free text into a deduplicated set of query terms: whole words made of
CJK ideographs, ASCII letters and digits, plus every 2-4 character substring
and every single character of each CJK run. Short CJK text has no
whitespace, so the n-grams stand in for word segmentation.
"""

import re
from typing import List, Set

# CJK unified ideographs (basic block), matching the corpus data
CJK_RANGE = "一-龥"

NON_TERM_CHARS = re.compile(f"[^{CJK_RANGE}a-zA-Z0-9]")
CJK_RUN = re.compile(f"[{CJK_RANGE}]+")

MIN_NGRAM = 2
MAX_NGRAM = 4


class Tokenizer:
    """Turns text into query terms. Stateless apart from its configuration."""

    def __init__(self, config=None):
        """Initialize with configuration."""
        self.config = config

    def tokenize(self, text: str) -> Set[str]:
        """
        Tokenize a query string into a set of terms.

        Args:
            text: Text to tokenize.

        Returns:
            Set of whole-word terms and CJK n-grams. Empty for empty or
            whitespace-only input.
        """
        if not text:
            return set()

        terms = set(NON_TERM_CHARS.sub(" ", text).split())

        for run in CJK_RUN.findall(text):
            terms.update(self.cjk_ngrams(run))

        return terms

    def cjk_ngrams(self, run: str) -> List[str]:
        """
        Generate the substrings of a CJK run used as candidate terms.

        Args:
            run: A maximal run of CJK ideographs.

        Returns:
            Every contiguous substring of length 2..min(4, len(run)), followed
            by every single character.
        """
        grams = []
        for length in range(MIN_NGRAM, min(MAX_NGRAM, len(run)) + 1):
            for start in range(len(run) - length + 1):
                grams.append(run[start:start + length])
        grams.extend(run)
        return grams


def split_chars(terms) -> List[str]:
    """Split every term into its characters (code points), in order."""
    return [char for term in terms for char in term]
