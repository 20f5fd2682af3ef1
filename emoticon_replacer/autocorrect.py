"""
Keyword suggestion module.

This module suggests corpus keywords for marker keywords that are not in the
corpus vocabulary, using Levenshtein distance and keyword frequency.
"""

from collections import Counter, defaultdict
from typing import Dict, List, Optional, Set, Tuple

from rapidfuzz.distance import Levenshtein

from . import config as default_config
from .models import CorpusIndex


class AutoCorrect:
    """Handles keyword suggestions using edit distance and frequency."""

    def __init__(self, config=None):
        """Initialize with configuration."""
        self.config = config or default_config
        self.keyword_vocab: Set[str] = set()
        self.keyword_freq: Counter = Counter()
        self.by_len_index: Dict[int, List[str]] = {}

    def build_vocab(self, index: CorpusIndex) -> None:
        """
        Collect the keyword vocabulary of a corpus index.

        Frequency is the number of entries listing the keyword.

        Args:
            index: The corpus index.
        """
        freq = Counter()
        for doc in index.documents:
            freq.update(doc.term_frequency.keys())

        self.keyword_freq = freq
        self.keyword_vocab = set(freq)
        self.by_len_index = self.build_len_index(self.keyword_vocab)

    def build_len_index(self, keyword_vocab: Set[str]) -> Dict[int, List[str]]:
        """
        Build a length-based index for efficient candidate lookup.

        Args:
            keyword_vocab: Set of vocabulary keywords.

        Returns:
            Dictionary mapping keyword length to the keywords of that length.
        """
        index = defaultdict(list)
        for w in sorted(keyword_vocab):
            index[len(w)].append(w)
        return dict(index)

    def _candidate_words(self, word: str, max_len_diff: int) -> List[str]:
        """Vocabulary keywords whose length is within ``max_len_diff`` of ``word``."""
        L = len(word)
        candidates = []
        for dL in range(-max_len_diff, max_len_diff + 1):
            bucket = self.by_len_index.get(L + dL)
            if bucket:
                candidates.extend(bucket)
        return candidates

    def suggest_correction(self, word: str, max_dist: int = None) -> Tuple[Optional[str], Optional[int]]:
        """
        Suggest the closest vocabulary keyword for a word.

        Args:
            word: Keyword to correct.
            max_dist: Maximum edit distance to consider.

        Returns:
            Tuple of (best_keyword, distance) or (None, None) if no good match.
        """
        if max_dist is None:
            max_dist = self.config.MAX_EDIT_DISTANCE

        best_word, best_dist, best_freq = None, None, -1

        for cand in self._candidate_words(word, max_dist):
            dist = Levenshtein.distance(word, cand, score_cutoff=max_dist)
            if dist <= max_dist:
                freq = self.keyword_freq.get(cand, 0)
                # Tie-break: smaller distance first, then higher frequency
                if (best_dist is None) or (dist < best_dist) or (dist == best_dist and freq > best_freq):
                    best_word, best_dist, best_freq = cand, dist, freq
                if best_dist == 0:
                    break

        return best_word, best_dist

    def autocorrect_keywords(self, keywords: List[str],
                             max_dist: int = None) -> Tuple[List[str], List[Tuple[str, str]]]:
        """
        Replace unknown keywords with their closest vocabulary keyword.

        Args:
            keywords: Marker keywords.
            max_dist: Maximum edit distance to consider.

        Returns:
            Tuple of (corrected_keywords, changes) where changes lists
            (original, corrected) pairs.
        """
        corrected = []
        changes = []

        for w in keywords:
            if self.is_valid_word(w):
                corrected.append(w)
                continue

            suggestion, _dist = self.suggest_correction(w, max_dist=max_dist)
            if suggestion is not None and suggestion != w:
                corrected.append(suggestion)
                changes.append((w, suggestion))
            else:
                corrected.append(w)

        return corrected, changes

    def get_similar_words(self, word: str, max_dist: int = None, top_k: int = None) -> List[Tuple[str, int, int]]:
        """
        Get vocabulary keywords similar to a given word.

        Args:
            word: Input word.
            max_dist: Maximum edit distance to consider.
            top_k: Number of similar keywords to return.

        Returns:
            List of (keyword, distance, frequency) tuples sorted by distance
            then frequency.
        """
        if max_dist is None:
            max_dist = self.config.MAX_EDIT_DISTANCE
        if top_k is None:
            top_k = self.config.MAX_SUGGESTIONS

        similar_words = []
        for cand in self._candidate_words(word, max_dist):
            dist = Levenshtein.distance(word, cand, score_cutoff=max_dist)
            if dist <= max_dist:
                similar_words.append((cand, dist, self.keyword_freq.get(cand, 0)))

        similar_words.sort(key=lambda x: (x[1], -x[2]))
        return similar_words[:top_k]

    def suggest_for_unknown(self, keywords: List[str]) -> Dict[str, List[str]]:
        """
        Suggestions for every keyword that is not in the vocabulary.

        Args:
            keywords: Marker keywords.

        Returns:
            Dictionary mapping each unknown keyword to its suggestions; known
            keywords and keywords without suggestions are omitted.
        """
        suggestions = {}
        for w in keywords:
            if self.is_valid_word(w):
                continue
            similar = [cand for cand, _dist, _freq in self.get_similar_words(w)]
            if similar:
                suggestions[w] = similar
        return suggestions

    def is_valid_word(self, word: str) -> bool:
        """Check if a keyword is in the vocabulary."""
        return word in self.keyword_vocab
