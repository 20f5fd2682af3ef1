"""
Document ranking and scoring module.

This module scores corpus entries against a set of query terms with a BM25
variant that combines whole-keyword and single-character evidence, and
provides the literal substring matcher used for exact lookups.

Scoring per entry:

    whole  = sum of BM25(tf, idf) over query terms that are keywords
           + borrowed credit for query characters found inside
             multi-character keywords (scored at whole-keyword strength)
    chars  = sum of BM25 over the remaining query characters
    score  = (whole + CHAR_WEIGHT * chars) * weight
"""

import logging
from typing import List, Set

from . import config as default_config
from .models import CorpusIndex, IndexedDocument, QueryResult
from .tokenizer import split_chars

logger = logging.getLogger(__name__)


class Ranker:
    """Handles document ranking using two-tier BM25."""

    def __init__(self, config=None):
        """Initialize with configuration."""
        self.config = config or default_config
        self.k1 = self.config.K1
        self.b = self.config.B
        self.char_weight = self.config.CHAR_WEIGHT

    def bm25_contribution(self, tf: float, idf: float, doc_len: float, avg_doc_len: float) -> float:
        """
        Classic BM25 contribution of one term to one document.

        Args:
            tf: Term frequency in the document.
            idf: Inverse document frequency of the term.
            doc_len: Document length.
            avg_doc_len: Average document length across the corpus.

        Returns:
            idf * tf*(k1+1) / (tf + k1*(1 - b + b*doc_len/avg_doc_len))
        """
        ratio = doc_len / avg_doc_len if avg_doc_len else 0.0
        numerator = tf * (self.k1 + 1)
        denominator = tf + self.k1 * (1 - self.b + self.b * ratio)
        return idf * (numerator / denominator)

    def score_document(self, query_terms: Set[str], query_chars: List[str],
                       doc: IndexedDocument, index: CorpusIndex) -> float:
        """
        Compute the combined score of one document.

        Args:
            query_terms: Full set of query terms.
            query_chars: Distinct characters of all query terms, sorted.
            doc: The indexed document.
            index: The corpus index the document belongs to.

        Returns:
            Weighted score; 0.0 when nothing matches.
        """
        # 1. Whole keyword matches
        whole_score = 0.0
        for term in sorted(query_terms):
            tf = doc.term_frequency.get(term, 0)
            if tf == 0:
                continue
            idf = index.idf.get(term, 0.0)
            whole_score += self.bm25_contribution(tf, idf, doc.doc_length, index.avg_doc_length)

        # 2. Borrowing: a character that is not a query term of its own takes
        #    whole-keyword credit from the keywords of this document containing it
        consumed = set()
        for char in query_chars:
            if char in query_terms:
                continue
            containing = doc.multi_term_char_index.get(char)
            if not containing:
                continue
            tf = sum(doc.term_frequency[keyword] for keyword in containing)
            idf = index.idf.get(char, index.char_idf.get(char, 0.0))
            whole_score += self.bm25_contribution(tf, idf, doc.doc_length, index.avg_doc_length)
            consumed.add(char)

        # 3. Single characters not already credited
        char_score = 0.0
        for char in query_chars:
            if char in consumed:
                continue
            tf = doc.char_frequency.get(char, 0)
            if tf == 0:
                continue
            idf = index.char_idf.get(char, 0.0)
            char_score += self.bm25_contribution(tf, idf, doc.char_doc_length, index.avg_char_doc_length)

        total = whole_score + char_score * self.char_weight
        return total * doc.entry.weight

    def search(self, query_terms: Set[str], index: CorpusIndex, top_k: int = None,
               threshold: float = None) -> List[QueryResult]:
        """
        Rank the corpus for a set of query terms.

        Args:
            query_terms: Tokenized query.
            index: The corpus index.
            top_k: Number of results to return.
            threshold: Results must score strictly above this value.

        Returns:
            At most ``top_k`` results, best first; equal scores keep corpus order.
        """
        if top_k is None:
            top_k = self.config.TOP_K_RESULTS
        if threshold is None:
            threshold = self.config.DEFAULT_THRESHOLD

        if not query_terms or not index.documents:
            return []

        query_terms = set(query_terms)
        query_chars = sorted(set(split_chars(query_terms)))

        results = []
        for doc in index.documents:
            score = self.score_document(query_terms, query_chars, doc, index)
            if score <= threshold:
                continue
            results.append(QueryResult(
                text=doc.entry.text,
                score=score,
                matched_keywords=[k for k in doc.entry.keywords if k in query_terms],
                category=doc.entry.category,
            ))

        # sorted() is stable with reverse=True, so ties keep corpus order
        results = sorted(results, key=lambda r: r.score, reverse=True)
        logger.debug(f"Ranked {len(results)} of {len(index)} entries above {threshold}")
        return results[:max(top_k, 0)]

    def exact_match(self, text: str, index: CorpusIndex) -> List[QueryResult]:
        """
        Find entries whose keywords occur literally in ``text``.

        Args:
            text: Text to scan.
            index: The corpus index.

        Returns:
            Every entry with at least one keyword match, scored
            ``len(matched_keywords) * weight``, best first. No threshold, no cap.
        """
        if not text:
            return []

        results = []
        for doc in index.documents:
            matched = [k for k in doc.entry.keywords if k in text]
            if matched:
                results.append(QueryResult(
                    text=doc.entry.text,
                    score=len(matched) * doc.entry.weight,
                    matched_keywords=matched,
                    category=doc.entry.category,
                ))

        return sorted(results, key=lambda r: r.score, reverse=True)

    def summarize_ranking_stats(self, index: CorpusIndex) -> None:
        """
        Print summary statistics about the ranking system.

        Args:
            index: The corpus index.
        """
        if not index.documents:
            print("No ranking statistics available.")
            return

        print("\n=== Ranking Statistics ===")
        print(f"BM25 parameters: k1={self.k1}, b={self.b}, char_weight={self.char_weight}")

        char_idf_values = list(index.char_idf.values())
        print(f"Character IDF range: {min(char_idf_values):.3f} - {max(char_idf_values):.3f}")

        weights = [doc.entry.weight for doc in index.documents]
        print(f"Entry weight range: {min(weights):.2f} - {max(weights):.2f}")
