"""
Corpus index construction.

This module derives the per-entry frequency tables and the corpus-wide IDF
tables the ranker reads. An index is built in one call and never patched
afterwards; reloading a corpus builds a fresh one.
"""

import logging
import math
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Sequence

from .exceptions import ValidationError
from .models import CorpusEntry, CorpusIndex, IndexedDocument
from .tokenizer import split_chars

logger = logging.getLogger(__name__)


class Indexer:
    """Handles corpus index construction and IDF computation."""

    def __init__(self, config=None):
        """Initialize with configuration."""
        self.config = config

    def build_index(self, entries: Sequence) -> CorpusIndex:
        """
        Build a complete corpus index from a sequence of entries.

        Args:
            entries: List or tuple of CorpusEntry objects or corpus mappings.

        Returns:
            A new CorpusIndex. An empty sequence yields an empty index that
            answers every query with no results.

        Raises:
            ValidationError: If ``entries`` is not a list/tuple or an item
                cannot be read as a corpus entry.
        """
        corpus = self.coerce_entries(entries)

        documents = [self.index_document(entry) for entry in corpus]
        N = len(documents)

        if N:
            avg_doc_length = sum(doc.doc_length for doc in documents) / N
            avg_char_doc_length = sum(doc.char_doc_length for doc in documents) / N
        else:
            avg_doc_length = avg_char_doc_length = 0.0

        term_df = self.document_frequencies(doc.term_frequency for doc in documents)
        char_df = self.document_frequencies(doc.char_frequency for doc in documents)

        index = CorpusIndex(
            documents=documents,
            avg_doc_length=avg_doc_length,
            avg_char_doc_length=avg_char_doc_length,
            idf=self.compute_idf(term_df, N),
            char_idf=self.compute_idf(char_df, N),
        )
        logger.debug(
            f"Built corpus index: {N} entries, {len(index.idf)} keywords, "
            f"{len(index.char_idf)} characters"
        )
        return index

    def coerce_entries(self, entries: Sequence) -> List[CorpusEntry]:
        """
        Check the container shape and turn mappings into CorpusEntry objects.

        Args:
            entries: Candidate corpus.

        Returns:
            List of CorpusEntry in input order. Entries passed in are copied,
            so the index never shares state with the caller.
        """
        if not isinstance(entries, (list, tuple)):
            raise ValidationError(
                f"Corpus data must be a list of entries, got {type(entries).__name__}"
            )

        corpus = []
        for position, item in enumerate(entries):
            if isinstance(item, CorpusEntry):
                corpus.append(item.copy())
                continue
            try:
                corpus.append(CorpusEntry.from_dict(item))
            except ValidationError as e:
                raise ValidationError(f"Item {position}: {e}") from e
        return corpus

    def index_document(self, entry: CorpusEntry) -> IndexedDocument:
        """
        Precompute the lookup tables for one entry.

        Args:
            entry: The corpus entry.

        Returns:
            IndexedDocument wrapping the entry.
        """
        keywords = list(entry.keywords)
        chars = split_chars(keywords)

        term_frequency = dict(Counter(keywords))
        char_frequency = dict(Counter(chars))

        # char -> multi-character keywords containing it
        multi_term_char_index = defaultdict(list)
        for keyword in term_frequency:
            if len(keyword) < 2:
                continue
            for char in dict.fromkeys(keyword):
                multi_term_char_index[char].append(keyword)

        return IndexedDocument(
            entry=entry,
            term_frequency=term_frequency,
            char_frequency=char_frequency,
            multi_term_char_index=dict(multi_term_char_index),
            doc_length=len(keywords),
            char_doc_length=len(chars),
        )

    def document_frequencies(self, tables: Iterable[Dict[str, int]]) -> Dict[str, int]:
        """
        Count the documents each term appears in at least once.

        Args:
            tables: Per-document frequency tables.

        Returns:
            Dictionary mapping term to document frequency.
        """
        df = Counter()
        for table in tables:
            df.update(table.keys())
        return dict(df)

    def compute_idf(self, doc_freq: Dict[str, int], N: int) -> Dict[str, float]:
        """
        Compute IDF per term.

        IDF formula: idf = ln((N - df + 0.5) / (df + 0.5) + 1)  (smooth, never negative)

        Args:
            doc_freq: Document frequency per term.
            N: Total number of documents.

        Returns:
            Dictionary mapping term to IDF.
        """
        return {
            term: math.log((N - df + 0.5) / (df + 0.5) + 1.0)
            for term, df in doc_freq.items()
        }

    def summarize_index(self, index: CorpusIndex) -> None:
        """
        Print a summary of the corpus index.

        Args:
            index: The corpus index.
        """
        print("\n=== Corpus Index Summary ===")
        print(f"Entries indexed: {len(index)}")
        print(f"Unique keywords: {len(index.idf)}")
        print(f"Unique characters: {len(index.char_idf)}")
        print(f"Average keywords per entry: {index.avg_doc_length:.2f}")
        print(f"Average characters per entry: {index.avg_char_doc_length:.2f}")

        if index.idf:
            idf_values = list(index.idf.values())
            print(f"IDF range: {min(idf_values):.3f} - {max(idf_values):.3f}")
