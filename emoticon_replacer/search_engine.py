"""
Main SearchEngine class that owns the corpus index.

This module contains the SearchEngine class that coordinates the tokenizer,
indexer and ranker. It holds exactly one corpus index at a time; rebuilding
creates a new index and swaps the reference, so a failed build leaves the
previous index in place.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from . import config
from .autocorrect import AutoCorrect
from .indexer import Indexer
from .models import CorpusIndex, QueryResult
from .ranker import Ranker
from .tokenizer import Tokenizer

CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")

# Option names that differ from the constant they set
CONFIG_ALIASES = {
    "REPLACE_STRATEGY": "DEFAULT_STRATEGY",
    "STRATEGY": "DEFAULT_STRATEGY",
    "THRESHOLD": "DEFAULT_THRESHOLD",
    "TOP_K": "TOP_K_RESULTS",
}


def config_key(key: str) -> str:
    """Map an option name such as ``charWeight`` to its constant, ``CHAR_WEIGHT``."""
    name = CAMEL_BOUNDARY.sub("_", str(key)).upper()
    return CONFIG_ALIASES.get(name, name)


class SearchEngine:
    """
    BM25 keyword search over a small in-memory corpus.

    Build the index once per corpus load with ``build_index``; queries are
    read-only afterwards.
    """

    def __init__(self, config_dict: Optional[Dict] = None, logger: Optional[logging.Logger] = None):
        """
        Initialize the SearchEngine.

        Args:
            config_dict: Optional configuration overrides, e.g. ``{"K1": 1.2}``.
            logger: Logger to report to. Defaults to this module's logger.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.config = self._load_config(config_dict)

        self.tokenizer = Tokenizer(self.config)
        self.indexer = Indexer(self.config)
        self.ranker = Ranker(self.config)
        self.auto_correct = AutoCorrect(self.config)

        self.index = CorpusIndex()

    def _load_config(self, config_dict: Optional[Dict]) -> Any:
        """
        Load configuration from the config module, overlaid with a dictionary.

        Keys may be given as constant names (``CHAR_WEIGHT``), snake case
        (``char_weight``) or camel case (``charWeight``). Unknown keys are
        logged and ignored.
        """
        if config_dict:
            logger = self.logger

            class Config:
                def __init__(self, config_dict):
                    for key in dir(config):
                        if key.isupper():
                            setattr(self, key, getattr(config, key))
                    for key, value in config_dict.items():
                        name = config_key(key)
                        if not hasattr(self, name):
                            logger.warning(f"Ignoring unknown config option {key!r}")
                            continue
                        setattr(self, name, value)
            return Config(config_dict)
        return config

    @property
    def documents(self):
        return self.index.documents

    def build_index(self, entries: Sequence) -> CorpusIndex:
        """
        Build a new index from ``entries`` and make it current.

        Args:
            entries: List or tuple of CorpusEntry objects or corpus mappings.

        Returns:
            The new CorpusIndex.

        Raises:
            ValidationError: If the entries are malformed. The current index
                is kept unchanged.
        """
        index = self.indexer.build_index(entries)
        self.auto_correct.build_vocab(index)
        self.index = index
        self.logger.info(f"Indexed {len(index)} entries ({len(index.idf)} unique keywords)")
        return index

    def search(self, text: str, top_k: int = None, threshold: float = None) -> List[QueryResult]:
        """
        Search for entries matching the given text.

        Args:
            text: Query text.
            top_k: Number of results to return. If None, uses config default.
            threshold: Minimum score (exclusive). If None, uses config default.

        Returns:
            Results sorted by relevance; empty when nothing scores above the
            threshold, the query has no terms, or the corpus is empty.
        """
        if not text or not self.index.documents:
            return []

        query_terms = self.tokenizer.tokenize(text)
        if not query_terms:
            return []

        results = self.ranker.search(query_terms, self.index, top_k=top_k, threshold=threshold)
        self.logger.debug(f"Query {text!r}: {len(query_terms)} terms, {len(results)} results")
        return results

    def exact_match(self, text: str) -> List[QueryResult]:
        """
        Find entries with a keyword occurring literally in ``text``.

        Args:
            text: Text to scan.

        Returns:
            Matches sorted by score, uncapped.
        """
        return self.ranker.exact_match(text, self.index)

    def suggest_keywords(self, keyword: str) -> List[str]:
        """
        Suggest corpus keywords close to ``keyword``.

        Args:
            keyword: A keyword that may be misspelled.

        Returns:
            Similar corpus keywords, closest first.
        """
        return [cand for cand, _dist, _freq in self.auto_correct.get_similar_words(keyword)]

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the current index.

        Returns:
            Dictionary containing various statistics.
        """
        return {
            "num_entries": len(self.index),
            "num_keywords": len(self.index.idf),
            "num_characters": len(self.index.char_idf),
            "avg_doc_length": self.index.avg_doc_length,
            "avg_char_doc_length": self.index.avg_char_doc_length,
        }
