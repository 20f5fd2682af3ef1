"""
Emoticon Replacer

Finds keyword markers such as ``[emoticon:无语,黑脸]`` in text and replaces
each one with the best-matching entry of a small curated corpus, ranked with
a BM25 variant that combines whole-keyword and single-character evidence.

Main components:
- EmoticonReplacer: Marker scanning, selection strategies and output assembly
- SearchEngine: Owns the corpus index and answers ranked and exact queries
- Tokenizer: Character-class splitting plus CJK n-grams
- Indexer: Per-entry frequency tables and IDF tables
- Ranker: Two-tier BM25 scoring
- AutoCorrect: Keyword suggestions using Levenshtein distance
- EmoticonDataManager: Loading, validation, editing and export of corpus data
- ResultFormatter: Console output for the command-line tool
"""

from . import config
from .autocorrect import AutoCorrect
from .data_manager import EmoticonDataManager, validate_data
from .exceptions import ValidationError
from .factory import (
    batch_replace,
    create_manager,
    create_replacer,
    create_search_engine,
    load_from_file,
    quick_query,
    quick_replace,
)
from .indexer import Indexer
from .models import (
    CorpusEntry,
    CorpusIndex,
    IndexedDocument,
    MarkerPreview,
    QueryResult,
    Replacement,
    ReplaceResult,
)
from .ranker import Ranker
from .replacer import REPLACE_STRATEGIES, EmoticonReplacer
from .search_engine import SearchEngine
from .tokenizer import Tokenizer
from .utils import ResultFormatter

__version__ = "1.1.0"
VERSION = __version__

DEFAULT_CONFIG = {
    "search": {
        "k1": config.K1,
        "b": config.B,
        "char_weight": config.CHAR_WEIGHT,
    },
    "replace": {
        "marker_tag": config.MARKER_TAG,
        "keyword_separator": config.KEYWORD_SEPARATOR,
        "replace_strategy": config.DEFAULT_STRATEGY,
    },
}

__all__ = [
    "EmoticonReplacer",
    "SearchEngine",
    "Tokenizer",
    "Indexer",
    "Ranker",
    "AutoCorrect",
    "EmoticonDataManager",
    "ResultFormatter",
    "ValidationError",
    "CorpusEntry",
    "CorpusIndex",
    "IndexedDocument",
    "QueryResult",
    "Replacement",
    "ReplaceResult",
    "MarkerPreview",
    "validate_data",
    "create_search_engine",
    "create_replacer",
    "create_manager",
    "quick_replace",
    "quick_query",
    "batch_replace",
    "load_from_file",
    "VERSION",
    "DEFAULT_CONFIG",
    "REPLACE_STRATEGIES",
]
