"""
Factory functions and one-shot helpers.

These wire a SearchEngine, an EmoticonReplacer and an EmoticonDataManager
together for the common cases: build a configured replacer, replace once,
query once.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .data_manager import EmoticonDataManager
from .models import CorpusEntry, QueryResult, ReplaceResult
from .replacer import EmoticonReplacer
from .search_engine import SearchEngine

CorpusData = Union[List[Dict[str, Any]], List[CorpusEntry], str]


def create_search_engine(search_config: Optional[Dict] = None) -> SearchEngine:
    """Create a SearchEngine with optional overrides such as ``{"K1": 1.2}``."""
    return SearchEngine(config_dict=search_config)


def create_manager(data: Optional[Union[List[Dict[str, Any]], str]] = None) -> EmoticonDataManager:
    """
    Create a data manager, loading ``data`` if given.

    Args:
        data: List of corpus items or a JSON string.

    Returns:
        The loaded EmoticonDataManager.
    """
    manager = EmoticonDataManager()
    if isinstance(data, str):
        manager.load_from_json(data)
    elif isinstance(data, list):
        manager.load_from_array(data)
    return manager


def create_replacer(entries: Optional[CorpusData] = None, search_config: Optional[Dict] = None,
                    replace_config: Optional[Dict] = None) -> EmoticonReplacer:
    """
    Create a fully configured EmoticonReplacer.

    Args:
        entries: Corpus as a list of items/entries, or a JSON string which is
            validated through EmoticonDataManager first.
        search_config: SearchEngine overrides, e.g. ``{"CHAR_WEIGHT": 0.5}``.
        replace_config: Keyword arguments for ``EmoticonReplacer.set_config``.

    Returns:
        The replacer, with its index built when entries were given.
    """
    replacer = EmoticonReplacer(create_search_engine(search_config))

    if replace_config:
        replacer.set_config(**replace_config)

    if isinstance(entries, str):
        replacer.load_entries(create_manager(entries).get_all_entries())
    elif entries:
        replacer.load_entries(entries)

    return replacer


def quick_replace(text: str, entries: CorpusData, search_config: Optional[Dict] = None,
                  replace_config: Optional[Dict] = None, **options) -> ReplaceResult:
    """Build a replacer for ``entries`` and replace the markers in ``text`` once."""
    replacer = create_replacer(entries, search_config=search_config, replace_config=replace_config)
    return replacer.replace_text(text, **options)


def quick_query(keywords: str, entries: CorpusData, top_k: int = 5) -> List[QueryResult]:
    """Build a replacer for ``entries`` and run one free-text query."""
    return create_replacer(entries).query(keywords, top_k)


def batch_replace(texts: List[str], entries: CorpusData, search_config: Optional[Dict] = None,
                  replace_config: Optional[Dict] = None, **options) -> List[ReplaceResult]:
    """Replace markers in several texts against one corpus."""
    replacer = create_replacer(entries, search_config=search_config, replace_config=replace_config)
    return replacer.replace_multiple(texts, **options)


def load_from_file(path: Union[str, Path]) -> List[CorpusEntry]:
    """
    Load and validate corpus entries from a JSON file.

    Args:
        path: Path to the corpus file.

    Returns:
        Validated entries.
    """
    return EmoticonDataManager().load_from_file(path).get_all_entries()
