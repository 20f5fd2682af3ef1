"""
Marker replacement engine.

Scans text for markers such as ``[emoticon:无语,黑脸]``, resolves each one
with a ranked query against the search engine and rebuilds the text with
the chosen payloads. Markers are processed in a single left-to-right pass
over the input; offsets in the replacement records refer to the input text.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Pattern, Union

from .models import MarkerPreview, QueryResult, Replacement, ReplaceResult
from .search_engine import SearchEngine

STRATEGY_FIRST = "first"
STRATEGY_BEST = "best"
STRATEGY_ALL = "all"

REPLACE_STRATEGIES = {
    "FIRST": STRATEGY_FIRST,  # Top-ranked result
    "BEST": STRATEGY_BEST,    # Top-ranked result (default)
    "ALL": STRATEGY_ALL,      # Every result, space separated
}


def build_marker_pattern(tag: str) -> Pattern:
    """Compile the marker regex for ``tag``: ``[tag:keywords]``, case-insensitive."""
    return re.compile(r"\[" + re.escape(tag) + r":([^\]]+)\]", re.IGNORECASE)


class EmoticonReplacer:
    """Replaces keyword markers in text with the best-matching corpus payloads."""

    def __init__(self, search_engine: Optional[SearchEngine] = None,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the replacer.

        Args:
            search_engine: Engine to resolve markers against. A new empty
                engine is created if omitted.
            logger: Logger to report to. Defaults to this module's logger.
        """
        self.search_engine = search_engine or SearchEngine()
        self.logger = logger or logging.getLogger(__name__)

        cfg = self.search_engine.config
        self.config = cfg
        self.marker_pattern = build_marker_pattern(cfg.MARKER_TAG)
        self.keyword_separator = cfg.KEYWORD_SEPARATOR
        self.replace_strategy = cfg.DEFAULT_STRATEGY

    def set_config(self, marker_tag: str = None, marker_pattern: Union[str, Pattern] = None,
                   keyword_separator: str = None, replace_strategy: str = None) -> None:
        """
        Update the marker syntax or the default strategy.

        Args:
            marker_tag: Literal tag, e.g. ``"kaomoji"`` for ``[kaomoji:...]``.
            marker_pattern: Full regex with one group capturing the keyword
                payload. Strings are compiled case-insensitively.
            keyword_separator: Separator between keywords inside a marker.
            replace_strategy: Default strategy, one of ``first``/``best``/``all``.
        """
        if marker_tag is not None:
            self.marker_pattern = build_marker_pattern(marker_tag)
        if marker_pattern is not None:
            if isinstance(marker_pattern, str):
                marker_pattern = re.compile(marker_pattern, re.IGNORECASE)
            self.marker_pattern = marker_pattern
        if keyword_separator is not None:
            self.keyword_separator = keyword_separator
        if replace_strategy is not None:
            self.replace_strategy = replace_strategy

    def load_entries(self, entries) -> None:
        """Rebuild the search index from ``entries``."""
        self.search_engine.build_index(entries)

    def parse_keywords(self, payload: str) -> List[str]:
        """Split a marker payload into trimmed, non-empty keywords."""
        keywords = (k.strip() for k in payload.split(self.keyword_separator))
        return [k for k in keywords if k]

    def select(self, matches: List[QueryResult], strategy: str):
        """
        Choose the replacement for a non-empty result list.

        Args:
            matches: Results, best first.
            strategy: ``first``, ``best`` or ``all``; anything else acts as ``best``.

        Returns:
            Tuple of (replacement_text, selected) where selected is a result
            or, for ``all``, the list of results.
        """
        if strategy == STRATEGY_ALL:
            return " ".join(m.text for m in matches), list(matches)
        # Results arrive best-first, so "first" and "best" agree
        return matches[0].text, matches[0]

    def replace_text(self, text: str, strategy: str = None, threshold: float = None,
                     keep_original_on_not_found: bool = None, mark_not_found: bool = None,
                     auto_correct: bool = None) -> ReplaceResult:
        """
        Replace every marker in ``text``.

        Args:
            text: Input text.
            strategy: Selection strategy. If None, uses the configured default.
            threshold: Minimum score (exclusive) for a candidate.
            keep_original_on_not_found: Leave unresolved markers verbatim
                instead of removing them.
            mark_not_found: Replace unresolved markers with ``[?<payload>]``.
            auto_correct: Swap unknown keywords for the closest corpus keyword
                before searching.

        Returns:
            ReplaceResult with the new text and one record per resolved or
            unresolved marker.
        """
        cfg = self.config
        if strategy is None:
            strategy = self.replace_strategy
        if threshold is None:
            threshold = cfg.DEFAULT_THRESHOLD
        if keep_original_on_not_found is None:
            keep_original_on_not_found = cfg.KEEP_ORIGINAL_ON_NOT_FOUND
        if mark_not_found is None:
            mark_not_found = cfg.MARK_NOT_FOUND
        if auto_correct is None:
            auto_correct = cfg.AUTO_CORRECT_ENABLED

        if not text:
            return ReplaceResult(text=text or "", replacements=[], original_text=text or "")

        replacements: List[Replacement] = []

        def resolve(match):
            original = match.group(0)
            payload = match.group(1)
            keywords = self.parse_keywords(payload)

            if not keywords:
                return original if keep_original_on_not_found else ""

            search_keywords = keywords
            if auto_correct:
                search_keywords, changes = self.search_engine.auto_correct.autocorrect_keywords(keywords)
                if changes:
                    self.logger.debug(f"Keyword corrections: {changes}")

            matches = self.search_engine.search(
                " ".join(search_keywords), top_k=cfg.MARKER_TOP_K, threshold=threshold
            )

            if matches:
                replacement, selected = self.select(matches, strategy)
                replacements.append(Replacement(
                    index=len(replacements),
                    original=original,
                    keywords=keywords,
                    replacement=replacement,
                    offset=match.start(),
                    matches=matches,
                    selected=selected,
                ))
                return replacement

            self.logger.debug(f"No entry found for marker {original!r}")
            replacements.append(Replacement(
                index=len(replacements),
                original=original,
                keywords=keywords,
                replacement=None,
                offset=match.start(),
                not_found=True,
            ))
            if mark_not_found:
                return f"[?{payload}]"
            return original if keep_original_on_not_found else ""

        output = self.marker_pattern.sub(resolve, text)
        return ReplaceResult(text=output, replacements=replacements, original_text=text)

    def replace_multiple(self, texts: List[str], **options) -> List[ReplaceResult]:
        """
        Replace markers in several texts with the same options.

        Args:
            texts: Input texts.
            **options: Keyword arguments accepted by ``replace_text``.

        Returns:
            One ReplaceResult per input text, in order.
        """
        return [self.replace_text(text, **options) for text in texts]

    def preview(self, text: str) -> List[MarkerPreview]:
        """
        List the candidates every marker would resolve to, without replacing.

        Args:
            text: Input text.

        Returns:
            One MarkerPreview per marker, in text order.
        """
        if not text:
            return []

        markers = []
        for match in self.marker_pattern.finditer(text):
            keywords = self.parse_keywords(match.group(1))
            matches = self.search_engine.search(" ".join(keywords), top_k=self.config.MARKER_TOP_K, threshold=0)
            markers.append(MarkerPreview(
                marker=match.group(0),
                keywords=keywords,
                offset=match.start(),
                matches=matches,
                suggestions=self.search_engine.auto_correct.suggest_for_unknown(keywords),
            ))
        return markers

    def query(self, keywords: str, top_k: int = None) -> List[QueryResult]:
        """
        Look up entries for free text, without marker syntax.

        Args:
            keywords: Query text.
            top_k: Number of results to return.

        Returns:
            Ranked results.
        """
        return self.search_engine.search(keywords, top_k=top_k, threshold=0)

    def exact_query(self, keywords: str) -> List[QueryResult]:
        """
        Look up entries whose keywords occur literally in ``keywords``.

        Args:
            keywords: Text to scan.

        Returns:
            Exact matches sorted by score.
        """
        return self.search_engine.exact_match(keywords)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the loaded corpus and the marker configuration.

        Returns:
            Dictionary containing statistics and the active configuration.
        """
        return {
            "total_entries": len(self.search_engine.index),
            "avg_doc_length": self.search_engine.index.avg_doc_length,
            "config": {
                "marker_pattern": self.marker_pattern.pattern,
                "keyword_separator": self.keyword_separator,
                "replace_strategy": self.replace_strategy,
            },
        }
