"""
Data structures shared by the index, the ranker and the replacer.

Corpus entries are the caller-owned input; indexed documents and the corpus
index are derived at build time and never mutated afterwards. Query results
and replacement records are produced per call and not retained.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import ValidationError

# Keys accepted for the payload of a corpus item, in order of preference
PAYLOAD_KEYS = ("text", "emoticon", "kaomoji")


@dataclass
class CorpusEntry:
    """One payload-to-keywords mapping available for retrieval."""

    text: str
    keywords: List[str]
    weight: float = 1.0
    category: str = ""

    @classmethod
    def from_dict(cls, item: Mapping[str, Any]) -> "CorpusEntry":
        """
        Build an entry from a mapping such as one item of a corpus JSON file.

        Args:
            item: Mapping with a payload key (``text``, ``emoticon`` or
                ``kaomoji``), ``keywords`` and optional ``weight``/``category``.

        Returns:
            A new CorpusEntry.

        Raises:
            ValidationError: If the payload or keywords are missing or empty.
        """
        if not isinstance(item, Mapping):
            raise ValidationError(f"Corpus item must be a mapping, got {type(item).__name__}")

        text = next((item[key] for key in PAYLOAD_KEYS if item.get(key)), None)
        if not isinstance(text, str) or not text.strip():
            raise ValidationError("Corpus item is missing a non-empty 'text' field")

        raw_keywords = item.get("keywords")
        if not isinstance(raw_keywords, (list, tuple)):
            raise ValidationError(f"Corpus item {text!r} has no 'keywords' list")
        keywords = [str(k).strip() for k in raw_keywords]
        keywords = [k for k in keywords if k]
        if not keywords:
            raise ValidationError(f"Corpus item {text!r} has no non-empty keywords")

        weight = item.get("weight", 1.0)
        # missing, non-numeric or non-positive weights fall back to the default
        if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight <= 0:
            weight = 1.0

        return cls(
            text=text,
            keywords=keywords,
            weight=float(weight),
            category=str(item.get("category") or ""),
        )

    def copy(self) -> "CorpusEntry":
        """An independent copy; the keyword list is not shared."""
        return CorpusEntry(
            text=self.text,
            keywords=list(self.keywords),
            weight=self.weight,
            category=self.category,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "keywords": list(self.keywords),
            "weight": self.weight,
            "category": self.category,
        }


@dataclass(frozen=True)
class IndexedDocument:
    """A corpus entry plus its precomputed frequency tables."""

    entry: CorpusEntry
    term_frequency: Dict[str, int]
    char_frequency: Dict[str, int]
    multi_term_char_index: Dict[str, List[str]]
    doc_length: int
    char_doc_length: int


@dataclass(frozen=True)
class CorpusIndex:
    """Everything the ranker needs, built once per corpus load."""

    documents: List[IndexedDocument] = field(default_factory=list)
    avg_doc_length: float = 0.0
    avg_char_doc_length: float = 0.0
    idf: Dict[str, float] = field(default_factory=dict)
    char_idf: Dict[str, float] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.documents)


@dataclass
class QueryResult:
    """A ranked hit for one corpus entry."""

    text: str
    score: float
    matched_keywords: List[str]
    category: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "score": self.score,
            "matched_keywords": list(self.matched_keywords),
            "category": self.category,
        }


@dataclass
class Replacement:
    """What happened to one marker occurrence."""

    index: int
    original: str
    keywords: List[str]
    replacement: Optional[str]
    offset: int
    matches: List[QueryResult] = field(default_factory=list)
    selected: Union[QueryResult, List[QueryResult], None] = None
    not_found: bool = False

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.selected, list):
            selected = [m.to_dict() for m in self.selected]
        elif self.selected is not None:
            selected = self.selected.to_dict()
        else:
            selected = None
        return {
            "index": self.index,
            "original": self.original,
            "keywords": list(self.keywords),
            "replacement": self.replacement,
            "offset": self.offset,
            "matches": [m.to_dict() for m in self.matches],
            "selected": selected,
            "not_found": self.not_found,
        }


@dataclass
class ReplaceResult:
    """Output text of one replace call plus per-marker records."""

    text: str
    replacements: List[Replacement]
    original_text: str

    @property
    def has_replacements(self) -> bool:
        return len(self.replacements) > 0

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.replacements if not r.not_found)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.replacements if r.not_found)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "replacements": [r.to_dict() for r in self.replacements],
            "original_text": self.original_text,
            "has_replacements": self.has_replacements,
            "success_count": self.success_count,
            "failure_count": self.failure_count,
        }


@dataclass
class MarkerPreview:
    """Candidates for one marker, without touching the text."""

    marker: str
    keywords: List[str]
    offset: int
    matches: List[QueryResult]
    suggestions: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def best_match(self) -> Optional[QueryResult]:
        return self.matches[0] if self.matches else None

    def to_dict(self) -> Dict[str, Any]:
        best = self.best_match
        return {
            "marker": self.marker,
            "keywords": list(self.keywords),
            "offset": self.offset,
            "matches": [m.to_dict() for m in self.matches],
            "best_match": best.to_dict() if best else None,
            "suggestions": {k: list(v) for k, v in self.suggestions.items()},
        }
