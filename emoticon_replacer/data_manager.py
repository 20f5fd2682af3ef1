"""
Corpus data management.

Loads corpus entries from JSON text, Python lists or files, validates and
normalizes them, and offers the editing operations a host UI needs before
handing the entries to the search engine. Reads return copies so callers
cannot mutate the managed entries by accident.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .exceptions import ValidationError
from .models import PAYLOAD_KEYS, CorpusEntry

logger = logging.getLogger(__name__)


def _payload(item: Dict[str, Any]) -> Any:
    return next((item[key] for key in PAYLOAD_KEYS if key in item), None)


def _is_positive_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def validate_data(data: Any) -> Tuple[bool, List[str]]:
    """
    Check corpus data without loading it.

    Args:
        data: Candidate corpus (a list of mappings).

    Returns:
        Tuple of (valid, errors) where errors lists one message per problem.
    """
    if not isinstance(data, list):
        return False, ["Data must be an array"]

    errors = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            errors.append(f"Item {index}: Must be an object.")
            continue

        payload = _payload(item)
        if not payload or not isinstance(payload, str):
            errors.append(f"Item {index}: Missing or invalid 'text' field")

        keywords = item.get("keywords")
        if not keywords or not isinstance(keywords, list):
            errors.append(f"Item {index}: Missing or invalid 'keywords' field")

        if "weight" in item and not _is_positive_number(item["weight"]):
            errors.append(f"Item {index}: Invalid 'weight' field (must be positive number)")

    return len(errors) == 0, errors


class EmoticonDataManager:
    """Validated, editable collection of corpus entries."""

    def __init__(self):
        self.entries: List[CorpusEntry] = []

    # ========== Loading ==========

    def load_from_json(self, json_string: str) -> "EmoticonDataManager":
        """
        Load entries from a JSON string.

        Args:
            json_string: JSON array of corpus items.

        Returns:
            self, for chaining.

        Raises:
            ValidationError: If the text is not valid JSON or not an array.
        """
        try:
            data = json.loads(json_string)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid JSON format: {e}") from e
        return self.load_from_array(data)

    def load_from_array(self, data: List[Dict[str, Any]]) -> "EmoticonDataManager":
        """
        Load entries from a list of mappings, replacing the current ones.

        Invalid items are skipped with a warning.

        Args:
            data: List of corpus items.

        Returns:
            self, for chaining.

        Raises:
            ValidationError: If ``data`` is not a list.
        """
        if not isinstance(data, list):
            raise ValidationError("Data must be an array")

        entries = []
        for index, item in enumerate(data):
            entry = self._normalize_item(item, index)
            if entry is not None:
                entries.append(entry)

        self.entries = entries
        logger.info(f"Loaded {len(self.entries)} entries")
        return self

    def load_from_file(self, path: Union[str, Path]) -> "EmoticonDataManager":
        """
        Load entries from a JSON file.

        Args:
            path: Path to a UTF-8 JSON file.

        Returns:
            self, for chaining.
        """
        with open(path, "r", encoding="utf-8") as f:
            return self.load_from_json(f.read())

    def _normalize_item(self, item: Any, index: Union[int, str]) -> Optional[CorpusEntry]:
        """Turn one raw item into a CorpusEntry, or warn and return None."""
        if isinstance(item, dict) and "weight" in item and not _is_positive_number(item["weight"]):
            logger.warning(f"Item {index}: Invalid 'weight' field (must be positive number), skipping")
            return None
        try:
            return CorpusEntry.from_dict(item)
        except ValidationError as e:
            logger.warning(f"Item {index}: {e}, skipping")
            return None

    def _find(self, text: str) -> Optional[CorpusEntry]:
        return next((e for e in self.entries if e.text == text), None)

    # ========== Reading ==========

    def get_all_entries(self) -> List[CorpusEntry]:
        """Copies of all entries, in order."""
        return [e.copy() for e in self.entries]

    def get_entry_by_text(self, text: str) -> Optional[CorpusEntry]:
        """A copy of the entry with payload ``text``, or None."""
        found = self._find(text)
        return found.copy() if found else None

    def get_all_keywords(self) -> List[str]:
        """Every distinct keyword, sorted."""
        return sorted({k for e in self.entries for k in e.keywords})

    def get_keywords_by_text(self, text: str) -> List[str]:
        """Keywords of the entry with payload ``text``; empty if not found."""
        found = self._find(text)
        return list(found.keywords) if found else []

    def filter_by_category(self, category: Union[str, List[str]]) -> List[CorpusEntry]:
        """
        Entries in one or several categories.

        Args:
            category: Category name or list of names.

        Returns:
            Copies of the matching entries.
        """
        categories = category if isinstance(category, list) else [category]
        return [e.copy() for e in self.entries if e.category in categories]

    def get_all_categories(self) -> List[str]:
        """Every non-empty category, sorted."""
        return sorted({e.category for e in self.entries if e.category})

    def find_by_keyword(self, keyword: str) -> List[CorpusEntry]:
        """Copies of the entries listing ``keyword``."""
        return [e.copy() for e in self.entries if keyword in e.keywords]

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the managed entries.

        Returns:
            Dictionary with entry, keyword and category counts.
        """
        total = len(self.entries)
        return {
            "total_entries": total,
            "total_keywords": len(self.get_all_keywords()),
            "total_categories": len(self.get_all_categories()),
            "average_keywords_per_entry": (
                sum(len(e.keywords) for e in self.entries) / total if total else 0
            ),
        }

    # ========== Editing ==========

    def add_keyword(self, text: str, keyword: str) -> bool:
        """
        Append a keyword to an entry.

        Args:
            text: Payload of the entry.
            keyword: Keyword to add; surrounding whitespace is trimmed.

        Returns:
            True if added; False if the entry is missing, the keyword is
            blank or already present.
        """
        entry = self._find(text)
        if entry is None:
            logger.warning(f"Entry {text!r} not found")
            return False

        keyword = str(keyword).strip()
        if not keyword:
            logger.warning("Keyword cannot be empty")
            return False
        if keyword in entry.keywords:
            logger.warning(f"Keyword {keyword!r} already exists")
            return False

        entry.keywords.append(keyword)
        return True

    def remove_keyword(self, text: str, keyword: str) -> bool:
        """
        Remove a keyword from an entry. The last keyword cannot be removed.

        Args:
            text: Payload of the entry.
            keyword: Keyword to remove.

        Returns:
            True if removed.
        """
        entry = self._find(text)
        if entry is None:
            logger.warning(f"Entry {text!r} not found")
            return False
        if keyword not in entry.keywords:
            logger.warning(f"Keyword {keyword!r} not found")
            return False
        if len(entry.keywords) <= 1:
            logger.warning("Cannot remove the last keyword")
            return False

        entry.keywords.remove(keyword)
        return True

    def update_keywords(self, text: str, keywords: List[str]) -> bool:
        """
        Replace all keywords of an entry.

        Args:
            text: Payload of the entry.
            keywords: New keywords; blanks are dropped.

        Returns:
            True if at least one valid keyword was given and the entry exists.
        """
        entry = self._find(text)
        if entry is None:
            logger.warning(f"Entry {text!r} not found")
            return False
        if not isinstance(keywords, list) or not keywords:
            logger.warning("Keywords must be a non-empty list")
            return False

        valid = [str(k).strip() for k in keywords]
        valid = [k for k in valid if k]
        if not valid:
            logger.warning("No valid keywords provided")
            return False

        entry.keywords = valid
        return True

    def set_category(self, text: str, category: Optional[str]) -> bool:
        """Set the category of an entry; None clears it."""
        entry = self._find(text)
        if entry is None:
            logger.warning(f"Entry {text!r} not found")
            return False
        entry.category = category or ""
        return True

    def set_weight(self, text: str, weight: float) -> bool:
        """Set the weight of an entry. Only positive numbers are accepted."""
        entry = self._find(text)
        if entry is None:
            logger.warning(f"Entry {text!r} not found")
            return False
        if not _is_positive_number(weight):
            logger.warning("Weight must be a positive number")
            return False
        entry.weight = float(weight)
        return True

    def add_entry(self, data: Dict[str, Any]) -> bool:
        """
        Add a new entry.

        Args:
            data: Corpus item ``{text, keywords, weight?, category?}``.

        Returns:
            True if added; False if invalid or the payload already exists.
        """
        entry = self._normalize_item(data, "new")
        if entry is None:
            return False
        if self._find(entry.text) is not None:
            logger.warning(f"Entry {entry.text!r} already exists")
            return False

        self.entries.append(entry)
        return True

    def remove_entry(self, text: str) -> bool:
        """Remove the entry with payload ``text``."""
        entry = self._find(text)
        if entry is None:
            logger.warning(f"Entry {text!r} not found")
            return False
        self.entries.remove(entry)
        return True

    def update_entry(self, text: str, new_data: Dict[str, Any]) -> bool:
        """
        Replace an entry with new data, keeping its position.

        Args:
            text: Current payload of the entry.
            new_data: Replacement corpus item.

        Returns:
            True if updated; False if the entry is missing, the data is
            invalid or the new payload collides with another entry.
        """
        entry = self._find(text)
        if entry is None:
            logger.warning(f"Entry {text!r} not found")
            return False

        updated = self._normalize_item(new_data, "update")
        if updated is None:
            return False
        if updated.text != text and self._find(updated.text) is not None:
            logger.warning(f"Entry {updated.text!r} already exists")
            return False

        self.entries[self.entries.index(entry)] = updated
        return True

    # ========== Export ==========

    def export_to_array(self) -> List[Dict[str, Any]]:
        """All entries as plain dictionaries."""
        return [e.to_dict() for e in self.entries]

    def export_to_json(self, pretty: bool = True) -> str:
        """
        Export all entries as JSON text.

        Args:
            pretty: Indent the output.

        Returns:
            JSON string.
        """
        return json.dumps(self.export_to_array(), ensure_ascii=False, indent=2 if pretty else None)

    def save_to_file(self, path: Union[str, Path], pretty: bool = True) -> None:
        """
        Write all entries to a UTF-8 JSON file.

        Args:
            path: Destination path.
            pretty: Indent the output.
        """
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.export_to_json(pretty=pretty))

    # ========== Batch operations ==========

    def batch_set_category(self, texts: List[str], category: str) -> int:
        """Set the category of several entries; returns how many were updated."""
        return sum(1 for text in texts if self.set_category(text, category))

    def batch_remove(self, texts: List[str]) -> int:
        """Remove several entries; returns how many were removed."""
        return sum(1 for text in texts if self.remove_entry(text))

    def clear(self) -> None:
        """Remove every entry."""
        self.entries = []
