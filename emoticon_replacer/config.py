"""
Configuration settings for the Emoticon Replacer.

This module contains all configurable parameters for the search engine
and the marker replacer. Modify these values to customize the behavior
of the system, or pass a ``config_dict`` to override them per instance.
"""

from pathlib import Path

# Project paths
PACKAGE_ROOT = Path(__file__).parent
DATA_DIR = PACKAGE_ROOT / "data"
DEFAULT_CORPUS_FILE = DATA_DIR / "emoticons.json"

# BM25 settings
K1 = 1.5  # Term frequency saturation
B = 0.75  # Document length normalization
CHAR_WEIGHT = 0.6  # Weight of single-character evidence relative to whole keywords

# Search settings
TOP_K_RESULTS = 5  # Number of results returned by direct queries
MARKER_TOP_K = 5  # Number of candidates fetched per marker
DEFAULT_THRESHOLD = 0.0  # Results must score strictly above this

# Marker settings
MARKER_TAG = "emoticon"  # [emoticon:keyword1,keyword2]
KEYWORD_SEPARATOR = ","
DEFAULT_STRATEGY = "best"  # "first", "best" or "all"
KEEP_ORIGINAL_ON_NOT_FOUND = True
MARK_NOT_FOUND = False

# Keyword suggestion settings
AUTO_CORRECT_ENABLED = False  # Correct unknown marker keywords before searching
MAX_EDIT_DISTANCE = 1  # Maximum edit distance for suggestions
MAX_SUGGESTIONS = 3  # Suggestions returned per unknown keyword

# Output settings
LOG_LEVEL = "INFO"  # Logging level: DEBUG, INFO, WARNING, ERROR

# Highlighting settings
HIGHLIGHT_START = "[["  # Start marker for highlighting
HIGHLIGHT_END = "]]"  # End marker for highlighting

# Result formatting
TEXT_COLUMN_WIDTH = 40  # Maximum width of the payload column in tables
SHOW_SCORES = True  # Show relevance scores in results
