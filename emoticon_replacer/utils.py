"""
Console formatting for query results and replacement reports.

Used by the command-line front end; the library itself never prints.
"""

import re
from typing import List, Optional

from . import config as default_config
from .models import MarkerPreview, QueryResult, ReplaceResult


class ResultFormatter:
    """Handles result formatting and display."""

    def __init__(self, config=None):
        """Initialize with configuration."""
        self.config = config or default_config

    def _format_tokens(self, tokens: List[str], maxn: int = 12) -> str:
        """
        Return tokens as a compact string; truncate long lists with an ellipsis.

        Args:
            tokens: List of tokens to format.
            maxn: Maximum number of tokens to show.

        Returns:
            Formatted token string.
        """
        if len(tokens) <= maxn:
            return "[" + ", ".join(tokens) + "]"
        head = ", ".join(tokens[:maxn // 2])
        tail = ", ".join(tokens[-maxn // 2:])
        return "[" + head + ", …, " + tail + "]"

    def highlight_words(self, text: str, words: List[str]) -> str:
        """
        Wrap every occurrence of ``words`` in ``text`` with the highlight markers.

        Args:
            text: Text to highlight.
            words: Words to highlight. Longer words win over their substrings.

        Returns:
            Highlighted text.
        """
        uniq = sorted({w for w in words if w}, key=len, reverse=True)
        if not uniq:
            return text

        regex = re.compile("|".join(re.escape(w) for w in uniq), flags=re.IGNORECASE)
        return regex.sub(
            lambda m: f"{self.config.HIGHLIGHT_START}{m.group(0)}{self.config.HIGHLIGHT_END}",
            text,
        )

    @staticmethod
    def _clip_pad(s: str, w: int) -> str:
        if len(s) > w:
            return s[: max(0, w - 1)] + "…" if w >= 2 else s[:w]
        return s.ljust(w)

    def format_results_table(self, results: List[QueryResult], query: Optional[str] = None) -> str:
        """
        Render results as an ASCII table.

        Args:
            results: Ranked or exact-match results.
            query: Query text, echoed with matched keywords highlighted.

        Returns:
            The table as a string.
        """
        if not results:
            return "No matching entries found."

        headers = ["#", "Score", "Text", "Category", "Matched"]
        rows = []
        for rank, r in enumerate(results, start=1):
            score = f"{r.score:.4f}" if self.config.SHOW_SCORES else ""
            rows.append([str(rank), score, r.text, r.category, self._format_tokens(r.matched_keywords, maxn=6)])

        max_widths = [3, 8, self.config.TEXT_COLUMN_WIDTH, 16, 40]
        col_widths = []
        for j, h in enumerate(headers):
            width = max([len(h)] + [len(row[j]) for row in rows])
            col_widths.append(min(width, max_widths[j]))

        lines = ["=== Top Results ==="]
        lines.append(" | ".join(self._clip_pad(h, col_widths[i]) for i, h in enumerate(headers)))
        lines.append("-+-".join("-" * w for w in col_widths))
        for row in rows:
            lines.append(" | ".join(self._clip_pad(row[i], col_widths[i]) for i in range(len(headers))))

        if query:
            matched = [k for r in results for k in r.matched_keywords]
            lines.append(f"\n(query: {self.highlight_words(query, matched)})")
        return "\n".join(lines)

    def print_results_table(self, results: List[QueryResult], query: Optional[str] = None) -> None:
        """Print results as an ASCII table."""
        print("\n" + self.format_results_table(results, query) + "\n")

    def format_replacements(self, result: ReplaceResult) -> str:
        """
        Describe a replace call: output text, then one line per marker.

        Args:
            result: Result of ``EmoticonReplacer.replace_text``.

        Returns:
            The report as a string.
        """
        lines = [result.text]
        if not result.has_replacements:
            return "\n".join(lines)

        lines.append(f"\n({result.success_count} replaced, {result.failure_count} not found)")
        for r in result.replacements:
            if r.not_found:
                lines.append(f"  #{r.index} @{r.offset} {r.original} -> (not found)")
            else:
                lines.append(f"  #{r.index} @{r.offset} {r.original} -> {r.replacement}")
        return "\n".join(lines)

    def format_preview(self, previews: List[MarkerPreview]) -> str:
        """
        Describe the candidates of every marker.

        Args:
            previews: Result of ``EmoticonReplacer.preview``.

        Returns:
            The report as a string.
        """
        if not previews:
            return "No markers found."

        lines = []
        for p in previews:
            best = p.best_match.text if p.best_match else "(none)"
            lines.append(f"{p.marker} @{p.offset} keywords={self._format_tokens(p.keywords)} best={best}")
            for m in p.matches:
                lines.append(f"    {m.score:.4f}  {m.text}")
            for keyword, similar in p.suggestions.items():
                lines.append(f"    did you mean {', '.join(similar)} for {keyword!r}?")
        return "\n".join(lines)
