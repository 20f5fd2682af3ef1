#!/usr/bin/env python3
"""
Example usage of the Emoticon Replacer.

This script demonstrates how to use the replacer programmatically for
marker replacement, free-text lookups and corpus editing.
"""

import sys
from pathlib import Path

# Add parent directory to path to import emoticon_replacer
sys.path.append(str(Path(__file__).parent.parent))

from emoticon_replacer import EmoticonDataManager, EmoticonReplacer, ResultFormatter, SearchEngine, config


def load_replacer() -> EmoticonReplacer:
    manager = EmoticonDataManager().load_from_file(config.DEFAULT_CORPUS_FILE)
    replacer = EmoticonReplacer(SearchEngine())
    replacer.load_entries(manager.get_all_entries())
    return replacer


def basic_replace_example():
    """Demonstrate marker replacement."""
    print("=== Basic Replace Example ===")

    replacer = load_replacer()
    formatter = ResultFormatter()

    texts = [
        "今天真是[emoticon:无语,黑脸]",
        "老板又改需求了[emoticon:掀桌,愤怒]",
        "周末终于到了[emoticon:开心]",
        "这个不存在[emoticon:不存在的词]",
    ]

    for text in texts:
        result = replacer.replace_text(text)
        print(f"\nInput:  {text}")
        print(formatter.format_replacements(result))


def not_found_policy_example():
    """Demonstrate the three ways to handle markers that match nothing."""
    print("\n=== Not-found Policy Example ===")

    replacer = load_replacer()
    text = "测试[emoticon:不存在]文本"

    print(f"keep:   {replacer.replace_text(text).text}")
    print(f"drop:   {replacer.replace_text(text, keep_original_on_not_found=False).text}")
    print(f"mark:   {replacer.replace_text(text, mark_not_found=True).text}")


def query_example():
    """Demonstrate ranked and exact lookups."""
    print("\n=== Query Example ===")

    replacer = load_replacer()
    formatter = ResultFormatter()

    for query in ["我很开心", "有点尴尬", "躺平"]:
        print(f"\nRanked lookup for: '{query}'")
        formatter.print_results_table(replacer.query(query, top_k=3), query=query)

    print("Exact lookup for: '无语黑脸'")
    formatter.print_results_table(replacer.exact_query("无语黑脸"), query="无语黑脸")


def preview_example():
    """Demonstrate previews with keyword suggestions."""
    print("\n=== Preview Example ===")

    replacer = load_replacer()
    print(ResultFormatter().format_preview(replacer.preview("[emoticon:开森] 和 [emoticon:加油]")))


def editing_example():
    """Demonstrate corpus editing followed by a rebuild."""
    print("\n=== Editing Example ===")

    manager = EmoticonDataManager().load_from_file(config.DEFAULT_CORPUS_FILE)
    manager.add_entry({"text": "(≧∇≦)ﾉ", "keywords": ["激动", "欢呼"], "category": "开心"})
    manager.add_keyword("= =", "呵呵")

    replacer = EmoticonReplacer(SearchEngine())
    replacer.load_entries(manager.get_all_entries())

    print(replacer.replace_text("[emoticon:欢呼] [emoticon:呵呵]").text)
    print(manager.get_stats())


if __name__ == "__main__":
    basic_replace_example()
    not_found_policy_example()
    query_example()
    preview_example()
    editing_example()
