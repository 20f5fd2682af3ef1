#!/usr/bin/env python3
"""
Main entry point for the Emoticon Replacer.

This script provides a command-line interface for replacing markers in text
and querying the emoticon corpus.
"""

import argparse
import logging
import sys

from emoticon_replacer import EmoticonReplacer, ResultFormatter, SearchEngine, ValidationError, config
from emoticon_replacer.data_manager import EmoticonDataManager
from emoticon_replacer.replacer import REPLACE_STRATEGIES


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Replace [emoticon:keywords] markers with BM25-ranked emoticons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                         # Start interactive mode
  python main.py --text "今天真是[emoticon:无语,黑脸]"      # Replace markers once
  python main.py --query "我很开心" --top-k 3              # Ranked lookup
  python main.py --exact "无语黑脸"                        # Literal keyword lookup
  python main.py --corpus ./my_emoticons.json --stats    # Use a custom corpus
        """
    )

    parser.add_argument(
        "--corpus",
        type=str,
        default=str(config.DEFAULT_CORPUS_FILE),
        help="JSON corpus file (default: bundled sample corpus)"
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--text", type=str, default=None, help="Replace markers in this text")
    mode.add_argument("--query", type=str, default=None, help="Ranked lookup for free text")
    mode.add_argument("--exact", type=str, default=None, help="Literal keyword lookup")
    mode.add_argument("--preview", type=str, default=None, help="Show marker candidates without replacing")

    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help=f"Number of results for --query (default: {config.TOP_K_RESULTS})"
    )

    parser.add_argument(
        "--threshold",
        type=float,
        default=config.DEFAULT_THRESHOLD,
        help="Minimum score a candidate must exceed"
    )

    parser.add_argument(
        "--strategy",
        choices=sorted(REPLACE_STRATEGIES.values()),
        default=config.DEFAULT_STRATEGY,
        help="How to pick the replacement for a marker"
    )

    parser.add_argument(
        "--drop-unmatched",
        action="store_true",
        help="Remove markers that match nothing instead of keeping them"
    )

    parser.add_argument(
        "--mark-not-found",
        action="store_true",
        help="Rewrite markers that match nothing as [?keywords]"
    )

    parser.add_argument(
        "--tag",
        type=str,
        default=config.MARKER_TAG,
        help=f"Marker tag (default: {config.MARKER_TAG})"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show corpus and index statistics"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=config.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )

    return parser


def interactive_replace(replacer: EmoticonReplacer, formatter: ResultFormatter, options: dict) -> None:
    """
    Start an interactive session: every line is run through the replacer.

    Type 'exit' or 'quit' to end the session.
    """
    print("\n=== Interactive Replace ===")
    print("Type text containing markers, or 'exit' to quit.")

    while True:
        try:
            line = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if not line:
            continue
        if line.lower() in ("exit", "quit"):
            print("Goodbye!")
            break

        result = replacer.replace_text(line, **options)
        if result.has_replacements:
            print(formatter.format_replacements(result))
        else:
            results = replacer.query(line)
            formatter.print_results_table(results, query=line)


def main(argv=None):
    """Main entry point for the replacer."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s: %(message)s",
    )

    try:
        manager = EmoticonDataManager().load_from_file(args.corpus)
        replacer = EmoticonReplacer(SearchEngine())
        replacer.set_config(marker_tag=args.tag)
        replacer.load_entries(manager.get_all_entries())
    except (OSError, ValidationError) as e:
        print(f"Error loading corpus: {e}")
        sys.exit(1)

    formatter = ResultFormatter(replacer.config)

    if args.stats:
        stats = manager.get_stats()
        print("\n=== Corpus Statistics ===")
        for key, value in stats.items():
            print(f"{key}: {value}")
        replacer.search_engine.indexer.summarize_index(replacer.search_engine.index)
        replacer.search_engine.ranker.summarize_ranking_stats(replacer.search_engine.index)

    options = {
        "strategy": args.strategy,
        "threshold": args.threshold,
        "keep_original_on_not_found": not args.drop_unmatched,
        "mark_not_found": args.mark_not_found,
    }

    if args.text is not None:
        print(formatter.format_replacements(replacer.replace_text(args.text, **options)))
    elif args.query is not None:
        formatter.print_results_table(replacer.query(args.query, top_k=args.top_k), query=args.query)
    elif args.exact is not None:
        formatter.print_results_table(replacer.exact_query(args.exact), query=args.exact)
    elif args.preview is not None:
        print(formatter.format_preview(replacer.preview(args.preview)))
    elif not args.stats:
        interactive_replace(replacer, formatter, options)


if __name__ == "__main__":
    main()
