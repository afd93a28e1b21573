"""This module provides the entry point for querying the string index."""

import argparse
import logging
import sys
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

from src.custom_data_structures.double_array_trie.double_array_trie import (
    DoubleArrayTrie,
)
from src.index.config import (
    ConfigBoolParsingError,
    ConfigNotFoundError,
    ConfigValueError,
    load_config_file,
)
from src.index.key_loader import build_trie, timed_contains
from src.index.logger import log, setup_logging, stop_logging

CONFIG_PATH = Path(__file__).parent / "config.txt"

FOUND_RESPONSE = "STRING EXISTS"
NOT_FOUND_RESPONSE = "STRING NOT FOUND"


def answer_query(
    data_trie: DoubleArrayTrie,
    query: str,
    log_details: bool,
) -> str:
    """Look up one query and return the response line.

    Queries with characters outside the alphabet cannot be stored
    keys, so they are reported as not found.
    """
    try:
        result, execution_time_ms = timed_contains(data_trie, query)
    except ValueError as e:
        logging.warning("Rejected query '%s': %s", query, e)
        return NOT_FOUND_RESPONSE

    if log_details:
        log(
            datetime.now().isoformat(),
            "contains",
            query,
            result,
            execution_time_ms,
        )

    return FOUND_RESPONSE if result else NOT_FOUND_RESPONSE


def run_queries(
    data_trie: DoubleArrayTrie,
    queries: Iterable[str],
    log_details: bool,
    output: TextIO,
) -> None:
    """Answer every query, one response line each."""
    for query in queries:
        print(answer_query(data_trie, query.strip(), log_details), file=output)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the index.

    Returns:
        int: The process exit status.

    """
    parser = argparse.ArgumentParser(
        description="Answer membership queries against a key file.",
    )
    parser.add_argument(
        "--config_path",
        type=str,
        default=str(CONFIG_PATH),
        help="Optional path to the config file.",
        required=False,
    )
    parser.add_argument(
        "queries",
        nargs="*",
        help="Strings to look up, read from stdin when omitted.",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config_file(Path(args.config_path))
    except (
        FileNotFoundError,
        ConfigNotFoundError,
        ConfigBoolParsingError,
        ConfigValueError,
    ) as e:
        print(f"[INDEX] Configuration error: {e}", file=sys.stderr)
        return 1

    if config.log_details:
        setup_logging()

    try:
        data_trie = build_trie(
            config.keys_path,
            initial_capacity=config.initial_capacity,
        )
        queries = args.queries if args.queries else sys.stdin
        run_queries(data_trie, queries, config.log_details, sys.stdout)
    finally:
        stop_logging()

    return 0


if __name__ == "__main__":
    sys.exit(main())
