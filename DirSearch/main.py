#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
DirSearch command-line interface

  dirsearch index <dir> [index]      index <dir> and save the index (default is index.json)
  dirsearch search <query> [index]   search for <query> in the saved [index] (default is index.json)
"""

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from DirSearch.build_term_index import TermFreqIndexBuilder, load_index
from DirSearch.config import TIE_BREAK_MODES, load_config
from DirSearch.errors import DirSearchError
from DirSearch.tfidf_search.tfidf_search import TFIDFSearchEngine

console = Console()
err_console = Console(stderr=True)


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative number, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dirsearch",
        description="DirSearch - TF-IDF full-text search over a directory of documents"
    )
    parser.add_argument('--config', help='Path to configuration file (default: ./config.json if present)')

    subparsers = parser.add_subparsers(dest='command', metavar='<subcommand>')

    index_parser = subparsers.add_parser('index', help='index <dir> and save the index')
    index_parser.add_argument('dir', help='Directory with documents to index')
    index_parser.add_argument('index', nargs='?', help='Path of the index file to write')

    search_parser = subparsers.add_parser('search', help='search for <query> in a saved index')
    search_parser.add_argument('query', help='Free text query')
    search_parser.add_argument('index', nargs='?', help='Path of the index file to load')
    search_parser.add_argument('--top', type=_non_negative_int, help='Number of top results to display')
    search_parser.add_argument('--tie-break', choices=TIE_BREAK_MODES,
                               help='Rank by the integer part of the score or by the exact score')

    return parser


def run_index(args, config) -> None:
    index_path = args.index or config["index"]["default_path"]

    builder = TermFreqIndexBuilder(console=err_console)
    builder.build_from_directory(args.dir)
    builder.save_to_json(index_path)


def run_search(args, config) -> None:
    index_path = args.index or config["index"]["default_path"]
    top_k = args.top if args.top is not None else config["search"]["top_k"]
    tie_break = args.tie_break or config["search"]["tie_break"]

    tf_index = load_index(index_path)
    err_console.print(f"Loaded {len(tf_index)} files from {escape(index_path)}", highlight=False)

    engine = TFIDFSearchEngine(tf_index)
    total, results = engine.search(args.query, top_k=top_k, tie_break=tie_break)

    console.print(f"Found {total} results:", highlight=False)
    for doc_id, _ in results:
        console.print(f"-> {doc_id}", markup=False, highlight=False, soft_wrap=True)


def main(argv=None) -> int:
    """Main entry point, returns the process exit status"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        err_console.print("[bold red]ERROR:[/bold red] no subcommand provided")
        parser.print_usage(sys.stderr)
        return 1

    try:
        config = load_config(args.config)

        if args.command == 'index':
            run_index(args, config)
        elif args.command == 'search':
            run_search(args, config)
    except DirSearchError as e:
        err_console.print(f"[bold red]ERROR:[/bold red] {escape(str(e))}", highlight=False)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
