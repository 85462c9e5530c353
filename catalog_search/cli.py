"""
Command-line search against the catalog.

Usage:
    catalog-search "2022 topps chrome juan soto rookie"
    catalog-search "bd-9 soto" --limit 10 --include-items
    catalog-search "1987 topps 5" --tokens-only
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from catalog_search.config import settings
from catalog_search.errors import InputError, SearchFailure
from catalog_search.models.requests import SearchOptions
from catalog_search.services.orchestrator import search
from catalog_search.services.tokenizer import parse_query_tokens

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="catalog-search",
        description="Search players, teams, sets, series and cards",
    )
    parser.add_argument("query", help="Search query text")
    parser.add_argument("--limit", type=int, default=settings.default_limit,
                        help=f"Maximum results (default {settings.default_limit})")
    parser.add_argument("--include-items", action="store_true",
                        help="Always run the card drill-down")
    parser.add_argument("--tokens-only", action="store_true",
                        help="Print the parsed tokens without searching")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log to stderr")
    return parser


def main(argv: Optional[List[str]] = None, store=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.tokens_only:
        print(json.dumps(parse_query_tokens(args.query).to_dict(), indent=2))
        return 0

    try:
        envelope = search(
            args.query,
            SearchOptions(limit=args.limit, include_items=args.include_items),
            store=store,
        )
    except InputError as e:
        print(f"Invalid query: {e.message}", file=sys.stderr)
        return 2
    except SearchFailure as e:
        print(json.dumps(e.to_dict(), indent=2), file=sys.stderr)
        return 1

    print(envelope.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
