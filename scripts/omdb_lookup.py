#!/usr/bin/env python3
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict

from omdb_backend.config import OmdbConfig
from omdb_backend.integrations.omdb.client import OmdbClient, OmdbClientError
from omdb_backend.models.movies import MovieQuery, format_search_results
from omdb_backend.utils.env import load_env

logger = logging.getLogger("omdb_lookup")


def _add_query_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("title", help="Title to query.")
    parser.add_argument("--year", default=None, help="Optional release year (passed through verbatim).")
    parser.add_argument(
        "--type",
        dest="category",
        default=None,
        help="Optional category filter: movie, series or episode.",
    )


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="omdb_lookup",
        description="Query OMDb by search term, exact title or IMDb id.",
    )
    parser.add_argument("--api-key", default=None, help="OMDb API key (default: OMDB_API_KEY).")
    parser.add_argument("--json", action="store_true", help="Print the decoded record as JSON.")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging.")

    sub = parser.add_subparsers(dest="command", required=True)
    _add_query_args(sub.add_parser("search", help="Search titles (s=)."))
    _add_query_args(sub.add_parser("title", help="Full record for an exact title (t=)."))
    id_parser = sub.add_parser("id", help="Full record for an IMDb id (i=).")
    id_parser.add_argument("imdb_id", help="IMDb id, e.g. tt1049413.")
    return parser.parse_args(argv)


def _run(client: OmdbClient, args: argparse.Namespace) -> str:
    if args.command == "search":
        response = client.search(MovieQuery(title=args.title, year=args.year, category=args.category))
        if args.json:
            return json.dumps(asdict(response), indent=2)
        return format_search_results(response.results)

    if args.command == "title":
        record = client.lookup_by_title(MovieQuery(title=args.title, year=args.year, category=args.category))
    else:
        record = client.lookup_by_id(args.imdb_id)
    if args.json:
        return json.dumps(record.to_dict(), indent=2)
    return str(record)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_env()

    try:
        config = OmdbConfig.from_env(args.api_key)
    except RuntimeError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    with OmdbClient(config) as client:
        try:
            output = _run(client, args)
        except OmdbClientError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
