"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="showtime", description="Top movies catalog by price")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # movies
    movies_parser = subparsers.add_parser("movies", help="List movies at or below a price limit")
    movies_parser.add_argument(
        "--limit",
        type=str,
        required=True,
        help="Maximum price, e.g. 9.99 (0 = free only)",
    )
    movies_parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Read a saved feed payload instead of fetching",
    )
    movies_parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="Feed URL (default: SHOWTIME_FEED_URL or the iTunes US top 50 feed)",
    )
    movies_parser.add_argument(
        "--rules",
        type=Path,
        default=None,
        help="Path to rules YAML (default: bundled rules or SHOWTIME_RULES_PATH)",
    )
    movies_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write movies JSON to file (default: stdout)",
    )
    movies_parser.add_argument(
        "--show-explanations",
        action="store_true",
        help="Print filter explanations for every entry instead of movies",
    )

    # rules
    rules_parser = subparsers.add_parser("rules", help="Show the effective catalog rules")
    rules_parser.add_argument(
        "--rules",
        type=Path,
        default=None,
        help="Path to rules YAML",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "movies":
        _run_movies(args)
    elif args.command == "rules":
        _run_rules(args)
    else:
        parser.print_help()


def _run_movies(args: argparse.Namespace) -> None:
    """Run movies command."""
    from showtime.connectors.itunes import ITunesTopMoviesConnector
    from showtime.errors import FetchError, InvalidLimit
    from showtime.filtering.rules import to_limit
    from showtime.pipeline import MovieService

    try:
        to_limit(args.limit)
    except InvalidLimit as e:
        raise SystemExit(f"Invalid --limit: {e}")

    service = MovieService(
        rules_path=args.rules,
        connector=ITunesTopMoviesConnector(feed_url=args.url),
    )

    if args.input:
        response = args.input.read_text(encoding="utf-8")
    else:
        try:
            response = service.connector.fetch_text()
        except FetchError as e:
            print(f"Error while fetching catalog feed: {e}", file=sys.stderr)
            raise SystemExit(1)

    if args.show_explanations:
        output = json.dumps(_explanations(service, response, args.limit), indent=2, default=str)
    else:
        result = service.parse_with_diagnostics(response, args.limit)
        for error in result.errors:
            print(f"Warning: {error}", file=sys.stderr)
        output = json.dumps(
            [m.model_dump(mode="json") for m in result.movies],
            indent=2,
        )

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote results to {args.output}")
    else:
        print(output)


def _explanations(service, response: str, limit: str) -> list[dict]:
    """Filter explanation trail for every decoded entry."""
    from showtime.errors import ShowtimeError
    from showtime.filtering import FilterEngine

    try:
        rules = service.rules
        entries = service.connector.decode(response, rules)
    except ShowtimeError as e:
        print(f"Warning: {type(e).__name__}: {e}", file=sys.stderr)
        return []
    engine = FilterEngine(limit, rules)
    return [
        {
            "entry": r.entry,
            "price": str(r.price),
            "passed": r.passed,
            "explanations": r.explanations,
        }
        for r in engine.filter_many(entries)
    ]


def _run_rules(args: argparse.Namespace) -> None:
    """Run rules command."""
    from showtime.errors import RuleEngineUnavailable
    from showtime.models.rules import CatalogRules, load_default_rules

    try:
        rules = CatalogRules.from_yaml(args.rules) if args.rules else load_default_rules()
    except RuleEngineUnavailable as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(1)
    print(json.dumps(rules.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    main()
