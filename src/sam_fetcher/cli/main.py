"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="sam-fetcher", description="Bulk SAM.gov opportunity fetcher")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="More logging on stderr (-v info, -vv debug)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # fetch
    fetch_parser = subparsers.add_parser("fetch", help="Fetch active opportunities for a date range")
    fetch_parser.add_argument(
        "--request",
        type=Path,
        default=None,
        help="Read request from a YAML or JSON file (flags below override it)",
    )
    fetch_parser.add_argument(
        "--posted-from",
        type=str,
        default=None,
        help="Start of posted date range, as accepted by SAM.gov (MM/dd/yyyy)",
    )
    fetch_parser.add_argument(
        "--posted-to",
        type=str,
        default=None,
        help="End of posted date range (MM/dd/yyyy)",
    )
    fetch_parser.add_argument(
        "--set-aside",
        dest="set_asides",
        action="append",
        default=None,
        metavar="CODE",
        help="Set-aside category code; repeat for several (default: SBA)",
    )
    fetch_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Page size (default: 1000)",
    )
    fetch_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write result JSON to file (default: stdout)",
    )

    # health
    subparsers.add_parser("health", help="Print the health payload")

    args = parser.parse_args()
    _configure_logging(args.verbose)

    if args.command == "fetch":
        _run_fetch(args)
    elif args.command == "health":
        from sam_fetcher.service import health

        print(json.dumps(health()))
    else:
        parser.print_help()


def _configure_logging(verbosity: int) -> None:
    """Log to stderr so stdout stays valid JSON."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_request(args: argparse.Namespace):
    """Merge --request file with explicit flags."""
    from pydantic import ValidationError

    from sam_fetcher.models.fetch import FetchRequest

    data: dict = {}
    if args.request:
        data = FetchRequest.from_file(args.request).model_dump()
    overrides = {
        "posted_from": args.posted_from,
        "posted_to": args.posted_to,
        "set_asides": args.set_asides,
        "limit": args.limit,
    }
    data.update({k: v for k, v in overrides.items() if v is not None})

    if not data.get("posted_from") or not data.get("posted_to"):
        raise SystemExit("--posted-from and --posted-to are required (or pass --request)")
    try:
        return FetchRequest.model_validate(data)
    except ValidationError as e:
        raise SystemExit(f"Invalid request: {e}")


def _run_fetch(args: argparse.Namespace) -> None:
    """Run fetch command."""
    from sam_fetcher.connectors.sam import SamConnector, UpstreamRejectedError
    from sam_fetcher.retry import RetryExhaustedError
    from sam_fetcher.settings import FetcherSettings

    request = _build_request(args)
    settings = FetcherSettings.from_env()
    if not settings.sam_api_key:
        raise SystemExit("Missing SAM_API_KEY env var")

    try:
        with SamConnector(
            api_key=settings.sam_api_key,
            base_url=settings.sam_api_url,
            timeout=settings.timeout,
        ) as connector:
            result = connector.fetch_all(request)
    except (UpstreamRejectedError, RetryExhaustedError) as e:
        raise SystemExit(f"Fetch failed: {e}")

    output = json.dumps(result.to_payload(), indent=2, default=str)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(
            f"Wrote {result.meta.fetched} opportunities ({result.meta.pages} pages) to {args.output}",
            file=sys.stderr,
        )
    else:
        print(output)


if __name__ == "__main__":
    main()
