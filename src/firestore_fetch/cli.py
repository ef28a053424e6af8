#!/usr/bin/env python3
"""
Command-line interface for firestore-fetch.

Signs in to Firebase anonymously, queries one Firestore collection, and saves
the result to a randomly named JSON file (or prints it with --output). When
anonymous access is refused, --user/--password are used for one retry.

Usage:
    firestore-fetch --referer=https://app.example.com --collection=users [options]

Exit codes:
    0  success (or --help)
    1  missing collection, missing config, missing credentials, or any fetch failure
    2  invalid command-line arguments (argparse usage error)
"""

import argparse
import logging
import math
import sys
from pathlib import Path
from typing import Optional, Sequence

from firestore_fetch.auth.client import IdentityClient
from firestore_fetch.config.logging import bootstrap_logging
from firestore_fetch.config.settings import (
    ClientSettings,
    FirebaseConfig,
    load_client_settings,
    load_firebase_config,
)
from firestore_fetch.exceptions import CredentialsRequiredError, FetchError
from firestore_fetch.fetch import DEFAULT_MONITOR_INTERVAL, DocumentFetcher
from firestore_fetch.output.writer import write_result
from firestore_fetch.query.executor import QueryExecutor
from firestore_fetch.query.models import DEFAULT_LIMIT, QueryRequest
from firestore_fetch.session import build_session

logger = logging.getLogger(__name__)


def parse_limit(raw: Optional[str]) -> int:
    """
    Turn the --limit value into an integer.

    Zero and negative values pass through unchanged. Anything that is not an
    integer falls back to the default with a warning, so a query is still sent.
    """
    if raw is None:
        return DEFAULT_LIMIT
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning(f"Invalid --limit value '{raw}', using default of {DEFAULT_LIMIT}")
        return DEFAULT_LIMIT


def positive_interval(raw: str) -> float:
    """argparse type for --interval: a number of seconds greater than zero."""
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid interval: '{raw}'")
    if not (math.isfinite(value) and value > 0):
        raise argparse.ArgumentTypeError(f"interval must be greater than 0, got '{raw}'")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="firestore-fetch",
        description="Fetch documents from a Firestore collection using anonymous or password sign-in.",
    )
    parser.add_argument("--referer", default="",
                        help="Referer header sent to the identity service")
    parser.add_argument("--collection",
                        help="Collection to query (required)")
    parser.add_argument("--recent", action="store_true",
                        help="Fetch recent documents ordered by created_at")
    parser.add_argument("--limit",
                        help=f"Limit the number of documents returned (default is {DEFAULT_LIMIT}; "
                             "a value that is not a whole number also uses the default)")
    parser.add_argument("--monitor", action="store_true",
                        help="Re-fetch periodically and exit when the result changes; "
                             "the first and the changed result are each written out")
    parser.add_argument("--interval", type=positive_interval, default=DEFAULT_MONITOR_INTERVAL,
                        help=f"Seconds between fetches in --monitor mode (default {DEFAULT_MONITOR_INTERVAL:g})")
    parser.add_argument("--user", metavar="EMAIL",
                        help="User email for authenticated access")
    parser.add_argument("--password",
                        help="User password for authenticated access")
    parser.add_argument("--output", action="store_true",
                        help="Print JSON output to the terminal instead of saving it to a file")
    parser.add_argument("--output-dir", type=Path,
                        help="Directory for saved JSON files (default: current directory)")
    parser.add_argument("--debug", action="store_true",
                        help="Print detailed error messages and debug logging")
    parser.add_argument("--config", type=Path,
                        help="YAML file with the Firebase web config (default: config/firebase.yaml)")
    parser.add_argument("--api-key",
                        help="Firebase web API key (overrides config file and FIREBASE_API_KEY)")
    parser.add_argument("--project-id",
                        help="Firebase project id (overrides config file and FIREBASE_PROJECT_ID)")
    parser.add_argument("--proxy",
                        help="HTTP(S) proxy URL for all requests (or FIRESTORE_FETCH_PROXY)")
    parser.add_argument("--insecure", action="store_true",
                        help="Disable TLS certificate validation for this run's requests")
    return parser


def run_fetch(firebase_config: FirebaseConfig, settings: ClientSettings, request: QueryRequest,
              email: Optional[str] = None, password: Optional[str] = None,
              to_terminal: bool = False, output_dir: Optional[Path] = None,
              monitor: bool = False, interval: float = DEFAULT_MONITOR_INTERVAL,
              debug: bool = False) -> int:
    """
    Run one fetch (or a monitor loop) and report failures.

    Returns:
        int: Process exit code
    """
    def emit(payload):
        write_result(payload, to_terminal=to_terminal, output_dir=output_dir)

    session = build_session(settings)
    try:
        fetcher = DocumentFetcher(
            IdentityClient(firebase_config, settings, session),
            QueryExecutor(firebase_config, session),
            email=email,
            password=password,
        )
        if monitor:
            fetcher.monitor(request, emit, interval=interval)
        else:
            emit(fetcher.fetch_once(request))
        return 0

    except CredentialsRequiredError as e:
        print(f"Error: {e}", file=sys.stderr)
        if debug:
            logger.exception("Escalation needed but no credentials were supplied")
        return 1
    except (FetchError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        if debug:
            logger.exception("Fetch failed")
        return 1
    except KeyboardInterrupt:
        print("Interrupted", file=sys.stderr)
        return 1
    finally:
        session.close()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    bootstrap_logging(debug=args.debug)

    if not args.collection:
        print("Error: The --collection argument is required.", file=sys.stderr)
        return 1

    try:
        firebase_config = load_firebase_config(args.config, args.api_key, args.project_id)
    except FetchError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    settings = load_client_settings(args.referer, args.proxy, args.insecure)
    request = QueryRequest(
        collection=args.collection,
        limit=parse_limit(args.limit),
        recent=args.recent,
    )

    return run_fetch(
        firebase_config,
        settings,
        request,
        email=args.user,
        password=args.password,
        to_terminal=args.output,
        output_dir=args.output_dir,
        monitor=args.monitor,
        interval=args.interval,
        debug=args.debug,
    )


if __name__ == '__main__':
    sys.exit(main())
