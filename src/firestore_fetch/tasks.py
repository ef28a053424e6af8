"""
Invoke tasks for firestore-fetch.

Usage:
    invoke -c firestore_fetch.tasks fetch --collection=users --referer=https://app.example.com
    invoke -c firestore_fetch.tasks token --referer=https://app.example.com
"""

import json
import sys

from invoke import Collection, task

from firestore_fetch.auth.client import IdentityClient
from firestore_fetch.auth.tokens import describe_token
from firestore_fetch.cli import parse_limit, run_fetch
from firestore_fetch.config.logging import bootstrap_logging
from firestore_fetch.config.settings import load_client_settings, load_firebase_config
from firestore_fetch.exceptions import FetchError
from firestore_fetch.query.models import QueryRequest
from firestore_fetch.session import build_session


@task(help={
    'collection': 'Collection to query (required)',
    'referer': 'Referer header sent to the identity service',
    'limit': 'Maximum number of documents (default 10)',
    'recent': 'Order by created_at, newest first',
    'user': 'User email for authenticated access',
    'password': 'User password for authenticated access',
    'output': 'Print JSON to the terminal instead of saving a file',
    'config': 'YAML file with the Firebase web config',
    'debug': 'Enable debug logging',
})
def fetch(ctx, collection=None, referer='', limit=None, recent=False, user=None,
          password=None, output=False, config=None, debug=False):
    """
    Fetch documents from a collection, exactly like the firestore-fetch command.

    Examples:
        invoke fetch --collection=users --referer=https://app.example.com
        invoke fetch --collection=orders --recent --limit=5 --output
    """
    bootstrap_logging(debug=debug)

    if not collection:
        print("❌ Collection required.", file=sys.stderr)
        print("💡 Usage: invoke fetch --collection=<name>", file=sys.stderr)
        return False

    try:
        firebase_config = load_firebase_config(config)
    except FetchError as e:
        print(f"❌ {e}", file=sys.stderr)
        return False

    request = QueryRequest(collection=collection, limit=parse_limit(limit), recent=recent)
    exit_code = run_fetch(
        firebase_config,
        load_client_settings(referer),
        request,
        email=user,
        password=password,
        to_terminal=output,
        debug=debug,
    )
    return exit_code == 0


@task(help={
    'referer': 'Referer header sent to the identity service',
    'config': 'YAML file with the Firebase web config',
    'quiet': 'Suppress metadata output to stderr (token always goes to stdout)',
})
def token(ctx, referer='', config=None, quiet=False):
    """
    Sign in anonymously and print the ID token.

    Token is always output to stdout. Metadata goes to stderr unless --quiet is used.

    Examples:
        TOKEN=$(invoke token --referer=https://app.example.com --quiet)
    """
    if not quiet:
        bootstrap_logging()

    settings = load_client_settings(referer)
    session = build_session(settings)
    try:
        firebase_config = load_firebase_config(config)
        id_token = IdentityClient(firebase_config, settings, session).sign_in_anonymously()
    except FetchError as e:
        if not quiet:
            print(f"❌ Token generation failed: {e}", file=sys.stderr)
        return False
    finally:
        session.close()

    print(id_token)
    if not quiet:
        print(json.dumps(describe_token(id_token), indent=2), file=sys.stderr)
    return True


namespace = Collection(fetch, token)
