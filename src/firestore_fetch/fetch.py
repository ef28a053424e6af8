"""
Document fetching with authentication escalation.

A fetch starts with an anonymous token. If Firestore refuses the query with an
authorization error (401 or 403), the fetcher signs in with the user's email
and password and retries the query exactly once. Nothing else is retried.
"""
import logging
import time
from enum import Enum
from typing import Any, Callable, Optional

from firestore_fetch.auth.client import IdentityClient
from firestore_fetch.exceptions import AuthorizationError, CredentialsRequiredError
from firestore_fetch.query.executor import QueryExecutor
from firestore_fetch.query.models import QueryRequest

logger = logging.getLogger(__name__)

DEFAULT_MONITOR_INTERVAL = 5.0


class AuthState(Enum):
    """Which kind of token the fetcher currently holds."""
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class DocumentFetcher:
    """Runs the sign-in, query, escalate, retry sequence for one collection query."""

    def __init__(self, identity: IdentityClient, executor: QueryExecutor,
                 email: Optional[str] = None, password: Optional[str] = None):
        self.identity = identity
        self.executor = executor
        self.email = email
        self.password = password
        self.token: Optional[str] = None
        self.state: Optional[AuthState] = None

    def fetch_once(self, request: QueryRequest) -> Any:
        """
        Fetch documents, escalating to password sign-in at most once.

        Args:
            request: The query to run

        Returns:
            The query payload

        Raises:
            AuthError: A sign-in request failed
            CredentialsRequiredError: Escalation was needed without email/password
            QueryError: The query failed for any other reason, or failed again
                after escalation
        """
        token = self.identity.sign_in_anonymously()
        self.state = AuthState.ANONYMOUS

        try:
            payload = self.executor.run(token, request)
        except AuthorizationError as e:
            logger.info(f"Anonymous access refused ({e.status}), switching to password sign-in")
            if not (self.email and self.password):
                raise CredentialsRequiredError() from e

            token = self.identity.sign_in_with_password(self.email, self.password)
            self.state = AuthState.AUTHENTICATED
            payload = self.executor.run(token, request)

        self.token = token
        return payload

    def poll(self, request: QueryRequest) -> Any:
        """
        Query again with the token from the last successful fetch.

        A refused token (expired, or revoked) is dropped and the full
        sign-in and escalation flow runs again for this poll.
        """
        if self.token is None:
            return self.fetch_once(request)
        try:
            return self.executor.run(self.token, request)
        except AuthorizationError as e:
            logger.info(f"Stored token refused ({e.status}), signing in again")
            self.token = None
            return self.fetch_once(request)

    def monitor(self, request: QueryRequest, on_payload: Callable[[Any], Any],
                interval: float = DEFAULT_MONITOR_INTERVAL,
                max_polls: Optional[int] = None,
                sleep: Optional[Callable[[float], Any]] = None) -> bool:
        """
        Fetch, then poll until the payload changes.

        The first payload and the first changed payload are handed to
        on_payload; unchanged polls are not. Any error ends monitoring.

        Args:
            request: The query to run
            on_payload: Called with each payload worth reporting
            interval: Seconds between polls
            max_polls: Stop after this many polls (None polls forever)
            sleep: Sleep function (defaults to time.sleep)

        Returns:
            bool: True if a change was seen, False if max_polls ran out first
        """
        sleep = sleep or time.sleep
        previous = self.fetch_once(request)
        on_payload(previous)

        polls = 0
        while max_polls is None or polls < max_polls:
            sleep(interval)
            polls += 1
            current = self.poll(request)
            if current != previous:
                logger.info(f"Change detected after {polls} poll(s)")
                on_payload(current)
                return True
            logger.info(f"No change after poll {polls}, waiting {interval:g}s")

        return False
