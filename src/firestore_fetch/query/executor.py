"""
Runs structured queries against the Firestore REST API and maps failures to
typed exceptions.

runQuery reports errors as a JSON array whose first element carries an
"error" object. Only that shape is inspected for the 401/403 codes that the
fetcher can recover from by signing in with a password.
"""
import logging
from typing import Any, Optional

import requests

from firestore_fetch.config.settings import FirebaseConfig
from firestore_fetch.exceptions import (
    PermissionDeniedError,
    QueryError,
    UnauthenticatedError,
)
from .models import QueryRequest

logger = logging.getLogger(__name__)

FIRESTORE_URL = "https://firestore.googleapis.com/v1"

RED = '\x1b[31m'
RESET = '\x1b[0m'


def _reported_error_code(payload: Any) -> Optional[int]:
    """Return payload[0]['error']['code'] if the payload has that shape."""
    if not isinstance(payload, list) or not payload:
        return None
    first = payload[0]
    if not isinstance(first, dict):
        return None
    error = first.get('error')
    if not isinstance(error, dict):
        return None
    code = error.get('code')
    return code if isinstance(code, int) else None


def classify_error(status_code: int, reason: str, payload: Any) -> QueryError:
    """
    Build the exception matching a failed runQuery response.

    Args:
        status_code: HTTP status code
        reason: HTTP status text
        payload: Decoded JSON body, or None if the body was not JSON

    Returns:
        UnauthenticatedError, PermissionDeniedError or a generic QueryError
    """
    code = _reported_error_code(payload)
    if code == UnauthenticatedError.code:
        logger.error(f"{RED}Unauthorized status to the collection.{RESET}")
        return UnauthenticatedError(UnauthenticatedError.status, status_code, reason, payload)
    if code == PermissionDeniedError.code:
        logger.error(f"{RED}Permission denied for accessing the collection.{RESET}")
        return PermissionDeniedError(PermissionDeniedError.status, status_code, reason, payload)
    return QueryError(f"Error fetching documents: {reason}", status_code, reason, payload)


class QueryExecutor:
    """Sends runQuery requests for one Firebase project."""

    def __init__(self, firebase_config: FirebaseConfig, session: requests.Session):
        self.firebase_config = firebase_config
        self.session = session

    @property
    def endpoint(self) -> str:
        return (
            f"{FIRESTORE_URL}/projects/{self.firebase_config.project_id}"
            f"/databases/(default)/documents:runQuery?key={self.firebase_config.api_key}"
        )

    def run(self, id_token: str, request: QueryRequest) -> Any:
        """
        Execute a structured query.

        Args:
            id_token: Bearer token from the identity service
            request: The query to run

        Returns:
            The decoded JSON payload, unmodified

        Raises:
            UnauthenticatedError: Service reported error code 401
            PermissionDeniedError: Service reported error code 403
            QueryError: Any other failure
        """
        headers = {
            'Authorization': f'Bearer {id_token}',
            'Content-Type': 'application/json',
        }

        logger.info(f'Fetching documents from the "{request.collection}" collection.')
        try:
            response = self.session.post(self.endpoint, json=request.to_body(), headers=headers)
        except requests.RequestException as e:
            raise QueryError(f"Error fetching documents: {e}") from e

        if not response.ok:
            try:
                payload = response.json()
            except ValueError:
                payload = None
            logger.debug(f"runQuery returned {response.status_code}: {response.text}")
            raise classify_error(response.status_code, response.reason, payload)

        try:
            return response.json()
        except ValueError as e:
            raise QueryError(
                "Error fetching documents: response was not JSON",
                response.status_code, response.reason,
            ) from e
