"""
Identity Toolkit client.

Obtains Firebase ID tokens either anonymously (accounts:signUp with an empty
body) or with email and password (accounts:signInWithPassword). Some projects
restrict their web API key by HTTP referer, so both calls send the configured
Referer header.
"""
import logging
from typing import Any, Dict

import requests

from firestore_fetch.config.settings import ClientSettings, FirebaseConfig
from firestore_fetch.exceptions import AuthError
from .tokens import log_token_safely

logger = logging.getLogger(__name__)

IDENTITY_TOOLKIT_URL = "https://identitytoolkit.googleapis.com/v1"


class IdentityClient:
    """Issues sign-in requests against the Firebase identity service."""

    def __init__(self, firebase_config: FirebaseConfig, settings: ClientSettings,
                 session: requests.Session):
        self.firebase_config = firebase_config
        self.settings = settings
        self.session = session

    def _endpoint(self, action: str) -> str:
        return f"{IDENTITY_TOOLKIT_URL}/accounts:{action}?key={self.firebase_config.api_key}"

    def _headers(self) -> Dict[str, str]:
        headers = {'Content-Type': 'application/json'}
        if self.settings.referer:
            headers['Referer'] = self.settings.referer
        return headers

    def _post(self, action: str, payload: Dict[str, Any], failure: str) -> str:
        """POST to an accounts endpoint and return the idToken from the response."""
        try:
            response = self.session.post(self._endpoint(action), json=payload, headers=self._headers())
        except requests.RequestException as e:
            raise AuthError(f"{failure}: {e}") from e

        if not response.ok:
            logger.debug(f"accounts:{action} returned {response.status_code}: {response.text}")
            raise AuthError(f"{failure}: {response.reason}")

        try:
            data = response.json()
        except ValueError as e:
            raise AuthError(f"{failure}: response was not JSON") from e

        id_token = data.get('idToken') if isinstance(data, dict) else None
        if not id_token:
            raise AuthError(f"{failure}: response did not include an idToken")
        return id_token

    def sign_in_anonymously(self) -> str:
        """
        Create an anonymous user and return its ID token.

        Returns:
            str: Firebase ID token

        Raises:
            AuthError: If the identity service rejects the request
        """
        logger.info(f"Signing in anonymously with referer {self.settings.referer}")
        id_token = self._post('signUp', {}, "Error signing in anonymously")
        logger.info("Successfully signed in anonymously.")
        log_token_safely(id_token, "Anonymous token")
        return id_token

    def sign_in_with_password(self, email: str, password: str) -> str:
        """
        Sign in with email and password and return the ID token.

        Args:
            email: User email address
            password: User password

        Returns:
            str: Firebase ID token

        Raises:
            AuthError: If the identity service rejects the credentials
        """
        logger.info(f"Signing in as {email}")
        payload = {"email": email, "password": password, "returnSecureToken": True}
        id_token = self._post('signInWithPassword', payload, "Error signing in with password")
        logger.info(f"Successfully signed in as {email}.")
        log_token_safely(id_token, "Password token")
        return id_token
