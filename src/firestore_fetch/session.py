"""
HTTP session construction.

Proxy and certificate policy live on the session object only; nothing here
touches process-wide environment variables.
"""
import logging

import requests
import urllib3

from firestore_fetch.config.settings import ClientSettings

logger = logging.getLogger(__name__)


def build_session(settings: ClientSettings) -> requests.Session:
    """
    Create a requests.Session configured from ClientSettings.

    Args:
        settings: Client settings (proxy, TLS verification)

    Returns:
        requests.Session ready for identity and Firestore calls
    """
    session = requests.Session()
    session.headers.update({'Content-Type': 'application/json'})

    if settings.proxy:
        session.proxies.update({'http': settings.proxy, 'https': settings.proxy})
        logger.debug(f"Routing requests through proxy {settings.proxy}")

    if not settings.verify_tls:
        session.verify = False
        # Only silence the warning that our own opt-out triggers
        urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)
        logger.warning("TLS certificate validation is disabled for this session")

    return session
