"""
Configuration for firestore-fetch.

Provides the Firebase web config, HTTP client settings and logging bootstrap.
"""

from .settings import (
    ClientSettings,
    FirebaseConfig,
    load_client_settings,
    load_firebase_config,
)
from .logging import bootstrap_logging

__all__ = [
    'ClientSettings',
    'FirebaseConfig',
    'load_client_settings',
    'load_firebase_config',
    'bootstrap_logging',
]
