"""
Root pytest configuration for firestore-fetch.
"""

import pytest

from firestore_fetch.config.logging import bootstrap_logging

bootstrap_logging()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests independent of the developer's environment and working directory."""
    for name in ("FIREBASE_API_KEY", "FIREBASE_PROJECT_ID", "FIRESTORE_FETCH_PROXY", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
