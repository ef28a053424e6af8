"""
Runtime settings for firestore-fetch.

FirebaseConfig holds the web app credentials (the same object the Firebase
console hands out as a JS snippet). ClientSettings holds everything that shapes
how HTTP calls are made. Both are built once by the entry point and passed
explicitly to the auth client, query executor and fetcher.

Lookup order for the Firebase config, later sources winning:
1. YAML file (--config, else config/firebase.yaml in the working directory)
2. FIREBASE_API_KEY / FIREBASE_PROJECT_ID environment variables
3. Explicit overrides (CLI flags)
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from firestore_fetch.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('config') / 'firebase.yaml'

ENV_API_KEY = 'FIREBASE_API_KEY'
ENV_PROJECT_ID = 'FIREBASE_PROJECT_ID'
ENV_PROXY = 'FIRESTORE_FETCH_PROXY'

# Firebase console snippets use camelCase keys
_CAMEL_TO_SNAKE = {
    'apiKey': 'api_key',
    'projectId': 'project_id',
    'authDomain': 'auth_domain',
    'databaseURL': 'database_url',
    'storageBucket': 'storage_bucket',
    'messagingSenderId': 'messaging_sender_id',
    'appId': 'app_id',
}


class FirebaseConfig(BaseModel):
    """Firebase web app configuration."""
    model_config = ConfigDict(frozen=True, extra='ignore')

    api_key: str = Field(min_length=1)
    project_id: str = Field(min_length=1)
    auth_domain: Optional[str] = None
    database_url: Optional[str] = None
    storage_bucket: Optional[str] = None
    messaging_sender_id: Optional[str] = None
    app_id: Optional[str] = None

    @field_validator('api_key', 'project_id')
    @classmethod
    def _strip(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError('must not be blank')
        return value


class ClientSettings(BaseModel):
    """How HTTP calls to the identity service and Firestore are made."""
    model_config = ConfigDict(frozen=True)

    referer: str = ''
    proxy: Optional[str] = None
    verify_tls: bool = True


def _normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {_CAMEL_TO_SNAKE.get(key, key): value for key, value in data.items()}


def _load_yaml_config(config_path: Optional[Path]) -> Dict[str, Any]:
    """Load the Firebase section of a YAML config file.

    An explicitly given path must exist. The default path is optional.
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else Path.cwd() / DEFAULT_CONFIG_PATH

    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug(f"No config file at {path}, relying on environment and flags")
        return {}

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    # Accept either a bare mapping or one nested under 'firebase'
    section = data.get('firebase', data)
    if not isinstance(section, dict):
        raise ConfigError(f"'firebase' section in {path} must be a mapping")

    logger.debug(f"Loaded Firebase config from {path}")
    return _normalize_keys(section)


def load_firebase_config(config_path: Optional[Path] = None,
                         api_key: Optional[str] = None,
                         project_id: Optional[str] = None) -> FirebaseConfig:
    """
    Build the FirebaseConfig for this run.

    Args:
        config_path: Optional YAML file; defaults to config/firebase.yaml
        api_key: Override for the web API key
        project_id: Override for the project id

    Returns:
        FirebaseConfig

    Raises:
        ConfigError: If no usable api key / project id could be found
    """
    values = _load_yaml_config(config_path)

    env_values = {
        'api_key': os.environ.get(ENV_API_KEY),
        'project_id': os.environ.get(ENV_PROJECT_ID),
    }
    values.update({k: v for k, v in env_values.items() if v})

    overrides = {'api_key': api_key, 'project_id': project_id}
    values.update({k: v for k, v in overrides.items() if v})

    missing = [name for name in ('api_key', 'project_id') if not values.get(name)]
    if missing:
        raise ConfigError(
            f"Missing Firebase settings: {', '.join(missing)}. "
            f"Provide them in {DEFAULT_CONFIG_PATH}, via {ENV_API_KEY}/{ENV_PROJECT_ID}, "
            f"or with --api-key/--project-id."
        )

    try:
        return FirebaseConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid Firebase config: {e}") from e


def load_client_settings(referer: Optional[str] = None,
                         proxy: Optional[str] = None,
                         insecure: bool = False) -> ClientSettings:
    """Build ClientSettings, falling back to FIRESTORE_FETCH_PROXY for the proxy."""
    return ClientSettings(
        referer=referer or '',
        proxy=proxy or os.environ.get(ENV_PROXY) or None,
        verify_tls=not insecure,
    )
