"""
Safe inspection of Firebase ID tokens.

Tokens are never verified here: the identity service already issued them and
the Firestore endpoint is what enforces them. Decoding is for logging only.
"""
import hashlib
import logging
from typing import Any, Dict

import jwt

logger = logging.getLogger(__name__)


def compute_token_hash(token: str) -> str:
    """Short SHA256 prefix that identifies a token in logs without exposing it."""
    return hashlib.sha256(token.encode()).hexdigest()[:16]


def decode_claims(token: str) -> Dict[str, Any]:
    """
    Decode token claims without verifying the signature.

    Returns:
        dict: The claims, or an empty dict if the token is not a parseable JWT
    """
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        logger.debug(f"Token is not a decodable JWT: {e}")
        return {}


def describe_token(token: str) -> Dict[str, Any]:
    """Summarize a token as printable metadata (hash, user, sign-in provider)."""
    claims = decode_claims(token)
    firebase_claims = claims.get('firebase') or {}
    return {
        'hash': compute_token_hash(token),
        'length': len(token),
        'user_id': claims.get('user_id') or claims.get('sub'),
        'email': claims.get('email'),
        'provider': firebase_claims.get('sign_in_provider'),
        'issuer': claims.get('iss'),
        'expires': claims.get('exp'),
    }


def log_token_safely(token: str, context: str = "Token") -> None:
    """Log token information at DEBUG, never failing regardless of token format."""
    info = describe_token(token)
    logger.debug(f"{context}: {info['length']} chars, hash {info['hash']}")
    if info['provider'] or info['user_id']:
        logger.debug(f"  - Provider: {info['provider']}, user: {info['user_id']}")
