"""
Authentication against the Firebase identity service.
"""

from .client import IdentityClient, IDENTITY_TOOLKIT_URL
from .tokens import describe_token, log_token_safely

__all__ = [
    'IdentityClient',
    'IDENTITY_TOOLKIT_URL',
    'describe_token',
    'log_token_safely',
]
