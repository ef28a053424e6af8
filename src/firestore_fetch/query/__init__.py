"""
Structured queries against Firestore.
"""

from .executor import QueryExecutor, classify_error
from .models import DEFAULT_LIMIT, QueryRequest

__all__ = [
    'QueryExecutor',
    'QueryRequest',
    'DEFAULT_LIMIT',
    'classify_error',
]
