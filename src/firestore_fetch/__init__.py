"""
firestore-fetch: fetch documents from a Firestore collection over the REST API,
signing in anonymously first and with a password only when access is refused.
"""

__version__ = '0.1.0'
