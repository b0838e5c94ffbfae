"""
Persistence for generated reviews.
"""

from .review_store import STORE_FILENAME, ReviewPersistenceError, ReviewStore

__all__ = [
    "STORE_FILENAME",
    "ReviewPersistenceError",
    "ReviewStore",
]
