"""
Domain exceptions for the document store.

Exception Hierarchy:
    StoreError (base)
    ├── DocumentNotFoundError
    └── InvalidCollectionError

Any backend failure surfaces as a StoreError so callers can report it
without knowing how the store is implemented.
"""


class StoreError(Exception):
    """Base exception for all document store errors."""
    pass


class DocumentNotFoundError(StoreError):
    """
    Raised when a document id does not exist in the collection.

    Example:
        raise DocumentNotFoundError("No document to update: sellers/abc123")
    """
    pass


class InvalidCollectionError(StoreError):
    """Raised when an unknown collection name is used."""
    pass
