"""
Domain exceptions for purchases app.

This module defines the exception hierarchy for cart and purchase errors.
Validation errors are raised before any store call, so a rejected save
never leaves a partial write behind.
"""


class PurchaseServiceError(Exception):
    """Base exception for purchase service errors."""
    pass


class NoSellerSelectedError(PurchaseServiceError):
    """Raised when a cart operation needs a selected seller and there is none."""
    pass


class EmptyCartError(PurchaseServiceError):
    """Raised when saving a cart without any positive quantity."""
    pass


class InvalidPurchaseDateError(PurchaseServiceError):
    """Raised when the purchase date is not a valid ISO date."""
    pass
