"""Domain exceptions for sellers app."""


class SellersServiceError(Exception):
    """Base exception for all sellers service errors."""
    pass


class SellerNotFoundError(SellersServiceError):
    """Seller does not exist (or was deleted meanwhile)."""
    pass


class InvalidSellerNameError(SellersServiceError):
    """Seller name must not be empty."""
    pass


class InvalidItemError(SellersServiceError):
    """Item fields are invalid (e.g. negative price)."""
    pass


class NoItemsError(SellersServiceError):
    """Seller must have at least one named item."""
    pass
