"""Domain exceptions for billing app."""


class BillingServiceError(Exception):
    """Base exception for all billing service errors."""
    pass


class NoUnbilledPurchasesError(BillingServiceError):
    """No unbilled purchase falls within the requested range."""
    pass


class NothingToBillError(BillingServiceError):
    """There is no generated bill waiting to be marked as billed."""
    pass
