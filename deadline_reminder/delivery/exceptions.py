class DeliveryError(Exception):
    """Raised when a notification cannot be delivered."""


class DeliveryNetworkError(DeliveryError):
    """Raised when the delivery request fails due to network/infrastructure issues."""
