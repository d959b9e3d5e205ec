class AttributionError(Exception):
    """Base exception for attribution lookups."""


class AttributionLookupError(AttributionError):
    """Raised when the version-control tool cannot attribute a line."""
