class ScannerError(Exception):
    """Base exception for all scanner-related errors."""


class SourceReadError(ScannerError):
    """Raised when a source file cannot be read from disk."""
