class NotificationError(Exception):
    """Base exception for notification composition errors."""


class TemplateError(NotificationError):
    """Raised when a custom message template is malformed or cannot be rendered."""
