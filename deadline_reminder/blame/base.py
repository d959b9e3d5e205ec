from abc import ABC, abstractmethod

from deadline_reminder.scanner.models import Attribution


class BaseAttributionLookup(ABC):
    """Contract for all version-control attribution adapters."""

    @abstractmethod
    def lookup(self, path: str, line_number: int) -> Attribution | None:
        """Return the author of ``line_number`` in ``path``.

        Returns:
            Attribution, or None when the line has no recorded author.

        Raises:
            AttributionLookupError: if the lookup itself fails.
        """
