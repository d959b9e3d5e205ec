from abc import ABC, abstractmethod

from deadline_reminder.notification.models import NotificationMessage


class BaseDeliveryClient(ABC):
    """Contract for all notification delivery adapters."""

    @abstractmethod
    def send(self, message: NotificationMessage) -> None:
        """Deliver a composed message.

        Raises:
            DeliveryError: on any transport or API failure. Never retried here.
        """
