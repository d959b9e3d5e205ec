"""Delivery adapter used when no Slack credentials are configured."""

from deadline_reminder.delivery.base import BaseDeliveryClient
from deadline_reminder.logging.logger import Log
from deadline_reminder.notification.models import NotificationMessage


class LogDeliveryAdapter(BaseDeliveryClient):
    """Writes the message to the log instead of sending it.

    No network calls. Useful for dry runs and local development.
    """

    def send(self, message: NotificationMessage) -> None:
        Log.warning("No Slack credentials provided. Skipping notification.")
        Log.warning("Provide either SLACK_WEBHOOK_URL or SLACK_BOT_TOKEN and SLACK_CHANNEL")
        Log.info(message.summary_text)
        for block in message.blocks:
            Log.debug(f"  {block.to_dict()}")
