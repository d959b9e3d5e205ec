from deadline_reminder.config.settings import Settings
from deadline_reminder.delivery.base import BaseDeliveryClient
from deadline_reminder.delivery.log_adapter import LogDeliveryAdapter
from deadline_reminder.delivery.slack_bot_adapter import SlackBotAdapter
from deadline_reminder.delivery.slack_webhook_adapter import SlackWebhookAdapter


class DeliveryClientFactory:
    """Creates the delivery adapter matching the configured credentials.

    A webhook URL wins over a bot token; without either, messages are logged.
    """

    @classmethod
    def create(cls, settings: Settings) -> BaseDeliveryClient:
        if settings.slack_webhook_url:
            return SlackWebhookAdapter(
                webhook_url=settings.slack_webhook_url,
                timeout_seconds=settings.slack_timeout_seconds,
            )
        if settings.slack_bot_token and settings.slack_channel:
            return SlackBotAdapter(
                token=settings.slack_bot_token,
                channel=settings.slack_channel,
                timeout_seconds=settings.slack_timeout_seconds,
            )
        return LogDeliveryAdapter()
