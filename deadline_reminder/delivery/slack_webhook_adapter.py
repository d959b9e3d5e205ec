import httpx

from deadline_reminder.delivery.base import BaseDeliveryClient
from deadline_reminder.delivery.exceptions import DeliveryError, DeliveryNetworkError
from deadline_reminder.logging.logger import Log
from deadline_reminder.notification.models import NotificationMessage


class SlackWebhookAdapter(BaseDeliveryClient):
    """Posts messages to a Slack incoming webhook.

    An injected ``client`` is reused and left open; otherwise each send opens
    and closes its own client.
    """

    def __init__(
        self,
        *,
        webhook_url: str,
        timeout_seconds: int = 30,
        client: httpx.Client | None = None,
    ) -> None:
        self._webhook_url = webhook_url
        self._timeout = timeout_seconds
        self._client = client

    def send(self, message: NotificationMessage) -> None:
        payload = message.to_payload()
        Log.debug(f"Slack webhook payload: {payload}")
        try:
            response = self._post(payload)
        except httpx.HTTPError as exc:
            raise DeliveryNetworkError(f"Slack webhook network error: {exc}") from exc

        if response.is_error:
            raise DeliveryError(
                f"Slack webhook failed: {response.status_code} {response.text}"
            )

    def _post(self, payload: dict[str, object]) -> httpx.Response:
        if self._client is not None:
            return self._client.post(self._webhook_url, json=payload)
        with httpx.Client(timeout=self._timeout) as client:
            return client.post(self._webhook_url, json=payload)
