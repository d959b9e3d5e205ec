from typing import ClassVar

import httpx

from deadline_reminder.delivery.base import BaseDeliveryClient
from deadline_reminder.delivery.exceptions import DeliveryError, DeliveryNetworkError
from deadline_reminder.logging.logger import Log
from deadline_reminder.notification.models import NotificationMessage


class SlackBotAdapter(BaseDeliveryClient):
    """Posts messages with a bot token through ``chat.postMessage``.

    An injected ``client`` is reused and left open; otherwise each send opens
    and closes its own client.
    """

    POST_MESSAGE_URL: ClassVar[str] = "https://slack.com/api/chat.postMessage"

    def __init__(
        self,
        *,
        token: str,
        channel: str,
        timeout_seconds: int = 30,
        client: httpx.Client | None = None,
    ) -> None:
        if not channel:
            raise ValueError("A channel is required to post with a bot token")
        self._token = token
        self._channel = channel
        self._timeout = timeout_seconds
        self._client = client

    def send(self, message: NotificationMessage) -> None:
        payload = message.to_payload()
        payload["channel"] = message.channel or self._channel
        Log.debug(f"Slack chat.postMessage payload: {payload}")
        try:
            response = self._post(payload)
        except httpx.HTTPError as exc:
            raise DeliveryNetworkError(f"Slack API network error: {exc}") from exc

        if response.is_error:
            raise DeliveryError(f"Slack API failed: {response.status_code} {response.text}")
        try:
            body = response.json()
        except ValueError as exc:
            raise DeliveryError(f"Slack API returned invalid JSON: {exc}") from exc
        if not body.get("ok"):
            raise DeliveryError(f"Slack API error: {body.get('error', 'unknown_error')}")

    def _post(self, payload: dict[str, object]) -> httpx.Response:
        headers = {"Authorization": f"Bearer {self._token}"}
        if self._client is not None:
            return self._client.post(self.POST_MESSAGE_URL, json=payload, headers=headers)
        with httpx.Client(timeout=self._timeout) as client:
            return client.post(self.POST_MESSAGE_URL, json=payload, headers=headers)
