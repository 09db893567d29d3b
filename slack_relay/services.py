import json
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from .config import RelayConfig
from .constants import DEBUG_PAYLOAD_PREVIEW, DEFAULT_SLACK_TIMEOUT_SECONDS, SLACK_API_URL
from .errors import ConfigurationError, ProviderRejection, TransportError
from .formatters import SlackMessage, build_message
from .models import WebhookPayload
from .routing import ChannelResolver
from .utils import truncate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DeliveryReceipt:
    channel: str
    ts: Optional[str] = None


class SlackClient:
    """Cliente mínimo para chat.postMessage: um POST por mensagem, sem retry."""

    def __init__(self, token: str, api_url: str = SLACK_API_URL,
                 timeout: float = DEFAULT_SLACK_TIMEOUT_SECONDS):
        self.token = token
        self.api_url = api_url
        self.timeout = timeout

    def post_message(self, message: SlackMessage) -> DeliveryReceipt:
        if not self.token:
            raise ConfigurationError("SLACK_BOT_TOKEN is not set")

        payload = message.to_payload()
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Slack payload: {truncate(json.dumps(payload), DEBUG_PAYLOAD_PREVIEW)}")

        try:
            # sem Session: o handler roda em várias threads
            resp = requests.post(
                self.api_url,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json; charset=utf-8",
                },
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Error reaching Slack: {exc}") from exc

        logger.debug(f"Slack response: {resp.status_code} {truncate(resp.text, DEBUG_PAYLOAD_PREVIEW)}")

        try:
            body = resp.json()
        except ValueError as exc:
            raise TransportError(
                f"Slack returned a non-JSON response (HTTP {resp.status_code})",
                status_code=resp.status_code,
            ) from exc
        if not isinstance(body, dict):
            raise TransportError(
                f"Slack returned an unexpected response body (HTTP {resp.status_code})",
                status_code=resp.status_code,
            )

        if body.get("ok") is not True:
            raise ProviderRejection(body.get("error") or "unknown_error", status_code=resp.status_code)

        return DeliveryReceipt(channel=body.get("channel") or message.channel, ts=body.get("ts"))


class Dispatcher:
    """Resolve o canal, formata e envia uma notificação por webhook."""

    def __init__(self, config: RelayConfig, client: Optional[SlackClient] = None,
                 resolver: Optional[ChannelResolver] = None):
        self.config = config
        self.resolver = resolver or ChannelResolver.from_config(config)
        self.client = client or SlackClient(
            config.slack_bot_token,
            api_url=config.slack_api_url,
            timeout=config.slack_timeout_seconds,
        )

    def dispatch(self, payload: WebhookPayload) -> DeliveryReceipt:
        """
        Entrega uma notificação. Levanta ConfigurationError, TransportError ou ProviderRejection;
        o chamador decide o que fazer com a falha (aqui nunca há retry).
        """
        channel = self.resolver.resolve(payload.group_info.project_id)
        message = build_message(payload, channel, self.config.message_format, self.config.alert_color)
        receipt = self.client.post_message(message)
        logger.info(
            f"Message sent to Slack successfully. Channel: {receipt.channel}, Timestamp: {receipt.ts}, "
            f"Project: {payload.group_info.project_id}"
        )
        return receipt

    def notify(self, payload: WebhookPayload) -> Optional[DeliveryReceipt]:
        """Fire-and-forget: falhas de entrega são registradas e não propagadas."""
        project_id = payload.group_info.project_id
        try:
            return self.dispatch(payload)
        except ProviderRejection as exc:
            logger.error(
                f"Slack rejected message. Channel: {self.resolver.resolve(project_id)}, "
                f"Project: {project_id}, Error: {exc.reason}, HTTP: {exc.status_code}"
            )
        except (TransportError, ConfigurationError) as exc:
            logger.error(
                f"Error sending message to Slack. Channel: {self.resolver.resolve(project_id)}, "
                f"Project: {project_id}, Error: {exc}"
            )
        return None
