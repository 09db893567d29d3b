from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    ALERT_COLOR,
    ALERT_TITLE_TEMPLATE,
    DETAILS_BUTTON_STYLE,
    DETAILS_BUTTON_TEXT,
)
from .models import WebhookPayload
from .utils import truncate

# limite do Slack para texto plain_text em header
HEADER_MAX_CHARS = 150


@dataclass(frozen=True)
class AttachmentField:
    title: str
    value: str
    short: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "value": self.value, "short": self.short}


@dataclass(frozen=True)
class AttachmentAction:
    text: str
    url: str
    type: str = "button"
    style: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        action = {"type": self.type, "text": self.text, "url": self.url}
        if self.style:
            action["style"] = self.style
        return action


@dataclass(frozen=True)
class Attachment:
    """Attachment legado do Slack. Quando `blocks` existe, os demais campos de conteúdo não são enviados."""

    color: str = ALERT_COLOR
    title: str = ""
    title_link: Optional[str] = None
    fallback: Optional[str] = None
    fields: Tuple[AttachmentField, ...] = ()
    actions: Tuple[AttachmentAction, ...] = ()
    blocks: Tuple[Dict[str, Any], ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        if self.blocks:
            return {"color": self.color, "blocks": list(self.blocks)}
        data: Dict[str, Any] = {"color": self.color, "title": self.title}
        if self.title_link:
            data["title_link"] = self.title_link
        if self.fallback:
            data["fallback"] = self.fallback
        if self.fields:
            data["fields"] = [f.to_dict() for f in self.fields]
        if self.actions:
            data["actions"] = [a.to_dict() for a in self.actions]
        return data


@dataclass(frozen=True)
class SlackMessage:
    channel: str
    text: str
    attachments: Tuple[Attachment, ...] = field(default_factory=tuple)

    def to_payload(self) -> Dict[str, Any]:
        """Corpo JSON esperado por chat.postMessage."""
        payload: Dict[str, Any] = {"channel": self.channel, "text": self.text}
        if self.attachments:
            payload["attachments"] = [a.to_dict() for a in self.attachments]
        return payload


def build_title(payload: WebhookPayload) -> str:
    return ALERT_TITLE_TEMPLATE.format(service=payload.event_info.service)


def build_fields(payload: WebhookPayload) -> List[AttachmentField]:
    return [
        AttachmentField(title="Project ID", value=payload.group_info.project_id, short=True),
        AttachmentField(title="Version", value=payload.event_info.version, short=True),
        AttachmentField(title="Error Message", value=payload.exception_info.message),
    ]


def build_attachment_message(payload: WebhookPayload, channel: str, color: str = ALERT_COLOR) -> SlackMessage:
    title = build_title(payload)
    link = payload.group_info.detail_link or None
    actions: Tuple[AttachmentAction, ...] = ()
    if link:
        actions = (AttachmentAction(text=DETAILS_BUTTON_TEXT, url=link, style=DETAILS_BUTTON_STYLE),)

    attachment = Attachment(
        color=color,
        title=title,
        title_link=link,
        fallback=title,
        fields=tuple(build_fields(payload)),
        actions=actions,
    )
    return SlackMessage(channel=channel, text=title, attachments=(attachment,))


def _mrkdwn(text: str) -> Dict[str, Any]:
    return {"type": "mrkdwn", "text": text}


def _escape_mrkdwn(text: str) -> str:
    # Slack exige escape apenas de &, < e >
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def build_blocks(payload: WebhookPayload) -> List[Dict[str, Any]]:
    """Mesma mensagem do attachment, codificada em Block Kit."""
    title = build_title(payload)
    link = payload.group_info.detail_link

    blocks: List[Dict[str, Any]] = [
        {
            "type": "header",
            "text": {"type": "plain_text", "text": truncate(title, HEADER_MAX_CHARS), "emoji": True},
        },
    ]
    if link:
        blocks.append({"type": "section", "text": _mrkdwn(f"<{link}|{_escape_mrkdwn(title)}>")})

    short_fields = [f for f in build_fields(payload) if f.short]
    blocks.append({
        "type": "section",
        "fields": [
            _mrkdwn(f"*{f.title}*\n{_escape_mrkdwn(f.value) or '-'}") for f in short_fields
        ],
    })

    message = payload.exception_info.message
    blocks.append({
        "type": "section",
        "text": _mrkdwn(f"*Error Message*\n```{_escape_mrkdwn(message)}```" if message else "*Error Message*\n-"),
    })

    if link:
        blocks.append({
            "type": "actions",
            "elements": [
                {
                    "type": "button",
                    "text": {"type": "plain_text", "text": DETAILS_BUTTON_TEXT},
                    "url": link,
                    "style": DETAILS_BUTTON_STYLE,
                }
            ],
        })
    return blocks


def build_blocks_message(payload: WebhookPayload, channel: str, color: str = ALERT_COLOR) -> SlackMessage:
    title = build_title(payload)
    attachment = Attachment(color=color, blocks=tuple(build_blocks(payload)))
    return SlackMessage(channel=channel, text=title, attachments=(attachment,))


def build_message(payload: WebhookPayload, channel: str, message_format: str = "attachment",
                  color: str = ALERT_COLOR) -> SlackMessage:
    if message_format == "blocks":
        return build_blocks_message(payload, channel, color)
    return build_attachment_message(payload, channel, color)
