import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Union

from .errors import DecodeError


def _read_group(data: Dict[str, Any], cls, key: str):
    """
    Constrói um dataclass de strings a partir de data[key].
    Campos ausentes viram "", campos extras são ignorados, tipos errados geram DecodeError.
    """
    raw = data.get(key)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise DecodeError(f"field '{key}' must be an object, got {type(raw).__name__}")
    values = {}
    for f in fields(cls):
        value = raw.get(f.name, "")
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise DecodeError(f"field '{key}.{f.name}' must be a string, got {type(value).__name__}")
        values[f.name] = value
    return cls(**values)


@dataclass(frozen=True)
class GroupInfo:
    project_id: str = ""
    detail_link: str = ""


@dataclass(frozen=True)
class ExceptionInfo:
    type: str = ""
    message: str = ""


@dataclass(frozen=True)
class EventInfo:
    log_message: str = ""
    request_method: str = ""
    request_url: str = ""
    referrer: str = ""
    user_agent: str = ""
    service: str = ""
    version: str = ""
    response_status: str = ""


@dataclass(frozen=True)
class WebhookPayload:
    version: str = ""
    subject: str = ""
    group_info: GroupInfo = field(default_factory=GroupInfo)
    exception_info: ExceptionInfo = field(default_factory=ExceptionInfo)
    event_info: EventInfo = field(default_factory=EventInfo)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WebhookPayload":
        if not isinstance(data, dict):
            raise DecodeError(f"webhook body must be a JSON object, got {type(data).__name__}")
        for key in ("version", "subject"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise DecodeError(f"field '{key}' must be a string, got {type(value).__name__}")
        return cls(
            version=data.get("version") or "",
            subject=data.get("subject") or "",
            group_info=_read_group(data, GroupInfo, "group_info"),
            exception_info=_read_group(data, ExceptionInfo, "exception_info"),
            event_info=_read_group(data, EventInfo, "event_info"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def decode_payload(body: Union[bytes, str, Dict[str, Any]]) -> WebhookPayload:
    """Decodifica o corpo bruto do webhook. Qualquer problema vira DecodeError."""
    if isinstance(body, dict):
        return WebhookPayload.from_dict(body)
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"body is not valid UTF-8: {exc}") from exc
    try:
        data = json.loads(body)
    except json.JSONDecodeError as exc:
        raise DecodeError(str(exc)) from exc
    return WebhookPayload.from_dict(data)
