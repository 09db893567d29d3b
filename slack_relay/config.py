import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .constants import (
    ALERT_COLOR,
    BASIC_AUTH_REQUIRED,
    CHANNEL_MAP_KV_DELIMITER,
    CHANNEL_MAP_PAIR_DELIMITER,
    DEFAULT_APP_HOST,
    DEFAULT_APP_PORT,
    DEFAULT_SLACK_TIMEOUT_SECONDS,
    MESSAGE_FORMATS,
    SLACK_API_URL,
    SLACK_MESSAGE_FORMAT,
)
from .errors import ConfigurationError


def parse_channel_map(
    value: Optional[str],
    pair_delimiter: str = CHANNEL_MAP_PAIR_DELIMITER,
    kv_delimiter: str = CHANNEL_MAP_KV_DELIMITER,
) -> Dict[str, str]:
    """
    Converte "proj-a:C111, proj-b:C222" em {"proj-a": "C111", "proj-b": "C222"}.

    Cada par é separado na primeira ocorrência do delimitador. Um único par
    inválido invalida o mapa inteiro: mapa parcial roteia alertas para o canal errado.
    """
    mapping: Dict[str, str] = {}
    if not value or not value.strip():
        return mapping

    for pair in value.split(pair_delimiter):
        if not pair.strip():
            # delimitador sobrando no fim ("a:C1,")
            continue
        if kv_delimiter not in pair:
            raise ConfigurationError(f"Invalid mapping pair: {pair.strip()!r} (expected project{kv_delimiter}channel)")
        key, channel = pair.split(kv_delimiter, 1)
        key = key.strip()
        channel = channel.strip()
        if not key or not channel:
            raise ConfigurationError(f"Invalid mapping pair: {pair.strip()!r} (empty project or channel)")
        if key in mapping:
            raise ConfigurationError(f"Duplicate project in channel map: {key!r}")
        mapping[key] = channel
    return mapping


@dataclass(frozen=True)
class RelayConfig:
    """Configuração imutável do processo, montada uma vez no startup."""

    slack_bot_token: str
    default_channel: str
    channel_map: Mapping[str, str] = field(default_factory=dict)
    basic_auth_username: str = ""
    basic_auth_password: str = ""
    basic_auth_required: bool = True
    slack_api_url: str = SLACK_API_URL
    slack_timeout_seconds: float = DEFAULT_SLACK_TIMEOUT_SECONDS
    message_format: str = "attachment"
    alert_color: str = ALERT_COLOR
    app_host: str = DEFAULT_APP_HOST
    app_port: int = DEFAULT_APP_PORT

    def __post_init__(self):
        # congela o mapa mesmo quando construído à mão (testes)
        object.__setattr__(self, "channel_map", MappingProxyType(dict(self.channel_map)))

    @property
    def basic_auth_configured(self) -> bool:
        return bool(self.basic_auth_username and self.basic_auth_password)


def load_config(environ: Optional[Mapping[str, str]] = None) -> RelayConfig:
    """
    Lê a configuração do ambiente e valida tudo de uma vez (fail fast).
    Qualquer valor obrigatório ausente ou malformado gera ConfigurationError.
    """
    env = os.environ if environ is None else environ

    token = env.get("SLACK_BOT_TOKEN", "").strip()
    if not token:
        raise ConfigurationError("SLACK_BOT_TOKEN environment variable is not set")

    default_channel = env.get("DEFAULT_CHANNEL_ID", "").strip()
    if not default_channel:
        raise ConfigurationError("DEFAULT_CHANNEL_ID environment variable is not set")

    channel_map = parse_channel_map(env.get("PROJECT_CHANNEL_MAP", ""))

    message_format = env.get("SLACK_MESSAGE_FORMAT", SLACK_MESSAGE_FORMAT).strip().lower()
    if message_format not in MESSAGE_FORMATS:
        raise ConfigurationError(
            f"SLACK_MESSAGE_FORMAT must be one of {', '.join(MESSAGE_FORMATS)}, got {message_format!r}"
        )

    raw_timeout = env.get("SLACK_TIMEOUT_SECONDS")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_SLACK_TIMEOUT_SECONDS
    except ValueError as exc:
        raise ConfigurationError(f"SLACK_TIMEOUT_SECONDS must be a number, got {raw_timeout!r}") from exc
    if timeout <= 0:
        raise ConfigurationError("SLACK_TIMEOUT_SECONDS must be positive")

    raw_port = env.get("APP_PORT")
    try:
        port = int(raw_port) if raw_port else DEFAULT_APP_PORT
    except ValueError as exc:
        raise ConfigurationError(f"APP_PORT must be an integer, got {raw_port!r}") from exc
    if not 0 < port < 65536:
        raise ConfigurationError(f"APP_PORT out of range: {port}")

    raw_required = env.get("BASIC_AUTH_REQUIRED")
    auth_required = BASIC_AUTH_REQUIRED if raw_required is None else raw_required.lower() == "true"

    return RelayConfig(
        slack_bot_token=token,
        default_channel=default_channel,
        channel_map=channel_map,
        basic_auth_username=env.get("BASIC_AUTH_USERNAME", ""),
        basic_auth_password=env.get("BASIC_AUTH_PASSWORD", ""),
        basic_auth_required=auth_required,
        slack_api_url=env.get("SLACK_API_URL", SLACK_API_URL),
        slack_timeout_seconds=timeout,
        message_format=message_format,
        alert_color=env.get("ALERT_COLOR", ALERT_COLOR),
        app_host=env.get("APP_HOST") or DEFAULT_APP_HOST,
        app_port=port,
    )
