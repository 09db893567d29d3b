import logging
from types import MappingProxyType
from typing import Mapping

from .config import RelayConfig
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class ChannelResolver:
    """Resolve o canal do Slack para um projeto, com fallback para o canal padrão."""

    def __init__(self, channel_map: Mapping[str, str], default_channel: str):
        if not default_channel:
            raise ConfigurationError("default channel must not be empty")
        self._map = MappingProxyType(dict(channel_map))
        self.default_channel = default_channel

    @classmethod
    def from_config(cls, config: RelayConfig) -> "ChannelResolver":
        return cls(config.channel_map, config.default_channel)

    def resolve(self, project_id: str) -> str:
        channel = self._map.get(project_id)
        if channel is None:
            logger.debug(f"Projeto '{project_id}' sem mapeamento, usando canal padrão {self.default_channel}")
            return self.default_channel
        return channel
