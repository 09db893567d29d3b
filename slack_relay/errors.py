from typing import Optional


class RelayError(Exception):
    """Erro base do relay de erros -> Slack."""


class DecodeError(RelayError):
    """Corpo do webhook de entrada inválido (JSON malformado ou formato inesperado)."""


class ConfigurationError(RelayError):
    """Configuração ausente ou malformada (token, canal padrão, mapa de canais)."""


class DeliveryError(RelayError):
    """Falha ao entregar a notificação ao Slack."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(DeliveryError):
    """Falha de rede ou resposta ilegível do Slack."""


class ProviderRejection(DeliveryError):
    """O Slack respondeu, mas com ok=false."""

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(f"Slack rejected the message: {reason}", status_code=status_code)
        self.reason = reason
