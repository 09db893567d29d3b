import hmac
import logging
from typing import Optional

from flask import Flask, request

from .config import RelayConfig, load_config
from .constants import BASIC_AUTH_REALM, SERVICE_NAME, WEBHOOK_PATH
from .errors import DecodeError
from .models import decode_payload
from .services import Dispatcher

logger = logging.getLogger(__name__)

# OPTIONS explícito desliga a resposta automática do Flask; auth e 405 valem para todos
ALLOWED_METHODS = ['GET', 'HEAD', 'OPTIONS', 'POST', 'PUT', 'PATCH', 'DELETE']


def _credentials_match(config: RelayConfig) -> bool:
    auth = request.authorization
    if auth is None or (auth.type or '').lower() != 'basic':
        return False
    user_ok = hmac.compare_digest((auth.username or '').encode(), config.basic_auth_username.encode())
    pass_ok = hmac.compare_digest((auth.password or '').encode(), config.basic_auth_password.encode())
    return user_ok and pass_ok


def create_app(config: Optional[RelayConfig] = None, dispatcher: Optional[Dispatcher] = None):
    if config is None:
        config = load_config()
    if dispatcher is None:
        dispatcher = Dispatcher(config)

    app = Flask(__name__)

    if config.basic_auth_required and not config.basic_auth_configured:
        logger.error("Basic auth credentials are not set (BASIC_AUTH_USERNAME/BASIC_AUTH_PASSWORD); "
                     "all webhook requests will be rejected")

    @app.route('/health', methods=['GET'])
    def health():
        return {'status': 'ok', 'service': SERVICE_NAME}, 200

    @app.route(WEBHOOK_PATH, methods=ALLOWED_METHODS)
    def webhook():
        # Basic auth: sem credenciais no servidor, recusa tudo
        if config.basic_auth_required:
            if not config.basic_auth_configured:
                logger.error("Basic auth credentials are not set in environment variables")
                return 'Internal Server Error', 500
            if not _credentials_match(config):
                logger.warning(f"Unauthorized webhook request from {request.remote_addr}")
                return 'Unauthorized', 401, {'WWW-Authenticate': f'Basic realm="{BASIC_AUTH_REALM}"'}

        if request.method != 'POST':
            return 'Only POST method is allowed', 405, {'Allow': 'POST'}

        try:
            payload = decode_payload(request.get_data())
        except DecodeError as e:
            logger.warning(f"Rejected webhook with invalid body: {e}")
            return f'Error decoding JSON: {e}', 400

        logger.debug(
            f"Received webhook: project={payload.group_info.project_id} "
            f"service={payload.event_info.service} type={payload.exception_info.type}"
        )

        # Falhas de entrega são só registradas; o chamador sempre recebe 200
        dispatcher.notify(payload)
        return '', 200

    return app
