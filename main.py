import logging
import sys

from slack_relay.config import load_config
from slack_relay.constants import DEBUG_MODE, LOG_LEVEL
from slack_relay.controller import create_app
from slack_relay.errors import ConfigurationError
from slack_relay.utils import mask_secret, setup_logging

logger = logging.getLogger("slack_relay")


def main():
    setup_logging(LOG_LEVEL, debug=DEBUG_MODE)
    try:
        config = load_config()
    except ConfigurationError as exc:
        # configuração inválida: não sobe o servidor
        logger.critical(f"Invalid configuration: {exc}")
        sys.exit(1)

    logger.info(
        f"Loaded {len(config.channel_map)} project mapping(s), default channel {config.default_channel}, "
        f"token {mask_secret(config.slack_bot_token)}, format {config.message_format}"
    )
    app = create_app(config)
    logger.info(f"Server is listening on port {config.app_port}...")
    app.run(host=config.app_host, port=config.app_port, debug=DEBUG_MODE, threaded=True, use_reloader=False)


if __name__ == '__main__':
    main()
