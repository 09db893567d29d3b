import os

# Configurações globais de ambiente
# APP_HOST, APP_PORT e SLACK_TIMEOUT_SECONDS são lidos e validados em config.load_config
DEFAULT_APP_HOST = "0.0.0.0"
DEFAULT_APP_PORT = 8080
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

SERVICE_NAME = "slack-error-relay"
WEBHOOK_PATH = "/webhook"

# Slack Web API
SLACK_API_URL = os.getenv("SLACK_API_URL", "https://slack.com/api/chat.postMessage")
DEFAULT_SLACK_TIMEOUT_SECONDS = 10.0
SLACK_MESSAGE_FORMAT = os.getenv("SLACK_MESSAGE_FORMAT", "attachment").strip().lower()
MESSAGE_FORMATS = ("attachment", "blocks")

# Aparência da notificação
ALERT_COLOR = os.getenv("ALERT_COLOR", "#ff0000")
ALERT_TITLE_TEMPLATE = "[Alert] New error reported in service: {service}"
DETAILS_BUTTON_TEXT = "View Details"
DETAILS_BUTTON_STYLE = "danger"

# Mapa projeto -> canal: "proj-a:C111,proj-b:C222"
CHANNEL_MAP_PAIR_DELIMITER = ","
CHANNEL_MAP_KV_DELIMITER = ":"

# Basic auth do endpoint de entrada
BASIC_AUTH_REALM = "Restricted"
BASIC_AUTH_REQUIRED = os.getenv("BASIC_AUTH_REQUIRED", "true").lower() == "true"

# Limite do payload registrado em DEBUG
DEBUG_PAYLOAD_PREVIEW = 500
