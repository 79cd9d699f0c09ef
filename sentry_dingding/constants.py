import os

# Configurações globais de ambiente
DINGDING_WEBHOOK_URL = os.getenv("DINGDING_WEBHOOK_URL")
APP_PORT = int(os.getenv("APP_PORT", "5001"))
DEBUG_MODE = os.getenv("DEBUG_MODE", "False").lower() == "true"

# Timeout do POST para o robô do DingDing (segundos)
DINGDING_TIMEOUT_SECONDS = float(os.getenv("DINGDING_TIMEOUT_SECONDS", "10"))

# CORS aplicado a todas as respostas
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

# Envelope do DingDing
DINGDING_MSGTYPE = "markdown"
DINGDING_MESSAGE_TITLE = "🚨 Sentry 告警"

# Textos fixos da mensagem
MESSAGE_HEADING = "## 🚨 Sentry 告警通知"
FALLBACK_MESSAGE = "## 🚨 Sentry 告警\n\n**错误**: 无法解析错误数据"

# Defaults por campo
DEFAULT_PROJECT = "Unknown"
DEFAULT_LEVEL = "info"
DEFAULT_ENVIRONMENT = "production"
DEFAULT_TITLE = "未知错误"

# Tags exibidas no bloco de labels (ordem de chegada é preservada)
IMPORTANT_TAGS = ["release", "version", "browser", "os", "device", "transaction", "url"]

# Quantidade de frames do final do stacktrace
STACK_FRAMES_LIMIT = 3

SHAPE_EVENT = "event"
SHAPE_ACTION = "action"

# Respostas do gateway
RESPONSE_MESSAGES = {
    "method_not_allowed": "Method Not Allowed",
    "not_configured": "DingDing webhook URL not configured",
    "failed": "Failed to process webhook",
    "success": "Message sent to DingDing successfully",
}
