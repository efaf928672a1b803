"""All magic values live here — no inline literals anywhere else."""

# Image preparation
MAX_IMAGE_EDGE = 1024
JPEG_QUALITY = 80
OUTPUT_MEDIA_TYPE = "image/jpeg"
OUTPUT_FORMAT = "JPEG"
DEFAULT_SOURCE_MEDIA_TYPE = "image/jpeg"

# Backends
BACKEND_GEMINI = "gemini"
BACKEND_CLAUDE = "claude"
BACKENDS = (BACKEND_GEMINI, BACKEND_CLAUDE)
GEMINI_DEFAULT_MODEL = "gemini-2.5-flash"
CLAUDE_DEFAULT_MODEL = "claude-sonnet-4-20250514"
CLAUDE_MAX_TOKENS = 1024
ANALYSIS_TIMEOUT: int = 60

# JSON fence markers stripped from model output, in removal order
FENCE_MARKERS = ("```json", "```")

# Telegram typing indicator re-send interval (seconds).
# The TYPING action expires after ~5 s, so we refresh every 4 s.
TELEGRAM_TYPING_INTERVAL: float = 4.0

# HTTP backend
API_ROUTE = "/api/analyzeImage"
HEALTH_ROUTE = "/healthz"
DEFAULT_API_HOST = "0.0.0.0"
DEFAULT_API_PORT = 8000

# Errors (also the `error` field of HTTP responses)
ERR_NO_IMAGES = "No images provided"
ERR_INVALID_BODY = "Invalid request body"
ERR_MISSING_API_KEY = "Missing API key"
ERR_EMPTY_RESPONSE = "Empty response from model"
ERR_TIMEOUT = "Analysis timed out after %ss"
ERR_NOT_JSON = "Model response is not valid JSON: %s"
ERR_NOT_OBJECT = "Model response must be a JSON object"
ERR_DECODE = "Could not read image: %s"
ERR_EMPTY_IMAGE = "Image is empty"
ERR_UNEXPECTED = "Unexpected error, please try again"

# Log messages
MSG_API_STARTING = "Starting analysis API on %s:%s (backend: %s)"
MSG_BOT_STARTING = "Starting Telegram bot… (backend: %s)"
MSG_BLOCKED_CHAT = "Blocked update from chat_id: %s"
MSG_ANALYSIS_START = "→ %s (%s) with %d image(s)"
MSG_ANALYSIS_DONE = "✓ Analysis done (%.1fs): %s"
MSG_ANALYSIS_FAILED = "✗ Analysis failed: %s"
MSG_PREPARED = "Prepared image %sx%s → %sx%s (%d bytes)"
MSG_SEND_FAIL = "Telegram send_message failed: %s"

# Telegram replies
CMD_ANALYZE = "analyze"
CMD_NEW = "new"
CMD_REMOVE = "remove"
CMD_STATUS = "status"
CMD_HELP = "help"
MSG_IMAGE_QUEUED = "Got it — %d image(s) ready. Send more or /analyze."
MSG_IMAGE_READ_FAILED = "Could not download that image — please try again."
MSG_NO_IMAGES_YET = "Send a photo of the nutrition label first."
MSG_BUSY = "Still analyzing — hang on."
MSG_ANALYSIS_ERROR = "Analysis failed: %s\nSend the photos again to retry."
MSG_SESSION_RESET = "Cleared — send a new label photo."
MSG_REMOVE_USAGE = "Usage: /remove <number>"
MSG_REMOVED = "Removed image %d — %d left."
MSG_REMOVE_OUT_OF_RANGE = "No image number %d."
MSG_FINISH_FIRST = "Send /new to start another label."
MSG_STATUS = (
    "Status\n"
    "  Backend    : %s\n"
    "  Model      : %s\n"
    "  Step       : %s\n"
    "  Images     : %d\n"
    "  Last error : %s\n"
)
MSG_HELP = (
    "Nutrition label decoder\n"
    "\n"
    "  Photo             — add a label photo (front or back, several allowed)\n"
    "  /analyze          — analyze the queued photos\n"
    "  /remove <n>       — drop queued photo n\n"
    "  /new              — start over\n"
    "  /status           — current backend and queue\n"
    "  /help             — show this message\n"
)

# Result card
VERDICT_ICONS = {"green": "🟢", "yellow": "🟡", "red": "🔴"}
VERDICT_ICON_DEFAULT = "⚪"
HIGHLIGHT_ICONS = {"good": "✅", "bad": "⚠️"}
HIGHLIGHT_ICON_DEFAULT = "•"
CARD_HIGHLIGHTS = "Highlights"
CARD_TRANSLATIONS = "Ingredients, decoded"
CARD_ADVICE = "Advice"
CARD_TARGET = "Good for"
CARD_WARNING = "Careful if"
CARD_ACTION = "How to eat"
CARD_UNKNOWN_PRODUCT = "Unknown product"
