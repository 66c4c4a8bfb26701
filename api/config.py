"""Application configuration and constants."""
import os


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float_env(name: str, default: float) -> float:
    """Parse float from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# Content management backend
CMS_API_ENDPOINT = os.environ.get("CMS_API_ENDPOINT", "https://cms.peerlearning.com")
CMS_AUTH_TOKEN = os.environ.get("CMS_AUTH_TOKEN", "")

# Model provider
OPENROUTER_API_KEY = os.environ.get("OPENROUTER_API_KEY", "")
OPENROUTER_API_URL = os.environ.get(
    "OPENROUTER_API_URL", "https://openrouter.ai/api/v1/chat/completions"
)
LLM_MODEL = os.environ.get("LLM_MODEL", "google/gemini-2.0-flash-001")
LLM_MAX_TOKENS = _parse_int_env("LLM_MAX_TOKENS", 4000)
APP_REFERER = os.environ.get("APP_REFERER", "http://localhost:8000")
APP_TITLE = os.environ.get("APP_TITLE", "Test Viewer")

# Outbound HTTP
HTTP_TIMEOUT_SECONDS = _parse_float_env("HTTP_TIMEOUT_SECONDS", 60.0)

# Viewer sessions kept in memory before the oldest is evicted
VIEWER_SESSION_LIMIT = _parse_int_env("VIEWER_SESSION_LIMIT", 100)
