import os

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# --- Model runtime ---
MODEL_BASE_URL = os.getenv("MODEL_BASE_URL", "http://127.0.0.1:11434/v1")
MODEL_NAME = os.getenv("MODEL_NAME", "llama3.2")
MODEL_API_KEY = os.getenv("MODEL_API_KEY", "ollama")
MODEL_TIMEOUT_SECONDS = float(os.getenv("MODEL_TIMEOUT_SECONDS", "300"))
MODEL_TEMPERATURE = float(os.getenv("MODEL_TEMPERATURE", "0.2"))
MODEL_NUM_CTX = int(os.getenv("MODEL_NUM_CTX", "4096"))
MODEL_JSON_REPAIR = os.getenv("MODEL_JSON_REPAIR", "false").lower() in ("1", "true", "yes")

# --- Plan checks ---
CATALOG_VALIDATION_MODES = ("filter", "reject", "off")
CATALOG_VALIDATION = os.getenv("CATALOG_VALIDATION", "filter").lower()
if CATALOG_VALIDATION not in CATALOG_VALIDATION_MODES:
    raise RuntimeError(
        f"CATALOG_VALIDATION must be one of {', '.join(CATALOG_VALIDATION_MODES)}, got '{CATALOG_VALIDATION}'"
    )

# --- Web server ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
WEB_HOST = os.getenv("WEB_HOST", "0.0.0.0")
WEB_PORT = int(os.getenv("WEB_PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
