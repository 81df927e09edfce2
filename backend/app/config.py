"""
Application configuration - all constants and environment variables
"""
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# ========================================
# Secrets
# ========================================
FLASK_SECRET = os.getenv("FLASK_SECRET", "dev")

# ========================================
# HTTP
# ========================================
DEFAULT_CORS_ORIGINS = [
    "http://localhost:8080",
    "http://127.0.0.1:8080",
]


def get_cors_origins():
    """Allowed CORS origins from CORS_ORIGINS (comma separated), else the local dev servers"""
    env_origins = os.getenv("CORS_ORIGINS", "")
    origins = [o.strip() for o in env_origins.split(",") if o.strip()]
    return origins or list(DEFAULT_CORS_ORIGINS)


CORS_ORIGINS = get_cors_origins()

# ========================================
# Logging
# ========================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# ========================================
# Resume export
# ========================================
DEFAULT_TEMPLATE_ID = os.getenv("RESUME_DEFAULT_TEMPLATE", "classic")
MAX_RESUME_CHARS = int(os.getenv("RESUME_MAX_CHARS", "50000"))

# ========================================
# Rate limiting
# ========================================
EXPORT_RATE_LIMIT = os.getenv("RESUME_EXPORT_RATE_LIMIT", "30 per minute")
RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")
