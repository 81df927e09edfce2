"""
Flask extensions and initialization
"""
import logging

from flask import Flask
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from app.config import CORS_ORIGINS, FLASK_SECRET, RATELIMIT_STORAGE_URI
from app.utils.exceptions import register_error_handlers

logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=["200 per day", "50 per hour"],
    storage_uri=RATELIMIT_STORAGE_URI,
    strategy="fixed-window",
    headers_enabled=True  # Include rate limit headers in response
)


def init_app_extensions(app: Flask):
    """Initializes Flask extensions like CORS, Rate Limiting, and error handlers."""
    limiter.init_app(app)
    app.limiter = limiter

    cors_config = {
        "origins": CORS_ORIGINS,
        "methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["Content-Type", "Authorization", "X-Requested-With"],
        "max_age": 3600,
        "expose_headers": ["Content-Type", "Content-Disposition"]
    }
    CORS(app, resources={r"/api/*": cors_config}, automatic_options=True)
    logger.debug("CORS configured", extra={'origins': ','.join(CORS_ORIGINS)})

    app.secret_key = FLASK_SECRET
    register_error_handlers(app)
