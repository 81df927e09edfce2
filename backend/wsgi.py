import logging

from flask import Flask

# --- Import your API blueprints ---
from app.routes.health import health_bp
from app.routes.resume_export import resume_export_bp
from app.extensions import init_app_extensions
from app.logging_config import configure_logging


def create_app(config_overrides: dict = None) -> Flask:
    configure_logging()

    app = Flask(__name__)
    if config_overrides:
        app.config.update(config_overrides)

    init_app_extensions(app)

    # --- Register API blueprints ---
    app.register_blueprint(health_bp)
    app.register_blueprint(resume_export_bp)

    logging.getLogger(__name__).info("App initialized", extra={
        'blueprints': ','.join(sorted(app.blueprints)),
    })
    return app


# Gunicorn entrypoint
app = create_app()
