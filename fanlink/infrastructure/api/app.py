"""Flask application factory."""

from flask import Flask, request
from flask_cors import CORS

from fanlink.config import configure_stdlib_logging, get_logger, settings
from fanlink.infrastructure.api.routes import resolver_bp
from fanlink.infrastructure.container import ServiceContainer

logger = get_logger(__name__)


def create_app(container: ServiceContainer | None = None) -> Flask:
    """Create the HTTP application.

    Args:
        container: Wiring for the use cases; built from settings when omitted
    """
    app = Flask(__name__)
    CORS(app)
    configure_stdlib_logging()

    app.extensions["fanlink"] = container or ServiceContainer.from_settings()
    app.register_blueprint(resolver_bp)

    @app.before_request
    def log_request():
        logger.info(f"{request.method} {request.path}")

    @app.after_request
    def log_response(response):
        logger.info(f"{request.method} {request.path} - {response.status_code}")
        return response

    logger.info(
        "Flask app initialized",
        spotify_configured=bool(settings.credentials.spotify_client_id),
    )
    return app
