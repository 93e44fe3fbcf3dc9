"""
Springz Admin Service
Flask application factory
"""
import os
import logging
from flask import Flask
from flask_cors import CORS

from .extensions import db, migrate
from .config import get_config, validate_config
from .utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config_name: str = None) -> Flask:
    """
    Application factory for creating Flask app instances.

    Args:
        config_name: Configuration environment (development, production, testing)

    Returns:
        Configured Flask application
    """
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    # Setup logging before anything else
    setup_logging()

    validate_config(config_name)

    app = Flask(__name__)
    app.config.from_object(get_config(config_name))

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Admin dashboard frontend origins
    CORS(
        app,
        resources={r'/api/*': {'origins': app.config['CORS_ORIGINS']}},
        supports_credentials=True,
        allow_headers=['Content-Type', 'Authorization']
    )

    # Register blueprints
    register_blueprints(app)

    # Register CLI commands
    from .commands import init_app as init_commands
    init_commands(app)

    # Register error handlers
    register_error_handlers(app)

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return {'status': 'healthy', 'service': 'springz-admin'}

    logger.debug(f'App created with config {config_name}')
    return app


def register_blueprints(app: Flask) -> None:
    """Register all API blueprints."""
    # Admin analytics and dashboard statistics
    from .api.admin_analytics import admin_analytics_bp
    app.register_blueprint(admin_analytics_bp, url_prefix='/api/admin')


def register_error_handlers(app: Flask) -> None:
    """Register error handlers. 500 bodies never carry exception details."""

    @app.errorhandler(400)
    def bad_request(error):
        return {'error': {'message': 'Bad request', 'code': 'INVALID_REQUEST'}}, 400

    @app.errorhandler(404)
    def not_found(error):
        return {'error': {'message': 'Not found', 'code': 'NOT_FOUND'}}, 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f'Unhandled error: {error}')
        return {'error': {'message': 'Internal server error', 'code': 'INTERNAL_ERROR'}}, 500
