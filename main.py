"""
Board the Z - Onboarding Service

Flask app serving the multi-step onboarding form and the admin pages that
configure it.
"""

import os
import secrets
import tempfile

from flask import Flask, jsonify
from flask_session import Session

from admin import admin_bp
from auth import init_oauth
from auth_routes import auth_bp, init_auth_routes
from boardz import config
from boardz.log import setup_logging
from boardz.web import EXTENSION_KEY
from onboarding.form import onboarding_bp

SERVICE_NAME = 'boardz-onboarding'

logger = setup_logging(SERVICE_NAME, log_level=config.LOG_LEVEL, environment=config.APP_ENV)


def create_app(services=None, config_overrides=None):
    """
    Build the Flask app

    Args:
        services: Prebuilt boardz Services; built lazily from Supabase when omitted
        config_overrides: Extra Flask config applied before extensions start

    Returns:
        Flask application
    """
    app = Flask(__name__)

    # Session configuration
    app.config['SECRET_KEY'] = config.FLASK_SECRET_KEY or secrets.token_hex(32)
    app.config['SESSION_TYPE'] = 'filesystem'
    app.config['SESSION_FILE_DIR'] = os.getenv(
        'SESSION_FILE_DIR', os.path.join(tempfile.gettempdir(), 'boardz-sessions')
    )
    app.config['SESSION_COOKIE_SECURE'] = config.APP_ENV == 'production'
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config.update(config_overrides or {})
    Session(app)

    # Initialize OAuth
    oauth, google = init_oauth(app)
    init_auth_routes(google)

    if services is not None:
        app.extensions[EXTENSION_KEY] = services

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(onboarding_bp)
    app.register_blueprint(admin_bp)

    @app.route('/health', methods=['GET'])
    def health():
        """Health check endpoint"""
        return jsonify({'status': 'healthy', 'service': SERVICE_NAME}), 200

    return app


app = create_app()


if __name__ == '__main__':
    logger.info(f'Starting {SERVICE_NAME} on port {config.PORT}')
    app.run(host='0.0.0.0', port=config.PORT)
