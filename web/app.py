"""
Flask application factory for the SecureFiles gateway
"""
import logging
from urllib.parse import urlencode

from flask import Flask, redirect, request, session

from securefiles.auth import AuthGate, Identity
from securefiles.exceptions import AccessDenied, ConfigError, SecureFilesError
from securefiles.mime import MagicSniffer, MimeResolver
from securefiles.paths import MediaRoot
from securefiles.streaming import FileStreamer
from .config import DevelopmentConfig


def session_authenticator(req):
    """Default host hook: the caller is logged in if the session names a user"""
    user_id = session.get('user_id')
    if user_id is None:
        return None
    return Identity(subject=str(user_id))


def load_media_root(app):
    """
    Validate BASE_PATH once at startup

    Returns:
        MediaRoot, or None if the setting is missing or unusable. Requests
        then fail with ConfigError until the operator fixes the setting.
    """
    try:
        root = MediaRoot.from_config(app.config.get('BASE_PATH'))
    except ConfigError as e:
        app.logger.error("SecureFiles misconfigured: %s", e.detail)
        return None
    app.logger.info("Serving files from %s", root.path)
    return root


def create_app(config_class=DevelopmentConfig):
    """
    Create and configure the Flask application

    Args:
        config_class: Configuration class to use (DevelopmentConfig, TestingConfig
            or ProductionConfig)

    Returns:
        Configured Flask application
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.getLogger('securefiles').setLevel(app.config['LOG_LEVEL'])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Process scoped, read-only collaborators for the files blueprint
    sniffer = app.config.get('MIME_SNIFFER') or MagicSniffer()
    app.extensions['securefiles'] = {
        'media_root': load_media_root(app),
        'auth_gate': AuthGate(app.config.get('AUTHENTICATOR') or session_authenticator),
        'mime_resolver': MimeResolver(sniffer),
        'streamer': FileStreamer(app.config['STREAM_CHUNK_SIZE']),
    }

    # Register blueprints
    from .routes.files import files_bp

    app.register_blueprint(files_bp)

    # Error handlers: generic messages only, details stay in the log
    @app.errorhandler(AccessDenied)
    def access_denied(e):
        """Send unauthenticated callers to the host login page when configured"""
        login_url = app.config.get('LOGIN_URL')
        if login_url:
            target = request.full_path.rstrip('?')
            return redirect(f"{login_url}?{urlencode({'next': target})}")
        return _error_response(e)

    @app.errorhandler(SecureFilesError)
    def securefiles_error(e):
        """Render InvalidPath, NotFound and ConfigError"""
        if isinstance(e, ConfigError):
            app.logger.error("Configuration error: %s", e.detail)
        return _error_response(e)

    return app


def _error_response(e):
    return e.public_message, e.status_code, {
        'Content-Type': 'text/plain; charset=utf-8',
        'Cache-Control': 'no-store',
        'X-Content-Type-Options': 'nosniff',
    }
