"""
Flask configuration for the SecureFiles gateway
"""
import os


class Config:
    """Base configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-CHANGE-IN-PRODUCTION'

    # Media root; validated and canonicalized once when the app is created
    BASE_PATH = os.environ.get('SECUREFILES_BASE_PATH')

    # Where unauthenticated callers are sent (None = plain 403)
    LOGIN_URL = os.environ.get('SECUREFILES_LOGIN_URL')

    # Host authentication hook: callable(request) -> identity or None.
    # None = logged in when the Flask session holds a user_id.
    AUTHENTICATOR = None

    # Content sniffer for unknown extensions (None = libmagic)
    MIME_SNIFFER = None

    STREAM_CHUNK_SIZE = int(os.environ.get('SECUREFILES_CHUNK_SIZE', 64 * 1024))

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Security
    SESSION_COOKIE_SECURE = True  # HTTPS only
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    SESSION_COOKIE_SECURE = False  # Allow HTTP in dev
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    SESSION_COOKIE_SECURE = False


class ProductionConfig(Config):
    """Production configuration (pass an instance: create_app(ProductionConfig()))"""
    DEBUG = False

    @property
    def SECRET_KEY(self):
        """Force SECRET_KEY from environment in production"""
        key = os.environ.get('SECRET_KEY')
        if not key:
            raise ValueError("SECRET_KEY must be set in production!")
        return key


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
