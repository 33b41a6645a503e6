"""
Configuration settings for the Campus Portal backend
"""

import os
import tempfile

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration class"""

    APP_ENV = os.environ.get('APP_ENV', 'development')
    DEBUG = False
    TESTING = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'campus-portal-secret-key'

    # Token settings
    JWT_SECRET = os.environ.get('JWT_SECRET') or SECRET_KEY
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_HOURS = int(os.environ.get('JWT_EXPIRES_HOURS', 24 * 7))

    # Database settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///campus_portal.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Frontend origin allowed for CORS and socket connections
    FRONTEND_URL = os.environ.get('FRONTEND_URL', 'http://localhost:5173')

    # File upload settings
    MAX_CONTENT_LENGTH = 16 * 1024 * 1024  # 16MB max request size
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER', 'uploads')
    ALLOWED_EXTENSIONS = {'pdf', 'doc', 'docx', 'txt', 'zip', 'png', 'jpg', 'jpeg', 'ppt', 'pptx'}
    MAX_LEAVE_ATTACHMENTS = 5

    # Application settings
    ATTENDANCE_THRESHOLD = 75  # Minimum attendance percentage
    ASSIGNMENT_LIST_LIMIT = 50
    DEMO_ATTENDANCE_LIMIT = 10

    # Outbound mail
    MAIL_SERVER = os.environ.get('EMAIL_HOST', 'localhost')
    MAIL_PORT = int(os.environ.get('EMAIL_PORT', 587))
    MAIL_USE_TLS = _env_bool('EMAIL_USE_TLS', True)
    MAIL_USERNAME = os.environ.get('EMAIL_USER')
    MAIL_PASSWORD = os.environ.get('EMAIL_PASS')
    MAIL_DEFAULT_SENDER = ('College Digital Portal', os.environ.get('EMAIL_USER') or 'noreply@localhost')
    MAIL_SUPPRESS_SEND = _env_bool('MAIL_SUPPRESS_SEND', False)


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    APP_ENV = 'production'


class TestingConfig(Config):
    """Configuration used by the test suite"""

    APP_ENV = 'testing'
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET = 'test-jwt-secret'
    UPLOAD_FOLDER = os.path.join(tempfile.gettempdir(), 'campus_portal_test_uploads')
    MAIL_SUPPRESS_SEND = True
    MAIL_DEFAULT_SENDER = 'noreply@portal.test'


config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
