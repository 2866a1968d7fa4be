# puzzle_hub/config.py
import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # Database configuration
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///puzzle_hub.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Session settings
    SESSION_COOKIE_SECURE = False  # True in production with HTTPS
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'

    # Rate limiting (flask-limiter)
    RATELIMIT_DEFAULT = "200 per hour; 50 per minute"
    RATELIMIT_STORAGE_URI = os.environ.get('RATELIMIT_STORAGE_URI', 'memory://')
    YOHAKU_GENERATE_LIMIT = os.environ.get('YOHAKU_GENERATE_LIMIT', '30 per minute')

    # Yohaku
    YOHAKU_SESSION_CAP = int(os.environ.get('YOHAKU_SESSION_CAP', '500'))
    YOHAKU_TIME_BONUS_PER_SECOND = 5
    YOHAKU_MAX_SIZE = int(os.environ.get('YOHAKU_MAX_SIZE', '6'))

    LOG_DIR = os.environ.get('LOG_DIR', 'logs')

class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_ECHO = True  # Log SQL queries

class ProductionConfig(Config):
    SESSION_COOKIE_SECURE = True

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    RATELIMIT_ENABLED = False
    YOHAKU_SESSION_CAP = 5
