"""Configuration module for Flask application."""
import os
from decimal import Decimal
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    # Flask
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = os.getenv('FLASK_DEBUG', '1') == '1'
    ENV = os.getenv('FLASK_ENV', 'development')
    TESTING = False

    # Preferred URL scheme (for url_for with _external=True)
    PREFERRED_URL_SCHEME = os.getenv('PREFERRED_URL_SCHEME', 'http')

    # API metadata (shown on the index route)
    API_NAME = os.getenv('API_NAME', 'Ecommerce Store API')
    API_VERSION = os.getenv('API_VERSION', '1.0.0')

    # Discount codes: every Nth order unlocks one code
    DISCOUNT_MILESTONE = int(os.getenv('NTH_ORDER', '5'))
    DISCOUNT_RATE = Decimal(os.getenv('DISCOUNT_RATE', '0.10'))
    DISCOUNT_CODE_PREFIX = os.getenv('DISCOUNT_CODE_PREFIX', 'DISCOUNT')

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # Error tracking (production only)
    SENTRY_DSN = os.getenv('SENTRY_DSN')


class TestingConfig(Config):
    """Configuration used by the test suite."""

    TESTING = True
    DEBUG = False
    ENV = 'testing'
    DISCOUNT_MILESTONE = 5
    DISCOUNT_RATE = Decimal('0.10')
    DISCOUNT_CODE_PREFIX = 'DISCOUNT'
    SENTRY_DSN = None
