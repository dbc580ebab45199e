"""
Configuration Module

Defines the main configuration class. Follows the 'Fail Fast' pattern for
secrets: without SECRET_KEY the application does not even start. A missing
webhook URL is different: the app starts and refuses submissions instead.
"""

import os
from dotenv import load_dotenv

# Loads variables from the .env file
load_dotenv()


def _csv(value):
    return [item.strip() for item in value.split(',') if item.strip()] if value else []


class Config:
    """
    Base configuration class of the application.
    """

    # === CRITICAL SECURITY (Fail Fast) ===
    SECRET_KEY = os.environ.get('SECRET_KEY')
    if not SECRET_KEY:
        raise ValueError("CRITICAL ERROR: 'SECRET_KEY' not found in .env. The application cannot start insecure.")

    # === WEBHOOK (Power Automate / spreadsheet) ===
    REGISTRATION_WEBHOOK_URL = os.environ.get('REGISTRATION_WEBHOOK_URL', '')
    WEBHOOK_TIMEOUT = float(os.environ.get('WEBHOOK_TIMEOUT', '30'))

    # === FORM RULES ===
    # None means the defaults in core/constants.py
    VALIDATION_RULES = None
    GRADE_CENTERS = None

    # Seconds before error/success banners disappear from the page
    MESSAGE_DISMISS_SECONDS = int(os.environ.get('MESSAGE_DISMISS_SECONDS', '5'))

    # === SECURITY (receiving side) ===
    RATE_LIMIT_SUBMIT = os.environ.get('RATE_LIMIT_SUBMIT', '10 per minute')
    # Advisory only: the webhook enforces its own CORS policy
    CORS_ALLOWED_ORIGINS = _csv(os.environ.get('CORS_ALLOWED_ORIGINS'))

    # === FLASK ===
    DEBUG = os.environ.get('FLASK_DEBUG', 'False').lower() in ('true', '1')
