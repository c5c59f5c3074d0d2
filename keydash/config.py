"""Centralized configuration for keydash."""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Base configuration loaded from environment variables."""
    SECRET_KEY = os.getenv('SECRET_KEY')
    DATABASE_PATH = os.getenv('DATABASE_PATH', '/data/keydash.db')
    STORE_BACKEND = os.getenv('STORE_BACKEND', 'sqlite').lower()
    SUPABASE_URL = os.getenv('SUPABASE_URL', '')
    SUPABASE_KEY = os.getenv('SUPABASE_KEY', '')
    STORE_TIMEOUT_SECONDS = float(os.getenv('STORE_TIMEOUT_SECONDS', '10'))
    STATIC_USER_ID = os.getenv('STATIC_USER_ID', 'dev-local')
    RATE_LIMIT_PER_MINUTE = int(os.getenv('RATE_LIMIT_PER_MINUTE', '60'))
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()
    SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', 'false').lower() == 'true'
    SESSION_COOKIE_HTTPONLY = os.getenv('SESSION_COOKIE_HTTPONLY', 'true').lower() == 'true'
    SESSION_COOKIE_SAMESITE = os.getenv('SESSION_COOKIE_SAMESITE', 'Lax')
    WTF_CSRF_TIME_LIMIT = None
    FORCE_HTTPS = os.getenv('FORCE_HTTPS', 'false').lower() == 'true'
    PORT = int(os.getenv('PORT', '5000'))


class DevelopmentConfig(Config):
    DEBUG = True


class ProductionConfig(Config):
    DEBUG = False


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key-for-testing'
    STORE_BACKEND = 'sqlite'
    WTF_CSRF_ENABLED = False
    RATELIMIT_ENABLED = False
