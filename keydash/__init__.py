"""Application package for keydash, an API key management dashboard."""

from __future__ import annotations

import logging

import click
from flask import Flask, current_app
from flask.cli import with_appcontext
from flask_talisman import Talisman

from keydash.config import Config
from keydash.db import ensure_data_dir, init_db
from keydash.extensions import csrf, limiter
from keydash.repositories import create_api_key_repository
from keydash.routes import (
    create_api_keys_blueprint,
    create_dashboard_blueprint,
    create_health_blueprint,
)
from keydash.services import ApiKeyService

VERSION = '0.1.0'

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def get_api_key_repo():
    return current_app.extensions['api_key_repo']


def make_api_key_service(on_success=None, on_error=None) -> ApiKeyService:
    """Build a per-request service bound to the configured store and static user."""
    return ApiKeyService(
        get_api_key_repo(),
        current_app.config['STATIC_USER_ID'],
        on_success=on_success,
        on_error=on_error,
    )


def _configure_security(app: Flask) -> None:
    # Only enforce HTTPS if explicitly enabled (for reverse proxy setups)
    if app.config['FORCE_HTTPS']:
        Talisman(
            app,
            force_https=True,
            strict_transport_security=True,
            content_security_policy={
                'default-src': "'self'",
                'script-src': ["'self'"],
                'style-src': ["'self'"],
                'img-src': ["'self'", 'data:'],
            },
        )
        return

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response


def _init_sqlite_store(app: Flask) -> None:
    database_path = app.config['DATABASE_PATH']
    try:
        ensure_data_dir(database_path)
    except OSError as exc:
        logger.warning(f"Failed to ensure database directory: {exc}")
    init_db(database_path)


@click.command('init-db')
@with_appcontext
def init_db_command():
    """Create the SQLite api_keys table if it does not exist."""
    _init_sqlite_store(current_app)
    click.echo(f"Initialized database at {current_app.config['DATABASE_PATH']}")


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    configure_logging(app.config['LOG_LEVEL'])

    if not app.config.get('SECRET_KEY'):
        logger.warning("SECRET_KEY not set! Using insecure default. Generate a secure key with: python -c 'import secrets; print(secrets.token_hex(32))'")
        app.config['SECRET_KEY'] = 'dev-secret-key-change-in-production'
    app.config.setdefault('RATELIMIT_DEFAULT', f"{app.config['RATE_LIMIT_PER_MINUTE']} per minute")

    csrf.init_app(app)
    limiter.init_app(app)
    _configure_security(app)

    app.extensions['api_key_repo'] = create_api_key_repository(app.config)
    if app.config['STORE_BACKEND'] == 'sqlite':
        _init_sqlite_store(app)
    logger.info(f"Using {app.config['STORE_BACKEND']} store for user {app.config['STATIC_USER_ID']}")

    app.register_blueprint(create_dashboard_blueprint(make_service=make_api_key_service, logger=logger))
    app.register_blueprint(create_api_keys_blueprint(make_service=make_api_key_service, csrf=csrf, logger=logger))
    app.register_blueprint(create_health_blueprint(get_repo=get_api_key_repo, version=VERSION))
    app.cli.add_command(init_db_command)

    return app
