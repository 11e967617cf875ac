import logging
import os
from typing import Any, Dict, Optional

import click
from dotenv import load_dotenv
from flask import Flask
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .core.api_utils import error_response
from .core.config import (
    get_log_dir,
    get_log_json,
    get_log_level,
    get_log_to_file,
    get_rate_limit_enabled,
    get_secret_key,
    get_sql_echo,
    is_testing,
    log_app_config,
)
from .core.limiter_config import limiter
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    # Only load from .env when DATABASE_URL is not already defined by the environment
    if not os.getenv("DATABASE_URL"):
        load_dotenv()

    app = Flask(__name__)
    app.config["SECRET_KEY"] = get_secret_key()
    app.config["TESTING"] = is_testing()
    app.json.sort_keys = False
    # Read by limiter.init_app
    app.config["RATELIMIT_ENABLED"] = get_rate_limit_enabled()
    if config:
        app.config.update(config)

    setup_logging(
        app,
        log_level=get_log_level(),
        enable_sql_echo=get_sql_echo(),
        log_to_file=get_log_to_file() and not app.config["TESTING"],
        use_json_format=get_log_json(),
        log_dir=get_log_dir(),
    )
    log_app_config()

    limiter.init_app(app)

    # Import blueprints after logging so their module loggers are configured
    from .controllers.book_controller import books_bp
    from .controllers.health_controller import health_bp

    app.register_blueprint(books_bp)
    app.register_blueprint(health_bp)

    _register_error_handlers(app)
    _register_cli_commands(app)

    from .db.session import create_tables

    try:
        create_tables()
        logger.info("Database tables ensured")
    except SQLAlchemyError as e:
        # The app still starts; /health reports the database as disconnected
        logger.error(
            "Error creating tables",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )

    return app


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_exception(error: Exception):
        logger.error(
            "Internal server error",
            extra={"context": {"error": str(error)}},
            exc_info=error,
        )
        return error_response("An unexpected error occurred", 500)


def _register_cli_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db_command():
        """Create the catalog tables."""
        from .db.session import create_tables

        create_tables()
        click.echo("Database tables created.")

    @app.cli.command("seed-books")
    def seed_books_command():
        """Add the sample catalog, skipping books that already exist."""
        from .db.seed import seed_books

        created = seed_books()
        click.echo(f"Seeded {created} book(s).")
