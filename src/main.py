import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from flask import Flask, request
from flask_cors import CORS
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from src.config import Config
from src.extensions import db, migrate, mail
from inventory.components import init_inventory
from inventory.exceptions import InventoryError, StorageUnavailableError
from routes import register_routes
from routes.responses import error_response, success_response

logger = logging.getLogger("inventory")


def configure_logging(level="INFO"):
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def verify_database():
    """Fail fast when the configured database cannot be reached."""
    try:
        with db.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise StorageUnavailableError(f"Database connection failed: {exc}", retryable=False) from exc
    logger.info("Database connected successfully")


def register_error_handlers(app):
    @app.errorhandler(StorageUnavailableError)
    def handle_storage_unavailable(error):
        logger.error("Storage unavailable: %s", error.message)
        response, status = error_response(error.message, 503)
        if error.retryable:
            response.headers["Retry-After"] = "1"
        return response, status

    @app.errorhandler(InventoryError)
    def handle_inventory_error(error):
        logger.info("%s: %s", error.code, error.message)
        return error_response(error.message, 400)

    @app.errorhandler(404)
    def handle_not_found(error):
        return error_response("Not Found", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return error_response("Method Not Allowed", 405)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        if isinstance(error, HTTPException):
            return error_response(error.description, error.code)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("Internal Server Error", 500)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app.config["LOG_LEVEL"])

    # Enable CORS for all routes
    CORS(app, origins="*", send_wildcard=True, methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"], allow_headers=["Content-Type"])

    # initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    mail.init_app(app)

    # Import all models within app context to resolve relationships
    with app.app_context():
        import models  # noqa: F401
        if app.config["VERIFY_DATABASE_ON_STARTUP"]:
            verify_database()

    init_inventory(app)
    register_routes(app)
    register_error_handlers(app)

    @app.before_request
    def log_request():
        logger.info("%s %s", request.method, request.path)

    @app.get("/health")
    def health():
        return success_response({"status": "ok"})

    return app


if __name__ == "__main__":
    app = create_app()
    logger.info("Inventory Management API Server running on port %s", app.config["PORT"])
    app.run(host="0.0.0.0", port=app.config["PORT"], debug=app.config["DEBUG"])
