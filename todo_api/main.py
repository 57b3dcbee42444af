"""Flask application entry point."""

import logging
import sqlite3

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import settings
from .db import get_core, get_schema_version, init_db
from .exceptions import (
    AuthenticationError,
    InvalidCredentialsError,
    ResourceNotFound,
    TodoApiError,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Create Flask app
app = Flask(__name__)

# CORS configuration; browsers may only read x-auth if it is exposed
CORS(app, origins=settings.cors_origins, expose_headers=["x-auth"])


def initialize_database():
    """Initialize database on app startup."""
    try:
        init_db()
        version = get_schema_version(get_core().connection)
        logger.info(
            f"Database initialized at {settings.database_path} "
            f"(schema {version}, {settings.environment})"
        )
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


with app.app_context():
    initialize_database()


# Error handlers
def _error_response(error: TodoApiError, status: int):
    response = {
        "error": {
            "type": error.__class__.__name__,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), status


@app.errorhandler(ResourceNotFound)
def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _error_response(error, 404)


@app.errorhandler(ValidationError)
def handle_validation_error(error):
    """Handle ValidationError exceptions, including DuplicateKeyError."""
    return _error_response(error, 400)


@app.errorhandler(InvalidCredentialsError)
def handle_invalid_credentials(error):
    """Handle failed logins."""
    return _error_response(error, 400)


@app.errorhandler(AuthenticationError)
def handle_authentication_error(error):
    """Handle missing or invalid session tokens."""
    return _error_response(error, 401)


@app.errorhandler(TodoApiError)
def handle_todo_api_error(error):
    """Handle generic TodoApiError exceptions (DatabaseError among them)."""
    logger.error(f"{error.__class__.__name__}: {error.message}", exc_info=error)
    return _error_response(error, 500)


@app.errorhandler(sqlite3.Error)
def handle_database_error(error):
    """Handle store failures that escaped the operations layer."""
    logger.error(f"Database error: {error}")
    return jsonify({
        "error": {
            "type": "DatabaseError",
            "message": "A database error occurred"
        }
    }), 500


@app.errorhandler(HTTPException)
def handle_http_exception(error):
    """Handle Werkzeug HTTP errors (unknown routes, bad methods)."""
    return jsonify({
        "error": {
            "type": error.__class__.__name__,
            "message": error.description
        }
    }), error.code


@app.errorhandler(Exception)
def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}", exc_info=error)
    return jsonify({
        "error": {
            "type": "InternalServerError",
            "message": "An internal error occurred"
        }
    }), 500


# Health check endpoint
@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


# Register API blueprints
from .api.todos import todos_bp
from .auth.api import users_bp

app.register_blueprint(todos_bp)
app.register_blueprint(users_bp)


def run():
    """Run the development server on the configured host and port."""
    app.run(host=settings.host, port=settings.port, debug=settings.environment == "development")


if __name__ == "__main__":
    run()
