"""Error handlers for the application."""
from flask import jsonify
from werkzeug.exceptions import HTTPException

from app.core.exceptions import GroupNotFoundError, PersonNotFoundError


def register_error_handlers(app):
    """Register JSON error handlers with the Flask app."""

    @app.errorhandler(400)
    def bad_request(error):
        """Handle 400 Bad Request errors."""
        message = getattr(error, "description", None) or str(error)
        return jsonify({"error": "Bad Request", "message": message}), 400

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 Not Found errors."""
        return jsonify({"error": "Not Found", "message": "Resource not found"}), 404

    @app.errorhandler(PersonNotFoundError)
    @app.errorhandler(GroupNotFoundError)
    def lookup_failed(error):
        """Unknown people and groups are plain 404s."""
        return jsonify({"error": "Not Found", "message": str(error)}), 404

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        # Remaining HTTP errors (413, 503, ...) keep their status
        if isinstance(error, HTTPException):
            return jsonify({"error": error.name, "message": error.description}), error.code

        # ALWAYS log the full error - logs are secure, responses are not
        app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        return jsonify({"error": "Internal Server Error", "message": "An unexpected error occurred"}), 500
