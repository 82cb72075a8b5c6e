"""
Pacchetto principale dell'applicazione Flask NoteLog.
"""

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import DevConfig
from .extensions import db, init_extensions


def create_app(config_class=DevConfig) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_class)
    app.json.sort_keys = False
    init_extensions(app)

    _register_blueprints(app)
    _register_error_handlers(app)

    app.logger.info("Applicazione Flask inizializzata.")

    @app.route("/health")
    def healthcheck():
        return jsonify({"status": "ok"}), 200

    return app


def _register_blueprints(app: Flask) -> None:
    from .api import (
        api_auth_bp,
        api_contacts_bp,
        api_custom_notes_bp,
        api_notes_bp,
        api_todos_bp,
    )

    app.register_blueprint(api_auth_bp, url_prefix="/api/auth")
    app.register_blueprint(api_notes_bp, url_prefix="/api/notes")
    app.register_blueprint(api_todos_bp, url_prefix="/api/todos")
    app.register_blueprint(api_contacts_bp, url_prefix="/api/contacts")
    app.register_blueprint(api_custom_notes_bp, url_prefix="/api/custom-notes")


def _register_error_handlers(app: Flask) -> None:
    """
    Tutti gli errori escono come {"message": ...} con lo status HTTP corretto.
    """
    from .services.errors import ServiceError

    @app.errorhandler(ServiceError)
    def handle_service_error(exc: ServiceError):
        return jsonify({"message": exc.message}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"message": exc.description or exc.name}), exc.code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(exc: SQLAlchemyError):
        db.session.rollback()
        app.logger.exception("Errore database", extra={"component": "db"})
        return jsonify({"message": "Server error"}), 500

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        db.session.rollback()
        app.logger.exception("Errore non gestito", extra={"component": "api"})
        return jsonify({"message": "Server error"}), 500
