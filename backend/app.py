from __future__ import annotations

from flask import Flask, jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from lottery.errors import (
    InvalidPayment,
    InvalidState,
    LotteryError,
    PayoutFailure,
    RoundFull,
    Unauthorized,
)

from .config import load_settings
from .db import engine
from .models import Base
from .routes.admin import bp as admin_bp
from .routes.config import bp as config_bp
from .routes.health import bp as health_bp
from .routes.lottery import bp as lottery_bp

ERROR_STATUS = (
    (Unauthorized, 403),
    (InvalidPayment, 400),
    (InvalidState, 409),
    (RoundFull, 409),
    (PayoutFailure, 502),
)


def error_status(exc: LotteryError) -> int:
    for error_type, status in ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return 400


def create_app() -> Flask:
    settings = load_settings()
    app = Flask(__name__)
    app.config["SECRET_KEY"] = settings.flask.secret_key
    Base.metadata.create_all(engine)

    app.register_blueprint(health_bp)
    app.register_blueprint(lottery_bp, url_prefix="/lottery")
    app.register_blueprint(admin_bp, url_prefix="/admin/api")
    app.register_blueprint(config_bp)

    @app.errorhandler(LotteryError)
    def handle_lottery_error(exc: LotteryError):
        app.logger.info("Lottery call rejected: %s: %s", type(exc).__name__, exc)
        return jsonify({"error": str(exc), "type": type(exc).__name__}), error_status(exc)

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        details = exc.errors(include_url=False, include_context=False, include_input=False)
        return jsonify({"error": "invalid request", "details": details}), 400

    @app.errorhandler(ValueError)
    def handle_value_error(exc: ValueError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(Exception)
    def handle_error(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        app.logger.exception("Unhandled error: %s", exc)
        return jsonify({"error": str(exc)}), 500

    return app
