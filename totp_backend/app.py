"""
FLASK APP MAIN ENTRY POINT - TOTP BACKEND SERVER
==================================================

Khởi tạo Flask app, cấu hình CORS và logging, đăng ký blueprint TOTP.

CÁC TÍNH NĂNG CHÍNH
- GET /totp-data    : current code as JSON
- GET /totp-stream  : Server-Sent Events, one event per code change
- GET /health       : liveness
- CORS enabled so a browser frontend on another origin can call the API
"""
import logging

from flask import Flask, jsonify
from flask_cors import CORS

from totp_core.logging_config import configure_logging
from totp_core.service import TotpService

from .config import Config
from .routes import totp_bp

logger = logging.getLogger(__name__)


def create_app(config_object=Config, service: TotpService = None) -> Flask:
    """
    Build the Flask app.

    Arguments:
        config_object: class/object passed to app.config.from_object
        service: TotpService to use (default: shared cache, wall clock)
    """
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app.config["LOG_LEVEL"])

    # BẬT CORS (Cross-Origin Resource Sharing)
    CORS(app, origins=app.config["CORS_ORIGINS"])

    if service is None:
        service = TotpService(tick=app.config["TOTP_STREAM_TICK_SECONDS"])
    app.extensions["totp_service"] = service

    app.register_blueprint(totp_bp)

    @app.route("/", methods=["GET"])
    def index():
        """Trang chủ API: list of endpoints."""
        return jsonify({
            "service": "totp-stream",
            "endpoints": {
                "/totp-data": "GET ?secret=&digits=&period= -> current TOTP code",
                "/totp-stream": "GET ?secret=&digits=&period= -> text/event-stream of code changes",
                "/health": "GET -> service status",
            },
        })

    return app


def main():
    """
    CHẠY FLASK DEVELOPMENT SERVER

    Host/port/debug come from TOTP_HOST, TOTP_PORT, TOTP_DEBUG.
    """
    app = create_app()
    logger.info("Starting TOTP server on %s:%s", app.config["HOST"], app.config["PORT"])
    # threaded: every open /totp-stream holds a worker thread
    app.run(debug=app.config["DEBUG"], host=app.config["HOST"],
            port=app.config["PORT"], threaded=True)


if __name__ == "__main__":
    main()
