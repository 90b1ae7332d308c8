"""
TOTP BACKEND API ROUTES - FLASK BLUEPRINT

VÍ DỤ:
curl "http://localhost:5000/totp-data?secret=JBSWY3DPEHPK3PXP&digits=6&period=30"
curl -N "http://localhost:5000/totp-stream?secret=JBSWY3DPEHPK3PXP"
curl http://localhost:5000/health

Every endpoint validates (secret, digits, period) before touching the core.
"""

import json
import logging
from typing import Optional

from flask import Blueprint, Response, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from totp_core.exceptions import OtpComputationError

logger = logging.getLogger(__name__)

totp_bp = Blueprint('totp', __name__)

GENERATION_FAILED = "Failed to generate TOTP code"

# SSE comment frame, ignored by EventSource clients
KEEPALIVE = ": keepalive\n\n"


def _service():
    return current_app.extensions["totp_service"]


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise BadRequest(f"Parameter '{name}' must be an integer") from None


def _read_params():
    """(secret, digits, period) from the query string, with configured defaults."""
    cfg = current_app.config
    secret = request.args.get('secret') or cfg["TOTP_DEFAULT_SECRET"]
    digits = _int_arg('digits', cfg["TOTP_DEFAULT_DIGITS"])
    period = _int_arg('period', cfg["TOTP_DEFAULT_PERIOD"])
    return secret, digits, period


def _sse(payload: dict, event: Optional[str] = None) -> str:
    """One Server-Sent Event frame."""
    frame = f"data: {json.dumps(payload)}\n\n"
    if event:
        frame = f"event: {event}\n" + frame
    return frame


@totp_bp.errorhandler(BadRequest)
def bad_request(e):
    return jsonify({"error": e.description}), 400


@totp_bp.route('/totp-data', methods=['GET'])
def totp_data():
    """
    LẤY MÃ TOTP HIỆN TẠI

    Output:
      {"code": "123456", "remainingTime": 25, "progressPercent": 83.33}
    """
    secret, digits, period = _read_params()
    service = _service()

    validation = service.validate_params(secret, digits, period)
    if validation.has_error:
        return jsonify({"error": validation.error}), 400

    try:
        record = service.generate_snapshot(secret, digits, period)
    except OtpComputationError:
        logger.exception(GENERATION_FAILED)
        return jsonify({"error": GENERATION_FAILED}), 500
    return jsonify(record.to_dict())


@totp_bp.route('/totp-stream', methods=['GET'])
def totp_stream():
    """
    STREAM MÃ TOTP (Server-Sent Events)

    One `data: {...}` event right away, then one per code change, with a
    `: keepalive` comment on every quiet tick. Invalid
    parameters produce a single `data: {"error": "..."}` event.
    """
    secret, digits, period = _read_params()
    service = _service()

    validation = service.validate_params(secret, digits, period)
    if validation.has_error:
        logger.warning("SSE stream validation failed: digits=%s, period=%s", digits, period)
        return Response(_sse({"error": validation.error}), mimetype='text/event-stream')

    stream = service.open_stream(secret, digits, period)

    def events():
        # Quiet ticks still write a keepalive, so a dropped client surfaces as a
        # write error within one tick; GeneratorExit then lands in finally.
        try:
            while not stream.closed:
                record = stream.poll()
                if record is not None:
                    yield _sse(record.to_dict())
                elif not stream.closed:
                    yield KEEPALIVE
        except OtpComputationError:
            logger.exception(GENERATION_FAILED)
            yield _sse({"error": GENERATION_FAILED}, event="error")
        finally:
            stream.close()

    response = Response(events(), mimetype='text/event-stream',
                        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"})
    response.call_on_close(stream.close)
    return response


@totp_bp.route('/health', methods=['GET'])
def health():
    return jsonify({"status": "UP"})
