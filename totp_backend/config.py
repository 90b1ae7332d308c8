"""
Server configuration, read from the environment (and a local .env file).

Every value has a default so the server starts with no setup at all.
"""
import os

from dotenv import load_dotenv

load_dotenv()

_BOOL_TRUE = {"1", "true", "yes", "on"}


def _env_bool(key: str, default: bool) -> bool:
    raw = os.environ.get(key)
    if raw is None:
        return default
    return raw.strip().lower() in _BOOL_TRUE


class Config:
    HOST = os.environ.get("TOTP_HOST", "0.0.0.0")
    PORT = int(os.environ.get("TOTP_PORT", "5000"))
    DEBUG = _env_bool("TOTP_DEBUG", False)
    LOG_LEVEL = os.environ.get("TOTP_LOG_LEVEL", "INFO")

    # Used when a request omits the parameter
    TOTP_DEFAULT_SECRET = os.environ.get("TOTP_DEFAULT_SECRET", "JBSWY3DPEHPK3PXP")
    TOTP_DEFAULT_DIGITS = int(os.environ.get("TOTP_DEFAULT_DIGITS", "6"))
    TOTP_DEFAULT_PERIOD = int(os.environ.get("TOTP_DEFAULT_PERIOD", "30"))

    TOTP_STREAM_TICK_SECONDS = float(os.environ.get("TOTP_STREAM_TICK_SECONDS", "1.0"))

    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get("TOTP_CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]
