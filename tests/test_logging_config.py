import logging

from totp_core.logging_config import PACKAGE_LOGGERS, configure_logging


def _own_handlers(name):
    return [h for h in logging.getLogger(name).handlers if getattr(h, "_is_totp_handler", False)]


def test_configure_logging_is_idempotent():
    configure_logging("INFO")
    configure_logging("DEBUG")
    for name in PACKAGE_LOGGERS:
        assert len(_own_handlers(name)) == 1
        assert logging.getLogger(name).level == logging.DEBUG


def test_unknown_level_falls_back_to_info():
    configure_logging("LOUD")
    assert logging.getLogger("totp_core").level == logging.INFO


def test_package_records_do_not_reach_root(monkeypatch):
    for name in PACKAGE_LOGGERS:
        monkeypatch.setattr(logging.getLogger(name), "propagate", True)
    configure_logging("INFO")
    for name in PACKAGE_LOGGERS:
        assert logging.getLogger(name).propagate is False
