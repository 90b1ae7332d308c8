"""
generator.py — TOTP generator bound to one decoded secret, plus the shared
cache that keeps one generator per (secret, digits, period).

The cache exists so repeated requests with identical parameters reuse the
decoded key instead of running the Base32 decoder on every call.
"""

import logging
import threading
import time
from typing import Callable, Dict, NamedTuple, Optional

from . import base32
from .otp_core import DEFAULT_DIGITS, DEFAULT_TIME_STEP, hotp, remaining_time, totp

logger = logging.getLogger(__name__)


class GeneratorConfig(NamedTuple):
    """Cache key. `secret` is kept verbatim: "abcd efgh" and "ABCDEFGH" are two entries."""
    secret: str
    digits: int = DEFAULT_DIGITS
    period: int = DEFAULT_TIME_STEP


class TotpGenerator:
    """
    Decoded key + digits + period.

    The key bytes stay private to this object; repr() never shows them.
    `now` arguments are epoch seconds, defaulting to the wall clock.
    """

    def __init__(self, secret: str, digits: int = DEFAULT_DIGITS,
                 period: int = DEFAULT_TIME_STEP):
        self._key = base32.decode(secret)
        self.digits = digits
        self.period = period

    @staticmethod
    def _now(now: Optional[int]) -> int:
        return int(time.time() if now is None else now)

    def code(self, now: Optional[int] = None) -> str:
        return totp(self._key, self._now(now), self.period, self.digits)

    def remaining(self, now: Optional[int] = None) -> int:
        return remaining_time(self._now(now), self.period)

    def hotp(self, counter: int) -> str:
        return hotp(self._key, counter, self.digits)

    def __repr__(self) -> str:
        return f"TotpGenerator(digits={self.digits}, period={self.period})"


class GeneratorCache:
    """
    Thread-safe, never-evicting map GeneratorConfig -> TotpGenerator.

    Lookups take no lock. On a miss the generator is built outside the lock,
    then inserted with insert-if-absent: if another thread won the race its
    instance is kept and ours is discarded, so every caller observes the same
    canonical generator for a key.
    """

    def __init__(self, factory: Callable[..., TotpGenerator] = TotpGenerator):
        self._factory = factory
        self._generators: Dict[GeneratorConfig, TotpGenerator] = {}
        self._lock = threading.Lock()

    def get_or_create(self, config: GeneratorConfig) -> TotpGenerator:
        generator = self._generators.get(config)
        if generator is not None:
            return generator

        candidate = self._factory(config.secret, config.digits, config.period)
        with self._lock:
            generator = self._generators.setdefault(config, candidate)
        if generator is candidate:
            logger.debug("Created TOTP generator: digits=%d, period=%d (cache size %d)",
                         config.digits, config.period, len(self._generators))
        return generator

    def __len__(self) -> int:
        return len(self._generators)

    def __contains__(self, config) -> bool:
        return config in self._generators


# Shared by every caller in the process
default_cache = GeneratorCache()
