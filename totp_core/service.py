"""
service.py — Snapshot and streaming entry points used by the transports.

Contracts:
- validate_params(secret, digits, period) -> ValidationResult
- generate_snapshot(secret, digits, period) -> CodeRecord
- open_stream(secret, digits, period) -> TotpStream (iterator of CodeRecord)

Callers validate first; snapshot/stream assume valid parameters. Both
propagate OtpComputationError instead of producing a wrong code.
"""

import logging
import threading
import time
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, NamedTuple, Optional

from .exceptions import OtpComputationError
from .generator import GeneratorCache, GeneratorConfig, TotpGenerator, default_cache
from .otp_core import DEFAULT_DIGITS, DEFAULT_TIME_STEP
from .validation import ValidationResult, validate_params

logger = logging.getLogger(__name__)

STREAM_TICK_SECONDS = 1.0

_TWO_PLACES = Decimal("0.01")


def compute_progress(remaining: int, period: int) -> float:
    """remaining / period * 100, rounded half-up to 2 decimals (25/30 -> 83.33)."""
    value = Decimal(remaining) * 100 / Decimal(period)
    return float(value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP))


class CodeRecord(NamedTuple):
    code: str
    remaining_time: int
    progress_percent: float

    @classmethod
    def at(cls, generator: TotpGenerator, now: int, code: Optional[str] = None) -> "CodeRecord":
        if code is None:
            code = generator.code(now)
        remaining = generator.remaining(now)
        return cls(code, remaining, compute_progress(remaining, generator.period))

    def to_dict(self) -> dict:
        """Wire shape shared by /totp-data and every /totp-stream event."""
        return {
            "code": self.code,
            "remainingTime": self.remaining_time,
            "progressPercent": self.progress_percent,
        }


class TotpStream:
    """
    Infinite, change-triggered iterator of CodeRecord.

    - first next(): current record, no waiting
    - then: every `tick` seconds recompute the code; return a record only when
      the code differs from the last one returned
    - poll(): one tick at a time, None when the code did not change
    - close(): wakes a waiting next()/poll() and ends iteration for good

    Each stream owns its own timer (a threading.Event), nothing is buffered.
    """

    def __init__(self, generator: TotpGenerator, tick: float = STREAM_TICK_SECONDS,
                 clock: Callable[[], float] = time.time):
        self._generator = generator
        self._tick = tick
        self._clock = clock
        self._stopped = threading.Event()
        self._last_code: Optional[str] = None

    def __iter__(self):
        return self

    def __next__(self) -> CodeRecord:
        while not self._stopped.is_set():
            record = self.poll()
            if record is not None:
                return record
        raise StopIteration

    def poll(self) -> Optional[CodeRecord]:
        """
        One step of the stream.

        First call: the current record. Later calls wait one tick and return
        a record if the code changed, None otherwise (also None once closed).
        Lets a transport write keepalives on quiet ticks.
        """
        if self._stopped.is_set():
            return None
        try:
            if self._last_code is None:
                return self._emit(int(self._clock()))

            if self._stopped.wait(self._tick):
                return None
            now = int(self._clock())
            code = self._generator.code(now)
            if self._stopped.is_set() or code == self._last_code:
                return None
            return self._emit(now, code)
        except OtpComputationError:
            self.close()
            raise

    def _emit(self, now: int, code: Optional[str] = None) -> CodeRecord:
        record = CodeRecord.at(self._generator, now, code)
        self._last_code = record.code
        return record

    @property
    def closed(self) -> bool:
        return self._stopped.is_set()

    def close(self) -> None:
        if not self._stopped.is_set():
            self._stopped.set()
            logger.info("TOTP stream closed: digits=%d, period=%d",
                        self._generator.digits, self._generator.period)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class TotpService:
    """Binds the validator, a generator cache and a clock together."""

    def __init__(self, cache: GeneratorCache = None, clock: Callable[[], float] = time.time,
                 tick: float = STREAM_TICK_SECONDS):
        self.cache = cache if cache is not None else default_cache
        self.clock = clock
        self.tick = tick

    @staticmethod
    def validate_params(secret: Optional[str], digits: int = DEFAULT_DIGITS,
                        period: int = DEFAULT_TIME_STEP) -> ValidationResult:
        return validate_params(secret, digits, period)

    def generator_for(self, secret: str, digits: int = DEFAULT_DIGITS,
                      period: int = DEFAULT_TIME_STEP) -> TotpGenerator:
        return self.cache.get_or_create(GeneratorConfig(secret, digits, period))

    def generate_snapshot(self, secret: str, digits: int = DEFAULT_DIGITS,
                          period: int = DEFAULT_TIME_STEP, now: Optional[int] = None) -> CodeRecord:
        """Code, seconds left and progress at `now` (default: the service clock)."""
        logger.info("Generating TOTP snapshot: digits=%d, period=%d", digits, period)
        generator = self.generator_for(secret, digits, period)
        return CodeRecord.at(generator, int(self.clock() if now is None else now))

    def open_stream(self, secret: str, digits: int = DEFAULT_DIGITS,
                    period: int = DEFAULT_TIME_STEP) -> TotpStream:
        """New independent stream; the caller must close() it (or use `with`)."""
        logger.info("Opening TOTP stream: digits=%d, period=%d", digits, period)
        generator = self.generator_for(secret, digits, period)
        return TotpStream(generator, tick=self.tick, clock=self.clock)


default_service = TotpService()

generate_snapshot = default_service.generate_snapshot
open_stream = default_service.open_stream
