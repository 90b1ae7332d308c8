import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from totp_core.generator import GeneratorCache  # noqa: E402
from totp_core.service import TotpService  # noqa: E402

# RFC 4226 / RFC 6238 test key "12345678901234567890", Base32-encoded
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
RFC_KEY = b"12345678901234567890"


class ScriptedClock:
    """Returns the scripted times in order, then keeps returning the last one."""

    def __init__(self, *times):
        self.times = list(times)
        self.calls = 0

    def __call__(self):
        index = min(self.calls, len(self.times) - 1)
        self.calls += 1
        return self.times[index]


@pytest.fixture
def rfc_secret():
    return RFC_SECRET


@pytest.fixture
def rfc_key():
    return RFC_KEY


@pytest.fixture
def cache():
    return GeneratorCache()


@pytest.fixture
def make_service(cache):
    def _make(*times, tick=0):
        return TotpService(cache=cache, clock=ScriptedClock(*times), tick=tick)
    return _make
