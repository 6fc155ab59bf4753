from collections import namedtuple

import pytest

from ksnowflake import EPOCH

# psutil.net_if_addrs()返回值中我们关心的字段
Snic = namedtuple('Snic', ['family', 'address'])

# 2025-01-01T00:00:00Z
START_MS = EPOCH + 366 * 24 * 3600 * 1000


class FakeClock:
    """可控的毫秒时钟, script非空时每次读取依次取出一个值作为当前时间"""

    def __init__(self, now: int = START_MS):
        self.now = now
        self.reads = 0
        self.script = []

    def __call__(self) -> int:
        self.reads += 1
        if self.script:
            self.now = self.script.pop(0)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv('DATA_CENTER_ID', raising=False)
