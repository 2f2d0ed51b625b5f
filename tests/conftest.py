import time

import pytest


@pytest.fixture
def freeze_time(monkeypatch):
    def freeze(timestamp: float) -> None:
        monkeypatch.setattr(time, "time", lambda: timestamp)

    return freeze
