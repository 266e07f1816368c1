from datetime import datetime, timedelta, timezone

import pytest


class FakeClock:
    def __init__(self, start: datetime):
        self.now = start
    def __call__(self) -> datetime:
        return self.now
    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
