"""
Admin panel test fixtures.
"""

import pytest


@pytest.fixture
def sent_events(monkeypatch):
    """Record realtime broadcasts as (group, payload) instead of sending them."""
    from chat import realtime

    events = []

    def record(groups, payload, chat_id=None, skip_if_joined=False):
        for group in groups:
            events.append((group, payload))

    monkeypatch.setattr(realtime, "_send", record)
    return events
