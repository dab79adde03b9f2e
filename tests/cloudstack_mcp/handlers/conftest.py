"""Fixtures for handler tests."""

import pytest

from cloudstack_mcp.handlers import virtual_machines


@pytest.fixture
def no_settle_delay(monkeypatch):
    """Skip the pauses between destroy workflow steps."""
    monkeypatch.setattr(virtual_machines, "STOP_SETTLE_SECONDS", 0)
    monkeypatch.setattr(virtual_machines, "DESTROY_SETTLE_SECONDS", 0)
