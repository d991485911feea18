import logging

import pytest

import stores
from config import config, configure_logging


def test_latency_follows_operation_when_simulated(monkeypatch):
    monkeypatch.setattr(config, "SIMULATE_LATENCY", True)
    assert config.latency_seconds("login") == 1.0
    assert config.latency_seconds("update_request") == 0.5
    assert config.latency_seconds("send_notification") == 0.3
    assert config.latency_seconds("no_such_operation") == 0.5

def test_latency_is_zero_when_off():
    assert config.SIMULATE_LATENCY is False
    assert config.latency_seconds("login") == 0.0
    assert config.latency_seconds("no_such_operation") == 0.0

@pytest.mark.asyncio
async def test_simulated_latency_sleeps_for_operation(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(stores.asyncio, "sleep", fake_sleep)
    await stores.simulate_latency("login")
    monkeypatch.setattr(config, "SIMULATE_LATENCY", True)
    await stores.simulate_latency("login")
    await stores.simulate_latency("update_request")
    assert delays == [1.0, 0.5]

def test_configure_logging_installs_one_handler():
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    try:
        handler = configure_logging("DEBUG")
        assert configure_logging("DEBUG") is handler
        assert root.handlers.count(handler) == 1
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = before
        root.setLevel(level)
