"""Tests for utils.retry."""

import pytest

import config
from utils import retry


@pytest.fixture
def sleeps(monkeypatch):
    waits = []
    monkeypatch.setattr(retry.time, "sleep", waits.append)
    return waits


def test_succeeds_after_transient_failures(sleeps):
    calls = []

    @retry.retry_on_exception(exceptions=(ConnectionError,), max_attempts=3, jitter=0)
    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise ConnectionError("reset")
        return "ok"

    assert flaky() == "ok"
    assert len(calls) == 3
    assert sleeps == [1.0, 2.0]


def test_reraises_after_last_attempt(sleeps):
    @retry.retry_on_exception(exceptions=(TimeoutError,), max_attempts=2)
    def always_times_out():
        raise TimeoutError("slow")

    with pytest.raises(TimeoutError):
        always_times_out()
    assert len(sleeps) == 1


def test_other_exceptions_not_retried(sleeps):
    @retry.retry_on_exception(exceptions=(ConnectionError,), max_attempts=3)
    def broken():
        raise KeyError("x")

    with pytest.raises(KeyError):
        broken()
    assert sleeps == []


def test_attempts_default_to_config(sleeps, monkeypatch):
    monkeypatch.setattr(config, "RETRY_ATTEMPTS", 4)
    calls = []

    @retry.retry_on_exception(exceptions=(ConnectionError,), jitter=0)
    def down():
        calls.append(1)
        raise ConnectionError("down")

    with pytest.raises(ConnectionError):
        down()
    assert len(calls) == 4
