"""
Tests for StateChangeConf polling and LRO deadline handling.

Test Categories:
1. Reaching the target state
2. Failure modes (unexpected state, not found, timeout, refresh errors)
3. Backoff between refreshes
4. wait_for_completion
"""

from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from azurerm.core.exceptions import (
    NotFoundError,
    ProviderError,
    UnexpectedStateError,
    WaitTimeoutError,
)
from azurerm.core.state import StateChangeConf, wait_for_completion
from azurerm.core.timeouts import Deadline


@pytest.fixture
def fake_clock(monkeypatch):
    """Replace sleep/monotonic with a clock that only advances when sleeping."""
    clock = SimpleNamespace(now=1000.0, sleeps=[])

    def sleep(seconds):
        clock.sleeps.append(seconds)
        clock.now += seconds

    monkeypatch.setattr("azurerm.core.state.time.sleep", sleep)
    monkeypatch.setattr("azurerm.core.state.time.monotonic", lambda: clock.now)
    return clock


def _conf(refresh, **kwargs):
    defaults = dict(
        pending=["Pending", "Updating", "Creating"],
        target=["Succeeded"],
        refresh=refresh,
        timeout=600,
    )
    defaults.update(kwargs)
    return StateChangeConf(**defaults)


class TestTargetReached:

    def test_returns_result_once_target_reached(self, fake_clock):
        obj = object()
        refresh = MagicMock(side_effect=[(obj, "Pending"), (obj, "Updating"), (obj, "Succeeded")])

        assert _conf(refresh).wait_for_state() is obj
        assert refresh.call_count == 3

    def test_continuous_target_occurence(self, fake_clock):
        obj = object()
        refresh = MagicMock(side_effect=[
            (obj, "Succeeded"),
            (obj, "Updating"),
            (obj, "Succeeded"),
            (obj, "Succeeded"),
        ])

        _conf(refresh, continuous_target_occurence=2).wait_for_state()
        assert refresh.call_count == 4

    def test_empty_target_waits_until_gone(self, fake_clock):
        obj = object()
        refresh = MagicMock(side_effect=[(obj, "Deleting"), (None, "")])

        assert _conf(refresh, pending=["Deleting"], target=[]).wait_for_state() is None

    def test_delay_before_first_refresh(self, fake_clock):
        refresh = MagicMock(return_value=(object(), "Succeeded"))

        _conf(refresh, delay=5).wait_for_state()
        assert fake_clock.sleeps == [5]


class TestFailures:

    def test_unexpected_state(self, fake_clock):
        refresh = MagicMock(return_value=(object(), "Failed"))

        with pytest.raises(UnexpectedStateError, match="unexpected state 'Failed'"):
            _conf(refresh).wait_for_state()

    def test_not_found_too_many_times(self, fake_clock):
        refresh = MagicMock(return_value=(None, ""))

        with pytest.raises(NotFoundError):
            _conf(refresh, not_found_checks=2).wait_for_state()
        assert refresh.call_count == 3

    def test_timeout_carries_last_state(self, fake_clock):
        refresh = MagicMock(return_value=(object(), "Updating"))

        with pytest.raises(WaitTimeoutError) as exc_info:
            _conf(refresh, timeout=60, min_timeout=15).wait_for_state()

        assert exc_info.value.last_state == "Updating"
        assert exc_info.value.expected == ["Succeeded"]
        assert sum(fake_clock.sleeps) <= 60

    def test_refresh_error_propagates(self, fake_clock):
        refresh = MagicMock(side_effect=ProviderError("boom"))

        with pytest.raises(ProviderError, match="boom"):
            _conf(refresh).wait_for_state()


class TestBackoff:

    def test_exponential_backoff(self, fake_clock):
        obj = object()
        refresh = MagicMock(side_effect=[(obj, "Pending")] * 3 + [(obj, "Succeeded")])

        _conf(refresh).wait_for_state()
        assert fake_clock.sleeps == pytest.approx([0.2, 0.4, 0.8])

    def test_backoff_capped(self, fake_clock):
        obj = object()
        refresh = MagicMock(side_effect=[(obj, "Pending")] * 8 + [(obj, "Succeeded")])

        _conf(refresh).wait_for_state()
        assert max(fake_clock.sleeps) == 10.0

    def test_min_timeout_floor(self, fake_clock):
        obj = object()
        refresh = MagicMock(side_effect=[(obj, "Pending"), (obj, "Succeeded")])

        _conf(refresh, min_timeout=15).wait_for_state()
        assert fake_clock.sleeps == [15]

    def test_poll_interval(self, fake_clock):
        obj = object()
        refresh = MagicMock(side_effect=[(obj, "Pending"), (obj, "Pending"), (obj, "Succeeded")])

        _conf(refresh, poll_interval=3).wait_for_state()
        assert fake_clock.sleeps == [3, 3]


class TestWaitForCompletion:

    def test_returns_poller_result(self):
        poller = MagicMock()
        poller.result.return_value = "done"
        poller.done.return_value = True

        assert wait_for_completion(poller, Deadline(timedelta(minutes=5))) == "done"
        timeout = poller.result.call_args.kwargs["timeout"]
        assert 0 < timeout <= 300

    def test_unfinished_poller_times_out(self):
        poller = MagicMock()
        poller.done.return_value = False
        poller.status.return_value = "InProgress"

        with pytest.raises(WaitTimeoutError) as exc_info:
            wait_for_completion(poller, Deadline(timedelta(seconds=1)))
        assert exc_info.value.last_state == "InProgress"
