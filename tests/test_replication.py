from unittest import mock

import pytest

from adgraph.replication import StateChangeConf, WaitTimeoutError, wait_for_replication
from adgraph.response import GraphError, Response


class FakeTime:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def clock(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


def sequence_refresh(states, result="done"):
    calls = []

    def refresh():
        state = states[min(len(calls), len(states) - 1)]
        calls.append(state)
        return result, state

    return refresh, calls


def test_returns_after_continuous_targets():
    fake = FakeTime()
    refresh, calls = sequence_refresh(["pending", "pending", "Found"])
    conf = StateChangeConf(
        refresh=refresh,
        pending=["pending"],
        target=["Found"],
        continuous_target_occurence=3,
        sleep=fake.sleep,
        clock=fake.clock,
    )
    assert conf.wait_for_state() == "done"
    assert len(calls) == 5


def test_pending_resets_target_count():
    fake = FakeTime()
    refresh, calls = sequence_refresh(["Found", "pending", "Found", "Found"])
    conf = StateChangeConf(
        refresh=refresh,
        pending=["pending"],
        target=["Found"],
        continuous_target_occurence=2,
        sleep=fake.sleep,
        clock=fake.clock,
    )
    assert conf.wait_for_state() == "done"
    assert calls == ["Found", "pending", "Found", "Found"]


def test_timeout_raises_with_last_state():
    fake = FakeTime()
    refresh, _ = sequence_refresh(["pending"])
    conf = StateChangeConf(
        refresh=refresh,
        pending=["pending"],
        target=["Found"],
        timeout=5,
        sleep=fake.sleep,
        clock=fake.clock,
    )
    with pytest.raises(WaitTimeoutError, match="timeout while waiting for state to become 'Found'") as info:
        conf.wait_for_state()
    assert info.value.last_state == "pending"
    assert fake.now == pytest.approx(5.0)


def test_unexpected_state_raises():
    fake = FakeTime()
    refresh, _ = sequence_refresh(["weird"])
    conf = StateChangeConf(
        refresh=refresh, pending=["pending"], target=["Found"], sleep=fake.sleep, clock=fake.clock
    )
    with pytest.raises(RuntimeError, match="unexpected state 'weird'"):
        conf.wait_for_state()


def test_not_found_results_give_up():
    fake = FakeTime()
    refresh, calls = sequence_refresh(["pending"], result=None)
    conf = StateChangeConf(
        refresh=refresh,
        pending=["pending"],
        target=["Found"],
        not_found_checks=2,
        sleep=fake.sleep,
        clock=fake.clock,
    )
    with pytest.raises(LookupError, match="couldn't find resource"):
        conf.wait_for_state()
    assert len(calls) == 3


def test_waits_respect_min_timeout_and_cap():
    fake = FakeTime()
    refresh, _ = sequence_refresh(["pending"] * 12 + ["Found"])
    conf = StateChangeConf(
        refresh=refresh,
        pending=["pending"],
        target=["Found"],
        min_timeout=1,
        sleep=fake.sleep,
        clock=fake.clock,
    )
    assert conf.wait_for_state() == "done"
    assert all(1 <= s <= 10 for s in fake.sleeps)
    assert fake.sleeps == sorted(fake.sleeps)


def test_poll_interval_is_used():
    fake = FakeTime()
    refresh, _ = sequence_refresh(["pending", "pending", "Found"])
    conf = StateChangeConf(
        refresh=refresh,
        pending=["pending"],
        target=["Found"],
        poll_interval=3,
        sleep=fake.sleep,
        clock=fake.clock,
    )
    conf.wait_for_state()
    assert fake.sleeps == [3, 3]


def test_refresh_error_propagates():
    def refresh():
        raise KeyError("boom")

    conf = StateChangeConf(refresh=refresh, pending=["pending"], target=["Found"])
    with pytest.raises(KeyError):
        conf.wait_for_state()


def test_wait_for_replication_waits_through_not_found():
    calls = []

    def fetch():
        calls.append(1)
        if len(calls) <= 2:
            raise GraphError("missing", Response(404))
        return "app"

    with mock.patch("adgraph.replication.time.sleep") as sleep:
        assert wait_for_replication(fetch) == "app"
    assert len(calls) == 12
    assert min(c.args[0] for c in sleep.call_args_list) >= 1


def test_wait_for_replication_bad_cast_is_pending():
    calls = []

    def fetch():
        calls.append(1)
        if len(calls) == 1:
            raise ValueError("empty object")
        return "app"

    with mock.patch("adgraph.replication.time.sleep"):
        assert wait_for_replication(fetch) == "app"
    assert len(calls) == 11


def test_wait_for_replication_other_status_fails():
    def fetch():
        raise GraphError("server", Response(500))

    with mock.patch("adgraph.replication.time.sleep"):
        with pytest.raises(GraphError, match=r"response was not 404 \(500\)") as info:
            wait_for_replication(fetch)
    assert info.value.response.status_code == 500