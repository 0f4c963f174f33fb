"""Tests for the polling loop."""

from unittest.mock import MagicMock

import pytest

from monitoring.availability_checker import DecodeError, TransportError
from services.monitoring_daemon import AVAILABLE_MESSAGE, CycleOutcome, MonitoringDaemon
from tests.helpers import cabinet, make_response


def _daemon(poll_result=None, poll_error=None, notify_on_error=False, interval=60, sleep=None):
    checker = MagicMock()
    if poll_error is not None:
        checker.poll.side_effect = poll_error
    else:
        checker.poll.return_value = poll_result
    notifier = MagicMock()
    daemon = MonitoringDaemon(
        checker,
        notifier,
        interval=interval,
        notify_on_error=notify_on_error,
        sleep=sleep or MagicMock(),
    )
    return daemon, checker, notifier


def test_available_sends_exactly_one_notification():
    daemon, _, notifier = _daemon(poll_result=True)

    assert daemon.run_cycle() == CycleOutcome.AVAILABLE
    notifier.notify.assert_called_once_with("openreach broadband is available")


def test_unavailable_sends_nothing():
    daemon, _, notifier = _daemon(poll_result=False)

    assert daemon.run_cycle() == CycleOutcome.UNAVAILABLE
    notifier.notify.assert_not_called()


def test_error_without_notify_on_error_sends_nothing():
    daemon, _, notifier = _daemon(poll_error=TransportError("request failed: refused"))

    assert daemon.run_cycle() == CycleOutcome.ERROR
    notifier.notify.assert_not_called()


def test_error_with_notify_on_error_sends_error_text():
    daemon, _, notifier = _daemon(
        poll_error=DecodeError("failed decoding response (HTTP 502)"),
        notify_on_error=True,
    )

    assert daemon.run_cycle() == CycleOutcome.ERROR
    notifier.notify.assert_called_once()
    message = notifier.notify.call_args[0][0]
    assert message.startswith("openreach error: ")
    assert "failed decoding response (HTTP 502)" in message


def test_poll_completes_before_notify():
    calls = []
    daemon, checker, notifier = _daemon()
    checker.poll.side_effect = lambda: calls.append("poll") or True
    notifier.notify.side_effect = lambda message: calls.append("notify")

    daemon.run_cycle()

    assert calls == ["poll", "notify"]


def test_wait_sleeps_in_slices_for_interval():
    sleep = MagicMock()
    daemon, _, _ = _daemon(interval=2.5, sleep=sleep)

    daemon._wait(daemon.interval)

    assert [c.args[0] for c in sleep.call_args_list] == [1.0, 1.0, 0.5]


def test_run_forever_repeats_until_stopped():
    daemon, checker, _ = _daemon(poll_result=False, interval=2)
    sleeps = []

    def sleep(seconds):
        sleeps.append(seconds)
        if len(sleeps) == 4:
            daemon.stop()

    daemon._sleep = sleep
    daemon.run_forever()

    assert daemon.cycle_count == 2
    assert checker.poll.call_count == 2
    assert sleeps == [1.0, 1.0, 1.0, 1.0]


def test_run_forever_survives_unexpected_errors():
    daemon, checker, _ = _daemon(interval=1)
    checker.poll.side_effect = [RuntimeError("boom"), False]

    def sleep(seconds):
        if checker.poll.call_count == 2:
            daemon.stop()

    daemon._sleep = sleep
    daemon.run_forever()

    assert checker.poll.call_count == 2


def test_highdemand_then_normal(checker, session, store):
    notifier = MagicMock()
    daemon = MonitoringDaemon(checker, notifier, interval=1, sleep=MagicMock())

    session.send.return_value = make_response(cabinet("highdemand"))
    assert daemon.run_cycle() == CycleOutcome.UNAVAILABLE
    assert store.get().available is False
    notifier.notify.assert_not_called()

    session.send.return_value = make_response(cabinet("normal"))
    assert daemon.run_cycle() == CycleOutcome.AVAILABLE
    assert store.get().available is True
    notifier.notify.assert_called_once_with(AVAILABLE_MESSAGE)


@pytest.mark.parametrize("notify_on_error,expected_calls", [(False, 0), (True, 1)])
def test_real_decode_failure_routes_through_loop(checker, session, store, notify_on_error, expected_calls):
    notifier = MagicMock()
    daemon = MonitoringDaemon(checker, notifier, interval=1, notify_on_error=notify_on_error)
    before = store.get()

    session.send.return_value = make_response("not json", status_code=502)
    assert daemon.run_cycle() == CycleOutcome.ERROR

    assert notifier.notify.call_count == expected_calls
    assert store.get() == before
