from __future__ import annotations

import io
import signal

import pytest

from mipspro_suppress.errors import EXIT_FAILURE, ReapError
from mipspro_suppress.reaper import exit_code_from_status, reap
from tests.support.fake_child import FakeChild, exited, signaled, stopped


pytestmark = pytest.mark.unit


@pytest.mark.parametrize("code", [0, 1, 2, 77, 255])
def test_normal_exit_code_is_propagated(code: int) -> None:
    err = io.StringIO()
    assert exit_code_from_status(exited(code), err) == code
    assert err.getvalue() == ""


def test_signal_death_is_reported_and_fails() -> None:
    err = io.StringIO()
    assert exit_code_from_status(signaled(signal.SIGKILL), err) == EXIT_FAILURE
    assert err.getvalue() == f"mipspro-suppress: child process terminated by signal {int(signal.SIGKILL)}.\n"


def test_other_termination_is_abnormal() -> None:
    err = io.StringIO()
    assert exit_code_from_status(stopped(signal.SIGSTOP), err) == EXIT_FAILURE
    assert "terminated abnormally" in err.getvalue()


def test_reap_waits_exactly_once() -> None:
    child = FakeChild([], status=exited(3))
    assert reap(child, io.StringIO()) == 3
    assert child.wait_calls == 1


def test_reap_wait_failure_is_fatal() -> None:
    child = FakeChild([], wait_error=ChildProcessError(10, "No child processes"))
    with pytest.raises(ReapError, match="error waiting for child process"):
        reap(child, io.StringIO())
