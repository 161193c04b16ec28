import pytest

from deferio import GuardError, guard, pure, read_line, run_io, unless, when, write, write_line
from fakes import make_fake_env


def test_guard_true_succeeds_with_none() -> None:
    assert run_io(guard(True), make_fake_env()) is None


def test_guard_false_fails() -> None:
    with pytest.raises(GuardError, match="assertion failed"):
        run_io(guard(False), make_fake_env())


def test_guard_error_is_an_assertion_error() -> None:
    assert isinstance(GuardError(), AssertionError)


def test_guard_aborts_bind_chain() -> None:
    env = make_fake_env(lines=["3\n"])
    flow = (
        read_line()
        .map(int)
        .bind(lambda n: guard(n > 5))
        .then(write_line("big number"))
    )
    with pytest.raises(GuardError):
        run_io(flow, env)
    assert env.console.written == []


def test_guard_failure_is_recoverable_with_catch() -> None:
    env = make_fake_env()
    flow = guard(False).then(write("unreachable")).catch(lambda exc: write(f"caught {exc}"))
    run_io(flow, env)
    assert env.console.output == "caught assertion failed"


def test_when_runs_action_only_if_true() -> None:
    env = make_fake_env()
    run_io(when(write("yes"), True), env)
    run_io(when(write("no"), False), env)
    assert env.console.output == "yes"


def test_unless_is_the_reverse_of_when() -> None:
    env = make_fake_env()
    run_io(unless(write("yes"), True), env)
    run_io(unless(write("no"), False), env)
    assert env.console.output == "no"


def test_when_curried_in_bind_chain() -> None:
    env = make_fake_env(lines=["yes\n", "no\n"])
    read_bool = read_line().map(lambda x: x == "yes")
    flow = read_bool.bind(when(write_line("done!")))

    run_io(flow, env)
    run_io(flow, env)
    assert env.console.output == "done!\n"


def test_unless_curried() -> None:
    env = make_fake_env()
    run_io(pure(False).bind(unless(write("ran"))), env)
    assert env.console.output == "ran"
