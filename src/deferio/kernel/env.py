"""Environment for deferio - the ports an action reaches at run time."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from deferio.kernel.config import RuntimeConfig
from deferio.kernel.ports import ConsolePort, FilePort
from deferio.kernel.trace import Trace


@dataclass
class Env:
    """Environment aggregation - combines all ports."""

    console: ConsolePort
    files: FilePort
    trace: Trace | None = None
    config: RuntimeConfig = field(default_factory=RuntimeConfig)


_current_env: contextvars.ContextVar[Env | None] = contextvars.ContextVar(
    "_current_env", default=None
)


def current_env() -> Env:
    """Get the active environment.

    Falls back to a standard environment (real console and files) when none
    has been installed with ``use_env``. Tasks started by ``all_`` inherit
    the environment of the task that started them.
    """
    env = _current_env.get()
    if env is None:
        from deferio.runtime.run import fallback_env

        return fallback_env()
    return env


@contextmanager
def use_env(env: Env) -> Iterator[Env]:
    """Install ``env`` as the active environment for the enclosed block.

    Example:
        >>> with use_env(Env(console=FakeConsole(), files=FakeFiles())):
        ...     await write_line("hi").run()
    """
    token = _current_env.set(env)
    try:
        yield env
    finally:
        _current_env.reset(token)
