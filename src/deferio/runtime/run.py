"""Top-level entry point for running actions from synchronous code."""

from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import replace
from typing import TypeVar

from deferio.kernel import Action, Env, RuntimeConfig, Trace, use_env
from deferio.runtime.console import StdConsole
from deferio.runtime.files import LocalFiles

A = TypeVar("A")

logger = logging.getLogger(__name__)


def default_env(config: RuntimeConfig | None = None) -> Env:
    """Environment wired to the real console and local file system."""
    config = config or RuntimeConfig()
    return Env(
        console=StdConsole(encoding=config.encoding),
        files=LocalFiles(),
        config=config,
    )


@functools.lru_cache(maxsize=None)
def fallback_env() -> Env:
    """Process-wide environment used when none is installed, built once from ``DEFERIO_*``."""
    return default_env(RuntimeConfig.from_env())


async def _settle_outstanding() -> None:
    """Wait for every other task on the loop, including ones they start meanwhile."""
    current = asyncio.current_task()
    while pending := asyncio.all_tasks() - {current}:
        await asyncio.gather(*pending, return_exceptions=True)


def _log_trace(trace: Trace) -> None:
    logger.info("trace recorded %d events", len(trace))
    for ev in trace.get_events():
        duration = f" {ev.duration_ms:.1f}ms" if ev.duration_ms is not None else ""
        logger.info(
            "trace #%d parent=%s %s %s%s", ev.id, ev.parent_id, ev.action, ev.label, duration
        )


def run_io(action: Action[A], env: Env | None = None, *, trace: Trace | None = None) -> A:
    """Run an action to completion on a fresh event loop.

    Tasks still in flight when the action settles (for example ``all_``
    siblings of a failed branch) are awaited before returning, never
    cancelled, so their effects complete. Their own outcomes are discarded.

    Args:
        action: The action to run
        env: Environment to run in; defaults to the real console and files,
            configured from ``DEFERIO_*`` environment variables
        trace: Optional trace to record into, overriding ``env.trace``.
            When ``config.trace`` is on and no trace is supplied, a fresh
            one is created and its events are logged at INFO level

    Returns:
        The action's value. A failure of the action is raised.
    """
    if env is None:
        env = fallback_env()
    if trace is not None:
        env = replace(env, trace=trace)
    elif env.trace is None and env.config.trace:
        env = replace(env, trace=Trace())

    async def main() -> A:
        with use_env(env):
            try:
                value = await action.run()
            except Exception:
                await _settle_outstanding()
                raise
            await _settle_outstanding()
            return value

    try:
        return asyncio.run(main())
    except Exception as exc:
        logger.debug("action failed: %r", exc)
        raise
    finally:
        if env.trace is not None:
            _log_trace(env.trace)
