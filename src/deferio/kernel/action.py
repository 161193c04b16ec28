"""Action monad - core deferred-execution primitive."""

from __future__ import annotations

import asyncio
import contextvars
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from deferio.kernel.env import current_env
from deferio.kernel.result import Result

A = TypeVar("A")
B = TypeVar("B")


Executor = Callable[[], Awaitable[A]]


# Id of the enclosing traced run, so nested and concurrent runs link to the right parent
_trace_parent: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "_trace_parent", default=None
)


async def _continue(action: Action[B]) -> B:
    """Run a continuation as its own task, starting from a fresh stack.

    Recursive bind chains then use constant stack depth however deep they go.
    """
    return await asyncio.ensure_future(action.run())


@dataclass(frozen=True)
class Action(Generic[A]):
    """A description of a computation that produces an ``A`` or fails.

    Building an Action performs nothing. Effects happen only inside the
    executor, and only when the action is run. Actions are not memoized:
    running the same value twice performs its effects twice.
    """

    _run: Executor[A]
    label: str | None = None

    async def run(self) -> A:
        """Invoke the executor and await its result.

        A synchronous raise inside the executor and a failure of the
        awaitable it returns both surface as the raised exception.
        """
        if self.label is None:
            return await self._run()
        trace = current_env().trace
        if trace is None:
            return await self._run()

        step_id = trace.record(
            "run_begin",
            info={"label": self.label},
            parent_id=_trace_parent.get(),
        )
        token = _trace_parent.set(step_id)
        start_time = time.perf_counter()
        try:
            try:
                value = await self._run()
            except Exception as exc:
                trace.record(
                    "run_error",
                    info={"label": self.label, "error": repr(exc)},
                    parent_id=step_id,
                )
                raise
            duration_ms = (time.perf_counter() - start_time) * 1000
            trace.record(
                "run_end",
                info={"label": self.label},
                parent_id=step_id,
                duration_ms=duration_ms,
            )
            return value
        finally:
            _trace_parent.reset(token)

    def start(self) -> asyncio.Task[A]:
        """Begin evaluation on the running loop and return a handle to await.

        Must be called from inside a running event loop.
        """
        return asyncio.ensure_future(self.run())

    def named(self, label: str) -> Action[A]:
        """Wrap this action so its run is recorded under ``label`` when traced.

        Any label the action already carries is kept and recorded as a child.
        """
        return Action(self.run, label=label)

    def map(self, func: Callable[[A], B]) -> Action[B]:
        async def new_run() -> B:
            value = await self.run()
            return func(value)

        return Action(new_run)

    def ap(self: Action[Callable[[Any], B]], action: Action[Any]) -> Action[B]:
        """Sequential application.

        The receiver yields a function and runs first; ``action`` starts only
        after it has completed. Use ``all_`` for concurrent evaluation.
        """
        async def new_run() -> B:
            func = await self.run()
            value = await action.run()
            return func(value)

        return Action(new_run)

    def bind(self, func: Callable[[A], Action[B]]) -> Action[B]:
        """Sequentially compose two actions, passing the value of the first to ``func``."""
        async def new_run() -> B:
            value = await self.run()
            return await _continue(func(value))

        return Action(new_run)

    def then(self, action: Action[B]) -> Action[B]:
        """Run ``action`` after this one, discarding this action's value."""
        async def new_run() -> B:
            await self.run()
            return await _continue(action)

        return Action(new_run)

    def left(self, action: Action[Any]) -> Action[A]:
        """Run ``action`` after this one, keeping this action's value."""
        async def new_run() -> A:
            value = await self.run()
            await action.run()
            return value

        return Action(new_run)

    def catch(self, handler: Callable[[Exception], Action[A]]) -> Action[A]:
        """Run the action returned by ``handler`` when this one fails.

        The handler is called when:
            i) the executor raises synchronously, or
            ii) the awaitable it returned fails.
        """
        async def new_run() -> A:
            try:
                return await self.run()
            except Exception as exc:
                return await handler(exc).run()

        return Action(new_run)

    def recover(self, recovery_func: Callable[[Exception], A]) -> Action[A]:
        """Recover from failure with a plain replacement value."""
        async def new_run() -> A:
            try:
                return await self.run()
            except Exception as exc:
                return recovery_func(exc)

        return Action(new_run)

    def attempt(self) -> Action[Result[A]]:
        """Reify success or failure as a Result. The returned action never fails."""
        async def new_run() -> Result[A]:
            try:
                value = await self.run()
            except Exception as exc:
                return Result.Error(exc)
            return Result.Ok(value)

        return Action(new_run)

    def __rshift__(self, action: Action[B]) -> Action[B]:
        return self.then(action)

    def __lshift__(self, action: Action[Any]) -> Action[A]:
        return self.left(action)

    @staticmethod
    def pure(value: A) -> Action[A]:
        """Create an Action that succeeds with ``value`` and performs no effect."""
        async def run_func() -> A:
            return value

        return Action(run_func)

    @staticmethod
    def fail(error: Exception) -> Action[Any]:
        """Create an Action that fails with ``error`` when run."""
        async def run_func() -> Any:
            raise error

        return Action(run_func)
