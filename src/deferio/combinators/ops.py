"""Combinator primitives: pure, all_, sequence, forever, ignore, lift2, delay,
replicate, filter_m, guard, when, unless."""

# Combinators satisfy the following algebraic laws:
#
# 1. Left identity: pure(x).bind(f) == f(x)
#
# 2. Right identity: m.bind(pure) == m
#
# 3. Associativity: m.bind(f).bind(g) == m.bind(lambda x: f(x).bind(g))
#
# 4. Sequence keeps order: sequence([a, b]) runs a to completion before b starts
#
# 5. All keeps result order: all_([a, b]) yields [value_a, value_b] whatever
#    order a and b complete in

from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar, overload

from deferio.kernel import Action, GuardError

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")


def pure(value: A) -> Action[A]:
    """Inject a value into an action that performs no effect."""
    return Action.pure(value)


def all_(actions: Iterable[Action[A]]) -> Action[list[A]]:
    """Run every action concurrently and collect the results in input order.

    Semantics:
        - Every action is started as its own task before any is awaited
        - Results are listed in input order, not completion order
        - The first observed failure fails the aggregate immediately
        - Siblings still in flight are NOT cancelled; their effects complete
          and their values or later failures are discarded

    Use ``all_([a.attempt() for a in actions])`` to wait for every outcome
    instead.

    Args:
        actions: Actions to run. The iterable is copied when all_ is called.

    Returns:
        Action[list[A]]: A new action that runs the inputs concurrently.
    """
    snapshot = tuple(actions)

    async def _run() -> list[A]:
        tasks = [asyncio.ensure_future(action.run()) for action in snapshot]
        return list(await asyncio.gather(*tasks))

    return Action(_run)


def sequence(actions: Iterable[Action[A]]) -> Action[list[A]]:
    """Run actions one after another and collect the results in input order.

    Semantics:
        - Action i starts only after action i-1 succeeded
        - A failure stops the run; remaining actions are never started
        - Empty input yields [] and runs nothing

    Args:
        actions: Actions to run. The iterable is copied when sequence is called.

    Returns:
        Action[list[A]]: A new action that runs the inputs in order.
    """
    snapshot = tuple(actions)

    async def _run() -> list[A]:
        results: list[A] = []
        for action in snapshot:
            results.append(await action.run())
        return results

    return Action(_run)


def forever(action: Action[Any]) -> Action[Any]:
    """Repeat an action indefinitely.

    Stops only when the action fails; the failure propagates. Each iteration
    yields to the event loop, so the stack does not grow and other tasks
    keep making progress.
    """
    async def forever_loop() -> Any:
        while True:
            await action.run()
            await asyncio.sleep(0)

    return Action(forever_loop)


def ignore(action: Action[Any]) -> Action[None]:
    """Ignore the result of evaluation."""
    return action.map(lambda _: None)


def lift2(fn: Callable[[A, B], C], a: Action[A], b: Action[B]) -> Action[C]:
    """Lift a binary function to actions.

    Built on ``ap``, so ``a`` runs to completion before ``b`` starts.
    """
    return pure(lambda x: lambda y: fn(x, y)).ap(a).ap(b)


def delay(ms: float, action: Action[A] | None = None) -> Action[A | None]:
    """Suspend for at least ``ms`` milliseconds.

    Without ``action`` the result is None. With ``action``, the action is
    started only once the delay has elapsed and its result is returned.
    """
    if ms < 0:
        raise ValueError("delay must be non-negative")

    async def _run() -> A | None:
        await asyncio.sleep(ms / 1000)
        if action is None:
            return None
        return await action.run()

    return Action(_run)


@overload
def replicate(action: Action[A], n: int) -> Action[list[A]]: ...


@overload
def replicate(action: Action[A]) -> Callable[[int], Action[list[A]]]: ...


def replicate(action: Action[A], n: int | None = None):
    """Run ``action`` n times in sequence and collect the values.

    Called without ``n`` it returns ``n -> Action`` for use with bind:

        >>> read_int.bind(replicate(read_int))
    """
    if n is None:
        return lambda count: replicate(action, count)
    return sequence([action] * max(n, 0))


@overload
def replicate_(action: Action[Any], n: int) -> Action[None]: ...


@overload
def replicate_(action: Action[Any]) -> Callable[[int], Action[None]]: ...


def replicate_(action: Action[Any], n: int | None = None):
    """Like ``replicate`` but discards the values."""
    if n is None:
        return lambda count: replicate_(action, count)
    return ignore(replicate(action, n))


@overload
def filter_m(predicate: Callable[[A], Action[bool]], items: Sequence[A]) -> Action[list[A]]: ...


@overload
def filter_m(predicate: Callable[[A], Action[bool]]) -> Callable[[Sequence[A]], Action[list[A]]]: ...


def filter_m(predicate: Callable[[A], Action[bool]], items: Sequence[A] | None = None):
    """Keep the items whose predicate action yields True.

    Predicates run in order, one at a time.
    """
    if items is None:
        return lambda xs: filter_m(predicate, xs)
    snapshot = tuple(items)

    async def _run() -> list[A]:
        kept: list[A] = []
        for item in snapshot:
            if await predicate(item).run():
                kept.append(item)
        return kept

    return Action(_run)


# CONDITIONAL EXECUTION


def guard(cond: bool) -> Action[None]:
    """Conditional failure: fail with GuardError("assertion failed") unless ``cond``."""
    if cond:
        return pure(None)

    async def _run() -> None:
        raise GuardError()

    return Action(_run)


@overload
def when(action: Action[None], cond: bool) -> Action[None]: ...


@overload
def when(action: Action[None]) -> Callable[[bool], Action[None]]: ...


def when(action: Action[None], cond: bool | None = None):
    """Run ``action`` only if ``cond`` holds.

    Called without ``cond`` it returns ``cond -> Action`` for use with bind:

        >>> read_bool.bind(when(write_line("done!")))
    """
    if cond is None:
        return lambda c: when(action, c)
    return action if cond else pure(None)


@overload
def unless(action: Action[None], cond: bool) -> Action[None]: ...


@overload
def unless(action: Action[None]) -> Callable[[bool], Action[None]]: ...


def unless(action: Action[None], cond: bool | None = None):
    """The reverse of ``when``."""
    if cond is None:
        return lambda c: unless(action, c)
    return pure(None) if cond else action
