from __future__ import annotations

import asyncio
import inspect
from typing import Callable, Coroutine, Mapping, TypeVar

import anyio

T = TypeVar("T")


def run_async(coro: Coroutine[object, object, T], *, timeout: float | None = None) -> T:
    """
    Run an async coroutine from sync code without asyncio.run in request threads.

    - In FastAPI sync endpoints, uses anyio.from_thread.run to execute on the main loop.
    - Falls back to anyio.run when no AnyIO worker thread is available (e.g., CLI/tests).
    - Raises if called from an async context in the same thread (use await instead).
    - Errors raised by the coroutine propagate unchanged.
    - ``timeout`` bounds the whole coroutine; TimeoutError is raised when it elapses.
    """

    async def _runner() -> T:
        if timeout is not None:
            with anyio.fail_after(timeout):
                return await coro
        return await coro

    try:
        return anyio.from_thread.run(_runner)
    except RuntimeError:
        if inspect.getcoroutinestate(coro) != inspect.CORO_CREATED:
            # raised by the coroutine itself
            raise
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return anyio.run(_runner)
        coro.close()
        raise RuntimeError("run_async called from async context; use await instead")


async def gather_in_threads(
    calls: Mapping[str, Callable[[], T]],
    *,
    max_concurrency: int,
) -> dict[str, T]:
    """
    Run blocking callables concurrently in worker threads.

    Results are returned only when every call has finished. If one call
    raises, the remaining calls are cancelled and the first error is
    re-raised; no partial result is ever returned. On cancellation the
    worker threads are abandoned, not awaited.
    """
    limiter = anyio.CapacityLimiter(max(1, max_concurrency))
    results: dict[str, T] = {}

    async def _run(key: str, fn: Callable[[], T]) -> None:
        results[key] = await anyio.to_thread.run_sync(fn, abandon_on_cancel=True, limiter=limiter)

    try:
        async with anyio.create_task_group() as tg:
            for key, fn in calls.items():
                tg.start_soon(_run, key, fn)
    except ExceptionGroup as group:
        raise group.exceptions[0] from None

    return {key: results[key] for key in calls}
