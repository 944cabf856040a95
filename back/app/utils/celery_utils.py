# Standard library imports
import asyncio
from collections.abc import Callable, Coroutine
import functools
from typing import Any, TypeVar

T = TypeVar("T")


def run_async_in_celery(coro: Coroutine[Any, Any, T]) -> T:
    """
    Run a coroutine to completion from inside a (synchronous) Celery task.

    Every call gets a brand-new event loop that is closed afterwards, so nothing
    bound to a loop (asyncpg connections in particular) survives between two
    tasks. This is why the worker engine uses NullPool.

    Raises:
        Whatever the coroutine raises, so Celery records the task as failed
    """
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(coro)
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
        finally:
            asyncio.set_event_loop(None)
            loop.close()


def celery_async_task(func: Callable[..., Coroutine[Any, Any, T]]) -> Callable[..., T]:
    """
    Decorator turning an async function into a sync callable for Celery.

    Usage:
        @celery_app.task(name="issues.auto_assign")
        @celery_async_task
        async def auto_assign_issue_task(issue_id: str) -> None:
            ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return run_async_in_celery(func(*args, **kwargs))

    return wrapper
