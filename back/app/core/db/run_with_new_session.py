# Standard library imports
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Local application imports
from app.core.db.get_async_session import WorkerSessionLocal

T = TypeVar("T")


async def run_with_new_session(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    **kwargs: Any,
) -> T:
    """
    Run a handler with a fresh DB session that is closed afterwards.

    Every celery invocation gets its own session, so no state leaks between
    two events.

    Args:
        func: Coroutine function taking an AsyncSession as its first argument.
        *args: Positional arguments passed after the session.
        session_factory: Overrides the worker session factory.
        **kwargs: Keyword arguments passed to the function.

    Returns:
        The result of the function.
    """
    factory = session_factory or WorkerSessionLocal
    async with factory() as session:
        return await func(session, *args, **kwargs)
