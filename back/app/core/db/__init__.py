# Local application imports
from app.core.db.create_async_engine import async_engine, worker_async_engine
from app.core.db.get_async_session import AsyncSessionLocal, WorkerSessionLocal, get_async_session
from app.core.db.run_with_new_session import run_with_new_session

__all__ = [
    "AsyncSessionLocal",
    "WorkerSessionLocal",
    "async_engine",
    "get_async_session",
    "run_with_new_session",
    "worker_async_engine",
]
