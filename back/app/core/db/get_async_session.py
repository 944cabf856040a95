# Standard library imports
from collections.abc import AsyncGenerator

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Local application imports
from app.core.db.create_async_engine import async_engine, worker_async_engine

# Asynchronous Session Factories
AsyncSessionLocal = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)
WorkerSessionLocal = async_sessionmaker(bind=worker_async_engine, class_=AsyncSession, expire_on_commit=False)


# FastAPI dependency; celery tasks go through run_with_new_session instead
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
