# Third-party imports
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

# Local application imports
from app.settings import settings

# Asynchronous Engine (PostgreSQL via asyncpg, or aiosqlite when DATABASE_URL points at sqlite)
async_engine = create_async_engine(
    settings.SQLALCHEMY_ASYNC_DATABASE_URI,
    echo=settings.DATABASE_ECHO,
    future=True,
)

# Celery tasks run each handler on a fresh event loop, so pooled connections
# cannot be shared between invocations.
worker_async_engine = create_async_engine(
    settings.SQLALCHEMY_ASYNC_DATABASE_URI,
    echo=settings.DATABASE_ECHO,
    future=True,
    poolclass=NullPool,
)
