"""
Database connection setup using async SQLAlchemy with PostgreSQL.

Provides the async engine, session factory, and a dependency
for injecting database sessions into FastAPI route handlers.
Each request runs in one session that is committed when the
handler returns and rolled back when it raises.

Constraint names follow a fixed convention so that the ORM metadata
and the Alembic migrations agree on them (``ix_users_email``,
``ck_contracts_single_party``, ...).
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import MetaData
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ecodeli_admin.config import settings

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}

# pool_pre_ping drops connections the server closed while idle.
engine = create_async_engine(
    settings.DATABASE_URL,
    pool_size=settings.DATABASE_POOL_SIZE,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    """Base class for all Ecodeli ORM models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Unit of work for scripts and other code running outside a request."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency that yields a database session."""
    async with session_scope() as session:
        yield session
