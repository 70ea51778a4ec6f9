from __future__ import annotations

from contextlib import asynccontextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, AsyncIterator, TypeVar, cast

from sqlalchemy import DateTime, TypeDecorator
from sqlalchemy.engine import Result
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, selectinload
from sqlalchemy.pool import StaticPool
from sqlalchemy.sql import Executable, Select
from sqlalchemy.sql import func
from sqlalchemy.sql import select as sa_select

from ..logger import get_logger
from ..settings import settings


T = TypeVar("T")

logger = get_logger(__name__)


class Base(DeclarativeBase):
    __table_args__ = {"mysql_collate": "utf8mb4_bin"}


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone aware datetime column which is stored as naive UTC."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Any) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect: Any) -> datetime | None:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


def select(entity: Any, *args: Any) -> Select[Any]:
    """Shortcut for :meth:`sqlalchemy.future.select` which eagerly loads the given relationships."""

    if not args:
        return sa_select(entity)

    return sa_select(entity).options(*[selectinload(arg) for arg in args])


def filter_by(cls: Any, *args: Any, **kwargs: Any) -> Select[Any]:
    """Shortcut for :meth:`sqlalchemy.future.Select.filter_by`"""

    return select(cls, *args).filter_by(**kwargs)


def exists(statement: Select[Any]) -> Select[Any]:
    return sa_select(statement.exists())


class DB:
    """An async SQLAlchemy facade bound to the session of the current context."""

    def __init__(self, url: str, **kwargs: Any):
        self.engine: AsyncEngine = create_async_engine(url, **kwargs)
        self._sessionmaker = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        self._session: ContextVar[AsyncSession | None] = ContextVar("session", default=None)

    @property
    def session(self) -> AsyncSession:
        if (session := self._session.get()) is None:
            raise RuntimeError("No database session in the current context")
        return session

    async def create_tables(self) -> None:
        """Create all tables defined in the models."""

        logger.debug("creating tables")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop all tables defined in the models."""

        logger.debug("dropping tables")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def add(self, obj: T) -> T:
        """Add a new row to the database and flush it, so server side defaults and constraints apply."""

        self.session.add(obj)
        await self.session.flush()
        return obj

    async def exec(self, statement: Executable, *args: Any, **kwargs: Any) -> Result[Any]:
        return await self.session.execute(statement, *args, **kwargs)

    async def stream(self, statement: Select[Any]) -> AsyncIterator[Any]:
        return cast(AsyncIterator[Any], (await self.session.stream(statement)).scalars())

    async def all(self, statement: Select[Any]) -> list[Any]:
        return [x async for x in await self.stream(statement)]

    async def first(self, statement: Select[Any]) -> Any | None:
        return (await self.exec(statement)).scalars().first()

    async def exists(self, statement: Select[Any]) -> bool:
        return bool(await self.first(exists(statement)))

    async def count(self, statement: Select[Any]) -> int:
        return cast(int, await self.first(sa_select(func.count()).select_from(statement.subquery())))

    async def get(self, cls: type[T], *args: Any, **kwargs: Any) -> T | None:
        return cast(T | None, await self.first(filter_by(cls, *args, **kwargs)))

    @asynccontextmanager
    async def context(self) -> AsyncIterator[AsyncSession]:
        """Open a session for the current context and commit it unless an exception is raised."""

        session = self._sessionmaker()
        token = self._session.set(session)
        try:
            yield session
            await session.commit()
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()
            self._session.reset(token)


def get_database() -> DB:
    options: dict[str, Any] = {"echo": settings.sql_show_statements}
    if settings.database_url.startswith("sqlite"):
        options |= {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    else:
        options |= {
            "pool_pre_ping": True,
            "pool_recycle": settings.pool_recycle,
            "pool_size": settings.pool_size,
            "max_overflow": settings.max_overflow,
        }
    return DB(settings.database_url, **options)


db: DB = get_database()


def db_context() -> Any:
    return db.context()
