"""
Database engine construction and declarative base.

Engines are created explicitly and handed to whatever needs the store;
nothing here opens a connection at import time.
"""

import logging
from typing import Optional

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for every table in the store."""


def _resolve_url(url: Optional[str]) -> URL:
    return make_url(url or settings.DATABASE_URL)


def _resolve_echo(echo: Optional[bool]) -> bool:
    return settings.DATABASE_ECHO if echo is None else echo


def _enable_sqlite_transactional_ddl(sync_engine: Engine) -> None:
    """
    Make CREATE TABLE part of the surrounding transaction on SQLite.

    The sqlite3 driver only opens transactions ahead of DML, so DDL would
    otherwise autocommit statement by statement. Driver-level transaction
    handling is switched off and SQLAlchemy emits BEGIN itself.
    """

    @event.listens_for(sync_engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Create a synchronous engine for the configured (or given) database URL."""
    resolved = _resolve_url(url)
    engine = create_engine(resolved, echo=_resolve_echo(echo))
    if resolved.get_backend_name() == "sqlite":
        _enable_sqlite_transactional_ddl(engine)
    logger.debug("Created engine for %s", resolved.render_as_string(hide_password=True))
    return engine


def create_db_async_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> AsyncEngine:
    """Create an asyncio engine; plain sqlite URLs are switched to aiosqlite."""
    resolved = _resolve_url(url)
    if resolved.drivername == "sqlite":
        resolved = resolved.set(drivername="sqlite+aiosqlite")
    engine = create_async_engine(resolved, echo=_resolve_echo(echo))
    if resolved.get_backend_name() == "sqlite":
        _enable_sqlite_transactional_ddl(engine.sync_engine)
    logger.debug("Created async engine for %s", resolved.render_as_string(hide_password=True))
    return engine


def create_session_maker(engine: Engine) -> sessionmaker:
    """Session factory bound to ``engine``; objects stay readable after commit."""
    return sessionmaker(bind=engine, expire_on_commit=False)
