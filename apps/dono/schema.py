"""
Schema bootstrap for the video and song catalogs.

ensure_schema() creates youtube_videos and local_songs when they are absent
and checks that what is in the store matches the models. Creation and the
check run in one transaction: either both tables are there afterwards or
nothing was committed.
"""

import logging
from typing import List

from sqlalchemy import Connection, Engine, Integer, String, Table, inspect, text
from sqlalchemy.engine import Inspector
from sqlalchemy.ext.asyncio import AsyncEngine

from errors import StorageError, storage_errors
from models import LocalSongRecord, VideoRecord

logger = logging.getLogger(__name__)

# Creation order
SCHEMA_TABLES: List[Table] = [VideoRecord.__table__, LocalSongRecord.__table__]


def _uses_autoincrement(connection: Connection, table_name: str) -> bool:
    ddl = connection.execute(
        text("SELECT sql FROM sqlite_master WHERE type = 'table' AND name = :name"),
        {"name": table_name},
    ).scalar()
    return "AUTOINCREMENT" in (ddl or "").upper()


def _table_problems(connection: Connection, inspector: Inspector, table: Table) -> List[str]:
    name = table.name
    if not inspector.has_table(name):
        return [f"{name}: table is missing"]

    problems: List[str] = []
    reflected = {column["name"]: column for column in inspector.get_columns(name)}

    for column in table.columns:
        found = reflected.get(column.name)
        if found is None:
            problems.append(f"{name}.{column.name}: column is missing")
            continue
        affinity = Integer if isinstance(column.type, Integer) else String
        if not isinstance(found["type"], affinity):
            problems.append(
                f"{name}.{column.name}: expected {affinity.__name__.lower()} column, found {found['type']}"
            )
        # SQLite never stores NULL in an integer primary key, declared or not
        if not column.primary_key and bool(found["nullable"]) != bool(column.nullable):
            expected = "nullable" if column.nullable else "NOT NULL"
            problems.append(f"{name}.{column.name}: expected {expected}")

    for extra_name, found in reflected.items():
        if extra_name in table.columns:
            continue
        if not found["nullable"] and found.get("default") is None:
            problems.append(f"{name}.{extra_name}: unexpected NOT NULL column without a default")

    primary_key = list(inspector.get_pk_constraint(name).get("constrained_columns") or [])
    expected_key = [column.name for column in table.primary_key.columns]
    if primary_key != expected_key:
        problems.append(f"{name}: expected primary key {expected_key}, found {primary_key}")

    # without AUTOINCREMENT SQLite hands a deleted row's id out again
    if (
        connection.dialect.name == "sqlite"
        and table.dialect_options["sqlite"]["autoincrement"]
        and not _uses_autoincrement(connection, name)
    ):
        problems.append(f"{name}.{expected_key[0]}: expected AUTOINCREMENT")

    return problems


def verify_schema(connection: Connection) -> None:
    """
    Check both tables against the models.

    Raises:
        StorageError: if a table is missing or its shape is incompatible.
            The message lists every problem found.
    """
    with storage_errors("cannot inspect schema"):
        inspector = inspect(connection)
        problems: List[str] = []
        for table in SCHEMA_TABLES:
            problems.extend(_table_problems(connection, inspector, table))

    if problems:
        for problem in problems:
            logger.error("Schema drift: %s", problem)
        raise StorageError("schema drift detected: " + "; ".join(problems))


def _create_tables(connection: Connection) -> None:
    for table in SCHEMA_TABLES:
        if inspect(connection).has_table(table.name):
            logger.debug("Table %s already exists", table.name)
            continue
        table.create(connection)
        logger.info("Created table %s", table.name)
    verify_schema(connection)


def ensure_schema(engine: Engine) -> None:
    """
    Idempotently create youtube_videos and local_songs.

    Safe to call on every startup. Tables that already exist are left
    untouched as long as their shape matches.

    Raises:
        StorageError: the store is unreachable or read-only, or an existing
            table drifted from the expected shape. Nothing is committed.
    """
    with storage_errors("cannot create tables from schema"):
        with engine.begin() as connection:
            _create_tables(connection)


async def ensure_schema_async(engine: AsyncEngine) -> None:
    """ensure_schema() for an asyncio engine, e.g. from an application lifespan."""
    with storage_errors("cannot create tables from schema"):
        async with engine.begin() as connection:
            await connection.run_sync(_create_tables)
