"""One-shot entry point: open the store, create the schema, exit."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from sqlalchemy.engine import make_url

from config import settings
from database import create_db_engine
from errors import StorageError
from schema import ensure_schema

logger = logging.getLogger(__name__)


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def ensure_data_dir(database_url: str) -> Optional[Path]:
    """Create the directory holding a file-backed SQLite database."""
    url = make_url(database_url)
    database = url.database or ""
    if url.get_backend_name() != "sqlite" or database in ("", ":memory:") or database.startswith("file:"):
        return None
    data_dir = Path(database).expanduser().resolve().parent
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Create the youtube_videos and local_songs tables.")
    parser.add_argument("--database-url", default=settings.DATABASE_URL)
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        ensure_data_dir(args.database_url)
    except OSError as exc:
        logger.error("cannot create tables from schema: %s", exc)
        return 1

    engine = create_db_engine(args.database_url)
    try:
        ensure_schema(engine)
    except StorageError as exc:
        logger.error("cannot create tables from schema: %s", exc)
        return 1
    finally:
        engine.dispose()

    logger.info("Database schema verified.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
