import pytest

from database import create_db_engine
from schema import ensure_schema


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'videos.db'}"


@pytest.fixture
def engine(db_url):
    """Engine over an empty, file-backed SQLite store."""
    engine = create_db_engine(db_url)
    yield engine
    engine.dispose()


@pytest.fixture
def bootstrapped_engine(engine):
    ensure_schema(engine)
    return engine
