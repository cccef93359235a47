from config import Settings


def test_defaults_point_at_local_sqlite_store(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)

    settings = Settings(_env_file=None)

    assert settings.DATABASE_URL == "sqlite:///./data/videos.db"
    assert settings.DATABASE_ECHO is False
    assert settings.LOG_LEVEL == "INFO"


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:////var/lib/dono/videos.db")
    monkeypatch.setenv("DATABASE_ECHO", "true")

    settings = Settings(_env_file=None)

    assert settings.DATABASE_URL == "sqlite:////var/lib/dono/videos.db"
    assert settings.DATABASE_ECHO is True
