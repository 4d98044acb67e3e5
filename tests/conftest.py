import io

import pytest
from sqlalchemy import create_engine, text

from queue_scheduler.db import open_connection

PUSHER_VARS = (
    "DARK_CONFIG_PUSHER_APP_ID",
    "DARK_CONFIG_PUSHER_KEY",
    "DARK_CONFIG_PUSHER_SECRET",
    "DARK_CONFIG_PUSHER_HOST",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every variable the scheduler reads."""
    for name in PUSHER_VARS + ("DARK_CONFIG_DATABASE_URL",):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def events_db(tmp_path):
    """SQLite database with an empty events table; returns a seeding helper."""
    url = f"sqlite:///{tmp_path / 'events.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE events (id INTEGER PRIMARY KEY, status TEXT NOT NULL)"))

    def seed(*statuses):
        with engine.begin() as conn:
            for status in statuses:
                conn.execute(text("INSERT INTO events (status) VALUES (:status)"), {"status": status})
        return url

    seed.url = url
    yield seed
    engine.dispose()


@pytest.fixture
def conn(events_db):
    c = open_connection(events_db.url)
    yield c
    c.close()


@pytest.fixture
def log_stream():
    return io.StringIO()
