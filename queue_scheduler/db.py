from sqlalchemy import create_engine
from sqlalchemy.engine import Connection, URL, make_url
from sqlalchemy.pool import NullPool


def connection_url(raw: str) -> URL:
    url = make_url(raw)
    # libpq-style "postgres://" URLs are not accepted by SQLAlchemy
    if url.drivername == "postgres":
        url = url.set(drivername="postgresql")
    if url.get_backend_name() == "postgresql":
        url = url.update_query_dict({"sslmode": "disable"})
    return url


def open_connection(raw_url: str) -> Connection:
    """Open the single long-lived connection. Never pooled, never re-established."""
    engine = create_engine(connection_url(raw_url), poolclass=NullPool)
    return engine.connect().execution_options(isolation_level="AUTOCOMMIT")
