# stockledger/database.py

from contextlib import contextmanager

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from stockledger.core.config import settings


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")


def create_db_engine(url: str | None = None, **kwargs) -> Engine:
    url = url or settings.DATABASE_URL

    if _is_sqlite(url):
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    kwargs.setdefault("echo", settings.SQL_ECHO)

    return create_engine(url, **kwargs)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY clauses unless asked per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_db_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


@contextmanager
def session_scope():
    """Session for scripts: commit on success, roll back on any error."""
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db(bind: Engine | None = None):
    # Import models so every table is registered on Base.metadata
    import stockledger.models.suppliers  # noqa: F401
    import stockledger.models.products  # noqa: F401
    import stockledger.models.stock_transactions  # noqa: F401
    import stockledger.models.sales  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
