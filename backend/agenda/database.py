from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from .config import settings

# Execution option that makes a SQLite transaction take the write lock up front.
# Booking admission opens its session with it so the overlap check and the
# insert run under one lock (see services/admission.py).
SQLITE_BEGIN_OPTION = "sqlite_begin"


def make_engine(url: str, busy_timeout_s: float | None = None) -> Engine:
    """
    Create an engine for the given database URL.

    SQLite connections get foreign keys switched on and explicit BEGIN handling:
    pysqlite's own transaction management is disabled so that a transaction can
    be opened as ``BEGIN IMMEDIATE`` when the ``sqlite_begin`` execution option
    asks for it.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, pool_pre_ping=True)

    timeout = busy_timeout_s if busy_timeout_s is not None else settings.sqlite_busy_timeout_s

    # FastAPI runs sync endpoints in a threadpool, so connections cross threads
    engine = create_engine(
        url,
        connect_args={"check_same_thread": False, "timeout": timeout},
    )

    @event.listens_for(engine, "connect")
    def configure_sqlite_connection(dbapi_connection, _):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if ":memory:" not in url:
            # Readers never wait for the writer holding the admission lock
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def begin_sqlite_transaction(conn):
        mode = conn.get_execution_options().get(SQLITE_BEGIN_OPTION)
        if mode == "IMMEDIATE":
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")

    return engine


engine = make_engine(settings.resolved_database_url)

# SessionLocal is the one way request handlers and services get a session
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


# FastAPI dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
