from collections.abc import Generator
from time import perf_counter

from sqlalchemy import Engine, create_engine
from sqlalchemy import event
from sqlalchemy.orm import Session, sessionmaker

from legalhub.core.config import settings
from legalhub.infrastructure.observability.metrics import observe_db_query


def configure_engine(engine: Engine) -> Engine:
    """Attach query timing and, for SQLite, the transaction handling SAVEPOINTs rely on."""

    @event.listens_for(engine, "before_cursor_execute")
    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_started_at_stack", []).append(perf_counter())

    @event.listens_for(engine, "after_cursor_execute")
    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        stack = conn.info.get("query_started_at_stack", [])
        if not stack:
            return
        started_at = stack.pop(-1)
        observe_db_query(perf_counter() - started_at, operation="sync_sql")

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _sqlite_connect(dbapi_connection, connection_record):
            # pysqlite issues its own BEGIN lazily, which breaks nested transactions.
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine, "begin")
        def _sqlite_begin(conn):
            conn.exec_driver_sql("BEGIN")

    return engine


engine = configure_engine(create_engine(settings.sqlalchemy_database_uri, pool_pre_ping=True))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
