from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event

db = SQLAlchemy()

# Execution option asking the SQLite "begin" hook for BEGIN IMMEDIATE
IMMEDIATE = {"sqlite_begin": "IMMEDIATE"}


def configure_sqlite(engine):
    """
    SQLite only. Connections run in WAL mode with foreign keys enforced, and
    pysqlite's implicit BEGIN is replaced by our own: deferred by default,
    IMMEDIATE when the connection carries the IMMEDIATE execution option.
    Readers never take the write lock; writers that ask for it queue on it
    (up to the connect timeout) instead of failing on lock upgrade.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        mode = conn.get_execution_options().get("sqlite_begin")
        conn.exec_driver_sql(f"BEGIN {mode}" if mode else "BEGIN")


def begin_write(session):
    """
    Start a fresh write transaction on session. Any read transaction already
    open is committed first so its shared lock is not upgraded in place.
    """
    session.commit()
    session.connection(execution_options=IMMEDIATE)
