from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from app.taaza.core.config import settings


def build_engine(database_url: str) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=False, future=True)

    engine = create_engine(
        database_url,
        echo=False,
        future=True,
        connect_args={"check_same_thread": False, "timeout": settings.SQLITE_BUSY_TIMEOUT_SEC},
    )

    # pysqlite defers BEGIN until the first DML statement, which lets two
    # writers deadlock on lock upgrade. Emit BEGIN IMMEDIATE ourselves so
    # writers queue on the busy timeout instead.
    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
