from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from config import settings


def set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA busy_timeout=5000")  # Wait up to 5s for locks instead of failing immediately
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """
    Create an engine for the given URL.

    SQLite connections get foreign key enforcement so that order lines
    can never outlive their order.
    """
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(database_url, connect_args=connect_args, echo=echo, **kwargs)
        event.listen(engine, "connect", set_sqlite_pragma)
        return engine

    return create_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,  # Verify connections are alive before using
        pool_recycle=3600,  # Recycle connections after 1 hour to prevent stale connections
        **kwargs
    )


engine = build_engine(settings.database_url, echo=settings.sql_echo)

SessionLocal = sessionmaker(bind=engine)
Base = declarative_base()


def get_db():
    """Dependency for FastAPI routes"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
