from __future__ import annotations

from collections.abc import Generator
from typing import Any

from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

from ..models import db as _db_models  # noqa: F401 - ensure models register with metadata
from .config import get_settings


def create_engine_for_url(database_url: str, busy_timeout: float | None = None):
    connect_args: dict[str, Any] = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        if busy_timeout is None:
            busy_timeout = get_settings().sqlite_busy_timeout
        connect_args = {"check_same_thread": False, "timeout": busy_timeout}
    new_engine = create_engine(database_url, echo=False, connect_args=connect_args)
    if is_sqlite:
        _serialize_sqlite_writers(new_engine)
    return new_engine


def _serialize_sqlite_writers(sqlite_engine) -> None:
    # pysqlite defers BEGIN until the first write, which lets two transfers
    # read the same balance before either writes. Take the write lock up front.
    @event.listens_for(sqlite_engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "begin")
    def _begin_immediate(conn) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


settings = get_settings()
engine = create_engine_for_url(settings.database_url)


def init_db() -> None:
    SQLModel.metadata.create_all(engine)


def get_engine():
    return engine


def get_session() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def set_engine(new_engine) -> None:
    global engine
    engine = new_engine
