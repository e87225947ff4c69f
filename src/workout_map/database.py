import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from sqlalchemy import Column, DateTime, String, Text, create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base = declarative_base()


class StorageEntry(Base):
    __tablename__ = "local_storage"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)
    # timezone-aware UTC
    updated_at = Column(DateTime(timezone=True), nullable=False)


def _sqlite_pragmas(dbapi_con, _con_record):
    cur = dbapi_con.cursor()
    cur.execute("PRAGMA journal_mode=WAL;")
    cur.execute("PRAGMA synchronous=NORMAL;")
    cur.close()


class DatabaseManager:
    """Durable key-value storage; every write replaces the whole value for a key."""

    def __init__(self, database_url: str):
        connect_args = {}
        if database_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        self.engine = create_engine(
            database_url,
            echo=False,
            future=True,
            connect_args=connect_args,
            pool_pre_ping=True,
        )
        if database_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _sqlite_pragmas)

        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(bind=self.engine, future=True, expire_on_commit=False)

    def get_item(self, key: str) -> str | None:
        with self.Session() as session:
            entry = session.get(StorageEntry, key)
            return entry.value if entry else None

    def set_item(self, key: str, value: str) -> None:
        with self.Session() as session:
            session.merge(
                StorageEntry(key=key, value=value, updated_at=datetime.now(tz=ZoneInfo("UTC")))
            )
            session.commit()
        logger.debug("Stored %d bytes under %r", len(value), key)

    def remove_item(self, key: str) -> None:
        with self.Session() as session:
            entry = session.get(StorageEntry, key)
            if entry is None:
                return
            session.delete(entry)
            session.commit()

    def close(self) -> None:
        self.engine.dispose()
