from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import Column, String, Text, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from chefkit.errors import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()


class CartStorageOrm(Base):
    __tablename__ = "cart_storage"
    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)


class CartStorage(Protocol):
    def init_db(self) -> None: ...

    def load(self, key: str) -> str | None: ...

    def save(self, key: str, blob: str) -> None: ...


class MemoryCartStorage:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def init_db(self) -> None:
        pass

    def load(self, key: str) -> str | None:
        return self.data.get(key)

    def save(self, key: str, blob: str) -> None:
        self.data[key] = blob


class SqlCartStorage:
    """Key/value blob storage on any SQLAlchemy database."""

    def __init__(self, database_url: str | None = None, engine: Engine | None = None) -> None:
        if engine is None:
            if database_url is None:
                raise ValueError("either database_url or engine is required")
            engine = create_engine(database_url, future=True)
        self.engine = engine
        self.session_factory = sessionmaker(bind=engine, expire_on_commit=False, future=True)

    def init_db(self) -> None:
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to create cart storage table: {e}") from e

    def load(self, key: str) -> str | None:
        try:
            with self.session_factory() as session:
                return session.execute(
                    select(CartStorageOrm.value).where(CartStorageOrm.key == key)
                ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to read {key!r}: {e}") from e

    def save(self, key: str, blob: str) -> None:
        try:
            with self.session_factory.begin() as session:
                orm = session.get(CartStorageOrm, key)
                if orm is None:
                    session.add(CartStorageOrm(key=key, value=blob))
                else:
                    orm.value = blob
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to write {key!r}: {e}") from e
        logger.debug("Saved %d bytes under %s", len(blob), key)

    def dispose(self) -> None:
        self.engine.dispose()
