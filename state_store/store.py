"""State Store - durable, versioned records.

One row per record key. Each row carries the record kind and the schema
version its payload was written with, so that loads can run the explicit
migration chain in ``state_store.migrations``.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    Engine,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    delete,
    insert,
    or_,
    select,
    update,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import QueuePool, StaticPool

from shared.clock import utc_now
from state_store.config import StateStoreConfig
from state_store.migrations import CURRENT_VERSIONS, migrate

logger = logging.getLogger(__name__)

metadata = MetaData()

durable_records = Table(
    "durable_records",
    metadata,
    Column("key", String(255), primary_key=True),
    Column("kind", String(32), nullable=False, index=True),
    Column("schema_version", Integer, nullable=False),
    Column("payload", Text, nullable=False),
    Column("updated_at", DateTime(timezone=True), nullable=False),
)


class StateStore:
    """Durable key/value records backed by SQLAlchemy.

    Example:
        >>> store = StateStore(StateStoreConfig(database_url="sqlite:///:memory:"))
        >>> store.initialize()
        >>> store.save("credential:app_token", "credential", {"access_token": "abc"})
        >>> store.load("credential:app_token", "credential")
        {'access_token': 'abc'}
    """

    def __init__(self, config: StateStoreConfig, engine: Optional[Engine] = None):
        """Initialize the store.

        Args:
            config: StateStoreConfig instance
            engine: Optional pre-built engine (tests share one in-memory engine)

        Raises:
            ValueError: If configuration is invalid
        """
        config.validate()
        self.config = config
        self.engine: Engine = engine or self._create_engine()

        logger.info(f"StateStore initialized: {config!r}")

    def _create_engine(self) -> Engine:
        """Create SQLAlchemy engine.

        Returns:
            Configured SQLAlchemy Engine
        """
        if self.config.is_sqlite:
            kwargs: Dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in self.config.database_url:
                # One shared connection, otherwise every checkout sees an empty database
                kwargs["poolclass"] = StaticPool
            return create_engine(self.config.database_url, echo=self.config.debug, **kwargs)

        return create_engine(
            self.config.database_url,
            poolclass=QueuePool,
            pool_size=self.config.db_pool_size,
            max_overflow=self.config.db_max_overflow,
            pool_recycle=self.config.db_pool_recycle,
            pool_pre_ping=True,  # Verify connections before using
            echo=self.config.debug,
        )

    def initialize(self) -> None:
        """Create the records table if it does not exist."""
        metadata.create_all(self.engine)
        logger.debug("durable_records table ready")

    def load(self, key: str, kind: str) -> Optional[Dict[str, Any]]:
        """Load a record and migrate it to the current schema version.

        Upgraded payloads are written back so the migration runs once.

        Args:
            key: Record key
            kind: Expected record kind

        Returns:
            Payload at the current schema version, or None if absent

        Raises:
            SchemaVersionError: If the stored version cannot be migrated
            SQLAlchemyError: If the database operation fails
        """
        with self.engine.connect() as conn:
            row = conn.execute(
                select(durable_records.c.schema_version, durable_records.c.payload).where(
                    durable_records.c.key == key, durable_records.c.kind == kind
                )
            ).fetchone()

        if row is None:
            return None

        version, raw = row
        payload = migrate(kind, version, json.loads(raw))
        if version != CURRENT_VERSIONS[kind]:
            self.save(key, kind, payload)
        return payload

    def save(self, key: str, kind: str, payload: Dict[str, Any]) -> None:
        """Insert or replace a record at the current schema version.

        Args:
            key: Record key
            kind: Record kind
            payload: JSON-serializable payload

        Raises:
            SQLAlchemyError: If the database operation fails
        """
        values = {
            "kind": kind,
            "schema_version": CURRENT_VERSIONS[kind],
            "payload": json.dumps(payload),
            "updated_at": utc_now(),
        }
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    update(durable_records).where(durable_records.c.key == key).values(**values)
                )
                if result.rowcount == 0:
                    conn.execute(insert(durable_records).values(key=key, **values))
        except SQLAlchemyError as e:
            logger.error(f"Error saving record {key}: {e}")
            raise

    def delete_namespace(self, namespace: str) -> int:
        """Delete a record and every record nested below it.

        ``delete_namespace("monitor:alice")`` removes ``monitor:alice`` and any
        ``monitor:alice:*`` keys.

        Args:
            namespace: Record key acting as the namespace root

        Returns:
            Number of rows deleted
        """
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    delete(durable_records).where(
                        or_(
                            durable_records.c.key == namespace,
                            durable_records.c.key.startswith(f"{namespace}:", autoescape=True),
                        )
                    )
                )
        except SQLAlchemyError as e:
            logger.error(f"Error purging {namespace}: {e}")
            raise

        if result.rowcount:
            logger.info(f"Purged {result.rowcount} record(s) under {namespace}")
        return result.rowcount

    def keys(self, kind: str) -> List[str]:
        """List record keys of a kind.

        Args:
            kind: Record kind

        Returns:
            Sorted list of keys
        """
        with self.engine.connect() as conn:
            rows = conn.execute(
                select(durable_records.c.key)
                .where(durable_records.c.kind == kind)
                .order_by(durable_records.c.key)
            ).fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        """Close database connections."""
        self.engine.dispose()
        logger.info("StateStore connections closed")
