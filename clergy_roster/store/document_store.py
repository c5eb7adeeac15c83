"""
SQLite document store - JSON documents grouped by collection.

This is a DATA LAYER component:
- Persists roster records and the organization info singleton
- Pushes a fresh roster snapshot to every open channel after each write
- NO UI or workflow logic

Table:
- documents: (collection, id) -> JSON document
"""

import asyncio
import json
import logging
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from clergy_roster.store.errors import (
    MissingIdentifierError,
    PermissionDeniedError,
    StoreError,
)
from clergy_roster.store.gateway import (
    RecordStoreGateway,
    RosterSnapshot,
    SnapshotChannel,
    SubscriptionFailed,
)
from clergy_roster.store.models import ClergyRecord, OrganizationInfo


logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "data/roster.db"


def deep_merge(existing: dict, incoming: dict) -> dict:
    """Merge ``incoming`` into ``existing``; nested mappings merge, other values replace."""
    merged = dict(existing)
    for key, value in incoming.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class SQLiteDocumentStore(RecordStoreGateway):
    """Document store for the roster and settings collections."""

    def __init__(
        self,
        db_path: str = None,
        collection: str = "clergy",
        settings_collection: str = "settings",
        org_info_id: str = "aos_info",
        read_only: bool = False,
    ):
        self.db_path = db_path or DEFAULT_DB_PATH
        self.collection = collection
        self.settings_collection = settings_collection
        self.org_info_id = org_info_id
        self.read_only = read_only
        self._channels: list[SnapshotChannel] = []
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Initialize documents table."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS documents (
                    collection TEXT NOT NULL,
                    id TEXT NOT NULL,
                    data TEXT NOT NULL,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    updated_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    seq INTEGER,

                    PRIMARY KEY (collection, id)
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_documents_seq ON documents(collection, seq)")

    # =========================================================================
    # SUBSCRIPTIONS
    # =========================================================================

    def subscribe(self) -> SnapshotChannel:
        """Open a channel; the current roster is delivered as the first message."""
        channel = SnapshotChannel(on_close=self._detach)
        self._channels.append(channel)
        try:
            channel.publish(RosterSnapshot(tuple(self._load_records())))
        except sqlite3.Error as e:
            logger.warning("Initial roster snapshot failed: %s", e)
            channel.publish(SubscriptionFailed(StoreError(str(e))))
        return channel

    def _detach(self, channel: SnapshotChannel):
        if channel in self._channels:
            self._channels.remove(channel)

    async def _broadcast(self):
        """Push a fresh snapshot to every open channel."""
        if not self._channels:
            return
        try:
            records = await asyncio.to_thread(self._load_records)
        except sqlite3.Error as e:
            for channel in list(self._channels):
                channel.publish(SubscriptionFailed(StoreError(str(e))))
            return
        snapshot = RosterSnapshot(tuple(records))
        for channel in list(self._channels):
            channel.publish(snapshot)

    # =========================================================================
    # RECORD OPERATIONS
    # =========================================================================

    async def create(self, record: ClergyRecord) -> str:
        """
        Add a new record. Any id on ``record`` is ignored.

        Returns: assigned document id
        """
        self._check_writable()
        record_id = uuid.uuid4().hex
        await asyncio.to_thread(self._insert, record_id, record.to_dict())
        logger.debug("Created %s/%s", self.collection, record_id)
        await self._broadcast()
        return record_id

    async def update(self, record_id: Optional[str], record: ClergyRecord) -> None:
        """Replace the full document stored under ``record_id``."""
        if not record_id:
            raise MissingIdentifierError("Missing document id for update")
        self._check_writable()
        updated = await asyncio.to_thread(self._replace, record_id, record.to_dict())
        if not updated:
            raise StoreError(f"No document with id {record_id}", code="not-found")
        logger.debug("Updated %s/%s", self.collection, record_id)
        await self._broadcast()

    async def delete(self, record_id: Optional[str]) -> None:
        """Delete the document stored under ``record_id``."""
        if not record_id:
            raise MissingIdentifierError("Cannot delete a document without an id")
        self._check_writable()
        await asyncio.to_thread(self._remove, record_id)
        logger.debug("Deleted %s/%s", self.collection, record_id)
        await self._broadcast()

    # =========================================================================
    # SETTINGS SINGLETON
    # =========================================================================

    async def get_settings(self) -> Optional[OrganizationInfo]:
        """Get the organization info document, None if never written."""
        data = await asyncio.to_thread(
            self._get_document, self.settings_collection, self.org_info_id
        )
        return OrganizationInfo.from_dict(data) if data is not None else None

    async def set_settings(self, info: OrganizationInfo) -> None:
        """Upsert the organization info document (creates or merges)."""
        self._check_writable()
        await asyncio.to_thread(self._upsert_settings, info.to_dict())

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _check_writable(self):
        if self.read_only:
            raise PermissionDeniedError("Store is read-only")

    def _load_records(self) -> list[ClergyRecord]:
        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute(
                "SELECT id, data FROM documents WHERE collection = ? ORDER BY seq",
                (self.collection,)
            ).fetchall()
        return [ClergyRecord.from_dict(json.loads(data), record_id=doc_id) for doc_id, data in rows]

    def _insert(self, record_id: str, data: dict):
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("""
                    INSERT INTO documents (collection, id, data, seq)
                    VALUES (?, ?, ?, (SELECT COALESCE(MAX(seq), 0) + 1 FROM documents))
                """, (self.collection, record_id, json.dumps(data, ensure_ascii=False)))
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def _replace(self, record_id: str, data: dict) -> bool:
        try:
            with sqlite3.connect(self.db_path) as conn:
                cursor = conn.execute(
                    "UPDATE documents SET data = ?, updated_at = ? WHERE collection = ? AND id = ?",
                    (json.dumps(data, ensure_ascii=False), datetime.now().isoformat(),
                     self.collection, record_id)
                )
                return cursor.rowcount > 0
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def _remove(self, record_id: str):
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    "DELETE FROM documents WHERE collection = ? AND id = ?",
                    (self.collection, record_id)
                )
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

    def _get_document(self, collection: str, doc_id: str) -> Optional[dict]:
        try:
            with sqlite3.connect(self.db_path) as conn:
                row = conn.execute(
                    "SELECT data FROM documents WHERE collection = ? AND id = ?",
                    (collection, doc_id)
                ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return json.loads(row[0]) if row else None

    def _upsert_settings(self, data: dict):
        existing = self._get_document(self.settings_collection, self.org_info_id)
        merged = deep_merge(existing, data) if existing else data
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute("""
                    INSERT INTO documents (collection, id, data, seq)
                    VALUES (?, ?, ?, (SELECT COALESCE(MAX(seq), 0) + 1 FROM documents))
                    ON CONFLICT(collection, id) DO UPDATE SET
                        data = excluded.data,
                        updated_at = CURRENT_TIMESTAMP
                """, (self.settings_collection, self.org_info_id,
                      json.dumps(merged, ensure_ascii=False)))
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
