"""Store package - record store gateway and its backends."""

from clergy_roster.config import StoreSettings
from clergy_roster.store.document_store import SQLiteDocumentStore
from clergy_roster.store.errors import (
    MissingIdentifierError,
    PermissionDeniedError,
    StoreError,
    StoreNotConfiguredError,
)
from clergy_roster.store.gateway import (
    RecordStoreGateway,
    RosterSnapshot,
    SnapshotChannel,
    SubscriptionFailed,
)
from clergy_roster.store.unconfigured import UnconfiguredStore


def create_store(store_settings: StoreSettings) -> RecordStoreGateway:
    """Build the gateway selected by ``STORE_BACKEND``."""
    if store_settings.backend == "none":
        return UnconfiguredStore()
    store_settings.ensure_dirs()
    return SQLiteDocumentStore(
        db_path=store_settings.db_path,
        collection=store_settings.collection,
        settings_collection=store_settings.settings_collection,
        org_info_id=store_settings.org_info_id,
        read_only=store_settings.read_only,
    )


__all__ = [
    "RecordStoreGateway",
    "RosterSnapshot",
    "SnapshotChannel",
    "SubscriptionFailed",
    "SQLiteDocumentStore",
    "UnconfiguredStore",
    "StoreError",
    "StoreNotConfiguredError",
    "MissingIdentifierError",
    "PermissionDeniedError",
    "create_store",
]
