"""Roster synchronization - in-memory mirror fed by one live subscription."""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum
from typing import Optional

from clergy_roster.roster.defaults import fallback_roster
from clergy_roster.store.gateway import (
    RecordStoreGateway,
    RosterSnapshot,
    SnapshotChannel,
    SnapshotMessage,
    SubscriptionFailed,
)
from clergy_roster.store.models import ClergyRecord


logger = logging.getLogger(__name__)


class ConnectionStatus(str, Enum):
    CONNECTED = "connected"
    ERROR = "error"


class RosterSync:
    """Owns the roster mirror. Only the subscription consumer writes to it.

    Snapshots replace the mirror wholesale. A subscription error is terminal:
    the fallback dataset is shown and no retry is attempted.
    """

    def __init__(
        self,
        store: RecordStoreGateway,
        fallback: Optional[Callable[[], list[ClergyRecord]]] = None,
    ):
        self.store = store
        self._fallback = fallback or fallback_roster
        self._records: list[ClergyRecord] = []
        self.connection_status = ConnectionStatus.CONNECTED
        self.loading = True
        self.last_error: Optional[Exception] = None
        self._listeners: list[Callable[["RosterSync"], None]] = []
        self._channel: Optional[SnapshotChannel] = None
        self._task: Optional[asyncio.Task] = None
        self._stopped = False

    @property
    def records(self) -> list[ClergyRecord]:
        return list(self._records)

    @property
    def active(self) -> bool:
        return self._task is not None and not self._stopped

    def on_change(self, callback: Callable[["RosterSync"], None]):
        """Register a listener called after every applied message."""
        self._listeners.append(callback)

    def start(self):
        """Open the subscription. Must be called from a running event loop."""
        if self._task is not None:
            raise RuntimeError("Roster subscription already started")
        self._channel = self.store.subscribe()
        self._task = asyncio.get_running_loop().create_task(self._consume(self._channel))

    def stop(self):
        """Release the subscription; no listener runs afterwards."""
        self._stopped = True
        if self._channel is not None:
            self._channel.close()
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _consume(self, channel: SnapshotChannel):
        async for message in channel:
            self.apply(message)
            if isinstance(message, SubscriptionFailed):
                channel.close()
                return

    def apply(self, message: SnapshotMessage):
        """Apply one channel message to the mirror."""
        if self._stopped:
            return
        if isinstance(message, RosterSnapshot):
            self._records = list(message.records)
            self.connection_status = ConnectionStatus.CONNECTED
            self.last_error = None
        elif isinstance(message, SubscriptionFailed):
            logger.warning("Roster subscription failed, showing fallback data: %s", message.error)
            self._records = self._fallback()
            self.connection_status = ConnectionStatus.ERROR
            self.last_error = message.error
        else:
            raise TypeError(f"Unexpected snapshot message: {message!r}")
        self.loading = False
        for callback in list(self._listeners):
            callback(self)
