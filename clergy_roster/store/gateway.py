"""Record store gateway interface and the snapshot channel it delivers on."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional, Union

from clergy_roster.store.models import ClergyRecord, OrganizationInfo


@dataclass(frozen=True)
class RosterSnapshot:
    """Full point-in-time copy of the roster collection."""
    records: tuple[ClergyRecord, ...]


@dataclass(frozen=True)
class SubscriptionFailed:
    """Terminal subscription error."""
    error: Exception


SnapshotMessage = Union[RosterSnapshot, SubscriptionFailed]

_CLOSED = object()


class SnapshotChannel:
    """Consumable stream of snapshot-or-error messages for one subscriber.

    Iterate with ``async for``. Once :meth:`close` is called nothing more is
    delivered, including messages already queued.
    """

    def __init__(self, on_close: Optional[Callable[["SnapshotChannel"], None]] = None) -> None:
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False
        self._on_close = on_close

    @property
    def closed(self) -> bool:
        return self._closed

    def publish(self, message: SnapshotMessage) -> None:
        if self._closed:
            return
        self._queue.put_nowait(message)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)
        if self._on_close is not None:
            self._on_close(self)

    def __aiter__(self) -> "SnapshotChannel":
        return self

    async def __anext__(self) -> SnapshotMessage:
        message = await self._queue.get()
        if self._closed or message is _CLOSED:
            raise StopAsyncIteration
        return message


class RecordStoreGateway(ABC):
    """Abstract interface to the external document store."""

    @property
    def configured(self) -> bool:
        """Whether writes can reach a backend."""
        return True

    @abstractmethod
    def subscribe(self) -> SnapshotChannel:
        """Open a live subscription to the roster collection."""

    @abstractmethod
    async def create(self, record: ClergyRecord) -> str:
        """Store a new record and return its assigned identifier."""

    @abstractmethod
    async def update(self, record_id: Optional[str], record: ClergyRecord) -> None:
        """Replace the record stored under ``record_id``."""

    @abstractmethod
    async def delete(self, record_id: Optional[str]) -> None:
        """Remove the record stored under ``record_id``."""

    @abstractmethod
    async def get_settings(self) -> Optional[OrganizationInfo]:
        """Return the organization info document, or None if absent."""

    @abstractmethod
    async def set_settings(self, info: OrganizationInfo) -> None:
        """Upsert the organization info document."""

    def listen(
        self,
        on_snapshot: Callable[[list[ClergyRecord]], None],
        on_error: Callable[[Exception], None],
    ) -> Callable[[], None]:
        """Callback-style subscription. Returns an ``unsubscribe`` function.

        Must be called from a running event loop.
        """
        channel = self.subscribe()

        async def pump() -> None:
            async for message in channel:
                if isinstance(message, SubscriptionFailed):
                    channel.close()
                    on_error(message.error)
                    return
                on_snapshot(list(message.records))

        task = asyncio.get_running_loop().create_task(pump())

        def unsubscribe() -> None:
            channel.close()
            task.cancel()

        return unsubscribe
